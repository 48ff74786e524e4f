"""
Vendor tag enumeration.

Each supported vendor family is one ``Vendor`` member. Display names and
defaults mirror what the vendors document publicly; ``custom`` is any
OpenAI-compatible gateway and therefore has no defaults.
"""
from __future__ import annotations

from enum import Enum


class Vendor(str, Enum):
    """Supported completion vendors."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def default_base_url(self) -> str:
        return _DEFAULT_BASE_URLS[self]

    @property
    def default_model(self) -> str:
        return _DEFAULT_MODELS[self]

    @classmethod
    def parse(cls, value: "Vendor | str") -> "Vendor":
        """Return the member for ``value`` (case-insensitive name or value).

        Raises:
            ValueError: when ``value`` names no known vendor.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise ValueError(f"unknown vendor: {value!r}")


_DISPLAY_NAMES = {
    Vendor.OPENAI: "OpenAI",
    Vendor.ANTHROPIC: "Claude",
    Vendor.CUSTOM: "Custom",
}

_DEFAULT_BASE_URLS = {
    Vendor.OPENAI: "https://api.openai.com/v1",
    Vendor.ANTHROPIC: "https://api.anthropic.com/v1",
    Vendor.CUSTOM: "",
}

_DEFAULT_MODELS = {
    Vendor.OPENAI: "gpt-4o-mini",
    Vendor.ANTHROPIC: "claude-sonnet-4-5-20250929",
    Vendor.CUSTOM: "",
}


__all__ = ["Vendor"]
