"""
Immutable connection configuration consumed by the completion client.

`Configuration` is produced and owned by the caller (see
``llm_relay.config.load_configuration``); the client only reads it. It is a
frozen dataclass so one value can be shared safely between concurrent
subscriptions.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from ..constants import API_VERSION_SEGMENT
from .vendor import Vendor


@dataclass(frozen=True)
class Configuration:
    """Vendor + connection settings for one client.

    Attributes:
        vendor: Which vendor family the endpoint speaks.
        api_key: Credential string sent in the vendor's auth header.
        base_url: Vendor base URL; ``/v1`` and the endpoint suffix are added
            by :meth:`build_endpoint_url` when missing.
        model: Model identifier sent in the request body.
        enabled: Administrative switch; a disabled configuration never issues
            network calls.
    """

    vendor: Vendor = Vendor.OPENAI
    api_key: str = ""
    base_url: str = ""
    model: str = ""
    enabled: bool = False

    @classmethod
    def with_defaults(
        cls,
        vendor: Vendor | str = Vendor.OPENAI,
        *,
        api_key: str = "",
        base_url: str = "",
        model: str = "",
        enabled: bool = False,
    ) -> "Configuration":
        """Build a configuration, filling an empty base URL or model from vendor defaults."""
        v = Vendor.parse(vendor)
        return cls(
            vendor=v,
            api_key=api_key,
            base_url=base_url or v.default_base_url,
            model=model or v.default_model,
            enabled=enabled,
        )

    @property
    def is_valid(self) -> bool:
        return bool(self.api_key.strip() and self.base_url.strip() and self.model.strip())

    @property
    def usable(self) -> bool:
        """Valid and administratively enabled."""
        return self.is_valid and self.enabled

    def normalized_base_url(self) -> str:
        """Base URL without surrounding whitespace or trailing slash, with ``/v1`` present once."""
        url = self.base_url.strip()
        if url.endswith("/"):
            url = url[:-1]
        if API_VERSION_SEGMENT not in url:
            url += API_VERSION_SEGMENT
        return url

    def build_endpoint_url(self, suffix: str) -> str:
        """Return the full endpoint URL for ``suffix`` (e.g. ``/chat/completions``)."""
        url = self.normalized_base_url()
        if not url.endswith(suffix):
            url += suffix
        return url

    def evolve(self, **changes) -> "Configuration":
        """Return a copy with ``changes`` applied; the original is untouched."""
        return replace(self, **changes)

    def masked_api_key(self) -> str:
        key = self.api_key
        if len(key) <= 8:
            return "*" * len(key)
        return f"{key[:4]}...{key[-4:]}"

    def __repr__(self) -> str:
        return (
            f"Configuration(vendor={self.vendor.value!r}, api_key={self.masked_api_key()!r}, "
            f"base_url={self.base_url!r}, model={self.model!r}, enabled={self.enabled})"
        )


__all__ = ["Configuration"]
