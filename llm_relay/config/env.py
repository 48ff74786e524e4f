"""llm_relay.config.env
====================

Environment variable mapping for vendor settings.

Purpose
-------
- Single source of truth for the environment variable names read per vendor
  (``<VENDOR>_API_KEY``, ``<VENDOR>_BASE_URL``, ``<VENDOR>_MODEL``,
  ``<VENDOR>_ENABLED``).
- Placeholder detection so sample values such as ``changeme`` never count as
  credentials.

Failure Modes
-------------
Helpers never raise on unknown vendors or unset variables; they return empty
results and let the caller decide.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from ..base.models import Vendor

VENDOR_ENV = "LLM_RELAY_VENDOR"
CONFIG_FILE_ENV = "LLM_RELAY_CONFIG_FILE"

ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "model": "MODEL",
    "enabled": "ENABLED",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(vendor: "Vendor | str", field: str) -> Optional[str]:
    """Return the environment variable name for ``field`` of ``vendor``.

    >>> get_env_var_name("openai", "api_key")
    'OPENAI_API_KEY'
    """
    suffix = ENV_FIELD_MAP.get(field)
    if suffix is None:
        return None
    try:
        v = Vendor.parse(vendor)
    except ValueError:
        return None
    return f"{v.value.upper()}_{suffix}"


def env_overrides(vendor: "Vendor | str") -> Dict[str, str]:
    """Collect the set environment variables for ``vendor`` as config fields.

    Placeholder API keys are ignored.
    """
    out: Dict[str, str] = {}
    for field in ENV_FIELD_MAP:
        name = get_env_var_name(vendor, field)
        if name is None:
            continue
        val = os.environ.get(name)
        if val is None:
            continue
        if field == "api_key" and is_placeholder(val):
            continue
        out[field] = val
    return out


def default_vendor() -> Vendor:
    """Vendor named by ``LLM_RELAY_VENDOR``, falling back to ``openai``."""
    raw = os.environ.get(VENDOR_ENV)
    if not raw:
        return Vendor.OPENAI
    try:
        return Vendor.parse(raw)
    except ValueError:
        return Vendor.OPENAI


__all__ = [
    "VENDOR_ENV",
    "CONFIG_FILE_ENV",
    "ENV_FIELD_MAP",
    "is_placeholder",
    "get_env_var_name",
    "env_overrides",
    "default_vendor",
]
