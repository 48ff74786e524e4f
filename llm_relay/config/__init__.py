"""Configuration loading.

Goals
-----
* Produce the immutable ``Configuration`` value the client consumes; the
  client itself never reads the environment or persists anything.
* Merge sources in a predictable order (later wins):
    1. Built-in vendor defaults (base URL, model)
    2. Optional external config file (JSON or YAML) named by
       ``LLM_RELAY_CONFIG_FILE``, one section per vendor
    3. Environment variables (``OPENAI_API_KEY``, ``ANTHROPIC_MODEL``, ...)
    4. In-code overrides passed to :func:`load_configuration`
* Validate the merged mapping with ``ConfigurationDTO`` (pydantic).

External Config File
--------------------
```
openai:
  api_key: sk-...
  enabled: true
custom:
  base_url: https://gateway.internal/v1
  model: llama-3-70b
```

Public API
----------
* load_configuration(vendor=None, overrides=None) -> Configuration
* get_vendor_config(vendor, overrides=None) -> dict
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..base.dto import ConfigurationDTO
from ..base.errors import ErrorCode, ProviderError
from ..base.models import Configuration, Vendor
from .env import CONFIG_FILE_ENV, default_vendor, env_overrides, is_placeholder


_KEY_ALIASES = {"apiKey": "api_key", "baseURL": "base_url", "baseUrl": "base_url", "provider": "vendor"}


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_KEY_ALIASES.get(k, k): v for k, v in data.items() if v is not None}


def _defaults(vendor: Vendor) -> Dict[str, Any]:
    return {
        "base_url": vendor.default_base_url,
        "model": vendor.default_model,
        "enabled": False,
    }


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the external config file (JSON first, then YAML).

    Returns ``{}`` when no path is configured or the file does not exist.

    Raises:
        ProviderError: ``BAD_CONFIGURATION`` when the file exists but is
            neither valid JSON nor valid YAML, or is not a mapping.
    """
    path = path or os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ProviderError(
                code=ErrorCode.BAD_CONFIGURATION,
                message=f"config file {p} is neither JSON nor YAML: {e}",
                provider="config",
                raw=e,
            ) from e
    if not isinstance(data, dict):
        raise ProviderError(
            code=ErrorCode.BAD_CONFIGURATION,
            message=f"config file {p} must contain a mapping",
            provider="config",
        )
    return data


def get_vendor_config(
    vendor: "Vendor | str",
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    config_file: Optional[str] = None,
) -> Dict[str, Any]:
    """Return the merged (unvalidated) configuration mapping for ``vendor``."""
    v = Vendor.parse(vendor)
    cfg: Dict[str, Any] = {"vendor": v.value}
    cfg |= _defaults(v)

    file_cfg = load_config_file(config_file).get(v.value)
    if isinstance(file_cfg, dict):
        cfg |= _normalize_keys(file_cfg)

    cfg |= env_overrides(v)

    if overrides:
        cfg |= _normalize_keys(overrides)
    cfg["vendor"] = v.value
    return cfg


def load_configuration(
    vendor: "Vendor | str | None" = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    config_file: Optional[str] = None,
) -> Configuration:
    """Build an immutable :class:`Configuration` from all sources.

    Parameters:
        vendor: Vendor tag; defaults to ``LLM_RELAY_VENDOR`` or ``openai``.
        overrides: Explicit field values (``api_key``, ``base_url``,
            ``model``, ``enabled``); ``None`` values are ignored.
        config_file: Path overriding ``LLM_RELAY_CONFIG_FILE``.

    Raises:
        ProviderError: ``BAD_CONFIGURATION`` on an unknown vendor, an
            unreadable config file, or values that fail validation.
    """
    try:
        v = Vendor.parse(vendor) if vendor is not None else default_vendor()
    except ValueError as e:
        raise ProviderError(code=ErrorCode.BAD_CONFIGURATION, message=str(e), provider=str(vendor)) from e
    merged = get_vendor_config(v, overrides, config_file=config_file)
    try:
        dto = ConfigurationDTO.model_validate(merged)
    except ValidationError as e:
        raise ProviderError(
            code=ErrorCode.BAD_CONFIGURATION,
            message=f"invalid configuration: {e}",
            provider=v.value,
            raw=e,
        ) from e
    return dto.to_configuration()


__all__ = [
    "load_configuration",
    "load_config_file",
    "get_vendor_config",
    "is_placeholder",
]
