"""Provider adapter factory.

Purpose
-------
Resolve a vendor tag to its adapter. Adapters are imported lazily using
``importlib`` so importing the core does not pull in every vendor module, and
each adapter is created once and cached: adapters are stateless, so one
instance is shared by every subscription.

Failure semantics
-----------------
Unknown vendors raise ``ProviderError`` with ``ErrorCode.BAD_CONFIGURATION``
since the vendor tag is part of the caller-supplied configuration.
"""

from __future__ import annotations

import threading
from importlib import import_module
from typing import Dict, Tuple

from .errors import ErrorCode, ProviderError
from .interfaces import ProviderAdapter
from .models import Vendor


class ProviderFactory:
    """Create (and cache) adapters by vendor."""

    _ADAPTERS: Dict[Vendor, Tuple[str, str]] = {
        Vendor.OPENAI: ("llm_relay.openai.adapter", "OpenAIAdapter"),
        Vendor.ANTHROPIC: ("llm_relay.anthropic.adapter", "AnthropicAdapter"),
        Vendor.CUSTOM: ("llm_relay.custom.adapter", "CustomAdapter"),
    }
    _CACHE: Dict[Vendor, ProviderAdapter] = {}
    _LOCK = threading.Lock()

    @classmethod
    def get(cls, vendor: "Vendor | str") -> ProviderAdapter:
        """Return the adapter for ``vendor``.

        Raises
        ------
        ProviderError
            ``BAD_CONFIGURATION`` when the vendor is unknown.
        """
        try:
            key = Vendor.parse(vendor)
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.BAD_CONFIGURATION,
                message=str(exc),
                provider=str(vendor),
            ) from exc
        adapter = cls._CACHE.get(key)
        if adapter is not None:
            return adapter
        with cls._LOCK:
            adapter = cls._CACHE.get(key)
            if adapter is None:
                module_path, class_name = cls._ADAPTERS[key]
                klass = getattr(import_module(module_path), class_name)
                adapter = klass()
                cls._CACHE[key] = adapter
            return adapter

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical vendor names in deterministic order."""
        return tuple(v.value for v in cls._ADAPTERS)


def get_adapter(vendor: "Vendor | str") -> ProviderAdapter:
    """Shortcut for :meth:`ProviderFactory.get`."""
    return ProviderFactory.get(vendor)


__all__ = ["ProviderFactory", "get_adapter"]
