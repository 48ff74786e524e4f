"""ProviderFactory resolution and caching."""
from __future__ import annotations

import pytest

from llm_relay.anthropic.adapter import AnthropicAdapter
from llm_relay.base.errors import ErrorCode, ProviderError
from llm_relay.base.factory import ProviderFactory, get_adapter
from llm_relay.base.interfaces import ProviderAdapter
from llm_relay.base.models import Vendor


@pytest.mark.parametrize("name", ["openai", "anthropic", "custom", "OPENAI", Vendor.CUSTOM])
def test_resolves_every_vendor(name):
    adapter = ProviderFactory.get(name)
    assert isinstance(adapter, ProviderAdapter)
    assert adapter.vendor is Vendor.parse(name)


def test_adapters_are_cached():
    assert get_adapter("anthropic") is get_adapter(Vendor.ANTHROPIC)
    assert isinstance(get_adapter("anthropic"), AnthropicAdapter)


def test_unknown_vendor_is_bad_configuration():
    with pytest.raises(ProviderError) as ei:
        ProviderFactory.get("gemini")
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION


def test_supported_order():
    assert ProviderFactory.supported() == ("openai", "anthropic", "custom")
