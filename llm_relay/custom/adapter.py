"""Custom gateway adapter (vendor ``custom``).

Any OpenAI-compatible endpoint (self-hosted gateways, proxies, aggregators).
The caller must supply base URL and model since there are no defaults.
"""

from __future__ import annotations

from ..base.models import Vendor
from ..base.openai_style_parts import BaseOpenAIStyleAdapter


class CustomAdapter(BaseOpenAIStyleAdapter):
    """Adapter for OpenAI-compatible endpoints at arbitrary base URLs."""

    _vendor = Vendor.CUSTOM


__all__ = ["CustomAdapter"]
