"""OpenAI adapter (vendor ``openai``).

Speaks the OpenAI chat completions wire format via the shared
``BaseOpenAIStyleAdapter``; nothing here is specific beyond the vendor tag.
"""

from __future__ import annotations

from ..base.models import Vendor
from ..base.openai_style_parts import BaseOpenAIStyleAdapter


class OpenAIAdapter(BaseOpenAIStyleAdapter):
    """Adapter for ``https://api.openai.com/v1/chat/completions``."""

    _vendor = Vendor.OPENAI


__all__ = ["OpenAIAdapter"]
