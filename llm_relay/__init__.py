"""llm_relay package

Streaming chat-completion client for OpenAI, Anthropic and
OpenAI-compatible endpoints.

Purpose:
    Send a conversation to one configured vendor and deliver the reply as a
    cancellable stream of text chunks ending in exactly one terminal event
    (a finish chunk or a classified ``ProviderError``).

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`CompletionClient`, :class:`Subscription`,
      :class:`StreamChunk`
    - Values: :class:`Configuration`, :class:`Message`, :class:`ModelInfo`,
      :class:`Vendor`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Configuration loading: :func:`load_configuration`
"""

from .base.errors import ErrorCode, ProviderError
from .base.models import Configuration, Message, ModelInfo, Vendor
from .base.streaming import StreamChunk, Subscription
from .config import load_configuration
from .service import CompletionClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompletionClient",
    "Subscription",
    "StreamChunk",
    "Configuration",
    "Message",
    "ModelInfo",
    "Vendor",
    "ProviderError",
    "ErrorCode",
    "load_configuration",
]
