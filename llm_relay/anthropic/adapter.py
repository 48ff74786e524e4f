"""Anthropic adapter (vendor ``anthropic``).

Request shape::

    POST <base>/v1/messages
    x-api-key: <api_key>
    anthropic-version: 2023-06-01
    {"model", "messages": [non-system turns], "max_tokens": 4096,
     "stream": bool, "system": <first system message, when present>}

Streaming text arrives only on ``content_block_delta`` events
(``delta.text``); ``message_start``, ``ping``, ``message_delta`` and the other
metadata events carry none. Single-shot text is ``content[0].text``. The
vendor publishes no model listing endpoint.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.constants import ANTHROPIC_API_VERSION, ANTHROPIC_MAX_TOKENS
from ..base.models import Configuration, Message, ModelInfo, PreparedRequest, Vendor
from .helpers import content_block_delta_text, first_content_text, split_system

MESSAGES_SUFFIX = "/messages"


class AnthropicAdapter:
    """Adapter for the Anthropic Messages API."""

    def __init__(self, max_tokens: int = ANTHROPIC_MAX_TOKENS) -> None:
        self._max_tokens = max_tokens

    @property
    def vendor(self) -> Vendor:
        return Vendor.ANTHROPIC

    @property
    def endpoint_suffix(self) -> str:
        return MESSAGES_SUFFIX

    def build_headers(self, configuration: Configuration) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": configuration.api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    def build_request(
        self, configuration: Configuration, messages: Sequence[Message], stream: bool
    ) -> PreparedRequest:
        system_text, wire_messages = split_system(messages)
        body: Dict[str, Any] = {
            "model": configuration.model,
            "messages": wire_messages,
            "max_tokens": self._max_tokens,
            "stream": stream,
        }
        if system_text is not None:
            body["system"] = system_text
        return PreparedRequest(
            url=configuration.build_endpoint_url(self.endpoint_suffix),
            headers=self.build_headers(configuration),
            body=body,
        )

    def extract_stream_text(self, event: Any) -> Optional[str]:
        return content_block_delta_text(event)

    def extract_completion_text(self, body: Any) -> Optional[str]:
        return first_content_text(body)

    def models_url(self, configuration: Configuration) -> Optional[str]:
        return None

    def parse_models(self, body: Mapping[str, Any]) -> List[ModelInfo]:
        return []


__all__ = ["AnthropicAdapter", "MESSAGES_SUFFIX"]
