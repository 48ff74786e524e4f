"""Base adapter for OpenAI-compatible chat completion endpoints.

Request shape::

    POST <base>/v1/chat/completions
    Authorization: Bearer <api_key>
    {"model": ..., "messages": [{"role", "content"}, ...], "stream": bool}

System messages stay inline in ``messages``. Streaming events carry text at
``choices[0].delta.content``; single-shot bodies at
``choices[0].message.content``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import Configuration, Message, ModelInfo, PreparedRequest, Vendor
from .extraction import message_content, stream_delta_content

CHAT_COMPLETIONS_SUFFIX = "/chat/completions"
MODELS_SUFFIX = "/models"


class BaseOpenAIStyleAdapter:
    """Shared implementation for vendors speaking the OpenAI wire format.

    Subclasses set ``_vendor``; everything else is inherited.
    """

    _vendor: Vendor

    @property
    def vendor(self) -> Vendor:
        return self._vendor

    @property
    def endpoint_suffix(self) -> str:
        return CHAT_COMPLETIONS_SUFFIX

    def build_headers(self, configuration: Configuration) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {configuration.api_key}",
        }

    def build_body(
        self, configuration: Configuration, messages: Sequence[Message], stream: bool
    ) -> Dict[str, Any]:
        return {
            "model": configuration.model,
            "messages": [m.to_wire() for m in messages],
            "stream": stream,
        }

    def build_request(
        self, configuration: Configuration, messages: Sequence[Message], stream: bool
    ) -> PreparedRequest:
        return PreparedRequest(
            url=configuration.build_endpoint_url(self.endpoint_suffix),
            headers=self.build_headers(configuration),
            body=self.build_body(configuration, messages, stream),
        )

    def extract_stream_text(self, event: Any) -> Optional[str]:
        return stream_delta_content(event)

    def extract_completion_text(self, body: Any) -> Optional[str]:
        return message_content(body)

    def models_url(self, configuration: Configuration) -> Optional[str]:
        """``<base>/v1/models``, tolerating a base URL that already names the chat endpoint."""
        url = configuration.base_url.strip().rstrip("/")
        if url.endswith(CHAT_COMPLETIONS_SUFFIX):
            url = url[: -len(CHAT_COMPLETIONS_SUFFIX)]
        return configuration.evolve(base_url=url).build_endpoint_url(MODELS_SUFFIX)

    def parse_models(self, body: Mapping[str, Any]) -> List[ModelInfo]:
        data = body.get("data") if isinstance(body, Mapping) else None
        if not isinstance(data, list):
            raise ValueError("model listing has no 'data' array")
        models: List[ModelInfo] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            model_id = item.get("id")
            if not isinstance(model_id, str) or not model_id:
                continue
            owned_by = item.get("owned_by")
            name = f"{model_id} ({owned_by})" if isinstance(owned_by, str) and owned_by else model_id
            models.append(ModelInfo(id=model_id, name=name))
        models.sort(key=lambda m: m.id)
        return models

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(vendor={self._vendor.value!r})"


__all__ = ["BaseOpenAIStyleAdapter", "CHAT_COMPLETIONS_SUFFIX", "MODELS_SUFFIX"]
