"""
Pydantic DTOs and validators for inbound messages.

Purpose
-------
Validate the conversation handed to ``CompletionClient.send`` before any
request is built: the list must be non-empty, every role must be known and
every content a string. Callers may pass ``Message`` instances or plain
``{"role", "content"}`` mappings.

Failure semantics
-----------------
``validate_messages`` converts a ``pydantic.ValidationError`` into a
``ProviderError`` with ``ErrorCode.BAD_CONFIGURATION`` so callers only deal
with one exception type.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator, model_validator

from ..errors import ErrorCode, ProviderError
from ..models import Message


class MessageDTO(BaseModel):
    """Represents one inbound chat message.

    Rules:
        - ``role`` must be ``system``, ``user`` or ``assistant``.
        - ``content`` must be a string; ``user`` turns must not be blank.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        if self.role == "user" and not self.content.strip():
            raise ValueError("user message content must not be empty")
        return self

    def to_message(self) -> Message:
        return Message(role=self.role, content=self.content)


_MESSAGES_ADAPTER = TypeAdapter(List[MessageDTO])


def _as_mapping(item: Any) -> Any:
    if isinstance(item, Message) or is_dataclass(item):
        return asdict(item)
    return item


def validate_messages(
    messages: Iterable[Any],
    *,
    provider: str,
    model: Optional[str] = None,
) -> List[Message]:
    """Validate and normalize a conversation.

    Parameters:
        messages: Ordered ``Message`` objects or role/content mappings.
        provider: Vendor name for error attribution.
        model: Model name for error attribution.

    Returns:
        The conversation as a list of ``Message`` values, order preserved.

    Raises:
        ProviderError: ``BAD_CONFIGURATION`` when the list is empty or any
            entry is invalid.
    """
    items = [_as_mapping(m) for m in (messages or [])]
    if not items:
        raise ProviderError(
            code=ErrorCode.BAD_CONFIGURATION,
            message="messages must not be empty",
            provider=provider,
            model=model,
        )
    try:
        return [dto.to_message() for dto in _MESSAGES_ADAPTER.validate_python(items)]
    except ValidationError as e:
        raise ProviderError(
            code=ErrorCode.BAD_CONFIGURATION,
            message=f"invalid messages: {e}",
            provider=provider,
            model=model,
            raw=e,
        ) from e


__all__ = ["MessageDTO", "validate_messages"]
