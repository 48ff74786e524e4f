"""Pure extraction helpers for OpenAI-style JSON shapes.

Every helper tolerates foreign shapes: missing keys, wrong types and empty
lists all produce ``None`` instead of raising.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


def first_choice(payload: Any) -> Optional[Dict[str, Any]]:
    """Return ``payload["choices"][0]`` when it is a mapping."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    return first if isinstance(first, dict) else None


def stream_delta_content(payload: Any) -> Optional[str]:
    """``choices[0].delta.content`` of a streaming chunk."""
    choice = first_choice(payload)
    if choice is None:
        return None
    delta = choice.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


def message_content(payload: Any) -> Optional[str]:
    """``choices[0].message.content`` of a non-streaming response."""
    choice = first_choice(payload)
    if choice is None:
        return None
    message = choice.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


__all__ = ["first_choice", "stream_delta_content", "message_content"]
