"""Anthropic payload helpers.

Pure functions translating between the generic message list and the
Anthropic Messages API shapes. Kept apart from the adapter class so they can
be tested without building requests.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..base.models import Message

CONTENT_BLOCK_DELTA = "content_block_delta"


def split_system(messages: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, str]]]:
    """Hoist the system prompt out of the conversation.

    Returns ``(system_text, wire_messages)`` where ``system_text`` is the
    content of the first system message (``None`` when absent) and
    ``wire_messages`` holds every non-system turn in order.
    """
    system_text: Optional[str] = None
    wire: List[Dict[str, str]] = []
    for m in messages:
        if m.is_system:
            if system_text is None:
                system_text = m.content
            continue
        wire.append(m.to_wire())
    return system_text, wire


def content_block_delta_text(event: Any) -> Optional[str]:
    """Text of a ``content_block_delta`` event; ``None`` for every other event type."""
    if not isinstance(event, dict) or event.get("type") != CONTENT_BLOCK_DELTA:
        return None
    delta = event.get("delta")
    if not isinstance(delta, dict):
        return None
    text = delta.get("text")
    return text if isinstance(text, str) else None


def first_content_text(body: Any) -> Optional[str]:
    """``content[0].text`` of a non-streaming Messages response."""
    if not isinstance(body, dict):
        return None
    content = body.get("content")
    if not isinstance(content, list) or not content:
        return None
    first = content[0]
    if not isinstance(first, dict):
        return None
    text = first.get("text")
    return text if isinstance(text, str) else None


__all__ = ["split_system", "content_block_delta_text", "first_content_text", "CONTENT_BLOCK_DELTA"]
