"""Wire-format helpers shared by the test modules."""

from __future__ import annotations

import json
from typing import Any, Dict, List

DONE = b"data: [DONE]\n\n"


def sse(payload: Any) -> bytes:
    """Encode one ``data:`` event."""
    return f"data: {json.dumps(payload)}\n\n".encode("utf-8")


def openai_delta(text: str) -> Dict[str, Any]:
    return {"choices": [{"delta": {"content": text}}]}


def anthropic_delta(text: str) -> Dict[str, Any]:
    return {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}}


def split_every(data: bytes, size: int) -> List[bytes]:
    """Cut ``data`` into fragments of ``size`` bytes, ignoring line and character boundaries."""
    return [data[i : i + size] for i in range(0, len(data), size)]
