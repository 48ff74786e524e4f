"""Streaming primitives.

Keeps the chunk type and its helpers apart from the parser and the
subscription so every layer can import them without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class StreamChunk:
    """One unit of incrementally produced output.

    Fields:
      text: text fragment (may be empty, typically on the terminal chunk)
      finish: True on the last chunk of a successful subscription
    """

    text: str
    finish: bool = False


def accumulate_chunks(chunks: Iterable[StreamChunk]) -> str:
    """Concatenate the text of ``chunks`` in order."""
    return "".join(c.text for c in chunks if c.text)


__all__ = ["StreamChunk", "accumulate_chunks"]
