"""Streaming package.

Exposes the chunk type, the incremental SSE parser, the response classifier
and the cancellable subscription under a single namespace.
"""

from .streaming import StreamChunk, accumulate_chunks
from .sse_parser import SSEParser
from .classifier import HTTP_OK, StreamOutcome, classify_single_shot, classify_stream_end
from .subscription import Subscription

__all__ = [
    "StreamChunk",
    "accumulate_chunks",
    "SSEParser",
    "HTTP_OK",
    "StreamOutcome",
    "classify_single_shot",
    "classify_stream_end",
    "Subscription",
]
