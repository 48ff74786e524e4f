"""Incremental server-sent-event parser.

The transport delivers the body in fragments of arbitrary size; a fragment
may end in the middle of a line or even in the middle of a UTF-8 sequence.
``SSEParser`` keeps an unterminated trailing line (and any incomplete UTF-8
bytes) across ``feed`` calls and only interprets complete lines.

Line rules:
    - whitespace is stripped; empty lines are skipped;
    - ``data: [DONE]`` marks end of stream and is skipped;
    - ``data:`` lines are parsed as JSON and handed to the provider adapter;
    - ``event:``, ``id:``, ``retry:`` and ``:`` comment lines are ignored.

A line that fails to parse is logged and skipped; it never aborts the
stream. Events carrying a vendor error object (``{"error": {...}}``) are
remembered so the classifier can end the subscription with that message.
"""
from __future__ import annotations

import codecs
import json
import logging
from typing import List, Optional

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..errors import extract_vendor_message
from ..interfaces import ProviderAdapter
from ..logging import LogContext, log_event

_PREVIEW_CHARS = 100


class SSEParser:
    """Stateful per-request parser turning byte fragments into text deltas."""

    def __init__(
        self,
        adapter: ProviderAdapter,
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._adapter = adapter
        self._logger = logger
        self._ctx = ctx
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._raw = bytearray()
        self._pending = ""
        self.events_seen = 0
        self.events_decoded = 0
        self.decode_failures = 0
        self.done_seen = False
        self.vendor_error: Optional[str] = None

    @property
    def raw(self) -> bytes:
        """Every byte received so far."""
        return bytes(self._raw)

    @property
    def bytes_received(self) -> int:
        return len(self._raw)

    def absorb(self, fragment: bytes) -> None:
        """Buffer ``fragment`` without interpreting it (non-200 bodies)."""
        self._raw.extend(fragment)

    def feed(self, fragment: bytes) -> List[str]:
        """Consume one fragment and return the texts of every completed line, in order."""
        if not fragment:
            return []
        self._raw.extend(fragment)
        text = self._pending + self._decoder.decode(fragment)
        lines = text.split("\n")
        self._pending = lines.pop()
        return self._process_lines(lines)

    def flush(self) -> List[str]:
        """Interpret a final line left unterminated when the stream ended."""
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return self._process_lines([tail]) if tail else []

    def _process_lines(self, lines: List[str]) -> List[str]:
        texts: List[str] = []
        for line in lines:
            text = self._process_line(line)
            if text is not None:
                texts.append(text)
        return texts

    def _process_line(self, line: str) -> Optional[str]:
        trimmed = line.strip()
        if not trimmed or not trimmed.startswith(SSE_DATA_PREFIX):
            return None
        payload = trimmed[len(SSE_DATA_PREFIX):].strip()
        if payload == SSE_DONE_SENTINEL:
            self.done_seen = True
            return None
        self.events_seen += 1
        try:
            event = json.loads(payload)
        except json.JSONDecodeError:
            self.decode_failures += 1
            if self._logger is not None:
                log_event(
                    self._logger,
                    "stream.decode_error",
                    self._ctx,
                    level=logging.WARNING,
                    code="DECODE",
                    preview=payload[:_PREVIEW_CHARS],
                )
            return None
        self.events_decoded += 1
        if self.vendor_error is None:
            self.vendor_error = extract_vendor_message(event)
        return self._adapter.extract_stream_text(event)


__all__ = ["SSEParser"]
