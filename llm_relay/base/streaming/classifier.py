"""Response classification.

Decides the single terminal outcome of a request once the transport is done:
success, a vendor-reported error, or a transport-level failure. Two entry
points mirror the two pipelines:

``classify_stream_end``
    Called after the streaming transfer ends. Precedence: transport error,
    zero bytes, non-200 status, then the content checks on a 200 stream.

``classify_single_shot``
    Decodes a complete non-streaming body once and returns its completion
    text, or raises the classified ``ProviderError``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ErrorCode, ProviderError, extract_vendor_message, vendor_error_from_body
from ..interfaces import ProviderAdapter
from .sse_parser import SSEParser

HTTP_OK = 200


@dataclass(frozen=True)
class StreamOutcome:
    """Terminal outcome of a streaming transfer.

    Attributes:
        error: The classified failure, or ``None`` on success.
        text: Completion text recovered from a body that did not use SSE
            framing; delivered before the terminal chunk.
    """

    error: Optional[ProviderError] = None
    text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _decode_json(body: bytes) -> Any:
    return json.loads(body.decode("utf-8"))


def classify_single_shot(
    adapter: ProviderAdapter,
    body: bytes,
    status_code: int,
    *,
    provider: str,
    model: Optional[str] = None,
) -> str:
    """Return the completion text of a full response body.

    Raises:
        ProviderError: ``EMPTY_RESPONSE`` for an empty body; ``VENDOR_ERROR``
            for a non-200 status or an explicit error object (even on 200);
            ``DECODE_FAILURE`` when a 200 body matches no known shape.
    """
    if not body:
        raise ProviderError(
            code=ErrorCode.EMPTY_RESPONSE,
            message="response body was empty",
            provider=provider,
            model=model,
            status_code=status_code,
        )
    if status_code != HTTP_OK:
        raise vendor_error_from_body(body, status_code, provider=provider, model=model)
    try:
        payload = _decode_json(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProviderError(
            code=ErrorCode.DECODE_FAILURE,
            message=f"response body is not valid JSON: {e}",
            provider=provider,
            model=model,
            status_code=status_code,
            raw=e,
        ) from e
    text = adapter.extract_completion_text(payload)
    if text is not None:
        return text
    message = extract_vendor_message(payload)
    if message is not None:
        raise ProviderError(
            code=ErrorCode.VENDOR_ERROR,
            message=message,
            provider=provider,
            model=model,
            status_code=status_code,
        )
    raise ProviderError(
        code=ErrorCode.DECODE_FAILURE,
        message="response body has no completion text",
        provider=provider,
        model=model,
        status_code=status_code,
    )


def classify_stream_end(
    parser: SSEParser,
    adapter: ProviderAdapter,
    status_code: Optional[int],
    *,
    provider: str,
    model: Optional[str] = None,
    transport_error: Optional[BaseException] = None,
) -> StreamOutcome:
    """Classify the end of a streaming transfer.

    Order:
        1. transport error -> ``TRANSPORT_FAILURE``
        2. zero bytes received -> ``EMPTY_RESPONSE``
        3. status != 200 -> ``VENDOR_ERROR`` (vendor message or ``HTTP <status>``)
        4. an in-stream error event -> ``VENDOR_ERROR``
        5. data events seen but none decoded -> ``DECODE_FAILURE``
        6. no SSE events at all -> body decoded once as a single-shot response
        7. otherwise success
    """
    if transport_error is not None:
        return StreamOutcome(
            error=ProviderError(
                code=ErrorCode.TRANSPORT_FAILURE,
                message=str(transport_error) or type(transport_error).__name__,
                provider=provider,
                model=model,
                status_code=status_code,
                raw=transport_error,
            )
        )
    if parser.bytes_received == 0:
        return StreamOutcome(
            error=ProviderError(
                code=ErrorCode.EMPTY_RESPONSE,
                message="no data received",
                provider=provider,
                model=model,
                status_code=status_code,
            )
        )
    if status_code is not None and status_code != HTTP_OK:
        return StreamOutcome(
            error=vendor_error_from_body(parser.raw, status_code, provider=provider, model=model)
        )
    if parser.vendor_error is not None:
        return StreamOutcome(
            error=ProviderError(
                code=ErrorCode.VENDOR_ERROR,
                message=parser.vendor_error,
                provider=provider,
                model=model,
                status_code=status_code,
            )
        )
    if parser.events_seen > 0 and parser.events_decoded == 0:
        return StreamOutcome(
            error=ProviderError(
                code=ErrorCode.DECODE_FAILURE,
                message=f"none of {parser.events_seen} stream events could be decoded",
                provider=provider,
                model=model,
                status_code=status_code,
            )
        )
    if parser.events_seen == 0 and not parser.done_seen:
        # The server ignored ``stream: true`` and answered with a plain body.
        try:
            text = classify_single_shot(
                adapter, parser.raw, status_code or HTTP_OK, provider=provider, model=model
            )
        except ProviderError as e:
            return StreamOutcome(error=e)
        return StreamOutcome(text=text)
    return StreamOutcome()


__all__ = ["StreamOutcome", "classify_stream_end", "classify_single_shot", "HTTP_OK"]
