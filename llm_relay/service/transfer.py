"""Transfer functions run on a subscription's worker thread.

Each function performs exactly one HTTP request and ends the subscription
with exactly one terminal event. Both go through ``httpx.Client.stream`` so
cancelling the subscription can close the response and unblock a pending
read; a transfer that notices cancellation simply returns without emitting.

Streaming path
    Fragments of a 200 response are fed to :class:`SSEParser` as they arrive
    and every extracted delta is delivered immediately. Fragments of any
    other status are only buffered, then classified at end of stream.

Single-shot path
    The full body is read, then decoded once by ``classify_single_shot``; the
    completion text travels on the terminal chunk.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..base.interfaces import ProviderAdapter
from ..base.logging import LogContext, normalized_log_event
from ..base.models import PreparedRequest
from ..base.streaming import HTTP_OK, SSEParser, Subscription, classify_single_shot, classify_stream_end
from ..base.errors import ErrorCode, ProviderError

TransportError = (httpx.HTTPError, OSError)


def _open(client: httpx.Client, request: PreparedRequest):
    return client.stream("POST", request.url, headers=request.headers, json=request.body)


def run_streaming(
    sub: Subscription,
    *,
    client: httpx.Client,
    adapter: ProviderAdapter,
    request: PreparedRequest,
    logger: logging.Logger,
    ctx: LogContext,
) -> None:
    """Stream one completion into ``sub``."""
    token = sub.token
    parser = SSEParser(adapter, logger=logger, ctx=ctx)
    status: Optional[int] = None
    transport_error: Optional[BaseException] = None

    token.raise_if_cancelled()
    normalized_log_event(logger, "stream.start", ctx, phase="start", attempt=1, emitted=False, url=request.url)
    try:
        with _open(client, request) as resp:
            token.add_callback(resp.close)
            try:
                status = resp.status_code
                for fragment in resp.iter_bytes():
                    if token.cancelled:
                        return
                    if status != HTTP_OK:
                        parser.absorb(fragment)
                        continue
                    for text in parser.feed(fragment):
                        if not sub.emit_chunk(text):
                            return
                if status == HTTP_OK:
                    for text in parser.flush():
                        if not sub.emit_chunk(text):
                            return
            finally:
                token.remove_callback(resp.close)
    except TransportError as e:
        if token.cancelled:
            return
        transport_error = e

    if token.cancelled:
        return
    if parser.decode_failures:
        normalized_log_event(
            logger,
            "stream.decode_summary",
            ctx,
            phase="finalize",
            level=logging.DEBUG,
            events=parser.events_seen,
            decode_failures=parser.decode_failures,
        )
    outcome = classify_stream_end(
        parser,
        adapter,
        status,
        provider=ctx.provider or adapter.vendor.value,
        model=ctx.model,
        transport_error=transport_error,
    )
    if outcome.error is not None:
        sub.emit_error(outcome.error)
        return
    if outcome.text is not None and not sub.emit_chunk(outcome.text):
        return
    sub.finish()


def run_single_shot(
    sub: Subscription,
    *,
    client: httpx.Client,
    adapter: ProviderAdapter,
    request: PreparedRequest,
    logger: logging.Logger,
    ctx: LogContext,
) -> None:
    """Fetch one complete response and deliver it as a single terminal chunk."""
    token = sub.token
    provider = ctx.provider or adapter.vendor.value
    token.raise_if_cancelled()
    normalized_log_event(logger, "chat.start", ctx, phase="start", attempt=1, emitted=False, url=request.url)
    try:
        with _open(client, request) as resp:
            token.add_callback(resp.close)
            try:
                status = resp.status_code
                body = bytearray()
                for fragment in resp.iter_bytes():
                    if token.cancelled:
                        return
                    body.extend(fragment)
            finally:
                token.remove_callback(resp.close)
    except TransportError as e:
        if token.cancelled:
            return
        sub.emit_error(
            ProviderError(
                code=ErrorCode.TRANSPORT_FAILURE,
                message=str(e) or type(e).__name__,
                provider=provider,
                model=ctx.model,
                raw=e,
            )
        )
        return

    if token.cancelled:
        return
    try:
        text = classify_single_shot(adapter, bytes(body), status, provider=provider, model=ctx.model)
    except ProviderError as e:
        sub.emit_error(e)
        return
    sub.finish(text)


__all__ = ["run_streaming", "run_single_shot"]
