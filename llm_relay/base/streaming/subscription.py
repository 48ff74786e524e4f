"""Subscription: one in-flight completion request.

A subscription owns the worker thread running the transfer, the
cancellation token and the terminal latch. Its event sequence is zero or more
non-terminal chunks followed by exactly one terminal event (a finish chunk or
a ``ProviderError``), unless it is cancelled first.

Delivery and cancellation share one re-entrant lock. Every emit checks the
latch under the lock, and cancellation sets the latch under the same lock,
so a delivery racing with ``cancel()`` either completes before ``cancel()``
returns or does not happen at all.

Consumers may:
  * iterate (``for chunk in sub``) on their own thread; the terminal error
    is raised from the iterator;
  * pass ``on_chunk`` / ``on_error`` callbacks, invoked on the I/O thread;
  * block on ``wait()`` / ``result()``.
"""
from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Callable, Iterator, List, Optional

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, ProviderError, classify_exception
from ..logging import LogContext, normalized_log_event
from .streaming import StreamChunk

ChunkCallback = Callable[[StreamChunk], Any]
ErrorCallback = Callable[[ProviderError], Any]
Transfer = Callable[["Subscription"], None]

_CANCELLED = object()


class Subscription:
    """Cancellable handle on one completion request."""

    def __init__(
        self,
        *,
        ctx: LogContext,
        logger: logging.Logger,
        token: Optional[CancellationToken] = None,
        on_chunk: Optional[ChunkCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._ctx = ctx
        self._logger = logger
        self._token = token or CancellationToken()
        self._on_chunk = on_chunk
        self._on_error = on_error
        self._lock = threading.RLock()
        self._terminated = False
        self._cancelled = False
        self._error: Optional[ProviderError] = None
        self._parts: List[str] = []
        self._emitted = 0
        self._events: "queue.SimpleQueue[Any]" = queue.SimpleQueue()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._t0 = time.perf_counter()
        self._first_chunk_ms: Optional[float] = None
        self._token.add_callback(self._on_token_cancelled)

    # Lifecycle -----------------------------------------------------------
    def start(self, transfer: Transfer) -> "Subscription":
        """Run ``transfer(self)`` on a dedicated daemon thread."""
        if self._thread is not None:
            raise RuntimeError("subscription already started")
        self._t0 = time.perf_counter()
        self._thread = threading.Thread(
            target=self._run,
            args=(transfer,),
            name=f"llm-relay-{self._ctx.request_id or 'request'}",
            daemon=True,
        )
        self._thread.start()
        return self

    def _run(self, transfer: Transfer) -> None:
        try:
            transfer(self)
        except CancelledError:
            pass
        except Exception as e:
            if not self._token.cancelled:
                self.emit_error(
                    ProviderError(
                        code=classify_exception(e),
                        message=str(e) or type(e).__name__,
                        provider=self._ctx.provider or "unknown",
                        model=self._ctx.model,
                        raw=e,
                    )
                )
        finally:
            with self._lock:
                if not self._terminated and not self._token.cancelled:
                    # A transfer must end with a terminal event; treat silence as an empty response.
                    self._terminate_with_error(
                        ProviderError(
                            code=ErrorCode.EMPTY_RESPONSE,
                            message="transfer ended without a terminal event",
                            provider=self._ctx.provider or "unknown",
                            model=self._ctx.model,
                        )
                    )

    # Delivery (I/O thread) ----------------------------------------------
    @property
    def token(self) -> CancellationToken:
        return self._token

    def emit_chunk(self, text: str) -> bool:
        """Deliver a non-terminal chunk. Returns False once the subscription is closed."""
        with self._lock:
            if self._terminated or self._token.cancelled:
                return False
            if self._first_chunk_ms is None:
                self._first_chunk_ms = (time.perf_counter() - self._t0) * 1000.0
            self._deliver(StreamChunk(text=text, finish=False))
            return True

    def finish(self, text: str = "") -> bool:
        """Deliver the terminal chunk and close the subscription successfully."""
        with self._lock:
            if self._terminated or self._token.cancelled:
                return False
            self._terminated = True
            self._deliver(StreamChunk(text=text, finish=True))
            self._log_terminal(None)
        self._done.set()
        self._release()
        return True

    def emit_error(self, error: ProviderError) -> bool:
        """Deliver the terminal error and close the subscription."""
        with self._lock:
            if self._terminated or self._token.cancelled:
                return False
            self._terminate_with_error(error)
        return True

    def _terminate_with_error(self, error: ProviderError) -> None:
        self._terminated = True
        self._error = error
        self._events.put(error)
        self._log_terminal(error)
        self._done.set()
        self._release()
        if self._on_error is not None:
            self._notify(self._on_error, error)

    def _deliver(self, chunk: StreamChunk) -> None:
        self._emitted += 1
        if chunk.text:
            self._parts.append(chunk.text)
        self._events.put(chunk)
        if self._on_chunk is not None:
            self._notify(self._on_chunk, chunk)

    def _notify(self, callback: Callable[[Any], Any], event: Any) -> None:
        try:
            callback(event)
        except Exception:
            # A failing consumer callback must not corrupt the event sequence.
            self._logger.exception("subscription callback failed (request_id=%s)", self._ctx.request_id)

    # Cancellation ---------------------------------------------------------
    def cancel(self, reason: Optional[str] = None) -> None:
        """Stop the request. Idempotent; a no-op after the terminal event."""
        self._token.cancel(reason or "cancelled by caller")

    def _on_token_cancelled(self) -> None:
        with self._lock:
            if self._terminated:
                return
            self._terminated = True
            self._cancelled = True
            self._events.put(_CANCELLED)
            normalized_log_event(
                self._logger,
                f"{self._event_prefix}.cancelled",
                self._ctx,
                phase="finalize",
                error_code=ErrorCode.CANCELLED.value,
                emitted=self._emitted > 0,
                emitted_count=self._emitted,
                reason=self._token.reason,
            )
        self._done.set()
        self._release()

    def _release(self) -> None:
        # Terminal: drop every reference the token (and its parent) holds on us.
        self._token.remove_callback(self._on_token_cancelled)
        self._token.detach()

    # Consumer surface -----------------------------------------------------
    def __iter__(self) -> Iterator[StreamChunk]:
        """Yield chunks in arrival order; raise the terminal ``ProviderError`` if any.

        Single consumer: each event is yielded once. Iteration stops silently
        when the subscription is cancelled.
        """
        while True:
            item = self._events.get()
            if item is _CANCELLED or self._cancelled:
                return
            if isinstance(item, ProviderError):
                raise item
            yield item
            if item.finish:
                return

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the terminal event or cancellation; False on timeout."""
        return self._done.wait(timeout)

    def result(self, timeout: Optional[float] = None) -> str:
        """Block for completion and return the concatenated text.

        Raises:
            ProviderError: the terminal error; ``CANCELLED`` when the
                subscription was cancelled; ``TimeoutError`` when ``timeout``
                elapses first.
        """
        if not self.wait(timeout):
            raise TimeoutError(f"completion not finished within {timeout}s")
        if self._cancelled:
            raise ProviderError(
                code=ErrorCode.CANCELLED,
                message=self._token.reason or "cancelled",
                provider=self._ctx.provider or "unknown",
                model=self._ctx.model,
            )
        if self._error is not None:
            raise self._error
        return "".join(self._parts)

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def error(self) -> Optional[ProviderError]:
        return self._error

    @property
    def emitted_count(self) -> int:
        return self._emitted

    @property
    def request_id(self) -> Optional[str]:
        return self._ctx.request_id

    # Logging ------------------------------------------------------------
    @property
    def _event_prefix(self) -> str:
        return "chat" if self._ctx.stream is False else "stream"

    def _log_terminal(self, error: Optional[ProviderError]) -> None:
        normalized_log_event(
            self._logger,
            f"{self._event_prefix}.end" if error is None else f"{self._event_prefix}.error",
            self._ctx,
            phase="finalize",
            error_code=error.code.value if error is not None else None,
            emitted=self._emitted > 0,
            level=logging.INFO if error is None else logging.WARNING,
            emitted_count=self._emitted,
            time_to_first_chunk_ms=self._first_chunk_ms,
            total_duration_ms=(time.perf_counter() - self._t0) * 1000.0,
            status_code=error.status_code if error is not None else None,
            error=error.message if error is not None else None,
        )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"Subscription(request_id={self._ctx.request_id!r}, done={self.done}, "
            f"cancelled={self._cancelled}, emitted={self._emitted})"
        )


__all__ = ["Subscription", "StreamChunk"]
