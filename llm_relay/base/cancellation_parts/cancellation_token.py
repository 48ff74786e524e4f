"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by subscriptions to stop an
in-flight transfer. Besides the polled ``cancelled`` flag, a token runs
registered teardown callbacks (for example closing an ``httpx`` response) so
a blocked network read is interrupted promptly.
"""

from __future__ import annotations

from contextlib import suppress
from threading import Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe. Child tokens inherit cancellation when the parent is
    cancelled, which lets a caller cancel every subscription started from one
    client in a single call.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._parent: "CancellationToken | None" = None
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for cb in callbacks:
            # Teardown of a half-closed connection may raise; cancellation must still complete.
            with suppress(Exception):
                cb()
        for child in children:
            child.cancel(reason)

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register a teardown callback; runs immediately if already cancelled."""
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return
        with suppress(Exception):
            callback()

    def remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            with suppress(ValueError):
                self._state.callbacks.remove(callback)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            token._parent = self
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Stop cascading to ``token``; a no-op when it is not linked."""
        with self._lock:
            with suppress(ValueError):
                self._children.remove(token)
        if token._parent is self:
            token._parent = None

    def detach(self) -> None:
        """Unlink this token from its parent, if any."""
        parent = self._parent
        if parent is not None:
            parent.unlink_child(self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
