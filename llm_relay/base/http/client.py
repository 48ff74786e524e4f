"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so concurrent subscriptions share connection pools instead of
    allocating a client per request. ``httpx.Client`` is safe to use from
    several threads; each request still owns its own response object.

Timeout strategy:
    - ``"stream"`` clients are bounded only by the connect timeout (plus an
      optional read timeout) from :func:`get_timeout_config`.
    - Every other purpose uses the whole-request HTTP timeout.

Lifecycle & cleanup:
    - Clients are cached by ``purpose``. All clients are closed at interpreter
      exit via ``atexit``; tests may call :func:`close_all_clients`.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import suppress
from typing import Dict

import httpx

from ..timeouts import get_timeout_config

STREAM_PURPOSE = "stream"

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str = STREAM_PURPOSE) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given purpose.

    Parameters:
        purpose: A short string discriminating separate pools (e.g.,
            ``"stream"``, ``"models"``). Keep stable to maximize reuse.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        cfg = get_timeout_config()
        timeout = cfg.stream_timeout() if purpose == STREAM_PURPOSE else cfg.http_timeout()
        client = httpx.Client(timeout=timeout)
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Pool teardown failures at shutdown are non-actionable.
            with suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "STREAM_PURPOSE"]
