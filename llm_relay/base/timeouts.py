"""Transport timeout configuration.

The completion core imposes no timeout of its own: a streaming completion may
legitimately stay open for minutes. The only bound is the transport's
connection timeout, plus an optional read timeout for deployments that want
one. Values are read from the environment once and cached.

Supported environment variables (all optional):
    LLM_RELAY_CONNECT_TIMEOUT_SECONDS   connect/handshake timeout (default 30)
    LLM_RELAY_READ_TIMEOUT_SECONDS      per-read idle timeout (default: none)
    LLM_RELAY_HTTP_TIMEOUT_SECONDS      whole-request timeout for non-streaming
                                        calls such as model listing (default 60)
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

from .constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_HTTP_TIMEOUT


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Timeout for establishing the connection.
        read_timeout_seconds: Idle timeout between received fragments;
            ``None`` disables it.
        http_timeout_seconds: Timeout applied to short, non-streaming calls.
    """

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout_seconds: float | None = None
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT

    def stream_timeout(self) -> httpx.Timeout:
        """``httpx.Timeout`` for completion transfers (connect-bounded only)."""
        return httpx.Timeout(
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
            write=self.connect_timeout_seconds,
            pool=self.connect_timeout_seconds,
        )

    def http_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse a positive float environment variable, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config(*, refresh: bool = False) -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    ``refresh=True`` re-reads the environment (used by tests).
    """
    global _CACHED  # noqa: PLW0603 - intentional, documented module cache
    if _CACHED is not None and not refresh:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=float(
            _parse_env_float("LLM_RELAY_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT)
        ),
        read_timeout_seconds=_parse_env_float("LLM_RELAY_READ_TIMEOUT_SECONDS", None),
        http_timeout_seconds=float(_parse_env_float("LLM_RELAY_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT)),
    )
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
