"""Base shared constants.

Central location to avoid scattering wire-protocol literals and default
numbers across the parser, adapters and transfers.

# pragma: allowlist secret
"""
from __future__ import annotations

# SSE framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Endpoint construction
API_VERSION_SEGMENT = "/v1"

# Anthropic wire constants
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_MAX_TOKENS = 4096

# Default transport timeouts (seconds)
DEFAULT_CONNECT_TIMEOUT = 30.0
DEFAULT_HTTP_TIMEOUT = 60.0

__all__ = [
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "API_VERSION_SEGMENT",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_MAX_TOKENS",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_HTTP_TIMEOUT",
]
