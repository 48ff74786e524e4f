"""
Normalized completion error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the stream parser, the response
classifier and the request orchestrator. Values are lowercase snake_case and
are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    BAD_CONFIGURATION = "bad_configuration"
    TRANSPORT_FAILURE = "transport_failure"
    EMPTY_RESPONSE = "empty_response"
    VENDOR_ERROR = "vendor_error"
    DECODE_FAILURE = "decode_failure"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
