"""
Error classification helpers mapping exceptions and vendor bodies to
normalized ErrorCode values.

Implements exception classification for the transfer layer and the vendor
error-body lookup shared by the streaming and single-shot paths.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Decode errors (JSON / UTF-8).
        3. Everything else raised by the transfer is a transport failure.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError)):
        return ErrorCode.DECODE_FAILURE
    # httpx.TransportError, OSError, TimeoutError and anything else raised
    # while the transfer is running.
    return ErrorCode.TRANSPORT_FAILURE


def extract_vendor_message(payload: Any) -> Optional[str]:
    """Return the human-readable message of a vendor error body, if any.

    Both vendor families report errors as ``{"error": {"message": "..."}}``.
    Some OpenAI-compatible gateways send ``{"error": "..."}`` instead; that
    shape is accepted too. Anything else yields ``None``.
    """
    if not isinstance(payload, dict):
        return None
    err = payload.get("error")
    if isinstance(err, dict):
        message = err.get("message")
        return message if isinstance(message, str) and message else None
    if isinstance(err, str) and err:
        return err
    return None


def vendor_error_from_body(
    body: bytes,
    status_code: int,
    *,
    provider: str,
    model: Optional[str] = None,
) -> ProviderError:
    """Build the ``VENDOR_ERROR`` for a non-200 response body.

    The body is parsed as JSON and searched for an error message; when it does
    not parse or carries no message the error reads ``HTTP <status>``.
    """
    message: Optional[str] = None
    try:
        message = extract_vendor_message(json.loads(body.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError):
        message = None
    return ProviderError(
        code=ErrorCode.VENDOR_ERROR,
        message=message or f"HTTP {status_code}",
        provider=provider,
        model=model,
        status_code=status_code,
    )


__all__ = [
    "classify_exception",
    "extract_vendor_message",
    "vendor_error_from_body",
]
