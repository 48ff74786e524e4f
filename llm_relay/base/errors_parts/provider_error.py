"""
Structured provider error exception type.

Every failure a subscription can end with is represented by one
`ProviderError` carrying a normalized `ErrorCode`. The error is created where
the failure is detected and delivered exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode

GENERIC_USER_MESSAGES = {
    ErrorCode.BAD_CONFIGURATION: "The AI service is not configured. Check the API key, endpoint and model.",
    ErrorCode.TRANSPORT_FAILURE: "Could not reach the AI service. Check your network connection.",
    ErrorCode.EMPTY_RESPONSE: "The AI service returned an empty response.",
    ErrorCode.DECODE_FAILURE: "The AI service returned a response that could not be read.",
    ErrorCode.CANCELLED: "The request was cancelled.",
}


@dataclass
class ProviderError(Exception):
    """Represents a classified completion failure.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message. For ``VENDOR_ERROR`` this is
            the vendor-supplied text (or ``"HTTP <status>"``).
        provider: Vendor name where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        status_code: Final HTTP status when one was received.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"

    @property
    def is_vendor_error(self) -> bool:
        return self.code is ErrorCode.VENDOR_ERROR

    @property
    def user_message(self) -> str:
        """Text suitable for showing to an end user.

        Vendor errors already carry vendor-written text and are surfaced
        verbatim; every other kind maps to a generic sentence.
        """
        if self.is_vendor_error:
            return self.message
        return GENERIC_USER_MESSAGES.get(self.code, self.message)


__all__ = ["ProviderError", "GENERIC_USER_MESSAGES"]
