"""Unified completion error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_relay.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import (
    classify_exception,
    extract_vendor_message,
    vendor_error_from_body,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "extract_vendor_message",
    "vendor_error_from_body",
]
