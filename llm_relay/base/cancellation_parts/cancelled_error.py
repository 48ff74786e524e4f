"""Cancellation error type.

Defines the public ``CancelledError`` used inside a transfer to unwind once
the owning subscription has been cancelled.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes cooperative cancellation from transport failures so the
    transfer can stop silently instead of delivering an error.
    """

__all__ = ["CancelledError"]
