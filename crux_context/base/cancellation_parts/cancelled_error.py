"""Cancellation error type.

Raised by ``CancellationToken.raise_if_cancelled`` once a host request has
been cancelled. The model-based summarizer treats it like any other failed
model call and falls back to rule-based summarization.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cooperative cancellation request."""


__all__ = ["CancelledError"]
