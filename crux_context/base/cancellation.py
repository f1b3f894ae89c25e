"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` lets a host abandon the one blocking step of the
pipeline, the model-based summarizer's backend call. ``CancelledError`` is
raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
