"""
Context overflow error raised by the prompt builder.

This is the one unrecoverable condition of the pipeline: after trimming and
summarization the outgoing message sequence still exceeds the input budget.
The exception carries the exact token figures so callers can render an
actionable message instead of a stack trace.
"""
from __future__ import annotations

from .context_error import ContextError
from .error_code import ErrorCode


class ContextOverflowError(ContextError):
    """Raised when a conversation cannot be made to fit the input budget.

    Attributes:
        current_tokens: Estimated tokens of the final (trimmed) sequence.
        max_tokens: Maximum input tokens allowed by the budget.
    """

    def __init__(self, message: str, current_tokens: int, max_tokens: int) -> None:
        super().__init__(ErrorCode.OVERFLOW, message)
        self.current_tokens = current_tokens
        self.max_tokens = max_tokens

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"ContextOverflowError(current_tokens={self.current_tokens}, "
            f"max_tokens={self.max_tokens})"
        )


__all__ = ["ContextOverflowError"]
