"""
Structured context-pipeline error exception type.

Wraps failures raised by the context pipeline with a normalized `ErrorCode`
for consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode


@dataclass
class ContextError(Exception):
    """Represents a structured context error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging and display.
    """

    code: ErrorCode
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


__all__ = ["ContextError"]
