"""
Normalized context-pipeline error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the context pipeline and its
structured logging. Values are lowercase snake_case and are considered a stable
public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    OVERFLOW = "overflow"
    VALIDATION = "validation"
    SUMMARIZATION = "summarization"
    TOKENIZATION = "tokenization"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
