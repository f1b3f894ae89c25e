"""Unified context error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_context.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.context_error import ContextError
from .errors_parts.context_overflow_error import ContextOverflowError

__all__ = ["ErrorCode", "ContextError", "ContextOverflowError"]
