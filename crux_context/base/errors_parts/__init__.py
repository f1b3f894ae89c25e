"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_context.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .context_error import ContextError
from .context_overflow_error import ContextOverflowError

__all__ = ["ErrorCode", "ContextError", "ContextOverflowError"]
