"""Protocol seams of the context pipeline (public surface).

Re-exports the single-class modules under ``crux_context.base.interfaces_parts``.
"""

from .interfaces_parts.tokenizer import Tokenizer
from .interfaces_parts.completion_fn import CompletionFn

__all__ = ["Tokenizer", "CompletionFn"]
