"""Interfaces parts package (one Protocol per module)."""

from .tokenizer import Tokenizer
from .completion_fn import CompletionFn

__all__ = ["Tokenizer", "CompletionFn"]
