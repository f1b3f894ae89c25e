"""Tokenizer Protocol (single-class module).

Interface for the pluggable token counters used by the estimator. Any object
with these three methods can be passed where a tokenizer is expected.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import Message


@runtime_checkable
class Tokenizer(Protocol):
    """Counts tokens for text and messages.

    Implementations must be deterministic and must not raise: when exact
    counting is impossible they degrade to an estimate.
    """

    def encode(self, text: str) -> int:
        """Return the token count of ``text``."""
        ...

    def count_tokens(self, message: Message) -> int:
        """Return the token count of one message including structural overhead."""
        ...

    def get_name(self) -> str:
        """Return a short identifier, e.g. ``"tiktoken:cl100k_base"``."""
        ...


__all__ = ["Tokenizer"]
