"""
ContextLimitResult DTO returned by :func:`enforce_context_limit`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .message import Message


@dataclass(frozen=True)
class ContextLimitResult:
    """Outcome of enforcing a token limit on a message sequence.

    Attributes:
        messages: Surviving messages in original order (tool results may carry
            placeholder content).
        truncated: False when the input already fitted and was returned as-is.
        dropped_count: ``len(input) - len(messages)``.
        original_tokens: Estimate for the input sequence.
        final_tokens: Estimate for ``messages``.
        dropped_messages: Input messages absent from ``messages`` by identity,
            in original order. Placeholder-replaced messages count as dropped
            since their original content no longer reaches the model.
    """

    messages: List[Message]
    truncated: bool
    dropped_count: int
    original_tokens: int
    final_tokens: int
    dropped_messages: List[Message] = field(default_factory=list)


__all__ = ["ContextLimitResult"]
