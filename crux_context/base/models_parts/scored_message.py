"""
ScoredMessage DTO used inside a single trim invocation.
"""
from __future__ import annotations

from dataclasses import dataclass

from .message import Message


@dataclass(frozen=True)
class ScoredMessage:
    """A message tagged with its step, original position and priority.

    Higher ``priority`` survives longer. ``original_index`` is the position in
    the input sequence and is used to restore original order after removal.
    """

    message: Message
    step: int
    original_index: int
    priority: int


__all__ = ["ScoredMessage"]
