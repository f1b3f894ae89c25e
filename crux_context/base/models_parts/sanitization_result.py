"""
SanitizationResult DTO returned by :func:`sanitize_message_list`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .message import Message


@dataclass(frozen=True)
class SanitizationResult:
    """Outcome of message sanitization.

    Attributes:
        messages: The (possibly rewritten) message sequence.
        sanitized: True when anything was changed.
        combined_assistant_messages: Number of assistant messages folded into
            a preceding one (three in a row count as two).
        summary: Short human-readable description when something changed.
    """

    messages: List[Message]
    sanitized: bool
    combined_assistant_messages: int
    summary: Optional[str] = None


__all__ = ["SanitizationResult"]
