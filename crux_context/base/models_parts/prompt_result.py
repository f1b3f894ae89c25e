"""
PromptResult DTO returned by :func:`build_final_prompt`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .message import Message


@dataclass(frozen=True)
class PromptResult:
    """Final outgoing message sequence plus diagnostics.

    Attributes:
        messages: Sequence to send, with any stored summary injected first.
        token_count: Estimated tokens of ``messages``.
        within_budget: Always True for a returned result (overflow raises).
        was_trimmed: True when the trimmer ran.
        dropped_count: Messages removed by the trimmer.
        summarized: Whether dropped messages were folded into the summary store;
            ``None`` when no trimming happened.
    """

    messages: List[Message]
    token_count: int
    within_budget: bool
    was_trimmed: bool
    dropped_count: int
    summarized: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return JSON-friendly metadata (message count instead of messages)."""
        return {
            "message_count": len(self.messages),
            "token_count": self.token_count,
            "within_budget": self.within_budget,
            "was_trimmed": self.was_trimmed,
            "dropped_count": self.dropped_count,
            "summarized": self.summarized,
        }


__all__ = ["PromptResult"]
