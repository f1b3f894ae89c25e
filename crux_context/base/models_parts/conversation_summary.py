"""
ConversationSummary DTO owned by a :class:`SummaryStore`.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ConversationSummary:
    """Accumulated summary state for one conversation.

    Replaced wholesale on every update; timestamps are epoch milliseconds.

    Attributes:
        created_at: Time of the first summarization event.
        updated_at: Time of the latest summarization event.
        content: Accumulated summary text.
        tokens_used: Estimated token cost of ``content``.
        messages_included: Running total of source messages folded in.
        version: Incremented by one on every update, starting at 1.
    """

    created_at: int
    updated_at: int
    content: str
    tokens_used: int
    messages_included: int
    version: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ConversationSummary"]
