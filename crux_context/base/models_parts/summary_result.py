"""
SummaryResult DTO produced by every summarizer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


SummarizationMode = Literal["rule-based", "llm-based"]


@dataclass(frozen=True)
class SummaryResult:
    """Text summary of a batch of messages.

    Attributes:
        summary: Summary text.
        tokens_used: Estimated token cost of ``summary``.
        messages_processed: Number of input messages.
        mode: Strategy that actually produced the text (a model-based
            summarizer that fell back reports ``"rule-based"``).
    """

    summary: str
    tokens_used: int
    messages_processed: int
    mode: SummarizationMode


__all__ = ["SummaryResult", "SummarizationMode"]
