"""
SummarizerOptions DTO shared by all summarization strategies.
"""
from __future__ import annotations

from dataclasses import dataclass

from .summary_result import SummarizationMode


@dataclass(frozen=True)
class SummarizerOptions:
    """Knobs passed to :meth:`Summarizer.summarize`.

    Attributes:
        max_summary_tokens: Target size of one summary.
        preserve_error_details: Keep the first error line of failed tool output.
        mode: Requested strategy.
    """

    max_summary_tokens: int = 500
    preserve_error_details: bool = True
    mode: SummarizationMode = "rule-based"


__all__ = ["SummarizerOptions"]
