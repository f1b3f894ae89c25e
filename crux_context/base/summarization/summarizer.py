"""Summarizer abstraction.

A summarizer turns messages that are about to leave the context window into
a compact text that can be carried forward in the summary store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import Message, SummarizationMode, SummarizerOptions, SummaryResult


class Summarizer(ABC):
    """Base class for summarization strategies.

    Implementations must be best-effort: they return a result for any input
    rather than raising.
    """

    mode: SummarizationMode

    @abstractmethod
    def summarize(self, messages: Sequence[Message], options: SummarizerOptions) -> SummaryResult:
        """Summarize ``messages`` within ``options.max_summary_tokens``."""
        raise NotImplementedError


__all__ = ["Summarizer"]
