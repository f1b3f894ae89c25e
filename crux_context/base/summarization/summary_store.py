"""Versioned, growth-bounded summary accumulator for one conversation.

One store per conversation, passed explicitly to the prompt builder. Not
safe for concurrent use; callers serialize prompt building per conversation.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable, Optional, Sequence

from ..logging import get_logger, log_event
from ..models import ConversationSummary, Message, SummarizerOptions
from ..tokens import estimate_tokens
from .summarizer import Summarizer

SUMMARY_HEADER = "[Previous Conversation Summary]"
CONDENSED_HEADER = "[Conversation History Summary]"
GROWTH_FACTOR = 2

logger = get_logger("summary_store")


class SummaryStore:
    """Holds at most one :class:`ConversationSummary`.

    Args:
        clock: Returns seconds since the epoch; stored timestamps are ms.
        provider_name: Provider used to pick a tokenizer for size estimates.
        model: Model used to pick a tokenizer for size estimates.
        token_estimator: Tokenizer selection strategy.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        provider_name: Optional[str] = None,
        model: Optional[str] = None,
        token_estimator: str = "auto",
    ) -> None:
        self._clock = clock
        self.provider_name = provider_name
        self.model = model
        self.token_estimator = token_estimator
        self._summary: Optional[ConversationSummary] = None

    def _estimate(self, content: str) -> int:
        return estimate_tokens(
            [Message(role="system", content=content)],
            self.provider_name,
            self.model,
            self.token_estimator,
        )

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def update_summary(
        self,
        dropped_messages: Sequence[Message],
        summarizer: Summarizer,
        options: SummarizerOptions,
    ) -> ConversationSummary:
        """Summarize ``dropped_messages`` and merge the result into the store.

        The new text is appended under an ``[Update N]`` heading. When the
        merged text would exceed twice ``options.max_summary_tokens``, the
        history is discarded and only the newest text is kept under a
        condensed heading.
        """
        result = summarizer.summarize(dropped_messages, options)
        previous = self._summary
        content = result.summary
        tokens_used = result.tokens_used
        event = "summary.updated"

        if previous is not None:
            combined = f"{previous.content}\n\n[Update {previous.version + 1}]\n{content}"
            combined_tokens = self._estimate(combined)
            if combined_tokens > options.max_summary_tokens * GROWTH_FACTOR:
                content = f"{CONDENSED_HEADER}\n{content}"
                tokens_used = self._estimate(content)
                event = "summary.condensed"
            else:
                content = combined
                tokens_used = combined_tokens

        now = self._now_ms()
        self._summary = ConversationSummary(
            created_at=previous.created_at if previous else now,
            updated_at=now,
            content=content,
            tokens_used=tokens_used,
            messages_included=len(dropped_messages) + (previous.messages_included if previous else 0),
            version=(previous.version if previous else 0) + 1,
        )
        log_event(
            logger,
            event,
            version=self._summary.version,
            tokens_used=tokens_used,
            messages_included=self._summary.messages_included,
            mode=result.mode,
        )
        return self._summary

    def get_summary_message(self) -> Optional[Message]:
        """Return the summary as a system message, or None when empty."""
        if self._summary is None:
            return None
        return Message(role="system", content=f"{SUMMARY_HEADER}\n{self._summary.content}")

    def get_summary_info(self) -> Optional[ConversationSummary]:
        """Return a copy of the summary metadata, or None when empty."""
        return replace(self._summary) if self._summary is not None else None

    def has_summary(self) -> bool:
        return self._summary is not None

    def clear(self) -> None:
        """Drop the summary (new session boundary)."""
        if self._summary is not None:
            log_event(logger, "summary.cleared", version=self._summary.version)
        self._summary = None


__all__ = ["SummaryStore", "SUMMARY_HEADER", "CONDENSED_HEADER"]
