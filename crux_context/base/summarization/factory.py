"""Summarizer selection by configured mode."""

from __future__ import annotations

import logging
from typing import Optional

from ..cancellation import CancellationToken
from ..logging import get_logger, log_event
from ..interfaces import CompletionFn
from .llm_based import LLMBasedSummarizer
from .rule_based import RuleBasedSummarizer
from .summarizer import Summarizer

logger = get_logger("summarizer")


def create_summarizer(
    mode: str = "rule-based",
    complete: Optional[CompletionFn] = None,
    model: Optional[str] = None,
    cancellation_token: Optional[CancellationToken] = None,
    provider_name: Optional[str] = None,
    token_estimator: str = "auto",
) -> Summarizer:
    """Return the summarizer for ``mode``.

    ``llm-based`` without a ``complete`` callable degrades to rule-based.
    ``provider_name``, ``model`` and ``token_estimator`` select the tokenizer
    the model-based summarizer sizes its context with.

    Raises:
        ValueError: If ``mode`` is not a known summarization mode.
    """
    if mode == "rule-based":
        return RuleBasedSummarizer()
    if mode != "llm-based":
        raise ValueError(f"unknown summarization mode: {mode!r}")
    if complete is None:
        log_event(
            logger,
            "summarize.no_backend",
            level=logging.WARNING,
            requested_mode=mode,
            model=model,
        )
        return RuleBasedSummarizer()
    return LLMBasedSummarizer(
        complete,
        model=model,
        cancellation_token=cancellation_token,
        provider_name=provider_name,
        token_estimator=token_estimator,
    )


__all__ = ["create_summarizer"]
