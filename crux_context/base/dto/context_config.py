"""
Pydantic DTO for context-management configuration.

Purpose
-------
Validate the flat option set consumed by the budget, trimmer, summarizer and
prompt builder before it reaches them. Field names are snake_case; the
camelCase option names (``maxContextTokens``, ...) are accepted as
aliases so configuration files written for other hosts load unchanged.

Failure semantics: construction raises ``pydantic.ValidationError`` on
out-of-range numbers or unknown strategy/mode names.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ...config.defaults import (
    DEFAULT_ENABLED,
    DEFAULT_MAX_CONTEXT_TOKENS,
    DEFAULT_MAX_SUMMARY_TOKENS,
    DEFAULT_PRESERVE_ERROR_DETAILS,
    DEFAULT_PRESERVE_RECENT_TURNS,
    DEFAULT_RESERVED_OUTPUT_TOKENS,
    DEFAULT_SUMMARIZATION_MODE,
    DEFAULT_SUMMARIZE_ON_TRUNCATE,
    DEFAULT_TOKEN_ESTIMATOR,
    DEFAULT_TRIM_STRATEGY,
)


class ContextConfig(BaseModel):
    """Validated context-management configuration.

    Attributes:
        enabled: Rolling-context toggle for the host loop.
        max_context_tokens: Model context window size.
        reserved_output_tokens: Tokens reserved for the response.
        trim_strategy: ``priority-based`` or ``age-based``.
        preserve_recent_turns: Steps of user/assistant history always favoured.
        summarize_on_truncate: Summarize dropped messages into the summary store.
        summarization_mode: ``rule-based`` or ``llm-based``.
        max_summary_tokens: Target size of one summary.
        preserve_error_details: Keep error lines in summaries.
        token_estimator: ``auto``, ``conservative`` or ``exact``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    enabled: bool = Field(default=DEFAULT_ENABLED)
    max_context_tokens: int = Field(default=DEFAULT_MAX_CONTEXT_TOKENS, gt=0, alias="maxContextTokens")
    reserved_output_tokens: int = Field(default=DEFAULT_RESERVED_OUTPUT_TOKENS, ge=0, alias="reservedOutputTokens")
    trim_strategy: Literal["age-based", "priority-based"] = Field(
        default=DEFAULT_TRIM_STRATEGY, alias="trimStrategy"
    )
    preserve_recent_turns: int = Field(default=DEFAULT_PRESERVE_RECENT_TURNS, ge=0, alias="preserveRecentTurns")
    summarize_on_truncate: bool = Field(default=DEFAULT_SUMMARIZE_ON_TRUNCATE, alias="summarizeOnTruncate")
    summarization_mode: Literal["rule-based", "llm-based"] = Field(
        default=DEFAULT_SUMMARIZATION_MODE, alias="summarizationMode"
    )
    max_summary_tokens: int = Field(default=DEFAULT_MAX_SUMMARY_TOKENS, gt=0, alias="maxSummaryTokens")
    preserve_error_details: bool = Field(default=DEFAULT_PRESERVE_ERROR_DETAILS, alias="preserveErrorDetails")
    token_estimator: Literal["auto", "conservative", "exact"] = Field(
        default=DEFAULT_TOKEN_ESTIMATOR, alias="tokenEstimator"
    )

    @property
    def max_input_tokens(self) -> int:
        return self.max_context_tokens - self.reserved_output_tokens

    @classmethod
    def for_model(cls, model: str, **overrides: Any) -> "ContextConfig":
        """Build a config whose context window is looked up for ``model``.

        Explicit ``max_context_tokens``/``maxContextTokens`` overrides win
        over the lookup.
        """
        from ..tokens.limits import get_context_limit

        data = {"max_context_tokens": get_context_limit(model)}
        data.update(overrides)
        if "maxContextTokens" in overrides:
            data.pop("max_context_tokens")
        return cls.model_validate(data)


__all__ = ["ContextConfig"]
