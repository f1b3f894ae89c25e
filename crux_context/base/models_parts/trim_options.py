"""
TrimOptions DTO controlling the context trimmer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


TrimStrategy = Literal["age-based", "priority-based"]
TokenEstimatorMode = Literal["auto", "conservative", "exact"]

DEFAULT_PLACEHOLDER = "[content truncated - {age} steps ago, {tokens} tokens]"


@dataclass(frozen=True)
class TrimOptions:
    """Options for :func:`trim_conversation` and :func:`enforce_context_limit`.

    Attributes:
        max_age: Steps after which tool output counts as old.
        max_tokens_per_output: Per-tool-result cap (informational for hosts).
        placeholder: Template with ``{age}`` and ``{tokens}`` fields.
        preserve_errors: Never placeholder tool output that looks like an error.
        preserve_small_outputs: Never placeholder output below the threshold.
        small_output_threshold: Token threshold for "small" output.
        preserve_recent_turns: User/assistant messages this many steps old or
            newer get the recent-turn priority.
        strategy: ``priority-based`` (default) or ``age-based`` (oldest first).
        provider_name: Provider used to select a tokenizer.
        model: Model used to select a tokenizer.
        token_estimator: Tokenizer selection mode.
        boost_active_files: Raise the priority of tool output about files
            touched in recent steps.
    """

    max_age: int = 5
    max_tokens_per_output: int = 2000
    placeholder: str = DEFAULT_PLACEHOLDER
    preserve_errors: bool = True
    preserve_small_outputs: bool = True
    small_output_threshold: int = 100
    preserve_recent_turns: int = 5
    strategy: TrimStrategy = "priority-based"
    provider_name: str = ""
    model: str = ""
    token_estimator: TokenEstimatorMode = "auto"
    boost_active_files: bool = False


__all__ = ["TrimOptions", "TrimStrategy", "TokenEstimatorMode", "DEFAULT_PLACEHOLDER"]
