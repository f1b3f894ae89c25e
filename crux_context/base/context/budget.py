"""Context budget: how many input tokens a request may use."""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence, Union

from ...config.defaults import DEFAULT_MAX_CONTEXT_TOKENS, DEFAULT_RESERVED_OUTPUT_TOKENS
from ..dto import ContextConfig
from ..models import BudgetResult, Message
from ..tokens import estimate_tokens

ConfigLike = Union[ContextConfig, Mapping[str, Any], None]


def _option(config: ConfigLike, field: str, alias: str, default: Any) -> Any:
    if config is None:
        return default
    if isinstance(config, ContextConfig):
        return getattr(config, field)
    value = config.get(field, config.get(alias))
    return default if value is None else value


def compute_max_input_tokens(config: ConfigLike = None) -> int:
    """Return ``max_context_tokens - reserved_output_tokens``.

    Accepts a :class:`ContextConfig`, a plain mapping (snake_case or camelCase
    keys) or ``None``; missing options take their defaults.
    """
    max_context = _option(config, "max_context_tokens", "maxContextTokens", DEFAULT_MAX_CONTEXT_TOKENS)
    reserved = _option(config, "reserved_output_tokens", "reservedOutputTokens", DEFAULT_RESERVED_OUTPUT_TOKENS)
    return int(max_context) - int(reserved)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def check_budget(
    messages: Sequence[Message],
    config: ConfigLike = None,
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
) -> BudgetResult:
    """Compare the estimated size of ``messages`` against the input budget."""
    max_input_tokens = compute_max_input_tokens(config)
    strategy = _option(config, "token_estimator", "tokenEstimator", "auto")
    current = estimate_tokens(messages, provider_name, model, strategy)
    utilization = _round_half_up(current / max_input_tokens * 100) if max_input_tokens > 0 else 0
    return BudgetResult(
        max_input_tokens=max_input_tokens,
        current_tokens=current,
        available_tokens=max_input_tokens - current,
        within_budget=current <= max_input_tokens,
        utilization_percent=utilization,
    )


__all__ = ["compute_max_input_tokens", "check_budget", "ConfigLike"]
