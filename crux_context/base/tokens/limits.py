"""Known model context-window sizes.

Lookup tries an exact match, then the longest table key contained in the
model id (so ``gpt-4o-2024-08-06`` resolves to ``gpt-4o``, not ``gpt-4``).
Unknown models log a warning and get the default window.
"""

from __future__ import annotations

import logging

from ...config.defaults import DEFAULT_MAX_CONTEXT_TOKENS
from ..logging import get_logger, log_event


# Model context limits (in tokens)
MODEL_CONTEXT_LIMITS = {
    # OpenAI models
    "gpt-4": 8192,
    "gpt-4-32k": 32768,
    "gpt-4-turbo": 128000,
    "gpt-4o": 128000,
    "gpt-4o-mini": 128000,
    "gpt-4.1": 1047576,
    "o1": 200000,
    "o1-mini": 128000,
    "o3": 200000,
    "o3-mini": 200000,
    "o4-mini": 200000,
    "gpt-3.5-turbo": 16385,
    "gpt-3.5-turbo-16k": 16385,
    # Anthropic models
    "claude-3-opus": 200000,
    "claude-3-sonnet": 200000,
    "claude-3-haiku": 200000,
    "claude-3-5-sonnet": 200000,
    "claude-3-5-haiku": 200000,
    "claude-3-7-sonnet": 200000,
    "claude-sonnet-4": 200000,
    "claude-opus-4": 200000,
    # Gemini models
    "gemini-1.5-pro": 2000000,
    "gemini-1.5-flash": 1000000,
    "gemini-1.0-pro": 32760,
    "gemini-2.0-flash": 1048576,
    "gemini-2.5-pro": 1048576,
    "gemini-2.5-flash": 1048576,
}

logger = get_logger("limits")


def get_context_limit(model: str, default: int = DEFAULT_MAX_CONTEXT_TOKENS) -> int:
    """Return the context window size for ``model``.

    Args:
        model: Model identifier, optionally vendor-prefixed (``openai/gpt-4o``).
        default: Window used for unknown models.

    Returns:
        int: Maximum tokens allowed in the context window.
    """
    if model in MODEL_CONTEXT_LIMITS:
        return MODEL_CONTEXT_LIMITS[model]

    model_lower = (model or "").lower()
    matches = [key for key in MODEL_CONTEXT_LIMITS if key in model_lower]
    if matches:
        return MODEL_CONTEXT_LIMITS[max(matches, key=len)]

    log_event(
        logger,
        "limits.unknown_model",
        level=logging.WARNING,
        model=model,
        default_limit=default,
    )
    return default


__all__ = ["MODEL_CONTEXT_LIMITS", "get_context_limit"]
