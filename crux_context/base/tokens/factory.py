"""Tokenizer selection by provider, model and estimation strategy.

Strategies:
* ``conservative``: always the character heuristic.
* ``exact``: tiktoken for any model (cl100k_base when the model is unknown).
* ``auto``: tiktoken for OpenAI-compatible providers and model families,
  the heuristic everywhere else.

Tokenizers are cached per ``(provider, model, strategy)``; the same inputs
always yield the same instance.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from ..interfaces import Tokenizer
from .tokenizers import HeuristicTokenizer, TiktokenTokenizer

OPENAI_COMPATIBLE_PROVIDERS = frozenset({"openai", "azure", "azure-openai", "openrouter"})
OPENAI_MODEL_PREFIXES = ("gpt-", "chatgpt-", "o1", "o3", "o4", "text-embedding")


def _is_openai_family(provider_name: str, model: str) -> bool:
    if provider_name.strip().lower() in OPENAI_COMPATIBLE_PROVIDERS:
        return True
    # openrouter-style ids carry a vendor prefix: "openai/gpt-4o"
    base = model.strip().lower().rsplit("/", 1)[-1]
    return bool(base) and base.startswith(OPENAI_MODEL_PREFIXES)


@lru_cache(maxsize=64)
def _cached_tokenizer(provider_name: str, model: str, strategy: str) -> Tokenizer:
    if strategy == "conservative":
        return HeuristicTokenizer()
    if strategy == "exact" or _is_openai_family(provider_name, model):
        return TiktokenTokenizer(model=model or None)
    return HeuristicTokenizer()


def get_tokenizer(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    strategy: str = "auto",
) -> Tokenizer:
    """Return the tokenizer for a provider/model pair.

    Unknown strategies are treated as ``auto``. Never raises.
    """
    if strategy not in ("auto", "conservative", "exact"):
        strategy = "auto"
    return _cached_tokenizer(provider_name or "", model or "", strategy)


def clear_tokenizer_cache() -> None:
    _cached_tokenizer.cache_clear()


__all__ = ["get_tokenizer", "clear_tokenizer_cache", "OPENAI_COMPATIBLE_PROVIDERS"]
