"""Concrete tokenizers.

``TiktokenTokenizer`` counts with OpenAI's BPE encodings; when an encoding
cannot be loaded (unknown model, no network for the encoding files) or a
string cannot be encoded, it degrades to the character heuristic. Token
accounting never raises.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import tiktoken

from ..errors import ErrorCode
from ..logging import get_logger, log_event
from ..models import Message
from .message_cost import estimate_message_tokens

DEFAULT_ENCODING = "cl100k_base"  # GPT-4 / GPT-3.5 family default
DEFAULT_CHARS_PER_TOKEN = 4.0

logger = get_logger("tokens")


class HeuristicTokenizer:
    """Conservative character-length estimate: ``ceil(len / chars_per_token)``."""

    def __init__(self, chars_per_token: float = DEFAULT_CHARS_PER_TOKEN) -> None:
        if chars_per_token <= 0:
            raise ValueError("chars_per_token must be positive")
        self.chars_per_token = chars_per_token

    def encode(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self.chars_per_token)

    def count_tokens(self, message: Message) -> int:
        return estimate_message_tokens(message, self)

    def get_name(self) -> str:
        return "heuristic"


class TiktokenTokenizer:
    """Exact BPE counting via ``tiktoken``.

    Args:
        model: Model identifier used with ``tiktoken.encoding_for_model``.
        encoding_name: Explicit encoding; used when ``model`` is unknown to
            tiktoken, defaulting to ``cl100k_base``.
    """

    def __init__(self, model: Optional[str] = None, encoding_name: Optional[str] = None) -> None:
        self.model = model
        self._fallback = HeuristicTokenizer()
        self._encoding = None
        try:
            self._encoding = self._load_encoding(model, encoding_name or DEFAULT_ENCODING)
        except Exception as e:
            log_event(
                logger,
                "tokens.fallback",
                level=logging.INFO,
                code=ErrorCode.TOKENIZATION.value,
                model=model,
                encoding=encoding_name or DEFAULT_ENCODING,
                error=str(e),
            )

    @staticmethod
    def _load_encoding(model: Optional[str], encoding_name: str):
        if model:
            try:
                return tiktoken.encoding_for_model(model)
            except KeyError:
                pass
        return tiktoken.get_encoding(encoding_name)

    @property
    def degraded(self) -> bool:
        """True when no encoding could be loaded and the heuristic is in use."""
        return self._encoding is None

    def encode(self, text: str) -> int:
        if not text:
            return 0
        if self._encoding is not None:
            try:
                return len(self._encoding.encode(text, disallowed_special=()))
            except Exception:  # pragma: no cover - tiktoken rejects very little
                pass
        return self._fallback.encode(text)

    def count_tokens(self, message: Message) -> int:
        return estimate_message_tokens(message, self)

    def get_name(self) -> str:
        if self._encoding is None:
            return "heuristic"
        return f"tiktoken:{self._encoding.name}"


__all__ = ["HeuristicTokenizer", "TiktokenTokenizer", "DEFAULT_ENCODING", "DEFAULT_CHARS_PER_TOKEN"]
