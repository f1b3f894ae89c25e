"""Message and sequence token estimation.

Deterministic: identical input always yields identical output.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..interfaces import Tokenizer
from ..models import Message
from .factory import get_tokenizer
from .message_cost import SEQUENCE_OVERHEAD, estimate_message_tokens


def estimate_tokens(
    messages: Iterable[Message],
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    strategy: str = "auto",
    *,
    tokenizer: Optional[Tokenizer] = None,
) -> int:
    """Estimate the token cost of a whole message sequence.

    Sums the per-message costs and adds the list-structure overhead. An
    explicit ``tokenizer`` takes precedence over provider/model selection.
    """
    tok = tokenizer or get_tokenizer(provider_name, model, strategy)
    return sum(estimate_message_tokens(m, tok) for m in messages) + SEQUENCE_OVERHEAD


__all__ = ["estimate_tokens", "estimate_message_tokens"]
