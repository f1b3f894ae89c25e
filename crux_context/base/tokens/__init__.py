"""Token estimation: tokenizers, selection, message/sequence cost, model limits."""

from .tokenizers import HeuristicTokenizer, TiktokenTokenizer
from .factory import get_tokenizer, clear_tokenizer_cache
from .message_cost import estimate_message_tokens
from .estimator import estimate_tokens
from .limits import MODEL_CONTEXT_LIMITS, get_context_limit

__all__ = [
    "HeuristicTokenizer",
    "TiktokenTokenizer",
    "get_tokenizer",
    "clear_tokenizer_cache",
    "estimate_message_tokens",
    "estimate_tokens",
    "MODEL_CONTEXT_LIMITS",
    "get_context_limit",
]
