"""CompletionFn Protocol (single-class module).

The model-backend seam used by the model-based summarizer. Transport, auth
and retries belong to the host; the pipeline only needs "prompt in, text out".
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from ..models import Message


@runtime_checkable
class CompletionFn(Protocol):
    """Callable that forwards a prompt to a model and returns its text.

    Receives a one-message ``user`` prompt. Returning ``None`` or an empty
    string, or raising, makes the caller fall back to rule-based summarization.
    """

    def __call__(self, messages: List[Message]) -> Optional[str]:
        ...


__all__ = ["CompletionFn"]
