"""Cooperative cancellation token.

A host creates one token per agent turn and passes it (or a child of it) to
:class:`~crux_context.base.summarization.LLMBasedSummarizer`. The summarizer
polls the token before and after its backend call; a cancelled token turns
the call into a rule-based fallback. Nothing is interrupted mid-call.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe cancellation flag; cancelling a token cancels its children."""

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent._register(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel this token and every descendant. Repeated calls are no-ops."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled, self._reason = True, reason
            pending = self._children[:]
        for token in pending:
            token.cancel(reason)

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def _register(self, token: "CancellationToken") -> None:
        with self._lock:
            self._children.append(token)
            cancelled, reason = self._cancelled, self._reason
        # a child of an already-cancelled token starts cancelled
        if cancelled:
            token.cancel(reason)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
