"""Model-based summarization with rule-based fallback.

The backend is reached through an injected ``complete`` callable that takes
a one-message prompt and returns text. Every failure mode resolves to the
rule-based result, substituted wholesale:

* the combined context exceeds three times the summary budget (no call made);
* the cancellation token is cancelled before or during the call;
* the call raises;
* the call returns nothing, or something other than text.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence, Tuple

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode
from ..interfaces import CompletionFn
from ..logging import get_logger, log_event
from ..models import Message, SummarizerOptions, SummaryResult
from ..tokens import estimate_tokens
from .rule_based import RuleBasedSummarizer
from .summarizer import Summarizer

MESSAGE_EXCERPT_CHARS = 500
OVERSIZE_FACTOR = 3

DEFAULT_SUMMARY_PROMPT = """You are a context summarization assistant. Summarize the following conversation context concisely in {maxTokens} tokens or less.

Focus on:
- Files read/modified and their key contents
- Operations that succeeded or failed
- Key decisions, findings, or configurations made
- Current task state and progress
- Any errors encountered and resolutions

Keep the summary factual, structured, and useful for continuation.

Context to summarize:
{context}

Summary:"""

logger = get_logger("summarizer")


def build_context_text(messages: Sequence[Message]) -> str:
    """Render messages as ``[role]: content`` blocks, each cut to 500 chars."""
    return "\n\n".join(f"[{m.role}]: {(m.content or '')[:MESSAGE_EXCERPT_CHARS]}" for m in messages)


class LLMBasedSummarizer(Summarizer):
    """Summarizer that asks a model for the summary text.

    Args:
        complete: Backend call; receives ``[Message(role="user", content=prompt)]``.
        model: Model id, used only to pick a tokenizer for size estimates.
        provider_name: Provider id, used with ``model`` to pick a tokenizer.
        token_estimator: Tokenizer selection mode for size estimates.
        cancellation_token: Optional token observed before and after the call.
        prompt_template: Template with ``{maxTokens}`` and ``{context}`` fields.
    """

    mode = "llm-based"

    def __init__(
        self,
        complete: CompletionFn,
        model: Optional[str] = None,
        cancellation_token: Optional[CancellationToken] = None,
        prompt_template: str = DEFAULT_SUMMARY_PROMPT,
        provider_name: Optional[str] = None,
        token_estimator: str = "auto",
    ) -> None:
        self._complete = complete
        self.model = model
        self.provider_name = provider_name
        self.token_estimator = token_estimator
        self.cancellation_token = cancellation_token
        self.prompt_template = prompt_template
        self._fallback = RuleBasedSummarizer()

    def summarize(self, messages: Sequence[Message], options: SummarizerOptions) -> SummaryResult:
        context = build_context_text(messages)
        context_tokens = self._estimate(Message(role="user", content=context))

        text: Any = None
        if context_tokens > options.max_summary_tokens * OVERSIZE_FACTOR:
            reason: Optional[str] = "oversized_context"
        elif self._cancelled():
            reason = "cancelled"
        else:
            text, reason = self._call_model(self.render_prompt(context, options))
            if reason is None and not (isinstance(text, str) and text.strip()):
                reason = "empty_response"

        if reason is not None:
            log_event(
                logger,
                "summarize.fallback",
                level=logging.WARNING if reason == "call_failed" else logging.INFO,
                reason=reason,
                code=(ErrorCode.CANCELLED if reason == "cancelled" else ErrorCode.SUMMARIZATION).value,
                model=self.model,
                context_tokens=context_tokens,
                messages=len(messages),
            )
            return self._fallback.summarize(messages, replace(options, mode="rule-based"))

        return SummaryResult(
            summary=text,
            tokens_used=self._estimate(Message(role="assistant", content=text)),
            messages_processed=len(messages),
            mode="llm-based",
        )

    def render_prompt(self, context: str, options: SummarizerOptions) -> str:
        return self.prompt_template.replace("{maxTokens}", str(options.max_summary_tokens), 1).replace(
            "{context}", context, 1
        )

    def _estimate(self, message: Message) -> int:
        return estimate_tokens([message], self.provider_name, self.model, self.token_estimator)

    def _cancelled(self) -> bool:
        return self.cancellation_token is not None and self.cancellation_token.cancelled

    def _call_model(self, prompt: str) -> Tuple[Any, Optional[str]]:
        """Return ``(text, failure_reason)``; exactly one of them is meaningful."""
        try:
            text = self._complete([Message(role="user", content=prompt)])
        except CancelledError:
            return None, "cancelled"
        except Exception as e:
            log_event(logger, "summarize.call_error", level=logging.DEBUG, error=str(e))
            return None, "call_failed"
        if self._cancelled():
            return None, "cancelled"
        return text, None


__all__ = ["LLMBasedSummarizer", "DEFAULT_SUMMARY_PROMPT", "build_context_text"]
