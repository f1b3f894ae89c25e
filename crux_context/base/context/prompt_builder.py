"""Final prompt assembly with context overflow protection.

Hard rule: a request that exceeds the input budget is never returned. The
conversation is sanitized, trimmed when needed, dropped messages are
optionally folded into the summary store, and the stored summary is
injected first. Trimming is followed by a second sanitize so the result
keeps the ordering rules of ``validate_message_list``; when the summary grew
during the call the survivors are trimmed again against its new size for as
long as that shrinks the prompt.
If the result still does not fit, ``ContextOverflowError``
is raised with the exact figures.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..dto import ContextConfig
from ..errors import ContextOverflowError, ErrorCode
from ..logging import LogContext, get_logger, log_event
from ..models import Message, PromptResult, SummarizerOptions, TrimOptions
from ..summarization import Summarizer, SummaryStore
from ..tokens import estimate_tokens, get_tokenizer
from .budget import compute_max_input_tokens
from .sanitizer import sanitize_message_list
from .trimmer import enforce_context_limit

logger = get_logger("prompt_builder")


def overflow_message(current_tokens: int, max_tokens: int) -> str:
    return (
        "Cannot fit request within context limit. "
        f"After trimming: {current_tokens} tokens, Max: {max_tokens} tokens. "
        "Please narrow the scope or start a new session."
    )


def trim_options_for(config: ContextConfig, provider_name: Optional[str], model: Optional[str]) -> TrimOptions:
    """Derive trimmer options from the configuration."""
    return TrimOptions(
        max_age=config.preserve_recent_turns,
        preserve_recent_turns=config.preserve_recent_turns,
        strategy=config.trim_strategy,
        provider_name=provider_name or "",
        model=model or "",
        token_estimator=config.token_estimator,
    )


def summarizer_options_for(config: ContextConfig) -> SummarizerOptions:
    return SummarizerOptions(
        max_summary_tokens=config.max_summary_tokens,
        preserve_error_details=config.preserve_error_details,
        mode=config.summarization_mode,
    )


def _with_summary(summary: Optional[Message], messages: Sequence[Message]) -> List[Message]:
    return [summary, *messages] if summary else list(messages)


def build_final_prompt(
    messages: Sequence[Message],
    config: Optional[ContextConfig] = None,
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    summarizer: Optional[Summarizer] = None,
    summary_store: Optional[SummaryStore] = None,
) -> PromptResult:
    """Return the message sequence to send, guaranteed to fit the budget.

    Args:
        messages: Raw conversation, oldest first.
        config: Budget and trimming configuration (defaults when omitted).
        provider_name: Provider used to pick a tokenizer.
        model: Model used to pick a tokenizer.
        summarizer: Strategy for folding dropped messages into a summary.
        summary_store: Per-conversation summary accumulator.

    Raises:
        ContextOverflowError: If the sequence cannot fit even after trimming.
    """
    config = config or ContextConfig()
    tokenizer = get_tokenizer(provider_name, model, config.token_estimator)
    messages = sanitize_message_list(messages).messages
    max_input_tokens = compute_max_input_tokens(config)
    ctx = LogContext(
        provider=provider_name,
        model=model,
        estimator=config.token_estimator,
        trim_strategy=config.trim_strategy,
    ).bind(max_input_tokens=max_input_tokens)

    summary_message = summary_store.get_summary_message() if summary_store else None
    summary_tokens = estimate_tokens([summary_message], tokenizer=tokenizer) if summary_message else 0
    original_tokens = estimate_tokens(messages, tokenizer=tokenizer)

    if original_tokens + summary_tokens <= max_input_tokens:
        final = _with_summary(summary_message, messages)
        token_count = estimate_tokens(final, tokenizer=tokenizer)
        log_event(
            logger,
            "prompt.built",
            ctx,
            level=logging.DEBUG,
            token_count=token_count,
            was_trimmed=False,
        )
        return PromptResult(
            messages=final,
            token_count=token_count,
            within_budget=True,
            was_trimmed=False,
            dropped_count=0,
        )

    trim_options = trim_options_for(config, provider_name, model)
    result = enforce_context_limit(messages, max_input_tokens - summary_tokens, trim_options)

    summarized = False
    if summarizer and summary_store and config.summarize_on_truncate and result.dropped_messages:
        try:
            summary_store.update_summary(result.dropped_messages, summarizer, summarizer_options_for(config))
            summarized = True
        except Exception as e:
            log_event(
                logger,
                "prompt.summary_failed",
                ctx,
                level=logging.WARNING,
                code=ErrorCode.SUMMARIZATION.value,
                error=str(e),
                dropped=len(result.dropped_messages),
            )

    kept = sanitize_message_list(result.messages).messages
    dropped_count = result.dropped_count
    updated_summary = summary_store.get_summary_message() if summary_store else None
    final = _with_summary(updated_summary, kept)
    final_tokens = estimate_tokens(final, tokenizer=tokenizer)

    # the summary may have grown in this call and merging turns adds marker text;
    # trim again while that still shrinks the prompt
    new_summary_tokens = estimate_tokens([updated_summary], tokenizer=tokenizer) if updated_summary else 0
    while final_tokens > max_input_tokens:
        retrim = enforce_context_limit(kept, max_input_tokens - new_summary_tokens, trim_options)
        candidate = sanitize_message_list(retrim.messages).messages
        candidate_tokens = estimate_tokens(_with_summary(updated_summary, candidate), tokenizer=tokenizer)
        if candidate_tokens >= final_tokens:
            break
        kept = candidate
        dropped_count += retrim.dropped_count
        final = _with_summary(updated_summary, kept)
        final_tokens = candidate_tokens
        log_event(
            logger,
            "prompt.retrimmed",
            ctx,
            summary_tokens=new_summary_tokens,
            dropped_count=retrim.dropped_count,
            token_count=final_tokens,
        )

    if final_tokens > max_input_tokens:
        log_event(
            logger,
            "prompt.overflow",
            ctx,
            level=logging.ERROR,
            code=ErrorCode.OVERFLOW.value,
            current_tokens=final_tokens,
            max_tokens=max_input_tokens,
        )
        raise ContextOverflowError(overflow_message(final_tokens, max_input_tokens), final_tokens, max_input_tokens)

    log_event(
        logger,
        "prompt.built",
        ctx,
        token_count=final_tokens,
        original_tokens=original_tokens,
        was_trimmed=True,
        dropped_count=dropped_count,
        summarized=summarized,
    )
    return PromptResult(
        messages=final,
        token_count=final_tokens,
        within_budget=True,
        was_trimmed=True,
        dropped_count=dropped_count,
        summarized=summarized,
    )


__all__ = ["build_final_prompt", "overflow_message", "trim_options_for", "summarizer_options_for"]
