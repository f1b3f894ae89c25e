"""crux_context package

Context-window management for LLM coding agents: guarantees that the
conversation sent to a model never exceeds its context window.

Purpose:
    Provide a small, stable API for hosts. The usual entry point is
    :func:`build_final_prompt`; the lower-level operations are exported for
    callers that want partial control.

Public API (re-exported):
    - Version: ``__version__``
    - Configuration: :class:`ContextConfig`, :func:`get_context_config`
    - Orchestrator: :func:`build_final_prompt`, :class:`ContextOverflowError`
    - Operations: :func:`check_budget`, :func:`compute_max_input_tokens`,
      :func:`sanitize_message_list`, :func:`validate_message_list`,
      :func:`trim_conversation`, :func:`enforce_context_limit`,
      :func:`estimate_tokens`
    - Summarization: :class:`SummaryStore`, :func:`create_summarizer`
"""

from .base import (
    BudgetResult,
    CancellationToken,
    ContextConfig,
    ContextError,
    ContextLimitResult,
    ContextOverflowError,
    ErrorCode,
    LLMBasedSummarizer,
    Message,
    PromptResult,
    RuleBasedSummarizer,
    SanitizationResult,
    Summarizer,
    SummarizerOptions,
    SummaryResult,
    SummaryStore,
    ToolCall,
    TrimOptions,
    build_final_prompt,
    check_budget,
    compute_max_input_tokens,
    create_summarizer,
    enforce_context_limit,
    estimate_tokens,
    get_tokenizer,
    sanitize_message_list,
    trim_conversation,
    validate_message_list,
)
from .config import get_context_config

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Message",
    "ToolCall",
    "ContextConfig",
    "get_context_config",
    "TrimOptions",
    "SummarizerOptions",
    "BudgetResult",
    "SanitizationResult",
    "ContextLimitResult",
    "PromptResult",
    "SummaryResult",
    "ErrorCode",
    "ContextError",
    "ContextOverflowError",
    "CancellationToken",
    "estimate_tokens",
    "get_tokenizer",
    "compute_max_input_tokens",
    "check_budget",
    "sanitize_message_list",
    "validate_message_list",
    "trim_conversation",
    "enforce_context_limit",
    "build_final_prompt",
    "Summarizer",
    "RuleBasedSummarizer",
    "LLMBasedSummarizer",
    "SummaryStore",
    "create_summarizer",
]
