"""
Context Base Package

Exports the DTOs, configuration model, token estimation, context operations
and summarization strategies that make up the context pipeline.

Layering:
- Models (DTOs): immutable dataclasses shared by every component
- Tokens: tokenizer selection and message/sequence cost estimation
- Context: budget, sanitizer, trimmer and the prompt-builder orchestrator
- Summarization: rule-based and model-based summarizers plus the summary store
"""

from .cancellation import CancellationToken, CancelledError
from .dto import ContextConfig
from .errors import ContextError, ContextOverflowError, ErrorCode
from .interfaces import CompletionFn, Tokenizer
from .models import (
    BudgetResult,
    ContextLimitResult,
    ConversationSummary,
    FileReference,
    Message,
    PromptResult,
    Role,
    SanitizationResult,
    ScoredMessage,
    SummarizerOptions,
    SummaryResult,
    ToolCall,
    TrimOptions,
)
from .tokens import (
    HeuristicTokenizer,
    TiktokenTokenizer,
    estimate_message_tokens,
    estimate_tokens,
    get_context_limit,
    get_tokenizer,
)
from .context import (
    build_final_prompt,
    check_budget,
    compute_max_input_tokens,
    enforce_context_limit,
    sanitize_message_list,
    trim_conversation,
    validate_message_list,
)
from .summarization import (
    LLMBasedSummarizer,
    RuleBasedSummarizer,
    Summarizer,
    SummaryStore,
    create_summarizer,
)

__all__ = [
    # Models
    "Role",
    "ToolCall",
    "Message",
    "FileReference",
    "ScoredMessage",
    "ConversationSummary",
    "BudgetResult",
    "SanitizationResult",
    "ContextLimitResult",
    "PromptResult",
    "SummaryResult",
    "SummarizerOptions",
    "TrimOptions",
    "ContextConfig",
    # Interfaces
    "Tokenizer",
    "CompletionFn",
    # Errors / cancellation
    "ErrorCode",
    "ContextError",
    "ContextOverflowError",
    "CancellationToken",
    "CancelledError",
    # Tokens
    "HeuristicTokenizer",
    "TiktokenTokenizer",
    "get_tokenizer",
    "estimate_message_tokens",
    "estimate_tokens",
    "get_context_limit",
    # Context operations
    "compute_max_input_tokens",
    "check_budget",
    "sanitize_message_list",
    "validate_message_list",
    "trim_conversation",
    "enforce_context_limit",
    "build_final_prompt",
    # Summarization
    "Summarizer",
    "RuleBasedSummarizer",
    "LLMBasedSummarizer",
    "SummaryStore",
    "create_summarizer",
]
