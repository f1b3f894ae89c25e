"""
Context-pipeline domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``crux_context.base.models_parts``.
"""

from .models_parts.tool_call import ToolCall
from .models_parts.message import Message, Role
from .models_parts.file_reference import FileReference, FileTool
from .models_parts.scored_message import ScoredMessage
from .models_parts.conversation_summary import ConversationSummary
from .models_parts.budget_result import BudgetResult
from .models_parts.sanitization_result import SanitizationResult
from .models_parts.context_limit_result import ContextLimitResult
from .models_parts.prompt_result import PromptResult
from .models_parts.summary_result import SummaryResult, SummarizationMode
from .models_parts.summarizer_options import SummarizerOptions
from .models_parts.trim_options import (
    TrimOptions,
    TrimStrategy,
    TokenEstimatorMode,
    DEFAULT_PLACEHOLDER,
)

__all__ = [
    "ToolCall",
    "Message",
    "Role",
    "FileReference",
    "FileTool",
    "ScoredMessage",
    "ConversationSummary",
    "BudgetResult",
    "SanitizationResult",
    "ContextLimitResult",
    "PromptResult",
    "SummaryResult",
    "SummarizationMode",
    "SummarizerOptions",
    "TrimOptions",
    "TrimStrategy",
    "TokenEstimatorMode",
    "DEFAULT_PLACEHOLDER",
]
