"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`crux_context.base.models_parts` if needed, while `crux_context.base.models`
remains the primary stable import path.
"""

from .tool_call import ToolCall
from .message import Message, Role
from .file_reference import FileReference, FileTool
from .scored_message import ScoredMessage
from .conversation_summary import ConversationSummary
from .budget_result import BudgetResult
from .sanitization_result import SanitizationResult
from .context_limit_result import ContextLimitResult
from .prompt_result import PromptResult
from .summary_result import SummaryResult, SummarizationMode
from .summarizer_options import SummarizerOptions
from .trim_options import TrimOptions, TrimStrategy, TokenEstimatorMode, DEFAULT_PLACEHOLDER

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
