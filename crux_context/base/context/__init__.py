"""Context budget, sanitization, trimming and final prompt assembly."""

from .budget import compute_max_input_tokens, check_budget
from .sanitizer import sanitize_message_list, validate_message_list
from .trimmer import trim_conversation, enforce_context_limit
from .prompt_builder import build_final_prompt

__all__ = [
    "compute_max_input_tokens",
    "check_budget",
    "sanitize_message_list",
    "validate_message_list",
    "trim_conversation",
    "enforce_context_limit",
    "build_final_prompt",
]
