"""Summarization strategies and the per-conversation summary store."""

from .summarizer import Summarizer
from .rule_based import RuleBasedSummarizer
from .llm_based import LLMBasedSummarizer, DEFAULT_SUMMARY_PROMPT
from .summary_store import SummaryStore
from .factory import create_summarizer

__all__ = [
    "Summarizer",
    "RuleBasedSummarizer",
    "LLMBasedSummarizer",
    "DEFAULT_SUMMARY_PROMPT",
    "SummaryStore",
    "create_summarizer",
]
