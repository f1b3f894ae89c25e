"""Rule-based summarization: offline, free, deterministic.

Each tool result becomes a one-line fact tag chosen by tool name, e.g.
``[✓ read_file: Lines: 120 | Size: 4KB | Exports]`` or
``[❌ execute_bash: Output: 3 lines | ERROR detected]``. User messages are
kept verbatim up to 100 characters.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Literal, Optional, Sequence

from ..models import Message, SummarizerOptions, SummaryResult
from .summarizer import Summarizer

USER_EXCERPT_CHARS = 100
ERROR_DETAIL_CHARS = 120

_BASH_ERROR = re.compile(r"error|failed|exception|exit code (?!0)", re.IGNORECASE)
_GENERIC_ERROR = re.compile(r"error|failed", re.IGNORECASE)
_ERROR_LINE = re.compile(r"error|failed|exception|fatal", re.IGNORECASE)


@dataclass
class ToolSummary:
    tool_name: str
    status: Literal["success", "error", "partial"]
    key_facts: List[str] = field(default_factory=list)


def _line_count(content: str) -> int:
    return len(content.split("\n"))


def _non_blank_lines(content: str) -> int:
    return sum(1 for line in content.split("\n") if line.strip())


def _summarize_read_file(content: str, message: Message) -> ToolSummary:
    size_kb = math.floor(len(content) / 1024 + 0.5)
    return ToolSummary(
        "read_file",
        "success",
        [
            f"Lines: {_line_count(content)}",
            f"Size: {size_kb}KB",
            "Exports" if "export " in content else "No exports",
        ],
    )


def _summarize_bash(content: str, message: Message) -> ToolSummary:
    has_error = bool(_BASH_ERROR.search(content))
    return ToolSummary(
        "execute_bash",
        "error" if has_error else "success",
        [f"Output: {_non_blank_lines(content)} lines", "ERROR detected" if has_error else "Success"],
    )


def _summarize_search(content: str, message: Message) -> ToolSummary:
    matches = content.count("\n")
    return ToolSummary(
        "search",
        "success" if matches else "partial",
        [f"Matches: {matches}", "Found results" if matches else "No results"],
    )


def _summarize_write(content: str, message: Message) -> ToolSummary:
    return ToolSummary("write_file", "success", [f"Lines: {_line_count(content)}", "File written"])


def _summarize_edit(content: str, message: Message) -> ToolSummary:
    return ToolSummary("string_replace", "success", [f"Lines: {_line_count(content)}", "File edited"])


def _summarize_default(content: str, message: Message) -> ToolSummary:
    has_error = bool(_GENERIC_ERROR.search(content))
    return ToolSummary(
        message.name or "unknown",
        "error" if has_error else "success",
        [f"Lines: {_non_blank_lines(content)}", "ERROR" if has_error else "OK"],
    )


TOOL_SUMMARIZERS: Dict[str, Callable[[str, Message], ToolSummary]] = {
    "read_file": _summarize_read_file,
    "execute_bash": _summarize_bash,
    "search_files": _summarize_search,
    "write_file": _summarize_write,
    "create_file": _summarize_write,
    "string_replace": _summarize_edit,
}


def first_error_line(content: str) -> Optional[str]:
    """Return the first line mentioning an error, cut to a readable length."""
    for line in content.split("\n"):
        if _ERROR_LINE.search(line):
            return line.strip()[:ERROR_DETAIL_CHARS]
    return None


def format_tool_summary(summary: ToolSummary) -> str:
    status = "❌" if summary.status == "error" else "✓"
    return f"[{status} {summary.tool_name}: {' | '.join(summary.key_facts)}]"


class RuleBasedSummarizer(Summarizer):
    """Pattern-based summarizer dispatching on tool name."""

    mode = "rule-based"

    def summarize(self, messages: Sequence[Message], options: SummarizerOptions) -> SummaryResult:
        lines: List[str] = []
        tool_count = 0
        for message in messages:
            if message.role == "tool":
                lines.append(format_tool_summary(self.summarize_tool_result(message, options)))
                tool_count += 1
            elif message.role == "user":
                lines.append(f"User: {message.content[:USER_EXCERPT_CHARS]}")

        summary = f"[Summarized {tool_count} tool results]\n" + "\n".join(lines)
        return SummaryResult(
            summary=summary,
            tokens_used=math.ceil(len(summary) / 4),
            messages_processed=len(messages),
            mode="rule-based",
        )

    def summarize_tool_result(self, message: Message, options: SummarizerOptions) -> ToolSummary:
        content = message.content or ""
        handler = TOOL_SUMMARIZERS.get(message.name or "", _summarize_default)
        summary = handler(content, message)
        if summary.status == "error" and options.preserve_error_details:
            detail = first_error_line(content)
            if detail:
                summary.key_facts.append(detail)
        return summary


__all__ = ["RuleBasedSummarizer", "ToolSummary", "TOOL_SUMMARIZERS", "format_tool_summary", "first_error_line"]
