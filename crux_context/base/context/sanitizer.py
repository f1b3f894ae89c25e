"""Message sequence sanitization.

Some backends reject a request that ends with more than one assistant turn,
and consecutive assistant turns mid-sequence are a symptom of retried
generation. The sanitizer folds every run of consecutive assistant messages
into one, keeping all text and all tool calls.
"""

from __future__ import annotations

from typing import List, Sequence

from ..logging import get_logger, log_event
from ..models import Message, SanitizationResult, ToolCall

logger = get_logger("sanitizer")


def _merge_assistant_run(run: Sequence[Message]) -> Message:
    parts: List[str] = []
    calls: List[ToolCall] = []
    for message in run:
        if message.content.strip():
            parts.append(message.content)
        if message.has_tool_calls():
            parts.append(f"[Tools called: {', '.join(message.tool_names())}]")
            calls.extend(message.tool_calls)
    return Message(
        role="assistant",
        content="\n\n".join(parts),
        tool_calls=tuple(calls) if calls else None,
    )


def sanitize_message_list(messages: Sequence[Message]) -> SanitizationResult:
    """Merge every run of consecutive assistant messages.

    Non-assistant and isolated assistant messages pass through as the same
    objects. Returns the rewritten list with the number of messages folded
    into a preceding one.
    """
    out: List[Message] = []
    combined = 0
    i = 0
    n = len(messages)
    while i < n:
        message = messages[i]
        if message.role != "assistant":
            out.append(message)
            i += 1
            continue
        j = i + 1
        while j < n and messages[j].role == "assistant":
            j += 1
        run = messages[i:j]
        if len(run) == 1:
            out.append(message)
        else:
            out.append(_merge_assistant_run(run))
            combined += len(run) - 1
        i = j

    if not combined:
        return SanitizationResult(messages=out, sanitized=False, combined_assistant_messages=0)

    log_event(logger, "sanitize.merged", combined=combined, before=n, after=len(out))
    return SanitizationResult(
        messages=out,
        sanitized=True,
        combined_assistant_messages=combined,
        summary=f"Merged {combined} consecutive assistant message(s)",
    )


def validate_message_list(messages: Sequence[Message]) -> bool:
    """Return True when ``messages`` satisfies the backend ordering rules.

    Invalid when the sequence ends with more than one assistant message, when
    a tool message is not answered from an assistant turn (its nearest
    preceding non-tool message must be an assistant), or when two user
    messages are adjacent. An empty sequence is valid.
    """
    if not messages:
        return True

    trailing = 0
    for message in reversed(messages):
        if message.role != "assistant":
            break
        trailing += 1
    if trailing > 1:
        return False

    anchor = None
    previous = None
    for message in messages:
        if message.role == "tool":
            if anchor != "assistant":
                return False
        else:
            if message.role == "user" and previous == "user":
                return False
            anchor = message.role
        previous = message.role
    return True


__all__ = ["sanitize_message_list", "validate_message_list"]
