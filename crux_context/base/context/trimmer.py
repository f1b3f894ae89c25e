"""Deterministic context trimming.

Scores every message by priority and reduces the sequence in two explicit
passes until it fits a target token count:

1. Placeholder pass: large, low-priority tool results have their content
   replaced by a short placeholder. The total is re-estimated afterwards.
2. Removal pass: messages are visited in ascending priority order (system
   messages skipped) and removed until the running total fits. Tool results
   whose assistant call was removed are then dropped, as is the older of two
   user messages the removals made adjacent.

Output is always a subsequence of the input in original order. The trimmer
does not enforce a hard ceiling: when only system messages remain and the
sequence still does not fit, it returns what remains and leaves the failure
to the prompt builder.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Set

from ..interfaces import Tokenizer
from ..logging import get_logger, log_event
from ..models import (
    ContextLimitResult,
    FileReference,
    Message,
    ScoredMessage,
    TrimOptions,
)
from ..tokens import estimate_message_tokens, estimate_tokens, get_tokenizer

logger = get_logger("trimmer")

FILE_TOOLS = ("read_file", "write_file", "string_replace")
PLACEHOLDER_MIN_TOKENS = 200
PLACEHOLDER_MAX_PRIORITY = 60
ACTIVE_FILE_BOOST = 10

_ERROR_PATTERN = re.compile(r"error|exception|failed|fatal|cannot|unable to", re.IGNORECASE)


def contains_error(content: str) -> bool:
    """Return True when ``content`` looks like a failure report."""
    return bool(_ERROR_PATTERN.search(content or ""))


def _starts_step(message: Message) -> bool:
    return message.role == "assistant" and message.has_tool_calls()


def count_steps(messages: Sequence[Message]) -> int:
    """Number of assistant messages that issued at least one tool call."""
    return sum(1 for m in messages if _starts_step(m))


def tag_steps(messages: Sequence[Message]) -> List[int]:
    """Return the step counter in effect at each message.

    The assistant message that opens a step is tagged with the new step.
    """
    steps: List[int] = []
    current = 0
    for message in messages:
        if _starts_step(message):
            current += 1
        steps.append(current)
    return steps


def extract_file_references(messages: Sequence[Message]) -> Dict[int, List[FileReference]]:
    """Map message index to the file references its tool calls carry."""
    references: Dict[int, List[FileReference]] = {}
    current = 0
    for index, message in enumerate(messages):
        if not _starts_step(message):
            continue
        current += 1
        for call in message.tool_calls:
            if call.name not in FILE_TOOLS:
                continue
            path = call.arguments.get("path") or call.arguments.get("file_path")
            if not isinstance(path, str):
                continue
            references.setdefault(index, []).append(
                FileReference(
                    path=path,
                    tool=call.name,
                    step=current,
                    was_modified=call.name != "read_file",
                )
            )
    return references


def build_active_file_set(references: Dict[int, List[FileReference]], recent_steps: int) -> Set[str]:
    """Most recently touched files: two modified and three read per recent step."""
    refs = [ref for group in references.values() for ref in group]
    refs.sort(key=lambda ref: ref.step, reverse=True)
    modified = [ref for ref in refs if ref.was_modified][: recent_steps * 2]
    read = [ref for ref in refs if not ref.was_modified][: recent_steps * 3]
    return {ref.path for ref in modified + read}


def _tool_call_paths(messages: Sequence[Message], references: Dict[int, List[FileReference]]) -> Dict[str, str]:
    """Map tool_call_id to the file path its call touched."""
    out: Dict[str, str] = {}
    for index in references:
        for call in messages[index].tool_calls or ():
            path = call.arguments.get("path") or call.arguments.get("file_path")
            if call.name in FILE_TOOLS and isinstance(path, str) and call.id:
                out[call.id] = path
    return out


def _age_tier(age: int) -> int:
    if age > 10:
        return 15
    if age > 5:
        return 30
    return 40


def calculate_priority(message: Message, age: int, options: TrimOptions) -> int:
    """Return the retention priority of one message (higher survives longer)."""
    if message.role == "system":
        return 100
    if options.strategy == "age-based":
        return _age_tier(age)
    if message.role == "user" and age <= options.preserve_recent_turns:
        return 85
    if message.role == "assistant" and age <= options.preserve_recent_turns:
        return 80
    if message.role == "tool":
        if options.preserve_errors and contains_error(message.content):
            return 75
        if age <= 2:
            return 55
        if age <= 5:
            return 35
        return 20
    return _age_tier(age)


def score_messages(messages: Sequence[Message], options: TrimOptions) -> List[ScoredMessage]:
    """Tag each message with its step and priority."""
    total_steps = count_steps(messages)
    steps = tag_steps(messages)
    boosted: Dict[str, str] = {}
    active: Set[str] = set()
    if options.boost_active_files:
        references = extract_file_references(messages)
        active = build_active_file_set(references, options.preserve_recent_turns)
        boosted = _tool_call_paths(messages, references)

    scored = []
    for index, (message, step) in enumerate(zip(messages, steps)):
        priority = calculate_priority(message, total_steps - step, options)
        if message.role == "tool" and boosted.get(message.tool_call_id or "") in active:
            priority += ACTIVE_FILE_BOOST
        scored.append(ScoredMessage(message=message, step=step, original_index=index, priority=priority))
    return scored


def should_truncate(message: Message, tokens: int, options: TrimOptions) -> bool:
    """Return False when preservation rules exempt a tool result from placeholders."""
    if options.preserve_errors and contains_error(message.content):
        return False
    if options.preserve_small_outputs and tokens < options.small_output_threshold:
        return False
    return True


def make_placeholder(message: Message, age: int, tokens: int, options: TrimOptions) -> Message:
    text = options.placeholder.replace("{age}", str(age), 1).replace("{tokens}", str(tokens), 1)
    return message.with_content(text)


def _placeholder_pass(
    scored: List[ScoredMessage],
    total_steps: int,
    tokenizer: Tokenizer,
    options: TrimOptions,
) -> List[ScoredMessage]:
    processed = []
    for item in scored:
        if item.message.role != "tool":
            processed.append(item)
            continue
        tokens = estimate_message_tokens(item.message, tokenizer)
        if (
            tokens > PLACEHOLDER_MIN_TOKENS
            and item.priority < PLACEHOLDER_MAX_PRIORITY
            and should_truncate(item.message, tokens, options)
        ):
            age = total_steps - item.step
            item = ScoredMessage(
                message=make_placeholder(item.message, age, tokens, options),
                step=item.step,
                original_index=item.original_index,
                priority=item.priority,
            )
        processed.append(item)
    return processed


def _removal_pass(
    processed: List[ScoredMessage],
    current_tokens: int,
    target_tokens: int,
    tokenizer: Tokenizer,
) -> List[ScoredMessage]:
    removed: Set[int] = set()
    for item in sorted(processed, key=lambda s: s.priority):
        if current_tokens <= target_tokens:
            break
        if item.message.role == "system":
            continue
        removed.add(item.original_index)
        current_tokens -= estimate_message_tokens(item.message, tokenizer)
    return [item for item in processed if item.original_index not in removed]


def _drop_broken_links(survivors: List[ScoredMessage]) -> List[ScoredMessage]:
    """Remove what the removal pass left structurally invalid.

    A tool result is kept only while the nearest preceding non-tool message is
    an assistant that issued its ``tool_call_id``. Of two adjacent user
    messages only the newer is kept. Both rules only ever remove messages.
    """
    out: List[ScoredMessage] = []
    anchor_calls: Optional[Set[str]] = None
    for item in survivors:
        message = item.message
        if message.role == "tool":
            if anchor_calls is None or (message.tool_call_id and message.tool_call_id not in anchor_calls):
                continue
        elif message.role == "assistant":
            anchor_calls = {call.id for call in message.tool_calls or ()}
        else:
            anchor_calls = None
            if message.role == "user" and out and out[-1].message.role == "user":
                out.pop()
        out.append(item)
    return out


def trim_conversation(
    messages: Sequence[Message],
    target_tokens: int,
    options: Optional[TrimOptions] = None,
) -> List[Message]:
    """Trim ``messages`` so that their estimated cost fits ``target_tokens``.

    Returns the input messages unchanged (as a new list) when they already
    fit. Otherwise runs the placeholder pass, then the removal pass if still
    needed.
    """
    options = options or TrimOptions()
    tokenizer = get_tokenizer(options.provider_name, options.model, options.token_estimator)
    scored = score_messages(messages, options)

    current = estimate_tokens([s.message for s in scored], tokenizer=tokenizer)
    if current <= target_tokens:
        return [s.message for s in scored]

    total_steps = count_steps(messages)
    processed = _placeholder_pass(scored, total_steps, tokenizer, options)
    before = current
    current = estimate_tokens([s.message for s in processed], tokenizer=tokenizer)
    log_event(
        logger,
        "trim.placeholder_pass",
        replaced=sum(1 for a, b in zip(scored, processed) if a.message is not b.message),
        tokens_before=before,
        tokens_after=current,
        target=target_tokens,
    )
    if current <= target_tokens:
        return [s.message for s in processed]

    survivors = _removal_pass(processed, current, target_tokens, tokenizer)
    repaired = _drop_broken_links(survivors)
    log_event(
        logger,
        "trim.removal_pass",
        removed=len(processed) - len(repaired),
        unlinked=len(survivors) - len(repaired),
        kept=len(repaired),
        target=target_tokens,
    )
    return [s.message for s in repaired]


def enforce_context_limit(
    messages: Sequence[Message],
    max_tokens: int,
    options: Optional[TrimOptions] = None,
) -> ContextLimitResult:
    """Trim ``messages`` to ``max_tokens`` and report what was dropped.

    ``dropped_messages`` lists input messages that are not present (by
    identity) in the result, so a placeholder-replaced tool result counts as
    dropped while ``dropped_count`` counts only removed entries.
    """
    options = options or TrimOptions()
    tokenizer = get_tokenizer(options.provider_name, options.model, options.token_estimator)
    original_tokens = estimate_tokens(messages, tokenizer=tokenizer)
    if original_tokens <= max_tokens:
        return ContextLimitResult(
            messages=list(messages),
            truncated=False,
            dropped_count=0,
            original_tokens=original_tokens,
            final_tokens=original_tokens,
        )

    trimmed = trim_conversation(messages, max_tokens, options)
    kept = {id(m) for m in trimmed}
    dropped = [m for m in messages if id(m) not in kept]
    return ContextLimitResult(
        messages=trimmed,
        truncated=True,
        dropped_count=len(messages) - len(trimmed),
        original_tokens=original_tokens,
        final_tokens=estimate_tokens(trimmed, tokenizer=tokenizer),
        dropped_messages=dropped,
    )


__all__ = [
    "trim_conversation",
    "enforce_context_limit",
    "calculate_priority",
    "score_messages",
    "contains_error",
    "count_steps",
    "tag_steps",
    "extract_file_references",
    "build_active_file_set",
    "should_truncate",
    "make_placeholder",
]
