"""Context trimmer: priority scoring, placeholder pass, removal pass."""

from __future__ import annotations

from dataclasses import replace

import pytest

from crux_context.base.context import enforce_context_limit, trim_conversation, validate_message_list
from crux_context.base.context.trimmer import (
    build_active_file_set,
    calculate_priority,
    count_steps,
    extract_file_references,
    score_messages,
    should_truncate,
    tag_steps,
)
from crux_context.base.models import Message, ToolCall, TrimOptions
from crux_context.base.tokens import estimate_tokens
from crux_context.tests.helpers import is_subsequence, tool_step


def test_within_budget_returns_input_unchanged(long_conversation, trim_options):
    out = trim_conversation(long_conversation, 10_000, trim_options)
    assert len(out) == len(long_conversation)
    assert all(a is b for a, b in zip(out, long_conversation))


def test_system_message_survives_oversized_user(trim_options):
    system = Message(role="system", content="You are a helpful assistant.")
    user = Message(role="user", content="x" * 50_000)
    out = trim_conversation([system, user], 100, trim_options)
    assert system in out
    assert out == [system]


def test_oversized_system_prompt_is_returned_not_raised(trim_options):
    system = Message(role="system", content="s" * 4000)
    out = trim_conversation([system, Message(role="user", content="hi")], 50, trim_options)
    assert out == [system]
    assert estimate_tokens(out, strategy="conservative") > 50


def test_step_tagging():
    msgs = [Message(role="user", content="u")]
    msgs += tool_step(1, "a")
    msgs += [Message(role="assistant", content="thinking")]
    msgs += tool_step(2, "b")
    assert count_steps(msgs) == 2
    assert tag_steps(msgs) == [0, 1, 1, 1, 2, 2]


@pytest.mark.parametrize(
    "message,age,expected",
    [
        (Message(role="system", content="s"), 50, 100),
        (Message(role="user", content="u"), 0, 85),
        (Message(role="assistant", content="a"), 5, 80),
        (Message(role="user", content="u"), 6, 30),
        (Message(role="assistant", content="a"), 11, 15),
        (Message(role="tool", content="Traceback: unable to open"), 9, 75),
        (Message(role="tool", content="ok"), 2, 55),
        (Message(role="tool", content="ok"), 5, 35),
        (Message(role="tool", content="ok"), 6, 20),
    ],
)
def test_priority_scoring(message, age, expected):
    assert calculate_priority(message, age, TrimOptions()) == expected


def test_priority_without_error_preservation():
    opts = TrimOptions(preserve_errors=False)
    assert calculate_priority(Message(role="tool", content="FATAL error"), 0, opts) == 55


def test_recent_turn_window_is_configurable():
    opts = TrimOptions(preserve_recent_turns=2)
    assert calculate_priority(Message(role="assistant", content="a"), 3, opts) == 40


def test_age_based_strategy_uses_age_tiers_only():
    opts = TrimOptions(strategy="age-based")
    assert calculate_priority(Message(role="system", content="s"), 0, opts) == 100
    assert calculate_priority(Message(role="user", content="u"), 0, opts) == 40
    assert calculate_priority(Message(role="tool", content="error"), 0, opts) == 40
    assert calculate_priority(Message(role="tool", content="ok"), 7, opts) == 30
    assert calculate_priority(Message(role="assistant", content="a"), 12, opts) == 15


def test_should_truncate_rules():
    opts = TrimOptions()
    assert should_truncate(Message(role="tool", content="build failed"), 500, opts) is False
    assert should_truncate(Message(role="tool", content="fine"), 50, opts) is False
    assert should_truncate(Message(role="tool", content="fine"), 500, opts) is True
    lax = TrimOptions(preserve_small_outputs=False)
    assert should_truncate(Message(role="tool", content="fine"), 50, lax) is True


def test_placeholder_pass_alone_can_fit(long_conversation, trim_options):
    out = trim_conversation(long_conversation, 1000, trim_options)
    assert len(out) == len(long_conversation)
    tools = [m for m in out if m.role == "tool"]
    assert all(m.content.startswith("[content truncated - ") for m in tools)
    assert tools[0].content == "[content truncated - 7 steps ago, 387 tokens]"
    assert tools[-1].content == "[content truncated - 0 steps ago, 387 tokens]"
    # non-tool messages are the same objects
    for original, kept in zip(long_conversation, out):
        if original.role != "tool":
            assert kept is original
        else:
            assert kept.tool_call_id == original.tool_call_id
            assert original.content.startswith("line")
    assert estimate_tokens(out, strategy="conservative") <= 1000


def test_custom_placeholder_template(long_conversation):
    opts = TrimOptions(token_estimator="conservative", placeholder="<{tokens} dropped>")
    out = trim_conversation(long_conversation, 1000, opts)
    assert out[3].content == "<387 dropped>"


def test_error_output_is_never_placeholdered(trim_options):
    msgs = [Message(role="user", content="go")]
    for i in range(1, 8):
        msgs += tool_step(i, "line\n" * 300)
    msgs += tool_step(8, "Error: compilation failed\n" + "x" * 1500)
    msgs[2] = msgs[2].with_content("exception raised\n" + "y" * 1500)
    out = trim_conversation(msgs, 1200, trim_options)
    assert out[2].content.startswith("exception raised")
    assert out[-1].content.startswith("Error: compilation failed")


def test_removal_pass_drops_lowest_priority_first(long_conversation, trim_options):
    out = trim_conversation(long_conversation, 200, trim_options)
    assert estimate_tokens(out, strategy="conservative") <= 200
    assert out[0] is long_conversation[0]
    assert is_subsequence(out, long_conversation)
    kept_ids = {m.tool_call_id for m in out if m.role == "tool"}
    # oldest tool results (priority 20) go before the newest (priority 55)
    assert "c1" not in kept_ids and "c2" not in kept_ids
    assert "c8" in kept_ids
    # the most recent assistant turn (priority 80) survives
    assert long_conversation[-2] in out


def test_system_messages_never_removed_under_pressure(trim_options):
    msgs = [Message(role="system", content="a" * 200), Message(role="user", content="b" * 200)]
    msgs += [Message(role="system", content="c" * 200)]
    out = trim_conversation(msgs, 10, trim_options)
    assert [m.role for m in out] == ["system", "system"]


def test_enforce_within_budget(long_conversation, trim_options):
    result = enforce_context_limit(long_conversation, 10_000, trim_options)
    assert result.truncated is False
    assert result.dropped_count == 0
    assert result.dropped_messages == []
    assert result.original_tokens == result.final_tokens == 3286
    assert all(a is b for a, b in zip(result.messages, long_conversation))


def test_enforce_reports_placeholdered_originals_as_dropped(long_conversation, trim_options):
    result = enforce_context_limit(long_conversation, 1000, trim_options)
    assert result.truncated is True
    assert result.dropped_count == 0
    assert result.original_tokens == 3286
    assert result.final_tokens <= 1000
    originals = [m for m in long_conversation if m.role == "tool"]
    assert len(result.dropped_messages) == len(originals)
    assert all(a is b for a, b in zip(result.dropped_messages, originals))


def test_enforce_counts_removed_messages(long_conversation, trim_options):
    result = enforce_context_limit(long_conversation, 200, trim_options)
    assert result.truncated is True
    assert result.dropped_count == len(long_conversation) - len(result.messages)
    assert result.dropped_count > 0
    assert result.final_tokens <= 200


def test_file_references_and_active_set():
    msgs = [
        Message(
            role="assistant",
            tool_calls=(
                ToolCall("r1", "read_file", {"path": "a.py"}),
                ToolCall("b1", "execute_bash", {"command": "ls"}),
            ),
        ),
        Message(role="tool", content="x", tool_call_id="r1", name="read_file"),
        Message(role="assistant", tool_calls=(ToolCall("w1", "write_file", {"file_path": "b.py"}),)),
        Message(role="assistant", tool_calls=(ToolCall("s1", "string_replace", {"path": 3}),)),
    ]
    refs = extract_file_references(msgs)
    assert sorted(refs) == [0, 2]
    assert refs[0][0].path == "a.py" and refs[0][0].was_modified is False and refs[0][0].step == 1
    assert refs[2][0].tool == "write_file" and refs[2][0].was_modified is True and refs[2][0].step == 2
    assert build_active_file_set(refs, 5) == {"a.py", "b.py"}
    assert build_active_file_set(refs, 0) == set()


def test_active_file_boost_is_opt_in(trim_options):
    msgs = [Message(role="user", content="u")] + tool_step(1, "contents")
    plain = score_messages(msgs, trim_options)
    boosted = score_messages(msgs, replace(trim_options, boost_active_files=True))
    assert plain[2].priority == 55
    assert boosted[2].priority == 65
    assert [s.priority for s in plain[:2]] == [s.priority for s in boosted[:2]]


def _error_steps(count):
    msgs = [Message(role="system", content="sys"), Message(role="user", content="do it")]
    for i in range(1, count + 1):
        msgs += tool_step(i, f"Error: cannot open file f{i}.py")
    return msgs


def test_removed_call_takes_its_result_with_it(trim_options):
    # error results (75) outrank their older assistant calls (15/30)
    msgs = _error_steps(12)
    target = estimate_tokens(msgs, strategy="conservative") - 100
    out = trim_conversation(msgs, target, trim_options)
    assert validate_message_list(out)
    assert out[1].role == "assistant"
    issued = {m.tool_call_id for m in out if m.role == "tool"}
    kept_calls = {c.id for m in out if m.role == "assistant" for c in m.tool_calls or ()}
    assert issued <= kept_calls
    assert "c1" not in issued and "c12" in issued
    assert estimate_tokens(out, strategy="conservative") <= target


def test_removal_never_leaves_adjacent_user_turns(trim_options):
    msgs = [Message(role="system", content="sys")]
    for i in range(8):
        msgs += [Message(role="user", content="u" * 200), Message(role="assistant", content="a" * 40)]
    out = trim_conversation(msgs, estimate_tokens(msgs, strategy="conservative") - 40, trim_options)
    assert validate_message_list(out)
    # the three oldest assistant replies go first; the users they separated
    # collapse to the newest of them
    assert [m.role for m in out[:3]] == ["system", "user", "assistant"]
    assert out[1] is msgs[7]
    assert is_subsequence(out, msgs)


def test_enforce_reports_unlinked_results_as_dropped(trim_options):
    msgs = _error_steps(12)
    result = enforce_context_limit(msgs, estimate_tokens(msgs, strategy="conservative") - 100, trim_options)
    dropped_ids = {m.tool_call_id for m in result.dropped_messages if m.role == "tool"}
    assert {"c1", "c2"} <= dropped_ids
    assert result.dropped_count == len(msgs) - len(result.messages)
