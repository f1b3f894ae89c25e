from __future__ import annotations

from crux_context.base.context import sanitize_message_list, validate_message_list
from crux_context.base.models import Message, ToolCall


def _assistant(content: str = "", *tools: str) -> Message:
    calls = tuple(ToolCall(id=f"id-{t}", name=t, arguments={}) for t in tools) or None
    return Message(role="assistant", content=content, tool_calls=calls)


def test_three_consecutive_assistants_merge_in_order():
    msgs = [Message(role="user", content="hi"), _assistant("A1"), _assistant("A2"), _assistant("A3")]
    result = sanitize_message_list(msgs)
    assert result.sanitized is True
    assert result.combined_assistant_messages == 2
    assert len(result.messages) == 2
    merged = result.messages[1].content
    assert merged.index("A1") < merged.index("A2") < merged.index("A3")
    assert merged == "A1\n\nA2\n\nA3"
    assert result.summary
    assert validate_message_list(result.messages)


def test_merge_keeps_every_tool_call_and_marks_them():
    msgs = [_assistant("Reading", "read_file"), _assistant("", "execute_bash", "search_files")]
    merged = sanitize_message_list(msgs).messages[0]
    assert merged.content == (
        "Reading\n\n[Tools called: read_file]\n\n[Tools called: execute_bash, search_files]"
    )
    assert [c.name for c in merged.tool_calls] == ["read_file", "execute_bash", "search_files"]


def test_mid_sequence_runs_are_merged_and_others_pass_through():
    user = Message(role="user", content="go")
    tool = Message(role="tool", content="done", tool_call_id="id-x", name="x")
    msgs = [user, _assistant("one"), _assistant("two", "x"), tool, _assistant("final")]
    result = sanitize_message_list(msgs)
    assert result.combined_assistant_messages == 1
    assert [m.role for m in result.messages] == ["user", "assistant", "tool", "assistant"]
    assert result.messages[0] is user
    assert result.messages[2] is tool
    assert result.messages[3] is msgs[4]


def test_clean_sequence_is_untouched():
    msgs = [Message(role="system", content="s"), Message(role="user", content="u"), _assistant("a")]
    result = sanitize_message_list(msgs)
    assert result.sanitized is False
    assert result.combined_assistant_messages == 0
    assert result.summary is None
    assert all(a is b for a, b in zip(result.messages, msgs))


def test_empty_assistant_run_merges_to_empty_content():
    result = sanitize_message_list([_assistant(""), _assistant("   ")])
    assert result.messages[0].content == ""
    assert result.messages[0].tool_calls is None


def test_validate_rejects_two_trailing_assistants():
    assert validate_message_list([Message(role="user", content="u"), _assistant("a"), _assistant("b")]) is False


def test_validate_rejects_leading_tool_message():
    assert validate_message_list([Message(role="tool", content="x", tool_call_id="1")]) is False


def test_validate_rejects_tool_after_user():
    msgs = [Message(role="user", content="u"), Message(role="tool", content="x", tool_call_id="1")]
    assert validate_message_list(msgs) is False


def test_validate_rejects_adjacent_user_messages():
    assert validate_message_list([Message(role="user", content="a"), Message(role="user", content="b")]) is False


def test_validate_accepts_parallel_tool_results_and_empty_sequence():
    assert validate_message_list([]) is True
    msgs = [
        Message(role="system", content="s"),
        Message(role="user", content="u"),
        _assistant("", "read_file", "search_files"),
        Message(role="tool", content="r", tool_call_id="id-read_file", name="read_file"),
        Message(role="tool", content="s", tool_call_id="id-search_files", name="search_files"),
        _assistant("done"),
    ]
    assert validate_message_list(msgs) is True
