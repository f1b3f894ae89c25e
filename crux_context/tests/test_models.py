from __future__ import annotations

import dataclasses

import pytest

from crux_context.base.errors import ContextError, ContextOverflowError, ErrorCode
from crux_context.base.models import Message, ToolCall


def test_message_from_openai_wire_shape():
    msg = Message.from_dict(
        {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {"id": "c1", "type": "function", "function": {"name": "read_file", "arguments": '{"path": "a.py"}'}}
            ],
        }
    )
    assert msg.content == ""
    assert msg.tool_calls[0].arguments == {"path": "a.py"}
    assert msg.tool_names() == ["read_file"]
    assert msg.has_tool_calls()


def test_undecodable_arguments_are_kept_raw():
    call = ToolCall.from_dict({"id": "x", "function": {"name": "t", "arguments": "{not json"}})
    assert call.arguments == {"_raw": "{not json"}
    assert ToolCall.from_dict({"id": "y", "name": "t", "arguments": ""}).arguments == {}


def test_structured_content_is_flattened():
    msg = Message.from_dict(
        {"role": "user", "content": [{"type": "text", "text": "look"}, {"type": "image_url", "image_url": {}}]}
    )
    assert msg.content == "look\n[image_url]"


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        Message.from_dict({"role": "narrator", "content": "x"})


def test_to_dict_omits_unset_fields():
    assert Message(role="user", content="hi").to_dict() == {"role": "user", "content": "hi"}
    tool = Message(role="tool", content="r", tool_call_id="c1", name="read_file").to_dict()
    assert tool["tool_call_id"] == "c1" and tool["name"] == "read_file"


def test_messages_compare_by_identity_and_are_immutable():
    a = Message(role="user", content="same")
    b = Message(role="user", content="same")
    assert a != b
    assert a == a
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.content = "changed"
    c = a.with_content("new")
    assert a.content == "same" and c.content == "new" and c.role == "user"


def test_tool_calls_list_is_coerced_to_tuple():
    msg = Message(role="assistant", tool_calls=[ToolCall("c", "t")])
    assert isinstance(msg.tool_calls, tuple)


def test_error_types():
    err = ContextOverflowError("too big", current_tokens=10, max_tokens=5)
    assert isinstance(err, ContextError)
    assert err.code is ErrorCode.OVERFLOW
    assert str(err) == "too big"
    assert str(ContextError(ErrorCode.VALIDATION, "bad")) == "validation: bad"
