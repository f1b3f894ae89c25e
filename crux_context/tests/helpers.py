"""Message builders shared by the test modules."""

from __future__ import annotations

from typing import List

from crux_context.base.models import Message, ToolCall


def tool_step(index: int, content: str, tool: str = "read_file") -> List[Message]:
    """Return one assistant tool call plus its tool result."""

    call = ToolCall(id=f"c{index}", name=tool, arguments={"path": f"f{index}.py"})
    return [
        Message(role="assistant", tool_calls=(call,)),
        Message(role="tool", content=content, tool_call_id=f"c{index}", name=tool),
    ]


def is_subsequence(short: List[Message], full: List[Message]) -> bool:
    """True when ``short`` keeps the relative order of ``full``.

    Messages are matched by role, tool_call_id and position, so placeholder
    copies still match their originals.
    """

    def key(m: Message):
        return (m.role, m.tool_call_id, tuple(m.tool_names()))

    it = iter([key(m) for m in full])
    return all(key(m) in it for m in short)
