"""
Message DTO used across the context pipeline.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Messages are immutable value objects produced by the surrounding agent
loop; the pipeline only reads them or replaces them wholesale.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from .tool_call import ToolCall


# Message roles understood by the pipeline.
Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True, eq=False)
class Message:
    """A chat message as seen by the context pipeline.

    Summary:
        Equality is identity: two messages with identical fields are still two
        distinct conversation entries. ``enforce_context_limit`` relies on this
        to report exactly which entries were dropped.

    Attributes:
        role: The role of the message author.
        content: Plain text content (empty for tool-call-only assistant turns).
        tool_calls: Ordered tool invocations issued by an ``assistant`` message.
        tool_call_id: For ``tool`` messages, the invocation being answered.
        name: For ``tool`` messages, the name of the tool that produced the result.
    """

    role: Role
    content: str = ""
    tool_calls: Optional[Tuple[ToolCall, ...]] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.content is None:
            object.__setattr__(self, "content", "")
        if self.tool_calls is not None and not isinstance(self.tool_calls, tuple):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))

    def has_tool_calls(self) -> bool:
        """Return True when the message carries at least one tool invocation."""
        return bool(self.tool_calls)

    def tool_names(self) -> List[str]:
        return [call.name for call in self.tool_calls or ()]

    def with_content(self, content: str) -> "Message":
        """Return a copy of this message with ``content`` replaced."""
        return replace(self, content=content)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-style wire mapping, omitting unset optional fields."""
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        """Build a message from an OpenAI-style mapping.

        Structured content (a list of parts) is flattened to its text segments
        joined by newlines; non-text parts become bracketed type tags.
        """
        role = data.get("role")
        if role not in ("system", "user", "assistant", "tool"):
            raise ValueError(f"unsupported message role: {role!r}")
        content = data.get("content")
        if isinstance(content, list):
            segments = []
            for part in content:
                if isinstance(part, Mapping):
                    text = part.get("text")
                    segments.append(text if isinstance(text, str) else f"[{part.get('type', 'part')}]")
                else:
                    segments.append(str(part))
            content = "\n".join(segments)
        calls = data.get("tool_calls")
        return cls(
            role=role,
            content="" if content is None else str(content),
            tool_calls=tuple(ToolCall.from_dict(c) for c in calls) if calls else None,
            tool_call_id=data.get("tool_call_id"),
            name=data.get("name"),
        )

    @classmethod
    def list_from_dicts(cls, items: Sequence[Mapping[str, Any]]) -> List["Message"]:
        return [cls.from_dict(item) for item in items]


__all__ = [
    "Message",
    "Role",
]
