"""
ToolCall DTO describing one tool invocation issued by an assistant message.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class ToolCall:
    """A single tool invocation carried by an ``assistant`` message.

    Attributes:
        id: Invocation identifier; ``tool`` messages answer it via ``tool_call_id``.
        name: Function (tool) name, e.g. ``"read_file"``.
        arguments: Decoded argument mapping.
    """

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict, hash=False)

    def arguments_json(self) -> str:
        """Return the arguments serialized as compact, key-sorted JSON."""
        return json.dumps(self.arguments, sort_keys=True, ensure_ascii=False, default=str)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": dict(self.arguments)},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToolCall":
        """Build a ``ToolCall`` from the OpenAI wire shape or a flat mapping.

        ``function.arguments`` may be a mapping or a JSON string. Undecodable
        strings are kept under the ``"_raw"`` key rather than rejected.
        """
        fn = data.get("function") or {}
        name = fn.get("name") or data.get("name") or ""
        raw_args = fn.get("arguments", data.get("arguments"))
        if isinstance(raw_args, str):
            try:
                decoded = json.loads(raw_args) if raw_args.strip() else {}
            except ValueError:
                decoded = {"_raw": raw_args}
            args = decoded if isinstance(decoded, dict) else {"_raw": decoded}
        elif isinstance(raw_args, Mapping):
            args = dict(raw_args)
        else:
            args = {}
        return cls(id=str(data.get("id") or ""), name=str(name), arguments=args)


__all__ = ["ToolCall"]
