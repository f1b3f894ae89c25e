"""
FileReference DTO derived from file-touching tool calls.

Recomputed from the message sequence on every trim call and never cached.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


FileTool = Literal["read_file", "write_file", "string_replace"]


@dataclass(frozen=True)
class FileReference:
    """A file path touched by a tool call at a given conversation step.

    Attributes:
        path: File path taken from the ``path`` or ``file_path`` argument.
        tool: The tool that touched the file.
        step: Conversation step at which the call was issued.
        was_modified: True for mutations (``write_file``/``string_replace``).
    """

    path: str
    tool: FileTool
    step: int
    was_modified: bool


__all__ = ["FileReference", "FileTool"]
