"""Per-message token accounting shared by every tokenizer.

A message costs a fixed structural overhead plus its encoded content, plus
for each tool call the encoded name, the encoded JSON arguments and a fixed
per-call overhead, plus the encoded ``tool_call_id`` and ``name`` linkage
fields with their own small overheads.
"""

from __future__ import annotations

from ..interfaces import Tokenizer
from ..models import Message

MESSAGE_OVERHEAD = 4
TOOL_CALL_OVERHEAD = 10
LINK_FIELD_OVERHEAD = 2
SEQUENCE_OVERHEAD = 3


def estimate_message_tokens(message: Message, tokenizer: Tokenizer) -> int:
    """Return the estimated token cost of one message under ``tokenizer``."""
    total = MESSAGE_OVERHEAD
    if message.content:
        total += tokenizer.encode(message.content)
    for call in message.tool_calls or ():
        total += tokenizer.encode(call.name)
        total += tokenizer.encode(call.arguments_json())
        total += TOOL_CALL_OVERHEAD
    if message.tool_call_id:
        total += tokenizer.encode(message.tool_call_id) + LINK_FIELD_OVERHEAD
    if message.name:
        total += tokenizer.encode(message.name) + LINK_FIELD_OVERHEAD
    return total


__all__ = [
    "MESSAGE_OVERHEAD",
    "TOOL_CALL_OVERHEAD",
    "LINK_FIELD_OVERHEAD",
    "SEQUENCE_OVERHEAD",
    "estimate_message_tokens",
]
