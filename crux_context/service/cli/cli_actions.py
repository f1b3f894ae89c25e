"""CLI action handlers for context-cli.

Purpose
-------
Subcommand handlers kept apart from argument parsing. This module has no
top-level side effects and is safe to import in tests.

Fallback & Error Semantics
--------------------------
- Unreadable or malformed message files print a JSON error to stderr and
  return ``1``.
- A conversation that cannot fit its budget prints the actionable overflow
  message to stderr and returns ``2``.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from ...base.dto import ContextConfig
from ...base.errors import ContextOverflowError, ErrorCode
from ...base.logging import get_logger, log_event
from ...base.models import Message
from ...base.context import build_final_prompt, check_budget
from ...base.summarization import SummaryStore, create_summarizer
from ...base.tokens import get_context_limit
from ...config import get_context_config

logger = get_logger("cli")


def resolve_config(args: argparse.Namespace) -> ContextConfig:
    """Return the layered configuration with command-line overrides applied."""
    overrides: Dict[str, Any] = {}
    if getattr(args, "detect_limit", False) and args.model:
        overrides["max_context_tokens"] = get_context_limit(args.model)
    if args.max_context is not None:
        overrides["max_context_tokens"] = args.max_context
    if args.reserved_output is not None:
        overrides["reserved_output_tokens"] = args.reserved_output
    if getattr(args, "summarize", False):
        overrides["summarize_on_truncate"] = True
        overrides["summarization_mode"] = "rule-based"
    return get_context_config(overrides)


def load_messages(path: str) -> List[Message]:
    """Load messages from a JSON file.

    Accepts either a list of OpenAI-style message objects or an object with a
    ``messages`` list.

    Raises
    ------
    OSError
        If the file cannot be read.
    ValueError
        If the content is not valid JSON or a message is malformed.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("messages")
    if not isinstance(data, list):
        raise ValueError("expected a list of messages")
    return Message.list_from_dicts(data)


def _emit(payload: Dict[str, Any], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload))
        return
    for key, value in payload.items():
        print(f"{key}: {value}")


def _error(message: str, code: ErrorCode = ErrorCode.VALIDATION) -> None:
    print(json.dumps({"error": message, "code": code.value}), file=sys.stderr)


def handle_status(args: argparse.Namespace) -> int:
    """Print the effective configuration."""
    try:
        config = resolve_config(args)
    except ValidationError as e:
        _error(str(e))
        return 1
    _emit(
        {
            "enabled": config.enabled,
            "max_context_tokens": config.max_context_tokens,
            "reserved_output_tokens": config.reserved_output_tokens,
            "max_input_tokens": config.max_input_tokens,
            "trim_strategy": config.trim_strategy,
            "summarize_on_truncate": config.summarize_on_truncate,
            "summarization_mode": config.summarization_mode,
            "token_estimator": config.token_estimator,
        },
        args.json,
    )
    return 0


def handle_budget(args: argparse.Namespace) -> int:
    """Print how a message file compares to the input budget."""
    try:
        config = resolve_config(args)
        messages = load_messages(args.file)
    except (OSError, ValueError, ValidationError) as e:
        _error(str(e))
        return 1
    result = check_budget(messages, config, args.provider, args.model)
    _emit(result.to_dict(), args.json)
    return 0


def handle_build(args: argparse.Namespace) -> int:
    """Run the prompt builder over a message file and print its metadata.

    Returns
    -------
    int
        ``0`` on success, ``1`` on bad input, ``2`` on context overflow.
    """
    try:
        config = resolve_config(args)
        messages = load_messages(args.file)
    except (OSError, ValueError, ValidationError) as e:
        _error(str(e))
        return 1

    store = SummaryStore(provider_name=args.provider, model=args.model, token_estimator=config.token_estimator)
    summarizer = (
        create_summarizer(
            config.summarization_mode,
            model=args.model,
            provider_name=args.provider,
            token_estimator=config.token_estimator,
        )
        if args.summarize
        else None
    )
    try:
        result = build_final_prompt(messages, config, args.provider, args.model, summarizer, store)
    except ContextOverflowError as e:
        log_event(
            logger,
            "cli.overflow",
            code=e.code.value,
            current_tokens=e.current_tokens,
            max_tokens=e.max_tokens,
        )
        print(e.message, file=sys.stderr)
        return 2

    payload = result.to_dict()
    summary = store.get_summary_info()
    if summary is not None:
        payload["summary_version"] = summary.version
        payload["summary_tokens"] = summary.tokens_used
    _emit(payload, args.json)
    return 0


__all__ = ["resolve_config", "load_messages", "handle_status", "handle_budget", "handle_build"]
