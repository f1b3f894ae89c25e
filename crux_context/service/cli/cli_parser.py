"""CLI parser construction for context-cli.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def add_common_flags(parser: argparse.ArgumentParser) -> None:
    """Attach provider/model selection and budget override flags."""
    parser.add_argument("--provider", default=None, help="Provider name used to pick a tokenizer")
    parser.add_argument("--model", default=None, help="Model id used to pick a tokenizer")
    parser.add_argument("--max-context", dest="max_context", type=int, default=None)
    parser.add_argument("--reserved-output", dest="reserved_output", type=int, default=None)
    parser.add_argument(
        "--detect-limit",
        action="store_true",
        help="Use the known context window of --model instead of the configured size",
    )
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``status``, ``budget`` and ``build`` subcommands.
    """
    p = argparse.ArgumentParser(
        prog="context-cli", description="Inspect context budgets and trimmed prompts"
    )
    sub = p.add_subparsers(dest="cmd")

    # status
    p_status = sub.add_parser("status", help="Show the effective context configuration")
    add_common_flags(p_status)

    # budget
    p_budget = sub.add_parser("budget", help="Check a message file against the input budget")
    p_budget.add_argument("file", help="JSON file holding a list of messages")
    add_common_flags(p_budget)

    # build
    p_build = sub.add_parser("build", help="Build the final prompt for a message file")
    p_build.add_argument("file", help="JSON file holding a list of messages")
    p_build.add_argument(
        "--summarize",
        action="store_true",
        help="Fold dropped messages into a rule-based summary",
    )
    add_common_flags(p_build)

    return p
