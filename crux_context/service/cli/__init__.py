"""Context debugging CLI (package entrypoint).

Wires argument parsing to the action handlers in ``cli_actions``. Performs no
context logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_budget, handle_build, handle_status
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    p = build_parser()
    # Inject default subcommand "status" when omitted.
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if not argv_list or argv_list[0] not in {"status", "budget", "build"}:
        argv_list = ["status"] + argv_list
    args = p.parse_args(argv_list)

    if args.cmd == "budget":
        return handle_budget(args)
    return handle_build(args) if args.cmd == "build" else handle_status(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
