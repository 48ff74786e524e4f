"""llm-relay CLI (package entrypoint).

Wires argument parsing to the action handlers in ``cli_actions``; it performs
no vendor logic directly.

    python -m llm_relay.service.cli chat --vendor openai --prompt "Hello"
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from .cli_actions import handle_chat, handle_config, handle_models
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
        Process exit code (0 success, 1 request failure, 2 usage or
        configuration error).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.cmd is None:
        p.print_help(sys.stderr)
        return 2
    if args.log_level:
        configure_logger(level=args.log_level)

    if args.cmd == "models":
        return handle_models(args)
    return handle_config(args) if args.cmd == "config" else handle_chat(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
