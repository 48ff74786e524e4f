"""CLI parser construction for llm-relay.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...base.models import Vendor


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    When ``None`` (flag given without a value) this returns ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags (streaming is the default)."""
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=True)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Vendor selection and explicit configuration overrides."""
    parser.add_argument("--vendor", choices=[v.value for v in Vendor], default=None)
    parser.add_argument("--api-key", default=None)
    parser.add_argument("--base-url", default=None)
    parser.add_argument("--model", default=None)
    parser.add_argument("--config-file", default=None)
    parser.add_argument(
        "--enable",
        action="store_true",
        help="Treat the configuration as enabled regardless of <VENDOR>_ENABLED",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``chat``, ``models`` and ``config`` subcommands. No I/O
        happens here.
    """
    p = argparse.ArgumentParser(prog="llm-relay", description="Send chat completions to LLM vendors")
    p.add_argument("--log-level", default=None, help="Override LLM_RELAY_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd")

    # chat
    p_chat = sub.add_parser("chat", help="Send a prompt and print the completion")
    add_config_flags(p_chat)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=None, help="Optional system instruction")
    add_stream_flags(p_chat)
    p_chat.add_argument("--timeout", type=float, default=None, help="Seconds to wait before cancelling")
    p_chat.add_argument("--json", action="store_true")

    # models
    p_models = sub.add_parser("models", help="List the models the endpoint advertises")
    add_config_flags(p_models)
    p_models.add_argument("--json", action="store_true")

    # config
    p_cfg = sub.add_parser("config", help="Print the resolved configuration (API key masked)")
    add_config_flags(p_cfg)

    return p


__all__ = ["build_parser", "add_stream_flags", "add_config_flags"]
