"""CLI action handlers.

Purpose
-------
Subcommand handlers for the llm-relay CLI, keeping the entrypoint minimal.
This module has no top-level side effects and is safe to import in tests.

Error Semantics
---------------
- ``ProviderError`` is reported as a JSON object on stderr.
- Exit codes: ``0`` success, ``1`` request failure (transport, vendor,
  decode, empty, cancelled), ``2`` bad configuration.
"""

from __future__ import annotations

import argparse
import json
import sys
import threading
from typing import Any, Dict, List, Optional, TextIO

from ...base.errors import ErrorCode, ProviderError
from ...base.factory import ProviderFactory
from ...base.models import Configuration, Message
from ...config import load_configuration
from ..client import CompletionClient

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_CONFIGURATION = 2


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect configuration overrides given on the command line."""
    out: Dict[str, Any] = {
        "api_key": getattr(args, "api_key", None),
        "base_url": getattr(args, "base_url", None),
        "model": getattr(args, "model", None),
    }
    if getattr(args, "enable", False):
        out["enabled"] = True
    return {k: v for k, v in out.items() if v is not None}


def resolve_configuration(args: argparse.Namespace) -> Configuration:
    return load_configuration(
        getattr(args, "vendor", None),
        overrides_from_args(args),
        config_file=getattr(args, "config_file", None),
    )


def build_messages(prompt: str, system: Optional[str] = None) -> List[Message]:
    msgs: List[Message] = []
    if system:
        msgs.append(Message.system(system))
    msgs.append(Message.user(prompt))
    return msgs


def report_error(err: ProviderError, stream: Optional[TextIO] = None) -> int:
    """Write ``err`` as JSON (stderr by default) and return the matching exit code."""
    payload = {
        "error": err.code.value,
        "message": err.message,
        "provider": err.provider,
        "model": err.model,
        "status_code": err.status_code,
    }
    print(
        json.dumps({k: v for k, v in payload.items() if v is not None}, ensure_ascii=False),
        file=stream or sys.stderr,
    )
    return EXIT_BAD_CONFIGURATION if err.code is ErrorCode.BAD_CONFIGURATION else EXIT_FAILURE


def handle_chat(args: argparse.Namespace, client: Optional[CompletionClient] = None) -> int:
    """Run one completion and print it.

    Streaming output is written to stdout as chunks arrive; with ``--json``
    a single object ``{"text", "vendor", "model", "stream"}`` is printed at
    the end instead. A client built here from the arguments is closed on
    return; an injected one is left open.
    """
    try:
        if client is not None:
            return _chat(args, client)
        with CompletionClient(resolve_configuration(args)) as owned:
            return _chat(args, owned)
    except ProviderError as e:
        return report_error(e)
    except TimeoutError as e:
        print(json.dumps({"error": ErrorCode.CANCELLED.value, "message": str(e)}), file=sys.stderr)
        return EXIT_FAILURE


def _chat(args: argparse.Namespace, client: CompletionClient) -> int:
    sub = client.send(build_messages(args.prompt, args.system), stream=args.stream)
    if args.json:
        try:
            text = sub.result(args.timeout)
        except TimeoutError:
            sub.cancel("timed out")
            raise
        cfg = client.configuration
        print(json.dumps({"text": text, "vendor": cfg.vendor.value, "model": cfg.model, "stream": args.stream}))
        return EXIT_OK
    timer = None
    if args.timeout is not None:
        timer = threading.Timer(args.timeout, sub.cancel, args=("timed out",))
        timer.daemon = True
        timer.start()
    try:
        for chunk in sub:
            sys.stdout.write(chunk.text)
            sys.stdout.flush()
    finally:
        if timer is not None:
            timer.cancel()
    if sub.cancelled:
        return report_error(
            ProviderError(code=ErrorCode.CANCELLED, message="timed out", provider=client.configuration.vendor.value)
        )
    sys.stdout.write("\n")
    return EXIT_OK


def handle_models(args: argparse.Namespace, client: Optional[CompletionClient] = None) -> int:
    """List models, one ``id<TAB>name`` line each (or a JSON array)."""
    try:
        if client is not None:
            models = client.list_models()
        else:
            with CompletionClient(resolve_configuration(args)) as owned:
                models = owned.list_models()
    except ProviderError as e:
        return report_error(e)
    if args.json:
        print(json.dumps([{"id": m.id, "name": m.name} for m in models]))
    else:
        for m in models:
            print(f"{m.id}\t{m.name}")
    return EXIT_OK


def handle_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration with the API key masked."""
    try:
        cfg = resolve_configuration(args)
    except ProviderError as e:
        return report_error(e)
    print(
        json.dumps(
            {
                "vendor": cfg.vendor.value,
                "api_key": cfg.masked_api_key(),
                "base_url": cfg.base_url,
                "endpoint": cfg.build_endpoint_url(_endpoint_suffix(cfg)) if cfg.base_url else None,
                "model": cfg.model,
                "enabled": cfg.enabled,
                "valid": cfg.is_valid,
            },
            indent=2,
        )
    )
    return EXIT_OK


def _endpoint_suffix(cfg: Configuration) -> str:
    return ProviderFactory.get(cfg.vendor).endpoint_suffix


__all__ = [
    "handle_chat",
    "handle_models",
    "handle_config",
    "build_messages",
    "overrides_from_args",
    "report_error",
    "EXIT_OK",
    "EXIT_FAILURE",
    "EXIT_BAD_CONFIGURATION",
]
