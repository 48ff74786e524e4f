"""Shared pytest fixtures for the llm_relay test suite.

Provides ``httpx.MockTransport`` backed clients so wire behavior can be
exercised without network access, plus a list-collecting log handler.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import httpx
import pytest

from llm_relay.base.http import close_all_clients
from llm_relay.base.models import Configuration, Vendor
from llm_relay.service import CompletionClient

_ENV_NAMES = [
    f"{v.value.upper()}_{suffix}"
    for v in Vendor
    for suffix in ("API_KEY", "BASE_URL", "MODEL", "ENABLED")
] + ["LLM_RELAY_VENDOR", "LLM_RELAY_CONFIG_FILE"]


class ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        out = []
        for m in self.messages:
            try:
                out.append(json.loads(m))
            except ValueError:
                continue
        return out


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep real credentials in the developer's shell out of every test."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield
    close_all_clients()


@pytest.fixture()
def log_capture() -> Iterator[ListHandler]:
    handler = ListHandler()
    logger = logging.getLogger("llm_relay.tests")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield handler
    logger.handlers[:] = []


@pytest.fixture()
def config_factory() -> Callable[..., Configuration]:
    def _make(vendor: str = "openai", **fields: Any) -> Configuration:
        fields.setdefault("api_key", "sk-live-1234567890")
        fields.setdefault("enabled", True)
        if vendor == "custom":
            fields.setdefault("base_url", "https://gateway.local")
            fields.setdefault("model", "llama-3")
        return Configuration.with_defaults(vendor, **fields)

    return _make


class Recorder:
    """Counts and keeps the requests a mock transport received."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content.decode("utf-8"))


@pytest.fixture()
def mock_client(
    config_factory: Callable[..., Configuration], log_capture: ListHandler
) -> Callable[..., "tuple[CompletionClient, Recorder]"]:
    """Build a ``CompletionClient`` whose transport answers with ``respond``.

    ``respond`` is either a callable ``(request) -> httpx.Response`` or an
    iterable of byte fragments served as a 200 response.
    """

    def _make(
        respond: "Callable[[httpx.Request], httpx.Response] | Iterable[bytes]",
        vendor: str = "openai",
        configuration: Optional[Configuration] = None,
        **fields: Any,
    ):
        recorder = Recorder()

        def handler(request: httpx.Request) -> httpx.Response:
            recorder.requests.append(request)
            if callable(respond):
                return respond(request)
            return httpx.Response(200, content=iter(list(respond)))

        cfg = configuration or config_factory(vendor, **fields)
        http = httpx.Client(transport=httpx.MockTransport(handler))
        client = CompletionClient(cfg, http_client=http, logger=logging.getLogger("llm_relay.tests"))
        return client, recorder

    return _make
