"""Completion client: the public entry point for sending a conversation.

``CompletionClient`` validates the configuration and messages, picks the
vendor adapter, builds the request and starts one :class:`Subscription`
whose worker thread runs the streaming or single-shot transfer. Invalid
input is rejected synchronously with ``ProviderError(BAD_CONFIGURATION)``
before any network call.

Concurrency
-----------
Any number of subscriptions may run at once; each owns its worker thread,
parser and response, and they share only the immutable configuration, the
stateless adapter and the pooled ``httpx.Client``. Every subscription token
is a child of the client's root token so :meth:`CompletionClient.cancel_all`
stops them in one call.

Example
-------
>>> client = CompletionClient(load_configuration("openai"))  # doctest: +SKIP
>>> for chunk in client.send([Message.user("Hello")]):        # doctest: +SKIP
...     print(chunk.text, end="")
"""
from __future__ import annotations

import logging
import threading
import uuid
from functools import partial
from typing import Any, List, Optional, Sequence

import httpx

from ..base.cancellation import CancellationToken
from ..base.dto import validate_messages
from ..base.errors import ErrorCode, ProviderError
from ..base.factory import ProviderFactory
from ..base.http import STREAM_PURPOSE, get_httpx_client
from ..base.logging import LogContext, get_logger
from ..base.models import Configuration, Message, ModelInfo
from ..base.streaming import Subscription
from ..base.streaming.subscription import ChunkCallback, ErrorCallback
from .model_listing import fetch_models
from .transfer import run_single_shot, run_streaming

MODELS_PURPOSE = "models"


class CompletionClient:
    """Send conversations to the configured vendor.

    Parameters:
        configuration: Immutable connection settings; never modified.
        http_client: Optional ``httpx.Client`` used for every request
            (tests inject one built on ``httpx.MockTransport``). When omitted
            the shared pooled clients are used.
        logger: Optional logger; defaults to ``llm_relay.client``.
    """

    def __init__(
        self,
        configuration: Configuration,
        *,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._configuration = configuration
        self._http_client = http_client
        self._logger = logger or get_logger("client")
        self._root = CancellationToken()
        self._lock = threading.Lock()

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def _client_for(self, purpose: str) -> httpx.Client:
        return self._http_client if self._http_client is not None else get_httpx_client(purpose)

    def _check_configuration(self) -> None:
        cfg = self._configuration
        if not cfg.is_valid:
            missing = [name for name in ("api_key", "base_url", "model") if not getattr(cfg, name).strip()]
            raise ProviderError(
                code=ErrorCode.BAD_CONFIGURATION,
                message=f"configuration incomplete: missing {', '.join(missing)}",
                provider=cfg.vendor.value,
                model=cfg.model or None,
            )
        if not cfg.enabled:
            raise ProviderError(
                code=ErrorCode.BAD_CONFIGURATION,
                message="configuration is disabled",
                provider=cfg.vendor.value,
                model=cfg.model,
            )

    def send(
        self,
        messages: Sequence[Any],
        stream: bool = True,
        on_chunk: Optional[ChunkCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        """Start one completion request and return its subscription.

        Parameters:
            messages: Ordered conversation; ``Message`` values or mappings
                with ``role``/``content``.
            stream: ``True`` delivers deltas as they arrive; ``False`` delivers
                the whole text on the single terminal chunk.
            on_chunk: Optional callback for each ``StreamChunk``, invoked on
                the worker thread.
            on_error: Optional callback for the terminal ``ProviderError``.

        Raises:
            ProviderError: ``BAD_CONFIGURATION`` when the configuration is
                invalid or disabled, or the messages are invalid. No request
                is issued in that case.
        """
        self._check_configuration()
        cfg = self._configuration
        valid: List[Message] = validate_messages(messages, provider=cfg.vendor.value, model=cfg.model)
        adapter = ProviderFactory.get(cfg.vendor)
        request = adapter.build_request(cfg, valid, stream)

        ctx = LogContext(
            provider=cfg.vendor.value,
            model=cfg.model,
            request_id=uuid.uuid4().hex,
            stream=stream,
            extra={"messages": len(valid)},
        )
        with self._lock:
            token = self._root.child()
        sub = Subscription(ctx=ctx, logger=self._logger, token=token, on_chunk=on_chunk, on_error=on_error)
        transfer = run_streaming if stream else run_single_shot
        return sub.start(
            partial(
                transfer,
                client=self._client_for(STREAM_PURPOSE),
                adapter=adapter,
                request=request,
                logger=self._logger,
                ctx=ctx,
            )
        )

    def complete(self, messages: Sequence[Any], stream: bool = True, timeout: Optional[float] = None) -> str:
        """Send ``messages`` and block until the full text is available.

        Raises:
            ProviderError: the terminal error of the request (``CANCELLED``
                when it was cancelled).
            TimeoutError: when ``timeout`` elapses first; the request is
                cancelled before raising.
        """
        sub = self.send(messages, stream=stream)
        try:
            return sub.result(timeout)
        except TimeoutError:
            sub.cancel("timed out waiting for completion")
            raise

    def list_models(self) -> List[ModelInfo]:
        """Return the models the configured endpoint advertises.

        Needs only the API key and base URL; the model and ``enabled`` flag
        are not checked.
        """
        cfg = self._configuration
        if not cfg.api_key.strip() or not cfg.base_url.strip():
            raise ProviderError(
                code=ErrorCode.BAD_CONFIGURATION,
                message="model listing needs an api_key and base_url",
                provider=cfg.vendor.value,
            )
        adapter = ProviderFactory.get(cfg.vendor)
        ctx = LogContext(provider=cfg.vendor.value, request_id=uuid.uuid4().hex)
        return fetch_models(self._client_for(MODELS_PURPOSE), adapter, cfg, logger=self._logger, ctx=ctx)

    def cancel_all(self, reason: Optional[str] = None) -> None:
        """Cancel every subscription started so far; later sends are unaffected."""
        with self._lock:
            old, self._root = self._root, CancellationToken()
        old.cancel(reason or "client cancel_all")

    def close(self) -> None:
        """Cancel outstanding work and close an injected HTTP client."""
        self.cancel_all("client closed")
        if self._http_client is not None:
            self._http_client.close()

    def __enter__(self) -> "CompletionClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["CompletionClient", "MODELS_PURPOSE"]
