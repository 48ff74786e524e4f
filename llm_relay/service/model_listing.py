"""Model listing fetch.

``fetch_models`` issues one GET to the adapter's model listing URL and maps
the decoded body through ``adapter.parse_models``. Vendors without a listing
endpoint return ``[]`` without any I/O. Failures are classified exactly like
a single-shot completion and raised as ``ProviderError``.
"""
from __future__ import annotations

import json
import logging
from typing import List

import httpx

from ..base.errors import ErrorCode, ProviderError, vendor_error_from_body
from ..base.interfaces import ProviderAdapter
from ..base.logging import LogContext, normalized_log_event
from ..base.models import Configuration, ModelInfo
from ..base.streaming import HTTP_OK


def fetch_models(
    client: httpx.Client,
    adapter: ProviderAdapter,
    configuration: Configuration,
    *,
    logger: logging.Logger,
    ctx: LogContext,
) -> List[ModelInfo]:
    """Return the models advertised by the configured endpoint, sorted by id.

    Raises:
        ProviderError: ``TRANSPORT_FAILURE`` when the request fails,
            ``EMPTY_RESPONSE`` for an empty body, ``VENDOR_ERROR`` for a
            non-200 status, ``DECODE_FAILURE`` for an unreadable listing.
    """
    url = adapter.models_url(configuration)
    if url is None:
        normalized_log_event(logger, "models.list", ctx, phase="finalize", emitted=False, count=0, skipped=True)
        return []
    provider = configuration.vendor.value
    try:
        resp = client.get(url, headers=adapter.build_headers(configuration))
    except (httpx.HTTPError, OSError) as e:
        raise ProviderError(
            code=ErrorCode.TRANSPORT_FAILURE,
            message=str(e) or type(e).__name__,
            provider=provider,
            raw=e,
        ) from e

    body = resp.content
    if not body:
        raise ProviderError(
            code=ErrorCode.EMPTY_RESPONSE,
            message="model listing was empty",
            provider=provider,
            status_code=resp.status_code,
        )
    if resp.status_code != HTTP_OK:
        raise vendor_error_from_body(body, resp.status_code, provider=provider)
    try:
        models = adapter.parse_models(json.loads(body.decode("utf-8")))
    except (UnicodeDecodeError, ValueError) as e:
        raise ProviderError(
            code=ErrorCode.DECODE_FAILURE,
            message=f"model listing could not be decoded: {e}",
            provider=provider,
            status_code=resp.status_code,
            raw=e,
        ) from e
    normalized_log_event(logger, "models.list", ctx, phase="finalize", emitted=True, count=len(models))
    return models


__all__ = ["fetch_models"]
