"""Tests for terminal outcome classification of streaming and single-shot responses."""
from __future__ import annotations

import json

import httpx
import pytest

from llm_relay.anthropic.adapter import AnthropicAdapter
from llm_relay.base.errors import ErrorCode, ProviderError
from llm_relay.base.streaming import HTTP_OK, SSEParser, classify_single_shot, classify_stream_end
from llm_relay.openai.adapter import OpenAIAdapter
from llm_relay.tests.helpers import DONE, openai_delta, sse


def _end(parser, status, **kw):
    return classify_stream_end(parser, OpenAIAdapter(), status, provider="openai", model="m", **kw)


def test_rate_limited_body_yields_vendor_message():
    parser = SSEParser(OpenAIAdapter())
    parser.absorb(json.dumps({"error": {"message": "rate limited"}}).encode())
    outcome = _end(parser, 429)
    assert outcome.error is not None
    assert outcome.error.code is ErrorCode.VENDOR_ERROR
    assert outcome.error.message == "rate limited"
    assert outcome.error.status_code == 429


def test_unparseable_error_body_yields_http_status():
    parser = SSEParser(OpenAIAdapter())
    parser.absorb(b"<html>Bad Gateway</html>")
    outcome = _end(parser, 502)
    assert outcome.error.code is ErrorCode.VENDOR_ERROR
    assert outcome.error.message == "HTTP 502"


def test_zero_bytes_is_empty_response():
    outcome = _end(SSEParser(OpenAIAdapter()), 200)
    assert outcome.error.code is ErrorCode.EMPTY_RESPONSE


def test_transport_error_takes_precedence():
    parser = SSEParser(OpenAIAdapter())
    parser.feed(sse(openai_delta("partial")))
    outcome = _end(parser, 200, transport_error=httpx.ReadError("connection reset"))
    assert outcome.error.code is ErrorCode.TRANSPORT_FAILURE
    assert "connection reset" in outcome.error.message


def test_successful_stream_is_ok():
    parser = SSEParser(OpenAIAdapter())
    parser.feed(sse(openai_delta("x")) + DONE)
    outcome = _end(parser, 200)
    assert outcome.ok and outcome.text is None


def test_stream_of_only_malformed_events_is_decode_failure():
    parser = SSEParser(OpenAIAdapter())
    parser.feed(b"data: {broken\n\ndata: also broken\n\n" + DONE)
    outcome = _end(parser, 200)
    assert outcome.error.code is ErrorCode.DECODE_FAILURE


def test_in_stream_error_event_is_vendor_error():
    parser = SSEParser(OpenAIAdapter())
    parser.feed(sse({"error": {"message": "context too long"}}))
    outcome = _end(parser, 200)
    assert outcome.error.code is ErrorCode.VENDOR_ERROR
    assert outcome.error.message == "context too long"


def test_plain_json_body_on_stream_path_is_decoded_once():
    parser = SSEParser(OpenAIAdapter())
    parser.feed(json.dumps({"choices": [{"message": {"content": "whole"}}]}).encode())
    outcome = _end(parser, 200)
    assert outcome.ok and outcome.text == "whole"


def test_single_shot_anthropic_text():
    body = json.dumps({"content": [{"type": "text", "text": "Hi there"}]}).encode()
    assert classify_single_shot(AnthropicAdapter(), body, 200, provider="anthropic") == "Hi there"


@pytest.mark.parametrize(
    "body,status,code,message",
    [
        (b"", 200, ErrorCode.EMPTY_RESPONSE, None),
        (b'{"error":{"message":"invalid x-api-key"}}', 401, ErrorCode.VENDOR_ERROR, "invalid x-api-key"),
        (b"not json", 500, ErrorCode.VENDOR_ERROR, "HTTP 500"),
        (b'{"error":{"message":"quota"}}', 200, ErrorCode.VENDOR_ERROR, "quota"),
        (b"not json", 200, ErrorCode.DECODE_FAILURE, None),
        (b'{"id":"x"}', 200, ErrorCode.DECODE_FAILURE, None),
    ],
)
def test_single_shot_failures(body, status, code, message):
    with pytest.raises(ProviderError) as ei:
        classify_single_shot(OpenAIAdapter(), body, status, provider="openai")
    assert ei.value.code is code
    if message is not None:
        assert ei.value.message == message


def test_success_status_is_exported_for_transfers():
    from llm_relay.service import model_listing, transfer

    assert HTTP_OK == 200
    assert transfer.HTTP_OK is HTTP_OK and model_listing.HTTP_OK is HTTP_OK
