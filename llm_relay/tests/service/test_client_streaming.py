"""End-to-end CompletionClient behavior over ``httpx.MockTransport``.

Covers:
- Streaming and single-shot delivery for both wire formats.
- Synchronous rejection of invalid configuration and messages (no I/O).
- Vendor, transport and empty-response failures delivered once.
- Cancellation after the first chunk and ``cancel_all``.
- Finished subscriptions are released by the client.
"""
from __future__ import annotations

import gc
import json
import threading
import weakref

import httpx
import pytest

from llm_relay.base.errors import ErrorCode, ProviderError
from llm_relay.base.models import Configuration, Message
from llm_relay.base.streaming import StreamChunk
from llm_relay.tests.helpers import DONE, anthropic_delta, openai_delta, split_every, sse


def _collect(sub, timeout=5):
    assert sub.wait(timeout), "subscription did not finish"
    chunks, error = [], None
    try:
        chunks.extend(sub)
    except ProviderError as e:
        error = e
    return chunks, error


def test_openai_streaming_scenario(mock_client, log_capture):
    body = sse(openai_delta("Hello")) + sse(openai_delta(" world")) + DONE
    client, rec = mock_client([body])
    chunks, error = _collect(client.send([Message.user("Hi")]))
    assert error is None
    assert chunks == [StreamChunk("Hello"), StreamChunk(" world"), StreamChunk("", finish=True)]
    assert rec.calls == 1
    assert str(rec.requests[0].url) == "https://api.openai.com/v1/chat/completions"
    assert rec.last_json()["stream"] is True
    events = [e["event"] for e in log_capture.events()]
    assert events[0] == "stream.start" and events[-1] == "stream.end"


@pytest.mark.parametrize("size", [1, 5, 13])
def test_small_fragments_deliver_same_text(mock_client, size):
    body = sse(openai_delta("Hel")) + sse(openai_delta("lo, ")) + sse(openai_delta("wörld")) + DONE
    client, _ = mock_client(split_every(body, size))
    assert client.complete([Message.user("Hi")], timeout=5) == "Hello, wörld"


def test_anthropic_single_shot_scenario(mock_client):
    def respond(request):
        return httpx.Response(200, json={"content": [{"type": "text", "text": "Hi there"}]})

    client, rec = mock_client(respond, vendor="anthropic")
    chunks, error = _collect(client.send([Message.system("sys"), Message.user("Hello")], stream=False))
    assert error is None
    assert chunks == [StreamChunk("Hi there", finish=True)]
    sent = rec.last_json()
    assert sent["stream"] is False and sent["system"] == "sys"
    assert rec.requests[0].headers["x-api-key"] == "sk-live-1234567890"


def test_anthropic_streaming(mock_client):
    body = (
        b"event: message_start\n"
        + sse({"type": "message_start", "message": {}})
        + sse(anthropic_delta("Hi"))
        + sse(anthropic_delta(" there"))
        + sse({"type": "message_stop"})
    )
    client, _ = mock_client([body], vendor="anthropic")
    assert client.complete([Message.user("Hello")], timeout=5) == "Hi there"


def test_empty_credential_rejected_without_network(mock_client, config_factory):
    client, rec = mock_client([DONE], configuration=config_factory(api_key=""))
    with pytest.raises(ProviderError) as ei:
        client.send([Message.user("Hi")])
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION
    assert rec.calls == 0


def test_disabled_configuration_rejected(mock_client, config_factory):
    client, rec = mock_client([DONE], configuration=config_factory(enabled=False))
    with pytest.raises(ProviderError) as ei:
        client.send([Message.user("Hi")])
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION
    assert rec.calls == 0


@pytest.mark.parametrize("messages", [[], [{"role": "robot", "content": "x"}], [{"role": "user", "content": "  "}]])
def test_invalid_messages_rejected(mock_client, messages):
    client, rec = mock_client([DONE])
    with pytest.raises(ProviderError) as ei:
        client.send(messages)
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION
    assert rec.calls == 0


def test_mapping_messages_accepted(mock_client):
    client, rec = mock_client([sse(openai_delta("ok")) + DONE])
    assert client.complete([{"role": "User", "content": "Hi"}], timeout=5) == "ok"
    assert rec.last_json()["messages"] == [{"role": "user", "content": "Hi"}]


def test_rate_limited_status(mock_client):
    def respond(request):
        return httpx.Response(429, json={"error": {"message": "rate limited"}})

    errors = []
    client, _ = mock_client(respond)
    sub = client.send([Message.user("Hi")], on_error=errors.append)
    chunks, error = _collect(sub)
    assert chunks == []
    assert error.code is ErrorCode.VENDOR_ERROR and error.message == "rate limited"
    assert error.user_message == "rate limited"
    assert len(errors) == 1


def test_non_json_error_status(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(503, content=b"upstream down"))
    with pytest.raises(ProviderError) as ei:
        client.complete([Message.user("Hi")], timeout=5)
    assert ei.value.code is ErrorCode.VENDOR_ERROR
    assert ei.value.message == "HTTP 503"


def test_zero_bytes_is_empty_response(mock_client):
    client, _ = mock_client(lambda r: httpx.Response(200, content=b""))
    with pytest.raises(ProviderError) as ei:
        client.complete([Message.user("Hi")], timeout=5)
    assert ei.value.code is ErrorCode.EMPTY_RESPONSE


def test_connect_error_is_transport_failure(mock_client):
    def respond(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = mock_client(respond)
    with pytest.raises(ProviderError) as ei:
        client.complete([Message.user("Hi")], stream=False, timeout=5)
    assert ei.value.code is ErrorCode.TRANSPORT_FAILURE


def test_malformed_only_stream_is_decode_failure(mock_client):
    client, _ = mock_client([b"data: {oops\n\n" + DONE])
    with pytest.raises(ProviderError) as ei:
        client.complete([Message.user("Hi")], timeout=5)
    assert ei.value.code is ErrorCode.DECODE_FAILURE


def test_malformed_line_between_events_is_skipped(mock_client):
    body = sse(openai_delta("a")) + b"data: nope\n\n" + sse(openai_delta("b")) + DONE
    client, _ = mock_client([body])
    assert client.complete([Message.user("Hi")], timeout=5) == "ab"


def test_cancel_after_first_chunk_delivers_nothing_more(mock_client):
    release = threading.Event()
    first = threading.Event()

    def fragments():
        yield sse(openai_delta("Hello"))
        release.wait(5)
        yield sse(openai_delta(" world"))
        yield DONE

    def respond(request):
        return httpx.Response(200, content=fragments())

    chunks, errors = [], []

    def on_chunk(chunk):
        chunks.append(chunk)
        first.set()

    client, _ = mock_client(respond)
    sub = client.send([Message.user("Hi")], on_chunk=on_chunk, on_error=errors.append)
    assert first.wait(5)
    sub.cancel("user closed view")
    release.set()
    sub._thread.join(5)
    assert [c.text for c in chunks] == ["Hello"]
    assert errors == []
    assert sub.cancelled and sub.error is None


def test_cancel_all_stops_running_subscriptions(mock_client):
    release = threading.Event()

    def fragments():
        yield sse(openai_delta("x"))
        release.wait(5)
        yield DONE

    client, _ = mock_client(lambda r: httpx.Response(200, content=fragments()))
    subs = [client.send([Message.user("Hi")]) for _ in range(3)]
    client.cancel_all("shutdown")
    release.set()
    for sub in subs:
        assert sub.wait(5)
        assert sub.cancelled

    # new requests are unaffected by the earlier cancel_all
    assert client.complete([Message.user("Hi")], timeout=5) == "x"


def test_concurrent_subscriptions_are_independent(mock_client):
    def respond(request):
        prompt = json.loads(request.content)["messages"][-1]["content"]
        return httpx.Response(200, content=iter([sse(openai_delta(prompt.upper())), DONE]))

    client, rec = mock_client(respond)
    subs = {p: client.send([Message.user(p)]) for p in ("one", "two", "three")}
    assert {p: s.result(5) for p, s in subs.items()} == {"one": "ONE", "two": "TWO", "three": "THREE"}
    assert rec.calls == 3
    assert len({s.request_id for s in subs.values()}) == 3


def test_configuration_is_not_mutated(mock_client, config_factory):
    cfg = config_factory()
    client, _ = mock_client([sse(openai_delta("x")) + DONE], configuration=cfg)
    client.complete([Message.user("Hi")], timeout=5)
    assert client.configuration is cfg
    assert isinstance(cfg, Configuration)


def test_single_shot_chat_events_logged(mock_client, log_capture):
    client, _ = mock_client(lambda r: httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}))
    assert client.complete([Message.user("Hi")], stream=False, timeout=5) == "ok"
    events = [e["event"] for e in log_capture.events()]
    assert "chat.start" in events and "chat.end" in events


def test_finished_subscriptions_are_released(mock_client):
    counter = iter(range(1000))

    def respond(request):
        if next(counter) % 2:
            return httpx.Response(500, json={"error": {"message": "overloaded"}})
        return httpx.Response(200, content=iter([sse(openai_delta("x")), DONE]))

    client, _ = mock_client(respond)
    refs = []
    for _ in range(20):
        sub = client.send([Message.user("Hi")])
        assert sub.wait(5)
        sub._thread.join(5)
        refs.append(weakref.ref(sub))
    cancelled = client.send([Message.user("Hi")])
    cancelled.cancel()
    cancelled._thread.join(5)
    refs.append(weakref.ref(cancelled))
    del sub, cancelled
    gc.collect()

    assert client._root._children == []
    assert [r for r in refs if r() is not None] == []
