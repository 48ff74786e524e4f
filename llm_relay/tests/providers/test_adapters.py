"""Request construction and text extraction for each vendor adapter."""
from __future__ import annotations

import pytest

from llm_relay.anthropic.adapter import AnthropicAdapter
from llm_relay.anthropic.helpers import content_block_delta_text, first_content_text, split_system
from llm_relay.base.models import Configuration, Message
from llm_relay.custom.adapter import CustomAdapter
from llm_relay.openai.adapter import OpenAIAdapter


def _cfg(vendor="openai", **kw) -> Configuration:
    kw.setdefault("api_key", "sk-abc")
    return Configuration.with_defaults(vendor, enabled=True, **kw)


def test_anthropic_hoists_system_message():
    msgs = [Message.system("Be terse."), Message.user("Hi"), Message.assistant("Hello!")]
    req = AnthropicAdapter().build_request(_cfg("anthropic"), msgs, stream=True)
    assert req.body["system"] == "Be terse."
    assert req.body["messages"] == [
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello!"},
    ]
    assert req.body["max_tokens"] == 4096
    assert req.body["stream"] is True
    assert req.url == "https://api.anthropic.com/v1/messages"


def test_anthropic_headers():
    headers = AnthropicAdapter().build_headers(_cfg("anthropic", api_key="k-1"))
    assert headers["x-api-key"] == "k-1"
    assert headers["anthropic-version"] == "2023-06-01"
    assert "Authorization" not in headers


def test_anthropic_without_system_omits_field():
    req = AnthropicAdapter().build_request(_cfg("anthropic"), [Message.user("Hi")], stream=False)
    assert "system" not in req.body
    assert req.stream is False


def test_split_system_keeps_only_first_system():
    text, wire = split_system([Message.system("one"), Message.user("u"), Message.system("two")])
    assert text == "one"
    assert wire == [{"role": "user", "content": "u"}]


def test_openai_request_keeps_system_inline():
    msgs = [Message.system("sys"), Message.user("Hi")]
    req = OpenAIAdapter().build_request(_cfg(model="gpt-4o"), msgs, stream=False)
    assert req.url == "https://api.openai.com/v1/chat/completions"
    assert req.headers["Authorization"] == "Bearer sk-abc"
    assert req.body == {
        "model": "gpt-4o",
        "messages": [{"role": "system", "content": "sys"}, {"role": "user", "content": "Hi"}],
        "stream": False,
    }


@pytest.mark.parametrize(
    "base,expected",
    [
        ("https://gw.local", "https://gw.local/v1/chat/completions"),
        ("https://gw.local/", "https://gw.local/v1/chat/completions"),
        ("  https://gw.local/v1  ", "https://gw.local/v1/chat/completions"),
        ("https://gw.local/v1/chat/completions", "https://gw.local/v1/chat/completions"),
    ],
)
def test_custom_endpoint_url(base, expected):
    cfg = _cfg("custom", base_url=base, model="llama")
    assert CustomAdapter().build_request(cfg, [Message.user("x")], True).url == expected


def test_openai_extraction_tolerates_foreign_shapes():
    a = OpenAIAdapter()
    assert a.extract_stream_text({"choices": [{"delta": {"content": "t"}}]}) == "t"
    assert a.extract_stream_text({"choices": []}) is None
    assert a.extract_stream_text({"choices": [{"delta": {}}]}) is None
    assert a.extract_stream_text(["not", "a", "dict"]) is None
    assert a.extract_completion_text({"choices": [{"message": {"content": "full"}}]}) == "full"


def test_anthropic_extraction_only_reads_content_block_delta():
    assert content_block_delta_text({"type": "content_block_delta", "delta": {"text": "t"}}) == "t"
    assert content_block_delta_text({"type": "message_delta", "delta": {"stop_reason": "end_turn"}}) is None
    assert first_content_text({"content": [{"text": "Hi there"}]}) == "Hi there"
    assert first_content_text({"content": []}) is None


def test_models_url_and_parsing():
    a = OpenAIAdapter()
    cfg = _cfg("custom", base_url="https://gw.local/v1/chat/completions", model="m")
    assert a.models_url(cfg) == "https://gw.local/v1/models"
    models = a.parse_models(
        {"data": [{"id": "b-model", "owned_by": "acme"}, {"id": "a-model"}, {"object": "model"}]}
    )
    assert [(m.id, m.name) for m in models] == [("a-model", "a-model"), ("b-model", "b-model (acme)")]
    with pytest.raises(ValueError):
        a.parse_models({"object": "list"})


def test_anthropic_has_no_model_listing():
    a = AnthropicAdapter()
    assert a.models_url(_cfg("anthropic")) is None
    assert a.parse_models({}) == []
