"""Configuration value, environment mapping and loader merge order."""
from __future__ import annotations

import json

import pytest

from llm_relay.base.errors import ErrorCode, ProviderError
from llm_relay.base.models import Configuration, Vendor
from llm_relay.config import get_vendor_config, load_configuration
from llm_relay.config.env import env_overrides, get_env_var_name, is_placeholder


def test_validity_requires_key_url_and_model():
    assert Configuration.with_defaults("openai", api_key="k").is_valid
    assert not Configuration.with_defaults("openai").is_valid
    assert not Configuration.with_defaults("custom", api_key="k").is_valid
    assert not Configuration.with_defaults("openai", api_key="   ").is_valid


def test_usable_requires_enabled():
    cfg = Configuration.with_defaults("openai", api_key="k")
    assert not cfg.usable
    assert cfg.evolve(enabled=True).usable
    assert cfg.enabled is False


def test_repr_masks_key():
    cfg = Configuration.with_defaults("openai", api_key="sk-1234567890abcdef")
    assert "sk-1234567890abcdef" not in repr(cfg)
    assert cfg.masked_api_key() == "sk-1...cdef"


def test_env_var_names_and_placeholders():
    assert get_env_var_name("openai", "api_key") == "OPENAI_API_KEY"
    assert get_env_var_name(Vendor.ANTHROPIC, "model") == "ANTHROPIC_MODEL"
    assert get_env_var_name("nope", "api_key") is None
    assert is_placeholder("changeme")
    assert is_placeholder("test_key")
    assert not is_placeholder("sk-real")
    assert not is_placeholder(None)


def test_env_overrides_ignore_placeholder_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "your-key-placeholder")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4.1")
    assert env_overrides("openai") == {"model": "gpt-4.1"}


def test_defaults_only():
    cfg = load_configuration("anthropic")
    assert cfg.vendor is Vendor.ANTHROPIC
    assert cfg.base_url == "https://api.anthropic.com/v1"
    assert cfg.model == Vendor.ANTHROPIC.default_model
    assert cfg.api_key == "" and cfg.enabled is False


def test_env_then_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_ENABLED", "true")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-env")
    cfg = load_configuration("openai", {"model": "gpt-override", "base_url": None})
    assert cfg.api_key == "sk-env"
    assert cfg.enabled is True
    assert cfg.model == "gpt-override"
    assert cfg.base_url == "https://api.openai.com/v1"


def test_file_below_env(monkeypatch, tmp_path):
    path = tmp_path / "relay.json"
    path.write_text(
        json.dumps({"custom": {"apiKey": "sk-file", "baseURL": "https://gw.local", "model": "file-model"}})
    )
    monkeypatch.setenv("LLM_RELAY_CONFIG_FILE", str(path))
    monkeypatch.setenv("CUSTOM_MODEL", "env-model")
    merged = get_vendor_config("custom")
    assert merged["model"] == "env-model"
    cfg = load_configuration("custom")
    assert cfg.api_key == "sk-file"
    assert cfg.base_url == "https://gw.local"
    assert cfg.model == "env-model"


def test_yaml_file(tmp_path):
    path = tmp_path / "relay.yaml"
    path.write_text("openai:\n  api_key: sk-yaml\n  enabled: yes\n")
    cfg = load_configuration("openai", config_file=str(path))
    assert cfg.api_key == "sk-yaml"
    assert cfg.enabled is True


def test_vendor_from_environment(monkeypatch):
    monkeypatch.setenv("LLM_RELAY_VENDOR", "anthropic")
    assert load_configuration().vendor is Vendor.ANTHROPIC


def test_invalid_values_are_bad_configuration():
    with pytest.raises(ProviderError) as ei:
        load_configuration("openai", {"enabled": "maybe"})
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION


def test_unknown_vendor_is_bad_configuration():
    with pytest.raises(ProviderError) as ei:
        load_configuration("gemini")
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION


def test_non_mapping_file_is_bad_configuration(tmp_path):
    path = tmp_path / "relay.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ProviderError) as ei:
        load_configuration("openai", config_file=str(path))
    assert ei.value.code is ErrorCode.BAD_CONFIGURATION
