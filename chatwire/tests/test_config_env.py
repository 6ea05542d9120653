from __future__ import annotations

import json

import pytest

from chatwire import ChatwireClient, Config, config_from_env
from chatwire.base.errors import ConfigError
from chatwire.base.timeouts import get_timeout_config
from chatwire.config.defaults import DEFAULT_BASE_URL, DEFAULT_RETRY_COUNT
from chatwire.config.env import is_placeholder, read_env_settings, read_file_settings


def test_env_values_are_parsed():
    env = {
        "OPENAI_API_KEY": "sk-env",
        "OPENAI_BASE_URL": "https://proxy.test/v1",
        "OPENAI_TIMEOUT": "30",
        "OPENAI_CONNECT_TIMEOUT": "2.5",
        "OPENAI_RETRY_COUNT": "2",
        "OPENAI_USER_AGENT": "agent/1",
    }
    cfg = config_from_env(environ=env)
    assert cfg.api_key == "sk-env" and cfg.base_url == "https://proxy.test/v1"  # nosec B101
    assert cfg.retry_count == 2  # nosec B101
    assert cfg.http.timeout_seconds == 30.0 and cfg.http.connect_timeout_seconds == 2.5  # nosec B101
    assert cfg.http.user_agent == "agent/1"  # nosec B101


def test_defaults_apply_when_unset():
    cfg = config_from_env(environ={"OPENAI_API_KEY": "sk"})
    assert cfg.base_url == DEFAULT_BASE_URL and cfg.retry_count == DEFAULT_RETRY_COUNT  # nosec B101
    assert cfg.http.timeout_seconds == get_timeout_config().request_timeout_seconds  # nosec B101


def test_missing_api_key_raises():
    with pytest.raises(ConfigError):
        config_from_env(environ={"OPENAI_BASE_URL": "https://x"})


def test_blank_values_are_skipped():
    assert read_env_settings({"OPENAI_API_KEY": "  ", "OPENAI_PROXY": ""}) == {}  # nosec B101


def test_bad_number_names_the_variable():
    with pytest.raises(ConfigError) as ei:
        config_from_env(environ={"OPENAI_API_KEY": "sk", "OPENAI_RETRY_COUNT": "many"})
    assert "OPENAI_RETRY_COUNT" in str(ei.value)  # nosec B101


def test_overrides_beat_env_and_env_beats_file(tmp_path):
    path = tmp_path / "chatwire.json"
    path.write_text(json.dumps({"api_key": "sk-file", "base_url": "https://file.test", "retry_count": 9}))
    env = {"CHATWIRE_CONFIG_FILE": str(path), "OPENAI_BASE_URL": "https://env.test"}
    cfg = config_from_env({"retry_count": 1}, environ=env)
    assert cfg.api_key == "sk-file"  # nosec B101
    assert cfg.base_url == "https://env.test"  # nosec B101
    assert cfg.retry_count == 1  # nosec B101


def test_config_file_supplies_settings_env_overrides_one(tmp_path):
    path = tmp_path / "chatwire.json"
    path.write_text(
        json.dumps(
            {
                "api_key": "sk-file",
                "base_url": "https://file.test/v1",
                "retry_count": "4",
                "timeout_seconds": 12,
                "proxy": None,
                "unknown": "ignored",
            }
        )
    )
    env = {"CHATWIRE_CONFIG_FILE": str(path)}
    assert read_file_settings(env) == {  # nosec B101
        "api_key": "sk-file",
        "base_url": "https://file.test/v1",
        "retry_count": 4,
        "timeout_seconds": 12,
    }

    cfg = config_from_env(environ={**env, "OPENAI_RETRY_COUNT": "2"})
    assert cfg.base_url == "https://file.test/v1"  # nosec B101
    assert cfg.retry_count == 2  # nosec B101
    assert cfg.http.timeout_seconds == 12  # nosec B101


def test_config_file_must_hold_an_object(tmp_path):
    path = tmp_path / "chatwire.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        read_file_settings({"CHATWIRE_CONFIG_FILE": str(path)})
    assert read_file_settings({}) == {}  # nosec B101


def test_unreadable_config_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        config_from_env(environ={"CHATWIRE_CONFIG_FILE": str(tmp_path / "missing.json"), "OPENAI_API_KEY": "sk"})


def test_negative_retry_count_rejected():
    with pytest.raises(ConfigError):
        Config(api_key="sk", retry_count=-1)


def test_endpoint_joins_with_one_slash():
    cfg = Config(api_key="sk", base_url="https://api.test/v1/")
    assert cfg.endpoint("/chat/completions") == "https://api.test/v1/chat/completions"  # nosec B101


def test_copy_is_independent():
    cfg = Config(api_key="sk")
    other = cfg.with_http(timeout_seconds=5.0)
    other.http.headers["X-A"] = "1"
    assert cfg.http.headers == {}  # nosec B101
    assert other.http.timeout_seconds == 5.0  # nosec B101
    assert cfg.http.timeout_seconds == get_timeout_config().request_timeout_seconds  # nosec B101


def test_timeout_env_override(monkeypatch):
    monkeypatch.setenv("CHATWIRE_TIMEOUT_SECONDS", "42")
    monkeypatch.setenv("CHATWIRE_CHANNEL_POLL_SECONDS", "nope")
    cfg = get_timeout_config()
    assert cfg.request_timeout_seconds == 42.0  # nosec B101
    assert cfg.channel_poll_seconds == 0.1  # nosec B101


def test_client_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://env.test/v1")
    with ChatwireClient.from_env() as client:
        assert client.config.api_key == "sk-from-env"  # nosec B101
        assert client.config.endpoint("models") == "https://env.test/v1/models"  # nosec B101


def test_placeholder_detection():
    assert is_placeholder("your-api-key-here")  # nosec B101
    assert is_placeholder("CHANGEME")  # nosec B101
    assert not is_placeholder("sk-live")  # nosec B101
    assert not is_placeholder(None)  # nosec B101
