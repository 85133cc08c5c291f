from __future__ import annotations

from pathlib import Path

import pytest

from ghactivity.config.loader import load_config
from ghactivity.config.models import GitHubConfig, PluginSettings, RuntimeConfig, UserConfig
from ghactivity.core.errors import ConfigError

REPO_ROOT = Path(__file__).resolve().parent.parent
EXAMPLE_CONFIG_PATH = REPO_ROOT / "config" / "example.yaml"


def test_example_config_loads_with_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_CLIENT_ID", "cid")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("GITHUB_ACCESS_TOKEN", "tok")
    config = load_config(str(EXAMPLE_CONFIG_PATH))
    assert config.oauth.client_id == "cid"
    assert config.oauth.scope == "user"
    assert config.user.username == "octocat"
    assert config.user.access_token == "tok"
    assert config.runtime.host_adapter == "ghactivity.adapters.http.host:HttpxHost"


def test_missing_env_var_is_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_CLIENT_ID", raising=False)
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("GITHUB_ACCESS_TOKEN", "tok")
    with pytest.raises(ConfigError, match="GITHUB_CLIENT_ID"):
        load_config(str(EXAMPLE_CONFIG_PATH))


def test_missing_file_is_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(str(tmp_path / "nope.yaml"))


def test_invalid_yaml_is_config_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("oauth: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse YAML"):
        load_config(str(path))


def test_invalid_settings_are_config_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("oauth:\n  client_id: ''\n  client_secret: s\n  redirect_url: r\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(str(path))


def test_non_mapping_document_is_config_error(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(str(path))


def test_log_level_is_normalised_and_validated() -> None:
    assert RuntimeConfig(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValueError):
        RuntimeConfig(log_level="chatty")


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError):
        GitHubConfig(timeout=0)


def test_user_config_accepts_both_key_styles_and_keeps_extras() -> None:
    camel = UserConfig.model_validate({"username": "a", "accessToken": "t", "level": 3})
    snake = UserConfig.model_validate({"username": "a", "access_token": "t", "level": 3})
    assert camel == snake
    assert camel.to_host() == {"username": "a", "accessToken": "t", "level": 3}


def test_settings_defaults() -> None:
    settings = PluginSettings.model_validate(
        {"oauth": {"clientId": "c", "clientSecret": "s", "redirectUrl": "https://r"}}
    )
    assert str(settings.github.api_base).rstrip("/") == "https://api.github.com"
    assert settings.runtime.log_level == "INFO"
    assert settings.user.username is None


def test_env_default_is_used_when_variable_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_CLIENT_ID", "cid")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("GITHUB_ACCESS_TOKEN", "tok")
    monkeypatch.delenv("GITHUB_REDIRECT_URL", raising=False)
    config = load_config(str(EXAMPLE_CONFIG_PATH))
    assert config.oauth.redirect_url == "http://localhost:8000/oauth/github/callback"

    monkeypatch.setenv("GITHUB_REDIRECT_URL", "https://app.example.com/cb")
    assert load_config(str(EXAMPLE_CONFIG_PATH)).oauth.redirect_url == "https://app.example.com/cb"
