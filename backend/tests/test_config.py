"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_chat.core.config import Settings
from portfolio_chat.core.errors import ConfigError


def test_yaml_sections_map_to_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PFCHAT_CONTENT_ROOT")
    config = tmp_path / "config.yaml"
    config.write_text(
        "content:\n"
        f"  root: {tmp_path / 'portfolio'}\n"
        "  locale: de\n"
        "site:\n"
        "  url: https://ada.dev\n"
        "  last_updated: '2024-06-01'\n"
        "server:\n"
        "  cors_origins: [https://ada.dev]\n",
        encoding="utf-8",
    )
    settings = Settings.from_yaml(config)
    root = tmp_path / "portfolio"
    assert settings.content_root == root
    assert settings.site_url == "https://ada.dev"
    assert settings.site_last_updated == "2024-06-01"
    assert settings.cors_origins == ["https://ada.dev"]
    assert settings.blog_dir == root / "content" / "blog" / "de"
    assert settings.collections_path == root / "messages" / "de" / "collections.json"
    assert settings.personal_path == root / "messages" / "de" / "personal.json"


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("content:\n  locale: de\n", encoding="utf-8")
    monkeypatch.setenv("PFCHAT_LOCALE", "fr")
    monkeypatch.setenv("PFCHAT_CORS_ORIGINS", "http://a.test, http://b.test")
    settings = Settings.from_yaml(config)
    assert settings.locale == "fr"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_credential_comes_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    assert Settings.from_yaml().api_key is None
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
    assert Settings.from_yaml().api_key == "gsk_test"
    monkeypatch.setenv("PFCHAT_API_KEY", "override")
    assert Settings.from_yaml().api_key == "override"


def test_blank_credential_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "   ")
    assert Settings.from_yaml().api_key is None


@pytest.mark.parametrize("key", ["api_key", "groq_api_key", "secret", "token"])
def test_secrets_in_config_file_are_rejected(tmp_path: Path, key: str) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(f"provider:\n  {key}: abc\n", encoding="utf-8")
    with pytest.raises(ConfigError, match=key):
        Settings.from_yaml(config)


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.from_yaml(config)


def test_missing_config_file_uses_defaults(tmp_path: Path) -> None:
    settings = Settings.from_yaml(tmp_path / "nope.yaml")
    assert settings.locale == "en"
    assert settings.provider_base_url == "https://api.groq.com/openai/v1"
