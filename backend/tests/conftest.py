"""Test fixtures for the portfolio research chat."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import orjson
import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from portfolio_chat.core.config import Settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset cached settings and environment between tests."""
    monkeypatch.setenv("PFCHAT_CONFIG", str(tmp_path / "missing-config.yaml"))
    monkeypatch.setenv("PFCHAT_CONTENT_ROOT", str(tmp_path / "site"))
    for name in ("GROQ_API_KEY", "PFCHAT_API_KEY", "PFCHAT_LOCALE", "PFCHAT_HOST"):
        monkeypatch.delenv(name, raising=False)

    from portfolio_chat.api import dependencies as deps
    from portfolio_chat.core import config

    config.get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
    deps.get_app_settings.cache_clear()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir(exist_ok=True)
    return root


@pytest.fixture
def settings(site_root: Path) -> Settings:
    return Settings(
        content_root=site_root,
        site_url="https://portfolio.test",
        site_last_updated="2024-05-01",
        api_key="test-key",
    )


@pytest.fixture
def write_blog(settings: Settings) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        settings.blog_dir.mkdir(parents=True, exist_ok=True)
        path = settings.blog_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_collections(settings: Settings) -> Callable[[Any], Path]:
    def _write(data: Any) -> Path:
        path = settings.collections_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(orjson.dumps(data))
        return path

    return _write


@pytest.fixture
def write_personal(settings: Settings) -> Callable[[Any], Path]:
    def _write(data: Any) -> Path:
        path = settings.personal_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(orjson.dumps(data))
        return path

    return _write
