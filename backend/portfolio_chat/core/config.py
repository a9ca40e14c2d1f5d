"""Application configuration handling."""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, field_validator

from portfolio_chat.core.errors import ConfigError

ENV_PREFIX = "PFCHAT_"
CREDENTIAL_ENV = "GROQ_API_KEY"
DEFAULT_CONFIG_PATH = Path("~/.config/portfolio-chat/config.yaml")

_YAML_KEY_MAP: Mapping[tuple[str, ...], str] = {
    ("content", "root"): "content_root",
    ("content", "locale"): "locale",
    ("site", "url"): "site_url",
    ("site", "last_updated"): "site_last_updated",
    ("provider", "base_url"): "provider_base_url",
    ("server", "cors_origins"): "cors_origins",
}

# Credentials come from the environment only.
_SECRET_KEY_RE = re.compile(r"api[_\-]?key|secret|token|passw(?:ord|d)", re.IGNORECASE)


class Settings(BaseModel):
    """Runtime configuration loaded from YAML file and environment variables."""

    content_root: Path = Field(default_factory=Path.cwd)
    locale: str = "en"
    site_url: str = "https://example.com"
    site_last_updated: str = "1970-01-01"
    api_key: str | None = None
    provider_base_url: str = "https://api.groq.com/openai/v1"
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://127.0.0.1:3000", "http://localhost:3000"]
    )

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator("content_root", mode="before")
    @classmethod
    def _expand_content_root(cls, value: Any) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        if isinstance(value, str):
            return Path(value).expanduser()
        raise TypeError("content_root must be a path or string")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def blog_dir(self) -> Path:
        return self.content_root / "content" / "blog" / self.locale

    @property
    def collections_path(self) -> Path:
        return self.content_root / "messages" / self.locale / "collections.json"

    @property
    def personal_path(self) -> Path:
        return self.content_root / "messages" / self.locale / "personal.json"

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> "Settings":
        """Load YAML config and overlay env vars; fall back to defaults."""
        config_path = cls._resolve_config_path(path)
        data: dict[str, Any] = {}
        if config_path and config_path.exists():
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            if not isinstance(raw, Mapping):
                raise ConfigError(f"Config file '{config_path}' must contain a mapping")
            _check_no_secrets(raw, config_path)
            data.update(_flatten_yaml(raw))
        data.update(_load_env_overrides())
        if "api_key" not in data and os.environ.get(CREDENTIAL_ENV):
            data["api_key"] = os.environ[CREDENTIAL_ENV]
        return cls(**data)

    @staticmethod
    def _resolve_config_path(path: Path | None) -> Path | None:
        if path is not None:
            return path.expanduser()
        env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        resolved_default = DEFAULT_CONFIG_PATH.expanduser()
        return resolved_default if resolved_default.exists() else None


def _check_no_secrets(raw: Mapping[str, Any], source: Path, prefix: str = "") -> None:
    for key, value in raw.items():
        full = f"{prefix}.{key}" if prefix else str(key)
        if _SECRET_KEY_RE.search(str(key)):
            raise ConfigError(
                f"Config file '{source}' contains a forbidden key '{full}'. "
                f"Set the {CREDENTIAL_ENV} environment variable instead."
            )
        if isinstance(value, Mapping):
            _check_no_secrets(value, source, prefix=full)


def _flatten_yaml(raw: Mapping[str, Any], prefix: tuple[str, ...] = ()) -> dict[str, Any]:
    """Flatten nested YAML configuration to Settings field names."""
    flat: dict[str, Any] = {}
    for key, value in raw.items():
        next_prefix = prefix + (key,)
        if isinstance(value, Mapping):
            flat.update(_flatten_yaml(value, prefix=next_prefix))
        else:
            mapped_key = _YAML_KEY_MAP.get(next_prefix)
            if mapped_key:
                flat[mapped_key] = value
            elif key in Settings.model_fields:
                flat[key] = value
    return flat


def _load_env_overrides() -> dict[str, Any]:
    """Map environment variables with PFCHAT_ prefix into Settings fields."""
    overrides: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            overrides[field_name] = value
    return overrides


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor for dependency injection."""
    return Settings.from_yaml()


__all__ = ["Settings", "get_settings"]
