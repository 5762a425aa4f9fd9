"""Configuration loading and saving (TOML), including API key lookup."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from recast.constants import API_KEY_ENV_VARS, CONFIG_FILE, DEFAULT_HTTP_TIMEOUT

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingCredentialError:
    """Returned, not raised, when no key is configured for a provider."""

    provider: str

    @property
    def message(self) -> str:
        return f"ERROR: API key not set — {self.provider}"


@dataclass
class KeysConfig:
    """API keys, one per provider. Empty means "fall back to the environment"."""

    anthropic: str = ""
    openai: str = ""
    gemini: str = ""

    def get_api_key(self, provider: str) -> str | MissingCredentialError:
        """Resolve the key for a provider from config, then its env variable."""
        key = getattr(self, provider, "") if provider in API_KEY_ENV_VARS else ""
        if not key:
            env_var = API_KEY_ENV_VARS.get(provider)
            key = os.environ.get(env_var, "") if env_var else ""
        key = key.strip()
        if not key:
            return MissingCredentialError(provider)
        return key

    def set_api_key(self, provider: str, key: str) -> None:
        if provider not in API_KEY_ENV_VARS:
            raise ValueError(f"Unknown provider: {provider}")
        setattr(self, provider, key.strip())


@dataclass
class HttpConfig:
    """Outbound request settings."""

    timeout: float = DEFAULT_HTTP_TIMEOUT  # seconds, per request


@dataclass
class AppConfig:
    """Root application configuration."""

    keys: KeysConfig = field(default_factory=KeysConfig)
    http: HttpConfig = field(default_factory=HttpConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load config from TOML file, falling back to defaults."""
        config_path = path or CONFIG_FILE
        config = cls()

        if not config_path.exists():
            logger.info("No config file found at %s, using defaults", config_path)
            return config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            config = _merge_config(config, data)
            logger.info("Loaded config from %s", config_path)
        except Exception:
            logger.exception("Failed to load config from %s, using defaults", config_path)

        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        config_path = path or CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(asdict(self), f)
        # Keys live in this file
        config_path.chmod(0o600)
        logger.info("Saved config to %s", config_path)


def _merge_config(config: AppConfig, data: dict[str, Any]) -> AppConfig:
    """Merge a TOML dict into an AppConfig, preserving defaults for missing keys."""
    if "keys" in data:
        for key, val in data["keys"].items():
            if hasattr(config.keys, key):
                setattr(config.keys, key, str(val))

    if "http" in data:
        timeout = data["http"].get("timeout")
        if timeout is not None:
            try:
                config.http.timeout = float(timeout)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid [http] timeout: %r", timeout)

    return config
