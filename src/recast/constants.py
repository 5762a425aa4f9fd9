"""Default values, paths, endpoints, and version constants."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "0.1.0"
APP_NAME = "recast"

# XDG directories
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

# Application directories
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME

# Configuration files
CONFIG_FILE = CONFIG_DIR / "config.toml"
PRESETS_FILE = CONFIG_DIR / "presets.toml"

# Provider endpoints
ANTHROPIC_API_BASE = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_API_BASE = "https://api.openai.com/v1"
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

# Environment variables consulted when a key is not in the config file
API_KEY_ENV_VARS: dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}

# Selectable models per provider
MODELS: dict[str, list[str]] = {
    "anthropic": [
        "claude-opus-4-5",
        "claude-sonnet-4-5",
        "claude-haiku-4-5-20251001",
    ],
    "openai": [
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "gpt-3.5-turbo",
    ],
    "gemini": [
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
        "gemini-1.5-pro",
        "gemini-1.5-flash",
    ],
}

# Preset defaults
DEFAULT_PRESET_NAME = "preset"
DEFAULT_PROVIDER = "anthropic"
DEFAULT_TRANSFORM_MODE = "bulletize"
DEFAULT_LANGUAGE = "ja"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000

# HTTP
DEFAULT_HTTP_TIMEOUT = 60.0  # seconds

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def default_model(provider: str) -> str:
    """First listed model for a provider, or an empty string if unknown."""
    models = MODELS.get(provider, [])
    return models[0] if models else ""
