"""Preset records and their TOML-backed store."""

from __future__ import annotations

import logging
import sys
import time
import uuid
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

import tomli_w

from recast.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PRESET_NAME,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    DEFAULT_TRANSFORM_MODE,
    PRESETS_FILE,
    default_model,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Preset:
    """A named bundle of provider, model, mode, language and sampling settings."""

    id: str
    name: str
    provider: str
    model: str
    transform_mode: str = DEFAULT_TRANSFORM_MODE
    language: str = DEFAULT_LANGUAGE
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    created_at: int = 0
    updated_at: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Preset:
        """Build a preset from a stored table, filling defaults for missing keys."""
        provider = str(data.get("provider") or DEFAULT_PROVIDER)
        try:
            temperature = float(data.get("temperature", DEFAULT_TEMPERATURE))
        except (TypeError, ValueError):
            temperature = DEFAULT_TEMPERATURE
        try:
            max_tokens = int(data.get("max_tokens", DEFAULT_MAX_TOKENS)) or DEFAULT_MAX_TOKENS
        except (TypeError, ValueError, OverflowError):
            max_tokens = DEFAULT_MAX_TOKENS

        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or DEFAULT_PRESET_NAME),
            provider=provider,
            model=str(data.get("model") or default_model(provider)),
            transform_mode=str(data.get("transform_mode") or DEFAULT_TRANSFORM_MODE),
            language=str(data.get("language") or DEFAULT_LANGUAGE),
            temperature=temperature,
            max_tokens=max_tokens,
            created_at=int(data.get("created_at", 0)),
            updated_at=int(data.get("updated_at", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PresetFields:
    """Everything a user edits on a preset; ``id`` and timestamps are managed."""

    name: str = DEFAULT_PRESET_NAME
    provider: str = DEFAULT_PROVIDER
    model: str = ""
    transform_mode: str = DEFAULT_TRANSFORM_MODE
    language: str = DEFAULT_LANGUAGE
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    def resolved(self) -> PresetFields:
        """Apply the same fallbacks the settings form uses."""
        return replace(
            self,
            name=self.name.strip() or DEFAULT_PRESET_NAME,
            model=self.model or default_model(self.provider),
            max_tokens=self.max_tokens if self.max_tokens > 0 else DEFAULT_MAX_TOKENS,
        )


class PresetStore:
    """Loads, edits and persists the user's presets.

    The store owns the list; callers receive immutable Preset values and
    keep track of which one is selected themselves.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or PRESETS_FILE
        self._presets: list[Preset] = []

    def load(self) -> None:
        """Load presets from the TOML file. A broken file leaves the store empty."""
        self._presets = []
        if not self._path.exists():
            logger.info("No presets file found at %s", self._path)
            return

        try:
            with open(self._path, "rb") as f:
                data = tomllib.load(f)

            self._presets = [Preset.from_dict(p) for p in data.get("presets", [])]
            logger.info("Loaded %d preset(s)", len(self._presets))
        except Exception:
            logger.exception("Failed to load presets from %s", self._path)
            self._presets = []

    def save(self) -> None:
        """Save presets to the TOML file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {"presets": [p.to_dict() for p in self._presets]}
        with open(self._path, "wb") as f:
            tomli_w.dump(data, f)

    def add(self, fields: PresetFields) -> Preset:
        """Save a new preset with a fresh id."""
        now = _now_ms()
        values = fields.resolved()
        preset = Preset(id=uuid.uuid4().hex, created_at=now, updated_at=now, **asdict(values))
        self._presets.append(preset)
        self.save()
        logger.info("Added preset %r (%s)", preset.name, preset.id)
        return preset

    def overwrite(self, preset_id: str, fields: PresetFields) -> Preset | None:
        """Replace every editable field of a preset. Returns None if not found."""
        for i, existing in enumerate(self._presets):
            if existing.id == preset_id:
                updated = replace(existing, updated_at=_now_ms(), **asdict(fields.resolved()))
                self._presets[i] = updated
                self.save()
                return updated
        return None

    def delete(self, preset_id: str) -> bool:
        """Remove a preset by id. Returns True if found."""
        for i, p in enumerate(self._presets):
            if p.id == preset_id:
                self._presets.pop(i)
                self.save()
                return True
        return False

    def get(self, preset_id: str) -> Preset | None:
        for p in self._presets:
            if p.id == preset_id:
                return p
        return None

    def find(self, key: str) -> Preset | None:
        """Look a preset up by id, then by exact name, then case-insensitively."""
        preset = self.get(key)
        if preset is not None:
            return preset
        for p in self._presets:
            if p.name == key:
                return p
        lowered = key.lower()
        for p in self._presets:
            if p.name.lower() == lowered:
                return p
        return None

    @property
    def presets(self) -> list[Preset]:
        return list(self._presets)
