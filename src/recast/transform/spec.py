"""Compile a preset into a provider-agnostic TransformSpec."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from recast.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TRANSFORM_MODE,
)
from recast.transform.modes import OutputFormat, lookup

if TYPE_CHECKING:
    from recast.presets import Preset


class Language(str, Enum):
    """Output language. Japanese is primary, English secondary."""

    JA = "ja"
    EN = "en"


ROLE_FRAMING = "非人格的変換器として機能する。"
PROHIBITIONS = "禁止: 一人称・評価語・感情語・末尾質問・対話継続誘導・共感表現。"
PRINCIPLES = "原則: 入力の意味領域を超えない。新規主張を追加しない。出力のみを返す。"
JSON_ONLY_DIRECTIVE = (
    "出力形式: 厳密に有効なJSONのみを返す。コードフェンス・説明文・前置きを含めない。"
)

LANGUAGE_DIRECTIVES: dict[Language, str] = {
    Language.JA: "出力は日本語で行う。",
    Language.EN: "Output in English.",
}


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters shared by every provider."""

    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class TransformSpec:
    """Everything an adapter needs to build one request."""

    mode: str
    instruction: str
    output_language: Language
    output_format: OutputFormat
    generation: GenerationParams


def clamp_temperature(value: float | None) -> float:
    """Clamp to [0, 1]; missing or non-numeric values mean the default."""
    try:
        temperature = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_TEMPERATURE
    if temperature != temperature:  # NaN
        return DEFAULT_TEMPERATURE
    return min(1.0, max(0.0, temperature))


def resolve_max_tokens(value: int | None) -> int:
    try:
        max_tokens = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_MAX_TOKENS
    return max_tokens if max_tokens > 0 else DEFAULT_MAX_TOKENS


def resolve_language(value: str | None) -> Language:
    """Only English selects the secondary directive; anything else is primary."""
    if value == Language.EN.value:
        return Language.EN
    return Language(DEFAULT_LANGUAGE)


def build_instruction(mode: str, fragment: str, language: Language, output_format: OutputFormat) -> str:
    """Join the fixed instruction segments, one per line, skipping empty ones."""
    segments = [
        ROLE_FRAMING,
        f"transform_mode: {mode}",
        f"instruction: {fragment}を実行する。" if fragment else "",
        LANGUAGE_DIRECTIVES[language],
        PROHIBITIONS,
        PRINCIPLES,
        JSON_ONLY_DIRECTIVE if output_format is OutputFormat.JSON else "",
    ]
    return "\n".join(segment for segment in segments if segment)


def compile_spec(preset: Preset) -> TransformSpec:
    """Build a fresh TransformSpec from a preset.

    Pure and deterministic: no I/O, never raises for any stored preset
    values, and identical presets give identical specs.
    """
    mode = preset.transform_mode or DEFAULT_TRANSFORM_MODE
    definition = lookup(mode)
    language = resolve_language(preset.language)

    return TransformSpec(
        mode=mode,
        instruction=build_instruction(
            mode, definition.instruction, language, definition.output_format
        ),
        output_language=language,
        output_format=definition.output_format,
        generation=GenerationParams(
            temperature=clamp_temperature(preset.temperature),
            max_tokens=resolve_max_tokens(preset.max_tokens),
        ),
    )
