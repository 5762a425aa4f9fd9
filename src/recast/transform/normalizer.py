"""Validate and trim raw provider replies into a TransformResult."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recast.transform.errors import (
    EMPTY_RESPONSE_MESSAGE,
    INVALID_JSON_MESSAGE,
    ErrorKind,
)
from recast.transform.modes import OutputFormat

if TYPE_CHECKING:
    from recast.transform.spec import TransformSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """Outcome of one conversion: either text or an error message, never both."""

    ok: bool
    text: str = ""
    message: str = ""
    kind: ErrorKind | None = None

    @classmethod
    def success(cls, text: str) -> TransformResult:
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> TransformResult:
        return cls(ok=False, message=message, kind=kind)


def _reject_constant(name: str) -> None:
    # NaN and Infinity are Python extensions, not JSON
    raise ValueError(f"not a JSON value: {name}")


def normalize(raw_text: str | None, spec: TransformSpec) -> TransformResult:
    """Check a raw reply against the spec's declared output format.

    Blank replies are an error, not an empty success. JSON replies that do
    not parse are returned as an error that embeds the offending text.
    Valid replies come back trimmed and otherwise untouched.
    """
    text = (raw_text or "").strip()
    if not text:
        logger.warning("Provider returned an empty reply (mode=%s)", spec.mode)
        return TransformResult.failure(ErrorKind.EMPTY_RESPONSE, EMPTY_RESPONSE_MESSAGE)

    if spec.output_format is OutputFormat.JSON:
        try:
            json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            logger.warning("Reply is not valid JSON (%d chars)", len(text))
            return TransformResult.failure(
                ErrorKind.INVALID_FORMAT, f"{INVALID_JSON_MESSAGE}\n\n{text}"
            )

    return TransformResult.success(text)
