"""Provider identifiers and the adapter interface every backend conforms to."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from recast.transform.spec import TransformSpec


class Provider(str, Enum):
    """Supported text-generation services."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"


class ProviderAdapter(Protocol):
    """Projects a TransformSpec onto one provider's wire format."""

    provider: Provider

    def send(self, spec: TransformSpec, input_text: str, credential: str, model_id: str) -> str:
        """Issue exactly one generation request and return the reply text.

        Returns an empty string when the reply lacks the expected text field.
        Raises TransformError for non-success statuses and transport failures.
        """
        ...


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None as soon as a step is missing."""
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
            current = current[key]
        elif isinstance(current, dict):
            current = current.get(key)
        else:
            return None
    return current
