"""Conversion pipeline: preset + text → one provider call → TransformResult."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from recast.config import MissingCredentialError
from recast.constants import DEFAULT_HTTP_TIMEOUT
from recast.providers import get_adapter, resolve_provider
from recast.transform.errors import ErrorKind, TransformError
from recast.transform.normalizer import TransformResult, normalize
from recast.transform.spec import compile_spec

if TYPE_CHECKING:
    from recast.config import KeysConfig
    from recast.presets import Preset

logger = logging.getLogger(__name__)


class Converter:
    """Runs one conversion per call.

    Pipeline: preset → provider check → credential check → TransformSpec →
    adapter (one HTTP request) → normalizer → TransformResult.

    Holds only read-only settings, so one instance can serve concurrent
    conversions from several threads.
    """

    def __init__(
        self,
        keys: KeysConfig,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._keys = keys
        self._timeout = timeout
        self._transport = transport

    def convert(self, preset: Preset, input_text: str) -> TransformResult:
        """Apply a preset to ``input_text``. Never raises for provider failures."""
        provider = resolve_provider(preset.provider)
        if provider is None:
            logger.error("Unsupported provider %r in preset %r", preset.provider, preset.name)
            return TransformResult.failure(
                ErrorKind.UNSUPPORTED_PROVIDER,
                f"ERROR: unsupported provider: {preset.provider}",
            )

        credential = self._keys.get_api_key(provider.value)
        if isinstance(credential, MissingCredentialError):
            logger.error("No API key configured for %s", provider.value)
            return TransformResult.failure(ErrorKind.MISSING_CREDENTIAL, credential.message)

        spec = compile_spec(preset)
        adapter = get_adapter(provider, timeout=self._timeout, transport=self._transport)

        try:
            raw = adapter.send(spec, input_text, credential, preset.model)
        except TransformError as e:
            logger.error("Conversion failed (%s): %s", e.kind.value, e.message)
            return TransformResult.failure(e.kind, e.message)

        result = normalize(raw, spec)
        if result.ok:
            logger.info(
                "Conversion complete: %d → %d chars (provider=%s, mode=%s)",
                len(input_text),
                len(result.text),
                provider.value,
                spec.mode,
            )
        return result
