"""Gemini generateContent adapter (plain HTTP, no SDK)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from recast.constants import DEFAULT_HTTP_TIMEOUT, GEMINI_API_BASE
from recast.providers.base import Provider, dig
from recast.transform.errors import http_error, transport_error
from recast.transform.modes import OutputFormat

if TYPE_CHECKING:
    from recast.transform.spec import TransformSpec

logger = logging.getLogger(__name__)


def endpoint_url(model_id: str) -> str:
    return f"{GEMINI_API_BASE}/models/{model_id}:generateContent"


def build_payload(spec: TransformSpec, input_text: str) -> dict[str, Any]:
    """Request body: instruction and conversation are separate top-level fields.

    Sampling parameters live under ``generationConfig``, which also asks for
    an ``application/json`` reply when the spec declares JSON output.
    """
    generation_config: dict[str, Any] = {
        "temperature": spec.generation.temperature,
        "maxOutputTokens": spec.generation.max_tokens,
    }
    if spec.output_format is OutputFormat.JSON:
        generation_config["responseMimeType"] = "application/json"

    return {
        "systemInstruction": {"parts": [{"text": spec.instruction}]},
        "contents": [{"role": "user", "parts": [{"text": input_text}]}],
        "generationConfig": generation_config,
    }


class GeminiAdapter:
    """Adapter for Gemini models.

    The key is passed as the ``key`` query parameter, as the public REST
    API documents. URLs end up in proxy and server logs more readily than
    headers do, so this is a weaker boundary than the other two adapters;
    the ``x-goog-api-key`` header is the alternative if that matters.
    """

    provider = Provider.GEMINI

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def send(self, spec: TransformSpec, input_text: str, credential: str, model_id: str) -> str:
        payload = build_payload(spec, input_text)
        logger.info("Gemini request (model=%s, mode=%s)", model_id, spec.mode)

        with httpx.Client(transport=self._transport, timeout=self._timeout) as client:
            try:
                r = client.post(
                    endpoint_url(model_id),
                    params={"key": credential},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.TimeoutException as exc:
                raise transport_error(exc, timed_out=True) from exc
            except httpx.HTTPError as exc:
                raise transport_error(exc) from exc

        if not r.is_success:
            logger.warning("Gemini returned HTTP %d", r.status_code)
            raise http_error(r)

        try:
            data = r.json()
        except ValueError:
            logger.warning("Gemini returned a non-JSON body")
            return ""

        text = dig(data, "candidates", 0, "content", "parts", 0, "text")
        return text if isinstance(text, str) else ""
