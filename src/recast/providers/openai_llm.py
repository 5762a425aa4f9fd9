"""OpenAI Chat Completions adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from openai import APIConnectionError, APIError, APIStatusError, APITimeoutError, OpenAI

from recast.constants import DEFAULT_HTTP_TIMEOUT, OPENAI_API_BASE
from recast.providers.base import Provider
from recast.transform.errors import http_error, transport_error
from recast.transform.modes import OutputFormat

if TYPE_CHECKING:
    from recast.transform.spec import TransformSpec

logger = logging.getLogger(__name__)


def build_request(spec: TransformSpec, input_text: str, model_id: str) -> dict[str, Any]:
    """Keyword arguments for ``chat.completions.create``.

    The instruction is the first (system) turn. JSON output is enforced at
    the protocol level through ``response_format``.
    """
    kwargs: dict[str, Any] = {
        "model": model_id,
        "messages": [
            {"role": "system", "content": spec.instruction},
            {"role": "user", "content": input_text},
        ],
        "temperature": spec.generation.temperature,
        "max_tokens": spec.generation.max_tokens,
    }
    if spec.output_format is OutputFormat.JSON:
        kwargs["response_format"] = {"type": "json_object"}
    return kwargs


class OpenAIAdapter:
    """Adapter for GPT models. The key is sent as a bearer token."""

    provider = Provider.OPENAI

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def send(self, spec: TransformSpec, input_text: str, credential: str, model_id: str) -> str:
        kwargs = build_request(spec, input_text, model_id)
        logger.info("OpenAI request (model=%s, mode=%s)", model_id, spec.mode)

        with httpx.Client(transport=self._transport, timeout=self._timeout) as http_client:
            try:
                client = OpenAI(
                    api_key=credential,
                    base_url=OPENAI_API_BASE,
                    timeout=self._timeout,
                    max_retries=0,
                    http_client=http_client,
                )
                response = client.chat.completions.create(**kwargs)
            except APITimeoutError as exc:
                raise transport_error(exc, timed_out=True) from exc
            except APIStatusError as exc:
                logger.warning("OpenAI returned HTTP %d", exc.status_code)
                raise http_error(exc.response) from exc
            except APIConnectionError as exc:
                raise transport_error(exc) from exc
            except (APIError, ValueError) as exc:
                # Success status with a body that does not parse as a completion
                logger.warning("OpenAI reply could not be parsed (%s)", type(exc).__name__)
                return ""

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""
