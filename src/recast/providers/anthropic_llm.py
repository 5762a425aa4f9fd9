"""Anthropic Messages API adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from anthropic import (
    Anthropic,
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
)

from recast.constants import ANTHROPIC_API_BASE, ANTHROPIC_VERSION, DEFAULT_HTTP_TIMEOUT
from recast.providers.base import Provider
from recast.transform.errors import http_error, transport_error

if TYPE_CHECKING:
    from recast.transform.spec import TransformSpec

logger = logging.getLogger(__name__)


def build_request(spec: TransformSpec, input_text: str, model_id: str) -> dict[str, Any]:
    """Keyword arguments for ``messages.create``.

    The instruction travels in the top-level ``system`` field; the
    conversation is a single user turn holding the raw input.
    """
    return {
        "model": model_id,
        "max_tokens": spec.generation.max_tokens,
        "temperature": spec.generation.temperature,
        "system": spec.instruction,
        "messages": [{"role": "user", "content": input_text}],
    }


class AnthropicAdapter:
    """Adapter for Claude models. The key goes in the ``x-api-key`` header."""

    provider = Provider.ANTHROPIC

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def send(self, spec: TransformSpec, input_text: str, credential: str, model_id: str) -> str:
        kwargs = build_request(spec, input_text, model_id)
        logger.info("Anthropic request (model=%s, mode=%s)", model_id, spec.mode)

        with httpx.Client(transport=self._transport, timeout=self._timeout) as http_client:
            try:
                client = Anthropic(
                    api_key=credential,
                    base_url=ANTHROPIC_API_BASE,
                    timeout=self._timeout,
                    max_retries=0,
                    default_headers={"anthropic-version": ANTHROPIC_VERSION},
                    http_client=http_client,
                )
                response = client.messages.create(**kwargs)
            except APITimeoutError as exc:
                raise transport_error(exc, timed_out=True) from exc
            except APIStatusError as exc:
                logger.warning("Anthropic returned HTTP %d", exc.status_code)
                raise http_error(exc.response) from exc
            except APIConnectionError as exc:
                raise transport_error(exc) from exc
            except (APIError, ValueError) as exc:
                # Success status with a body that does not parse as a message
                logger.warning("Anthropic reply could not be parsed (%s)", type(exc).__name__)
                return ""

        blocks = getattr(response, "content", None) or []
        if not blocks:
            return ""
        return getattr(blocks[0], "text", None) or ""
