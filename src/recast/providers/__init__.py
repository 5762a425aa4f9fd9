"""Provider adapters, dispatched by Provider.

Usage:
    from recast.providers import get_adapter, resolve_provider

    provider = resolve_provider(preset.provider)
    adapter = get_adapter(provider, timeout=30.0)
    raw = adapter.send(spec, text, credential, preset.model)
"""

from __future__ import annotations

from typing import Callable

import httpx

from recast.constants import DEFAULT_HTTP_TIMEOUT
from recast.providers.base import Provider, ProviderAdapter

AdapterFactory = Callable[[float, "httpx.BaseTransport | None"], ProviderAdapter]


def _create_anthropic(timeout: float, transport: httpx.BaseTransport | None) -> ProviderAdapter:
    from recast.providers.anthropic_llm import AnthropicAdapter

    return AnthropicAdapter(timeout=timeout, transport=transport)


def _create_openai(timeout: float, transport: httpx.BaseTransport | None) -> ProviderAdapter:
    from recast.providers.openai_llm import OpenAIAdapter

    return OpenAIAdapter(timeout=timeout, transport=transport)


def _create_gemini(timeout: float, transport: httpx.BaseTransport | None) -> ProviderAdapter:
    from recast.providers.gemini_llm import GeminiAdapter

    return GeminiAdapter(timeout=timeout, transport=transport)


ADAPTER_FACTORIES: dict[Provider, AdapterFactory] = {
    Provider.ANTHROPIC: _create_anthropic,
    Provider.OPENAI: _create_openai,
    Provider.GEMINI: _create_gemini,
}


def resolve_provider(name: str | None) -> Provider | None:
    """Map a stored provider string to a Provider, or None if unsupported."""
    try:
        return Provider(name)
    except ValueError:
        return None


def get_adapter(
    provider: Provider,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> ProviderAdapter:
    """Create the adapter for a provider. ``transport`` is for tests and proxies."""
    return ADAPTER_FACTORIES[provider](timeout, transport)


__all__ = [
    "ADAPTER_FACTORIES",
    "Provider",
    "ProviderAdapter",
    "get_adapter",
    "resolve_provider",
]
