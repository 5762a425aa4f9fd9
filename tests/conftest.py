"""Shared test fixtures."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from recast.config import KeysConfig
from recast.presets import Preset

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_AUTH_TOKEN",
    "ANTHROPIC_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_ORG_ID",
    "OPENAI_PROJECT_ID",
    "GEMINI_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and SDK overrides out of every test."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@dataclass
class StubProvider:
    """Stands in for a provider endpoint via httpx.MockTransport."""

    status: int = 200
    body: Any = None
    raw: bytes | None = None
    content_type: str | None = None
    exc: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            headers = {"content-type": self.content_type} if self.content_type else None
            return httpx.Response(self.status, content=self.raw, headers=headers)
        return httpx.Response(self.status, json=self.body if self.body is not None else {})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last_request.read())


@pytest.fixture
def stub() -> StubProvider:
    return StubProvider()


@pytest.fixture
def keys() -> KeysConfig:
    return KeysConfig(anthropic="sk-ant-test", openai="sk-oai-test", gemini="gm-test")


@pytest.fixture
def make_preset() -> Callable[..., Preset]:
    """Factory for presets with sensible defaults."""

    def _make(**overrides: Any) -> Preset:
        values: dict[str, Any] = {
            "id": "p1",
            "name": "test",
            "provider": "anthropic",
            "model": "claude-haiku-4-5-20251001",
            "transform_mode": "summarize",
            "language": "ja",
            "temperature": 0.7,
            "max_tokens": 500,
            "created_at": 1,
            "updated_at": 1,
        }
        values.update(overrides)
        return Preset(**values)

    return _make


def anthropic_reply(text: str) -> dict[str, Any]:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "model": "claude-haiku-4-5-20251001",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 10, "output_tokens": 5},
    }


def openai_reply(text: str | None) -> dict[str, Any]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
    }


def gemini_reply(text: str) -> dict[str, Any]:
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ]
    }


@pytest.fixture
def replies() -> dict[str, Callable[[str], dict[str, Any]]]:
    """Success body builders keyed by provider name."""
    return {"anthropic": anthropic_reply, "openai": openai_reply, "gemini": gemini_reply}
