"""
Shared fixtures: synthetic candidates, the default catalog, and a test client
bound to the app with the built-in catalog.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sse_starlette.sse import AppStatus

from model_router.core.dependencies import app_state
from model_router.core.registry import CandidateRegistry
from model_router.main import app
from model_router.models.domain import Candidate
from model_router.shared import settings


def build_candidate(**overrides) -> Candidate:
    """A neutral candidate: no capabilities, medium speed, accuracy 80, mid-range pricing."""
    record = {
        "id": "neutral",
        "name": "Neutral Model",
        "provider": "Acme",
        "description": "Synthetic model for tests",
        "capabilities": [],
        "strengths": [],
        "pricing": {"inputTokens": 0.01, "outputTokens": 0.01},
        "maxTokens": 8192,
        "responseTime": "medium",
        "accuracy": 80,
        "icon": "",
    }
    record.update(overrides)
    return Candidate.model_validate(record)


@pytest.fixture
def make_candidate():
    return build_candidate


@pytest.fixture
def default_registry():
    return CandidateRegistry.default()


def text_chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))], usage=None)


def usage_chunk(prompt_tokens, completion_tokens):
    return SimpleNamespace(
        choices=[],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


class FakeChatStream:
    def __init__(self, chunks, error=None):
        self._chunks = list(chunks)
        self._error = error
        self.closed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error

    async def close(self):
        self.closed = True


class FakeAsyncClient:
    """Stands in for openai.AsyncOpenAI: records create() calls, returns canned chunks."""

    def __init__(self, chunks=(), error=None, stream_error=None):
        self.calls = []
        self.streams = []
        self.closed = False
        self._chunks = chunks
        self._error = error
        self._stream_error = stream_error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **params):
        self.calls.append(params)
        if self._error is not None:
            raise self._error
        stream = FakeChatStream(self._chunks, error=self._stream_error)
        self.streams.append(stream)
        return stream

    async def close(self):
        self.closed = True


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "CATALOG_PATH", None)
    # sse-starlette keeps its shutdown event across apps; each TestClient runs its own loop.
    if hasattr(AppStatus, "should_exit_event"):
        monkeypatch.setattr(AppStatus, "should_exit_event", None)
    with TestClient(app) as test_client:
        yield test_client
    app_state.clear()
