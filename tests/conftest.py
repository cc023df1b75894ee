import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from game_creator.generation.client import GenerationClient, GenerationResult
from game_creator.main import app
from game_creator.session.pipeline import GamePipeline
from game_creator.session.state import SessionState

SNAKE_HTML = "<!DOCTYPE html>\n<html><body><canvas></canvas><script>let score = 0;</script></body></html>"


class FakeGenerationClient:
    """Stands in for GenerationClient, replaying queued results in order."""

    def __init__(self, *results: GenerationResult) -> None:
        self.results = list(results)
        self.prompts: list[str] = []
        self.gate: asyncio.Event | None = None

    async def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        if not self.results:
            return GenerationResult(text=SNAKE_HTML)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeMessages:
    """Stands in for ``AsyncAnthropic.messages``."""

    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def text_block(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text)


def make_client(response=None, error: Exception | None = None) -> tuple[GenerationClient, FakeMessages]:
    messages = FakeMessages(response=response, error=error)
    client = GenerationClient(model="test-model", max_tokens=123, client=SimpleNamespace(messages=messages))
    return client, messages


@pytest.fixture
def session():
    return SessionState(session_id="test-session")


@pytest.fixture
def fake_client():
    return FakeGenerationClient()


@pytest.fixture
def pipeline(fake_client):
    return GamePipeline(fake_client)


@pytest.fixture
def api(fake_client):
    with TestClient(app) as client:
        app.state.pipeline = GamePipeline(fake_client)
        yield client
