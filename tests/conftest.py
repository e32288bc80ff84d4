"""Shared test fixtures."""

import random

import httpx
import pytest

from vaatsalya import config
from vaatsalya.llm import create_client

TEST_BASE_URL = "https://gemini.test/v1beta/models"


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers requested delays."""

    def __init__(self):
        self.delays: list[float] = []
        self.on_sleep = None

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.on_sleep is not None:
            self.on_sleep(delay)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep real env vars and .env files out of every test."""
    for name in (
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "LLM_API_KEY",
        "GEMINI_MODEL",
        "LLM_MODEL",
        "GEMINI_BASE_URL",
        "MAX_ATTEMPTS",
        "REQUEST_TIMEOUT_SECONDS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    config._settings = None
    yield
    config._settings = None


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(sleep):
    """Build a RetryClient whose HTTP traffic goes to a handler function."""

    def factory(handler, max_attempts: int = 3, seed: int = 1234):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return create_client(
            api_key="test-key",
            base_url=TEST_BASE_URL,
            max_attempts=max_attempts,
            http_client=http_client,
            rng=random.Random(seed),
            sleep=sleep,
        )

    return factory
