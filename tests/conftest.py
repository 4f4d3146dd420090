"""Pytest configuration and fixtures."""

import pytest
from collections import deque
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from config import Config
from tinyurl.service import URLShortenerService
from tinyurl.shortcode import ShortCodeGenerator
from tinyurl.store import InMemoryMappingStore
from tinyurl.common.logging_config import setup_logging
from web_app import create_app


class ScriptedCodeGenerator(ShortCodeGenerator):
    """Generator returning pre-scripted codes, then random ones."""

    def __init__(self, *codes: str, default_length: int = 8):
        super().__init__(default_length=default_length)
        self.codes = deque(codes)
        self.calls = 0

    def generate(self, length=None) -> str:
        self.calls += 1
        if self.codes:
            return self.codes.popleft()
        return super().generate(length)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> InMemoryMappingStore:
    """Create an empty in-memory store."""
    return InMemoryMappingStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def service(store, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
        base_url="http://short.test",
    )


@pytest.fixture
def config() -> Config:
    """Test configuration."""
    return Config(base_url="http://testserver")


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Test client acting as client 'u1'."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
        headers={"X-Client-Id": "u1"},
    ) as ac:
        yield ac


@pytest.fixture
async def anonymous_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Test client without the client id header."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes",
    ]
