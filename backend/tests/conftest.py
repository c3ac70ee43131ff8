"""
NoteStore - Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── cache_dir: Empty temporary cache directory
    ├── settings: Settings pointing at cache_dir
    ├── note_service: NoteService over cache_dir
    ├── app: FastAPI app built from settings
    └── test_client: HTTPX AsyncClient talking to app
"""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notestore.config import Settings
from notestore.main import create_app
from notestore.services.note_service import NoteService


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    """A fresh, empty cache directory for each test."""
    directory = tmp_path / "cache"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(cache_dir) -> Settings:
    return Settings(host="127.0.0.1", port=3000, cache=str(cache_dir), log_level="WARNING")


@pytest.fixture
def note_service(cache_dir) -> NoteService:
    return NoteService(cache_dir)


@pytest.fixture
def write_note(cache_dir):
    """
    Puts a note file straight into the cache directory, bypassing the API.

    Usage:
        def test_something(write_note):
            path = write_note("todo", "buy milk")
    """
    def _write(name: str, text: str) -> Path:
        path = cache_dir / f"{name}.txt"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client routed straight into the app (no server, no lifespan).

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
