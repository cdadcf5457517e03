"""
Shared test configuration.
Points the application at a throwaway SQLite database before it is imported.
"""

import json
import os
import tempfile

import pytest

_db_dir = tempfile.mkdtemp(prefix="newsdesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'newsdesk.db')}"
os.environ["HF_TOKEN"] = "test-token"


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status=200, body=""):
        self.status = status
        self.body = body

    def _decoded(self, errors="strict"):
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors)
        return self.body

    async def text(self, encoding=None, errors="strict"):
        return self._decoded(errors)

    async def json(self, content_type="application/json"):
        return json.loads(self._decoded())

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """Records outbound requests and answers them with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


@pytest.fixture
def fake_session_factory():
    return FakeSession


@pytest.fixture
def fake_response_factory():
    return FakeResponse
