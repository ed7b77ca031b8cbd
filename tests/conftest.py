"""Pytest fixtures for Todoist MCP tests."""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

import todoist_api
from tools.formatting import JSON_PREFIX


def make_response(data, status_code=200):
    """Create a mock httpx.Response."""
    resp = MagicMock(spec=httpx.Response)
    resp.status_code = status_code
    resp.json.return_value = data
    resp.text = json.dumps(data)
    resp.headers = {}
    if status_code >= 400:
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}",
            request=MagicMock(),
            response=resp,
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


def parse_json_block(result):
    """Return the decoded JSON block of a tool result, or None if it has none."""
    for block in result.content:
        text = getattr(block, "text", "")
        if text.startswith(JSON_PREFIX):
            return json.loads(text[len(JSON_PREFIX):])
    return None


def route(responses: dict):
    """Build a side_effect answering mocked requests by URL suffix.

    Values are response data, or callables taking the request kwargs and
    returning response data.
    """
    async def handler(url, *args, **kwargs):
        for suffix, data in responses.items():
            if url.endswith(suffix):
                return make_response(data(kwargs) if callable(data) else data)
        raise AssertionError(f"Unexpected request: {url}")
    return handler


@pytest.fixture(autouse=True)
def reset_state():
    """Reset module-level client state between tests."""
    todoist_api.reset_client()
    yield
    todoist_api.reset_client()


@pytest.fixture
def api_token(monkeypatch):
    monkeypatch.setenv("TODOIST_API_TOKEN", "test-token-abc123")
    monkeypatch.delenv("TODOIST_TIMEOUT", raising=False)
    return "test-token-abc123"


@pytest.fixture
def mock_client(api_token):
    """Provide a mocked httpx.AsyncClient that's injected into the module."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    with patch("todoist_api.httpx.AsyncClient", return_value=mock):
        yield mock


@pytest.fixture
def respond():
    return make_response


@pytest.fixture
def router():
    return route
