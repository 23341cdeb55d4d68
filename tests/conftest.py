"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import httpx
import pytest

from jira_rest_client.client.api import JiraClient
from jira_rest_client.client.config import JiraConfig
from jira_rest_client.client.transport import RawResponse


class FailingStream(httpx.SyncByteStream):
    """Response body that breaks off after the first chunk."""

    def __iter__(self):
        yield b"partial"
        raise httpx.ReadError("Connection reset by peer")


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays responses.

    Each response is a (status, body[, headers]) tuple, an exception to
    raise, or a callable taking the request. The last response repeats once
    the list is exhausted.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [(200, "{}")]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        spec = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(spec, Exception):
            raise spec
        if callable(spec):
            return spec(request)
        status, body, *rest = spec
        headers = rest[0] if rest else {}
        return httpx.Response(status, text=body, headers=headers)


@pytest.fixture
def config():
    """Create a test config using basic auth."""
    return JiraConfig(
        host="https://jira.example.com",
        user="alice",
        password="secret",
        log_level="DEBUG",
        _env_file=None,
    )


@pytest.fixture
def make_client(config):
    """Build a JiraClient backed by a RecordingHandler.

    Usage:
        client, handler = make_client((200, '{"id": "1"}'), token_based_auth=True)
    """
    clients = []

    def _make(*responses, **overrides):
        cfg = config.model_copy(update=overrides) if overrides else config
        handler = RecordingHandler(*responses)
        client = JiraClient(cfg, http_transport=httpx.MockTransport(handler))
        clients.append(client)
        return client, handler

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def mock_transport():
    """Create a mock transport handle returning an empty JSON object."""
    transport = MagicMock()
    transport.send.return_value = RawResponse(
        url="https://jira.example.com/rest/api/2/serverInfo",
        status_code=200,
        text="{}",
    )
    return transport


@pytest.fixture
def broken_response():
    """Factory for a response whose body breaks off mid-transfer."""

    def _make(status_code: int):
        return lambda request: httpx.Response(status_code, stream=FailingStream())

    return _make
