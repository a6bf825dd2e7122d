"""
Shared fixtures for comparison API client tests.
"""

import json

import httpx
import pytest

ACCOUNT_ID = "test-account"
AUTH_TOKEN = "test-auth-token"
BASE_URL = "https://api.example.com/v1"

COMPARISON_PAYLOAD = {
    "identifier": "abcDEF123",
    "left": {"file_type": "pdf", "source_url": "https://example.com/left.pdf"},
    "right": {"file_type": "docx", "display_name": "right.docx"},
    "public": False,
    "creation_time": "2026-10-18T10:00:00Z",
    "expiry_time": "2026-10-19T10:00:00Z",
    "ready": True,
    "ready_time": "2026-10-18T10:00:05Z",
    "failed": False,
    "error_message": None,
}

EXPORT_PAYLOAD = {
    "identifier": "exp12345",
    "comparison": "abcDEF123",
    "url": "https://example.com/exports/exp12345.pdf",
    "kind": "combined",
    "ready": True,
    "include_cover_page": True,
    "failed": False,
    "error_message": None,
}


class RecordingTransport(httpx.MockTransport):
    """
    MockTransport answering from a queue of canned responses and recording requests.

    Each queued item is either an httpx.Response, a (status, body) tuple, or
    an exception instance to raise.
    """

    def __init__(self):
        self.requests = []
        self.responses = []
        super().__init__(self._handle)

    def queue(self, status_code, body=None):
        self.responses.append((status_code, body))
        return self

    def fail_with(self, exc_factory):
        self.responses.append(exc_factory)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0)
        if callable(item):
            raise item(request)
        status_code, body = item
        if body is None:
            return httpx.Response(status_code)
        if isinstance(body, (dict, list)):
            return httpx.Response(status_code, json=body)
        return httpx.Response(status_code, text=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def transport():
    """Create recording mock transport."""
    return RecordingTransport()


@pytest.fixture
def comparison_payload():
    return json.loads(json.dumps(COMPARISON_PAYLOAD))


@pytest.fixture
def export_payload():
    return dict(EXPORT_PAYLOAD)
