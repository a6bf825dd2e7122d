"""
Integration tests against a live comparison API.

Set COMPARE_API_ACCOUNT_ID and COMPARE_API_AUTH_TOKEN (and optionally
COMPARE_API_BASE_URL for a self-hosted server) to run them.
"""

import datetime
import os
import threading
import time

import httpx
import pytest

from compare_api_client import (
    CLOUD_BASE_URL,
    Comparisons,
    ExportKind,
    InvalidCredentialsError,
    NotFoundError,
    Side,
)

ACCOUNT_ID = os.environ.get("COMPARE_API_ACCOUNT_ID")
AUTH_TOKEN = os.environ.get("COMPARE_API_AUTH_TOKEN")
BASE_URL = os.environ.get("COMPARE_API_BASE_URL", CLOUD_BASE_URL)

LEFT_URL = "https://api.draftable.com/static/test-documents/code-of-conduct/left.rtf"
RIGHT_URL = "https://api.draftable.com/static/test-documents/code-of-conduct/right.pdf"

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (ACCOUNT_ID and AUTH_TOKEN),
        reason="COMPARE_API_ACCOUNT_ID and COMPARE_API_AUTH_TOKEN are not set",
    ),
]


class TestIntegration:
    """Integration tests with the comparison API."""

    @pytest.fixture(scope="class")
    def client(self):
        """Create authenticated comparisons client."""
        with Comparisons(ACCOUNT_ID, AUTH_TOKEN, BASE_URL, timeout=120) as client:
            yield client

    @pytest.fixture
    def comparison(self, client):
        """Create a short-lived comparison and delete it afterwards."""
        comparison = client.create(
            Side.from_url(LEFT_URL, "rtf"),
            Side.from_url(RIGHT_URL, "pdf"),
            identifier=client.generate_identifier(),
            expires=datetime.timedelta(minutes=10),
        )
        yield comparison
        try:
            client.delete(comparison.identifier)
        except NotFoundError:
            pass

    def wait_until_ready(self, client, identifier, timeout=120):
        deadline = time.monotonic() + timeout
        while True:
            comparison = client.get(identifier)
            if comparison.ready or time.monotonic() > deadline:
                return comparison
            time.sleep(2)

    def test_create_and_get(self, client, comparison):
        fetched = client.get(comparison.identifier)

        assert fetched.identifier == comparison.identifier
        assert fetched.left.file_type == "rtf"
        assert fetched.right.file_type == "pdf"
        assert fetched.is_public is False
        assert fetched.expiry_time is not None

    def test_listed_in_get_all(self, client, comparison):
        identifiers = [c.identifier for c in client.get_all()]
        assert comparison.identifier in identifiers

    def test_upload_file_side(self, client):
        comparison = client.create(
            Side.from_bytes(b"The quick brown fox.", "txt", "left.txt"),
            Side.from_bytes(b"The quick red fox.", "txt", "right.txt"),
            expires=datetime.timedelta(minutes=10),
        )
        try:
            assert comparison.left.display_name == "left.txt"
        finally:
            client.delete(comparison.identifier)

    def test_delete(self, client, comparison):
        client.delete(comparison.identifier)

        with pytest.raises(NotFoundError):
            client.get(comparison.identifier)

    def test_signed_viewer_url_is_accepted(self, client, comparison):
        url = client.signed_viewer_url(comparison.identifier, datetime.timedelta(minutes=5), wait=True)

        response = httpx.get(url, timeout=30)
        assert response.status_code == 200

    def test_export(self, client, comparison):
        ready = self.wait_until_ready(client, comparison.identifier)
        if not ready.ready or ready.failed:
            pytest.skip("comparison did not finish processing in time")

        export = client.run_export(comparison.identifier, ExportKind.LEFT)
        assert export.comparison == comparison.identifier

        fetched = client.get_export(export.identifier)
        assert fetched.identifier == export.identifier

    def test_wrong_auth_token(self):
        with Comparisons(ACCOUNT_ID, "wrong-auth-token", BASE_URL) as wrong_client:
            with pytest.raises(InvalidCredentialsError):
                wrong_client.get_all()

    def test_wrong_auth_token_during_upload(self):
        """Test that rejected uploads are reported as credential errors."""
        with Comparisons(ACCOUNT_ID, "wrong-auth-token", BASE_URL) as wrong_client:
            with pytest.raises(InvalidCredentialsError):
                wrong_client.create(
                    Side.from_bytes(b"x" * 1000000, "txt"),
                    Side.from_bytes(b"y" * 1000000, "txt"),
                )

    def test_concurrent_requests(self, client, comparison):
        """Test concurrent requests from several threads."""
        results = []

        def fetch():
            results.append(client.get(comparison.identifier).identifier)

        threads = [threading.Thread(target=fetch) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [comparison.identifier] * 5
