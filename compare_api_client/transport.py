"""
REST transport for the comparison API.

Wraps a single ``httpx.AsyncClient`` and enforces the status code each call
expects. Any other status is reported as an UnexpectedResponseError carrying
the full response body; the resource clients translate it into one of the
public RequestError kinds.
"""

import logging
import threading
from typing import Dict, Mapping, Optional

import httpx

from .constants import (
    ACCEPT_JSON,
    AUTHORIZATION_SCHEME,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    STATUS_DELETE,
    STATUS_GET,
    STATUS_POST,
)
from .exceptions import OperationCancelledError
from .sides import FileContent
from .urls import QueryParameters, build_url

logger = logging.getLogger(__name__)

# Symptoms of the server dropping the connection mid-request
CONNECTION_DROPPED_ERRORS = (httpx.RemoteProtocolError, httpx.ReadError, httpx.WriteError)

CONNECTION_DROPPED_REASON = (
    "Connection terminated early due to authentication failure - "
    "check that your auth token is valid."
)


class UnexpectedResponseError(Exception):
    """Raised when the server answers with a status other than the expected one."""

    def __init__(self, expected_status: int, actual_status: int, response_reason: str,
                 response_content: str = ""):
        super().__init__(
            f"Expected a HTTP {expected_status} response but received {actual_status} "
            f"({response_reason}). Response:\n{response_content}"
        )
        self.expected_status = expected_status
        self.actual_status = actual_status
        self.response_reason = response_reason
        self.response_content = response_content


def _check_cancelled(cancel_event: Optional[threading.Event]):
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError("The operation was cancelled.")


def _prepare_content(data: Optional[Mapping[str, Optional[str]]],
                     files: Optional[Mapping[str, FileContent]]) -> dict:
    """
    Build the httpx request body arguments for a POST.

    Fields whose value is None or empty are dropped. Without files the body
    is form-encoded (or empty); with files it is multipart, and each file
    part uses its field name as the filename.
    """
    fields: Dict[str, str] = {
        key: value for key, value in (data or {}).items() if value is not None and value != ""
    }
    file_parts = dict(files or {})

    if not file_parts:
        if fields:
            return {'data': fields}
        return {'content': b""}

    return {
        'data': fields,
        'files': {key: (key, content) for key, content in file_parts.items()},
    }


class RestApiClient:
    """
    Authenticated JSON REST client.

    All request methods are coroutines; run them on the owning
    EventLoopThread so the connection pool stays on one loop.
    """

    def __init__(self, auth_token: str, timeout: float = 30, verify: bool = True,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(
            headers={
                HEADER_ACCEPT: ACCEPT_JSON,
                HEADER_AUTHORIZATION: f"{AUTHORIZATION_SCHEME} {auth_token}",
            },
            timeout=httpx.Timeout(timeout),
            verify=verify,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def get(self, endpoint: str, query_params: Optional[QueryParameters] = None,
                  expected_status: int = STATUS_GET,
                  cancel_event: Optional[threading.Event] = None) -> str:
        """
        GET an endpoint and return the response body.

        Raises:
            UnexpectedResponseError: If the status is not expected_status
            OperationCancelledError: If cancel_event was set during the request
            httpx.HTTPError: If the request could not be performed
        """
        url = build_url(endpoint, query_params)
        logger.debug("GET %s", url)
        response = await self._client.get(url)
        return self._handle_response(response, expected_status, cancel_event)

    async def delete(self, endpoint: str, query_params: Optional[QueryParameters] = None,
                     expected_status: int = STATUS_DELETE,
                     cancel_event: Optional[threading.Event] = None) -> None:
        """DELETE an endpoint. Success is decided by the status code alone."""
        url = build_url(endpoint, query_params)
        logger.debug("DELETE %s", url)
        response = await self._client.delete(url)
        self._handle_response(response, expected_status, cancel_event)

    async def post(self, endpoint: str, query_params: Optional[QueryParameters] = None,
                   data: Optional[Mapping[str, Optional[str]]] = None,
                   files: Optional[Mapping[str, FileContent]] = None,
                   expected_status: int = STATUS_POST,
                   cancel_event: Optional[threading.Event] = None) -> str:
        """
        POST form fields, and optionally files, and return the response body.

        When files are uploaded with bad credentials the server may drop the
        connection instead of answering 401; that case is reported as an
        UnexpectedResponseError with status 401.
        """
        url = build_url(endpoint, query_params)
        content = _prepare_content(data, files)
        logger.debug("POST %s (%s)", url, 'multipart' if 'files' in content else 'form')
        try:
            response = await self._client.post(url, **content)
        except CONNECTION_DROPPED_ERRORS as e:
            if 'files' not in content:
                raise
            logger.warning("Connection dropped during upload to %s: %s", url, e)
            raise UnexpectedResponseError(
                expected_status, 401, CONNECTION_DROPPED_REASON
            ) from e
        return self._handle_response(response, expected_status, cancel_event)

    def _handle_response(self, response: httpx.Response, expected_status: int,
                         cancel_event: Optional[threading.Event]) -> str:
        _check_cancelled(cancel_event)
        logger.debug("%s %s -> %d", response.request.method, response.request.url,
                     response.status_code)
        if response.status_code != expected_status:
            logger.warning(
                "Unexpected HTTP %d (expected %d) from %s %s",
                response.status_code, expected_status,
                response.request.method, response.request.url,
            )
            raise UnexpectedResponseError(
                expected_status,
                response.status_code,
                response.reason_phrase or str(response.status_code),
                response.text,
            )
        return response.text

    async def aclose(self):
        """Close the underlying connection pool."""
        await self._client.aclose()
