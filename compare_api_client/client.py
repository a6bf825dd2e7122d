"""
Base client shared by the comparison and export resource clients.

This module owns configuration, the connection object and the event loop
thread, and the translation of transport faults into public errors.
"""

import asyncio
import concurrent.futures
import logging
from typing import Awaitable, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from .classifier import classify
from .constants import CLOUD_BASE_URL, DEFAULT_CONFIG
from .exceptions import (
    ClientClosedError,
    ConfigurationError,
    RequestError,
    UnknownResponseError,
)
from .runner import EventLoopThread
from .transport import RestApiClient, UnexpectedResponseError
from .urls import URLs

logger = logging.getLogger(__name__)

CLOSED_IN_FLIGHT = "The client was closed while the operation was in flight."

ModelT = TypeVar('ModelT', bound=BaseModel)
T = TypeVar('T')


def _current_task_cancelling() -> bool:
    """Whether the caller's own task has a pending cancellation request (Python 3.11+)."""
    task = asyncio.current_task()
    cancelling = getattr(task, 'cancelling', None)
    return bool(cancelling and cancelling())


def deserialize(model: Type[ModelT], content: str, description: str) -> ModelT:
    """
    Parse a successful response body into a record.

    Raises:
        UnknownResponseError: If the body is not valid JSON for the record
    """
    try:
        return model.model_validate_json(content)
    except ModelValidationError as e:
        raise UnknownResponseError.for_content(
            content, f"Unable to parse the response as {description}."
        ) from e


class APIClient:
    """
    Authenticated client for the comparison API.

    Instances are safe to share between threads and between event loops.
    Every operation is implemented once as a coroutine; blocking methods
    run it on the client's private loop and wait for the result.
    """

    def __init__(self, auth_token: str, base_url: str = CLOUD_BASE_URL, **config):
        """
        Initialize the client.

        Args:
            auth_token: API auth token for the account
            base_url: API base URL (defaults to the cloud API)
            **config: Configuration options (timeout, verify, signed_url_validity, transport)
        """
        self.auth_token = auth_token

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config(config)

        self.urls = URLs(base_url)
        self.base_url = self.urls.base_url

        self._rest = RestApiClient(
            auth_token,
            timeout=self.config['timeout'],
            verify=self.config['verify'],
            transport=self.config['transport'],
        )
        self._runner = EventLoopThread(name=f"{type(self).__name__.lower()}-client")
        logger.debug("%s client created for %s", type(self).__name__, self.base_url)

    def _validate_config(self, overrides: dict):
        """Validate client configuration."""
        unknown = set(overrides) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")

        if not isinstance(self.auth_token, str) or not self.auth_token:
            raise ConfigurationError("auth_token cannot be empty")

        if self.config['timeout'] is None or self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        if self.config['signed_url_validity'] <= 0:
            raise ConfigurationError("signed_url_validity must be positive")

        transport = self.config['transport']
        if transport is not None and not isinstance(transport, httpx.AsyncBaseTransport):
            raise ConfigurationError("transport must be an httpx.AsyncBaseTransport")

    @property
    def closed(self) -> bool:
        return self._runner.closed

    def _run(self, coro: Awaitable[T]) -> T:
        """Block until an operation completes on the client's loop."""
        try:
            return self._runner.run(coro)
        except concurrent.futures.CancelledError:
            if self._runner.closed:
                raise ClientClosedError(CLOSED_IN_FLIGHT) from None
            raise

    async def _run_async(self, coro: Awaitable[T]) -> T:
        """Await an operation running on the client's loop."""
        try:
            return await self._runner.run_async(coro)
        except asyncio.CancelledError:
            if self._runner.closed and not _current_task_cancelling():
                raise ClientClosedError(CLOSED_IN_FLIGHT) from None
            raise

    @staticmethod
    async def _translate(call: Awaitable[T], kinds: Sequence[Type[RequestError]]) -> T:
        """Await a transport call, rewriting any fault into a public error."""
        try:
            return await call
        except UnexpectedResponseError as e:
            raise classify(e, kinds) from e

    def close(self):
        """Cancel in-flight operations and release the connection pool."""
        if not self._runner.closed:
            logger.debug("Closing %s client", type(self).__name__)
        self._runner.close(self._rest.aclose)

    async def aclose(self):
        """Async variant of close() that does not block the caller's loop."""
        if self._runner.in_loop_thread():
            self.close()
            return
        await asyncio.get_running_loop().run_in_executor(None, self.close)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
