"""
Export jobs: render a finished comparison into a downloadable document.
"""

import threading
from typing import Optional, Union

from .client import APIClient, deserialize
from .constants import CLOUD_BASE_URL
from .exceptions import (
    BadRequestError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from .models import Export, ExportKind
from .validation import validate_export_id, validate_identifier

CREATE_EXPORT_ERRORS = (BadRequestError, NotFoundError, InvalidCredentialsError)
GET_EXPORT_ERRORS = (NotFoundError, BadRequestError, InvalidCredentialsError)


def resolve_export_kind(kind: Union[ExportKind, str]) -> ExportKind:
    """Accept an ExportKind or its wire string ("single_page", "combined", "left", "right")."""
    try:
        return ExportKind(kind)
    except ValueError:
        allowed = ", ".join(k.value for k in ExportKind)
        raise ValidationError(f"Unsupported export kind {kind!r}. Supported kinds: {allowed}") from None


class ExportOperations(APIClient):
    """Export coroutines shared by the Exports and Comparisons clients."""

    async def _create_export(self, comparison_id: str, kind: ExportKind, include_cover_page: bool,
                             cancel_event: Optional[threading.Event]) -> Export:
        content = await self._translate(
            self._rest.post(
                self.urls.exports,
                data={
                    'comparison': comparison_id,
                    'kind': kind.value,
                    'include_cover_page': 'true' if include_cover_page else 'false',
                },
                cancel_event=cancel_event,
            ),
            CREATE_EXPORT_ERRORS,
        )
        return deserialize(Export, content, "an export")

    async def _get_export(self, export_id: str, cancel_event: Optional[threading.Event]) -> Export:
        content = await self._translate(
            self._rest.get(self.urls.export(export_id), cancel_event=cancel_event),
            GET_EXPORT_ERRORS,
        )
        return deserialize(Export, content, "an export")


class Exports(ExportOperations):
    """
    Client for the exports endpoint.

    Example:
        with Exports(auth_token) as exports:
            export = exports.create("my-comparison", ExportKind.COMBINED)
            export = exports.get(export.identifier)
    """

    def __init__(self, auth_token: str, base_url: str = CLOUD_BASE_URL, **config):
        super().__init__(auth_token, base_url, **config)

    def create(self, comparison_id: str, kind: Union[ExportKind, str],
               include_cover_page: bool = True,
               cancel_event: Optional[threading.Event] = None) -> Export:
        """
        Start exporting a comparison.

        Raises:
            ValidationError: If comparison_id or kind is invalid
            BadRequestError: If the server rejected the parameters
            NotFoundError: If the comparison does not exist
            InvalidCredentialsError: If the auth token was rejected
            UnknownResponseError: For any other response
        """
        validate_identifier(comparison_id)
        export_kind = resolve_export_kind(kind)
        return self._run(self._create_export(comparison_id, export_kind, include_cover_page, cancel_event))

    async def create_async(self, comparison_id: str, kind: Union[ExportKind, str],
                           include_cover_page: bool = True,
                           cancel_event: Optional[threading.Event] = None) -> Export:
        validate_identifier(comparison_id)
        export_kind = resolve_export_kind(kind)
        return await self._run_async(
            self._create_export(comparison_id, export_kind, include_cover_page, cancel_event)
        )

    def get(self, export_id: str, cancel_event: Optional[threading.Event] = None) -> Export:
        """Fetch an export, e.g. to poll until it is ready and has a download URL."""
        validate_export_id(export_id)
        return self._run(self._get_export(export_id, cancel_event))

    async def get_async(self, export_id: str, cancel_event: Optional[threading.Event] = None) -> Export:
        validate_export_id(export_id)
        return await self._run_async(self._get_export(export_id, cancel_event))
