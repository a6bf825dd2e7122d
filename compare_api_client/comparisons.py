"""
Comparisons client: create, retrieve, list and delete comparisons, build
viewer URLs, and export comparison results.
"""

import datetime
import logging
import random
import threading
from typing import Dict, List, Optional, Union

from .client import deserialize
from .constants import (
    CLOUD_BASE_URL,
    GENERATED_IDENTIFIER_CHARACTERS,
    GENERATED_IDENTIFIER_LENGTH,
)
from .exceptions import (
    BadRequestError,
    ConfigurationError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from .exports import ExportOperations, resolve_export_kind
from .models import Comparison, ComparisonList, Export, ExportKind
from .sides import FileContent, Side
from .signing import valid_until_timestamp, viewer_signature
from .validation import validate_expires, validate_export_id, validate_identifier

logger = logging.getLogger(__name__)

GET_ERRORS = (NotFoundError, BadRequestError, InvalidCredentialsError)
GET_ALL_ERRORS = (BadRequestError, InvalidCredentialsError)
CREATE_ERRORS = (BadRequestError, InvalidCredentialsError)
DELETE_ERRORS = (NotFoundError, BadRequestError, InvalidCredentialsError)

ValidUntil = Union[datetime.datetime, datetime.timedelta, None]


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def generate_identifier(rng: Optional[random.Random] = None) -> str:
    """
    Generate a random comparison identifier.

    Produces 12 ASCII letters, which is unique with very high probability.
    Pass rng to control the random source; otherwise a SystemRandom is used.
    """
    rng = rng or random.SystemRandom()
    return ''.join(
        rng.choice(GENERATED_IDENTIFIER_CHARACTERS) for _ in range(GENERATED_IDENTIFIER_LENGTH)
    )


class Comparisons(ExportOperations):
    """
    Client for the comparisons endpoint.

    Example usage:
        with Comparisons(account_id, auth_token) as comparisons:
            comparison = comparisons.create(
                Side.from_file("old.docx"),
                Side.from_url("https://example.com/new.pdf", "pdf"),
            )
            print(comparisons.signed_viewer_url(comparison.identifier))
    """

    generate_identifier = staticmethod(generate_identifier)

    def __init__(self, account_id: str, auth_token: str, base_url: str = CLOUD_BASE_URL, **config):
        """
        Initialize comparisons client.

        Args:
            account_id: API account ID
            auth_token: API auth token for the account
            base_url: API base URL (defaults to the cloud API)
            **config: Configuration options (timeout, verify, signed_url_validity, transport)
        """
        if not isinstance(account_id, str) or not account_id:
            raise ConfigurationError("account_id cannot be empty")
        self.account_id = account_id
        super().__init__(auth_token, base_url, **config)

    # Coroutines run on the client loop

    async def _get(self, identifier: str, cancel_event: Optional[threading.Event]) -> Comparison:
        content = await self._translate(
            self._rest.get(self.urls.comparison(identifier), cancel_event=cancel_event),
            GET_ERRORS,
        )
        return self._deserialize_comparison(content)

    async def _get_all(self, cancel_event: Optional[threading.Event]) -> List[Comparison]:
        content = await self._translate(
            self._rest.get(self.urls.comparisons, cancel_event=cancel_event),
            GET_ALL_ERRORS,
        )
        return self._deserialize_all(content)

    async def _delete(self, identifier: str, cancel_event: Optional[threading.Event]) -> None:
        await self._translate(
            self._rest.delete(self.urls.comparison(identifier), cancel_event=cancel_event),
            DELETE_ERRORS,
        )

    async def _create(self, data: Dict[str, Optional[str]], files: Dict[str, FileContent],
                      cancel_event: Optional[threading.Event]) -> Comparison:
        logger.debug("Creating comparison %s with %d uploaded side(s)",
                     data.get('identifier') or "(server-assigned identifier)", len(files))
        content = await self._translate(
            self._rest.post(self.urls.comparisons, data=data, files=files, cancel_event=cancel_event),
            CREATE_ERRORS,
        )
        return self._deserialize_comparison(content)

    @staticmethod
    def _deserialize_comparison(content: str) -> Comparison:
        return deserialize(Comparison, content, "a comparison")

    @staticmethod
    def _deserialize_all(content: str) -> List[Comparison]:
        return list(deserialize(
            ComparisonList, content, "a list of comparisons (expected a \"results\" array)"
        ).results)

    @staticmethod
    def _create_payload(left: Side, right: Side, identifier: Optional[str], public: bool,
                        expires: Optional[datetime.timedelta]):
        """Validate create arguments and assemble the form fields and file parts."""
        if not isinstance(left, Side) or not isinstance(right, Side):
            raise ValidationError("left and right must be Side instances (see Side.from_file / Side.from_url).")
        if identifier is not None:
            validate_identifier(identifier)
        validate_expires(expires)

        data: Dict[str, Optional[str]] = {
            'identifier': identifier,
            'public': 'true' if public else None,
            'expiry_time': (_utcnow() + expires).isoformat() if expires is not None else None,
        }
        data.update(left.form_data('left'))
        data.update(right.form_data('right'))

        files: Dict[str, FileContent] = {}
        files.update(left.file_content('left'))
        files.update(right.file_content('right'))
        return data, files

    # Public interface

    def get(self, identifier: str, cancel_event: Optional[threading.Event] = None) -> Comparison:
        """
        Retrieve a comparison.

        Raises:
            ValidationError: If identifier is malformed
            NotFoundError: If no comparison has this identifier
            InvalidCredentialsError: If the credentials were rejected
            UnknownResponseError: For any other response
        """
        validate_identifier(identifier)
        return self._run(self._get(identifier, cancel_event))

    async def get_async(self, identifier: str,
                        cancel_event: Optional[threading.Event] = None) -> Comparison:
        validate_identifier(identifier)
        return await self._run_async(self._get(identifier, cancel_event))

    def get_all(self, cancel_event: Optional[threading.Event] = None) -> List[Comparison]:
        """Retrieve every comparison in the account."""
        return self._run(self._get_all(cancel_event))

    async def get_all_async(self, cancel_event: Optional[threading.Event] = None) -> List[Comparison]:
        return await self._run_async(self._get_all(cancel_event))

    def delete(self, identifier: str, cancel_event: Optional[threading.Event] = None) -> None:
        """
        Delete a comparison.

        Raises:
            ValidationError: If identifier is malformed
            NotFoundError: If no comparison has this identifier
            InvalidCredentialsError: If the credentials were rejected
            UnknownResponseError: For any other response
        """
        validate_identifier(identifier)
        self._run(self._delete(identifier, cancel_event))

    async def delete_async(self, identifier: str,
                           cancel_event: Optional[threading.Event] = None) -> None:
        validate_identifier(identifier)
        await self._run_async(self._delete(identifier, cancel_event))

    def create(self, left: Side, right: Side, identifier: Optional[str] = None,
               public: bool = False, expires: Optional[datetime.timedelta] = None,
               cancel_event: Optional[threading.Event] = None) -> Comparison:
        """
        Create a comparison between two sides.

        Args:
            left: Original document
            right: New document
            identifier: Identifier to use; the server generates one when omitted
            public: Whether the comparison can be viewed without a signed URL
            expires: Lifetime of the comparison; it never expires when omitted
            cancel_event: Set to abandon the response once it arrives

        Raises:
            ValidationError: If identifier or expires is invalid
            BadRequestError: If the server rejected the parameters
            InvalidCredentialsError: If the credentials were rejected
            UnknownResponseError: For any other response
        """
        data, files = self._create_payload(left, right, identifier, public, expires)
        return self._run(self._create(data, files, cancel_event))

    async def create_async(self, left: Side, right: Side, identifier: Optional[str] = None,
                           public: bool = False, expires: Optional[datetime.timedelta] = None,
                           cancel_event: Optional[threading.Event] = None) -> Comparison:
        data, files = self._create_payload(left, right, identifier, public, expires)
        return await self._run_async(self._create(data, files, cancel_event))

    def public_viewer_url(self, identifier: str, wait: bool = False) -> str:
        """
        URL of the viewer for a public comparison.

        With wait=True the viewer shows a loading page until the comparison
        is ready instead of failing.
        """
        validate_identifier(identifier)
        url = self.urls.comparison_viewer(self.account_id, identifier)
        if wait:
            url += "?wait"
        return url

    def signed_viewer_url(self, identifier: str, valid_until: ValidUntil = None,
                          wait: bool = False) -> str:
        """
        Time-limited viewer URL for a private comparison.

        Args:
            identifier: Comparison identifier
            valid_until: Expiry as a UTC datetime, or a timedelta from now;
                defaults to the configured signed_url_validity
            wait: Show a loading page until the comparison is ready
        """
        validate_identifier(identifier)
        if valid_until is None:
            valid_until = datetime.timedelta(seconds=self.config['signed_url_validity'])
        if isinstance(valid_until, datetime.timedelta):
            valid_until = _utcnow() + valid_until

        timestamp = valid_until_timestamp(valid_until)
        signature = viewer_signature(self.account_id, self.auth_token, identifier, timestamp)
        url = self.urls.comparison_viewer(self.account_id, identifier)
        return f"{url}?valid_until={timestamp}&signature={signature}{'&wait' if wait else ''}"

    def run_export(self, comparison_id: str, kind: Union[ExportKind, str],
                   include_cover_page: bool = True,
                   cancel_event: Optional[threading.Event] = None) -> Export:
        """Start exporting a comparison. See Exports.create."""
        validate_identifier(comparison_id)
        export_kind = resolve_export_kind(kind)
        return self._run(self._create_export(comparison_id, export_kind, include_cover_page, cancel_event))

    async def run_export_async(self, comparison_id: str, kind: Union[ExportKind, str],
                               include_cover_page: bool = True,
                               cancel_event: Optional[threading.Event] = None) -> Export:
        validate_identifier(comparison_id)
        export_kind = resolve_export_kind(kind)
        return await self._run_async(
            self._create_export(comparison_id, export_kind, include_cover_page, cancel_event)
        )

    def get_export(self, export_id: str, cancel_event: Optional[threading.Event] = None) -> Export:
        validate_export_id(export_id)
        return self._run(self._get_export(export_id, cancel_event))

    async def get_export_async(self, export_id: str,
                               cancel_event: Optional[threading.Event] = None) -> Export:
        validate_export_id(export_id)
        return await self._run_async(self._get_export(export_id, cancel_event))
