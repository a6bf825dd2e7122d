"""
Pre-flight validation of caller-supplied arguments.

Every check raises ValidationError before any request is issued.
"""

import datetime
import string
from typing import Optional
from urllib.parse import urlsplit

from .constants import (
    ALLOWED_FILE_TYPES,
    IDENTIFIER_EXTRA_CHARACTERS,
    IDENTIFIER_LENGTH_MAX,
    IDENTIFIER_LENGTH_MIN,
    SOURCE_URL_SCHEMES,
)
from .exceptions import ValidationError

_IDENTIFIER_CHARACTERS = frozenset(
    string.ascii_letters + string.digits + IDENTIFIER_EXTRA_CHARACTERS
)
_ALLOWED_FILE_TYPES_TEXT = ", ".join(sorted(ALLOWED_FILE_TYPES))


def validate_identifier(identifier: str) -> str:
    """Check a comparison identifier's length and character set."""
    if not isinstance(identifier, str):
        raise ValidationError(f"Identifier must be a string, got {type(identifier).__name__}.")
    if len(identifier) < IDENTIFIER_LENGTH_MIN:
        raise ValidationError(
            f"Comparison identifier must be at least {IDENTIFIER_LENGTH_MIN} characters."
        )
    if len(identifier) > IDENTIFIER_LENGTH_MAX:
        raise ValidationError(
            f"Comparison identifier must be at most {IDENTIFIER_LENGTH_MAX} characters."
        )
    if any(c not in _IDENTIFIER_CHARACTERS for c in identifier):
        raise ValidationError(
            "Comparison identifier can only contain ASCII letters, numbers, "
            f"and the \"{IDENTIFIER_EXTRA_CHARACTERS}\" characters."
        )
    return identifier


def normalize_file_type(file_type: str) -> str:
    """
    Validate a side file type and return its canonical form.

    A leading dot is stripped and the result is lower-cased, so ".PDF",
    "Pdf" and "pdf" all become "pdf".
    """
    if not isinstance(file_type, str):
        raise ValidationError(f"File type must be a string, got {type(file_type).__name__}.")
    normalized = file_type.lstrip('.').lower()
    if normalized not in ALLOWED_FILE_TYPES:
        raise ValidationError(
            f"An unsupported comparison side file type was specified ({file_type!r}). "
            f"Supported types: {_ALLOWED_FILE_TYPES_TEXT}"
        )
    return normalized


def validate_expires(expires: Optional[datetime.timedelta]) -> None:
    """An expiry, when given, must lie strictly in the future."""
    if expires is None:
        return
    if not isinstance(expires, datetime.timedelta):
        raise ValidationError("expires must be a datetime.timedelta.")
    if expires.total_seconds() <= 0:
        raise ValidationError("The comparison expiry time must be in the future.")


def validate_source_url(source_url: str) -> str:
    """A side source URL must be an absolute http or https URL."""
    try:
        parts = urlsplit(source_url)
    except (TypeError, ValueError, AttributeError):
        parts = None
    if parts is None or parts.scheme.lower() not in SOURCE_URL_SCHEMES or not parts.netloc:
        raise ValidationError(
            f"source_url could not be parsed as an absolute HTTP or HTTPS URL: {source_url!r}"
        )
    return source_url


def validate_export_id(export_id: str) -> str:
    """An export identifier must be a non-empty string."""
    if not isinstance(export_id, str):
        raise ValidationError(f"Export identifier must be a string, got {type(export_id).__name__}.")
    if not export_id:
        raise ValidationError("Export identifier cannot be empty.")
    return export_id
