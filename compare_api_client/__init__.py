"""
Comparison API Client Library

A Python client for the Draftable document comparison REST API: create,
retrieve, list and delete comparisons, run exports, and build signed
viewer URLs.

Example usage:
    from compare_api_client import Comparisons, Side

    with Comparisons("account-id", "auth-token") as comparisons:
        comparison = comparisons.create(Side.from_file("old.pdf"), Side.from_file("new.pdf"))
        url = comparisons.signed_viewer_url(comparison.identifier)
"""

from .client import APIClient
from .comparisons import Comparisons, generate_identifier
from .exports import Exports
from .models import Comparison, ComparisonSide, Export, ExportKind
from .sides import FileSide, Side, URLSide
from .exceptions import (
    CompareAPIError,
    ConfigurationError,
    ValidationError,
    ClientClosedError,
    OperationCancelledError,
    RequestError,
    BadRequestError,
    InvalidCredentialsError,
    NotFoundError,
    UnknownResponseError
)
from .constants import (
    CLOUD_BASE_URL,
    DEFAULT_CONFIG,
    ALLOWED_FILE_TYPES
)

__version__ = "1.0.0"
__all__ = [
    "APIClient",
    "Comparisons",
    "Exports",
    "generate_identifier",
    "Comparison",
    "ComparisonSide",
    "Export",
    "ExportKind",
    "Side",
    "FileSide",
    "URLSide",
    "CompareAPIError",
    "ConfigurationError",
    "ValidationError",
    "ClientClosedError",
    "OperationCancelledError",
    "RequestError",
    "BadRequestError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UnknownResponseError",
    "CLOUD_BASE_URL",
    "DEFAULT_CONFIG",
    "ALLOWED_FILE_TYPES"
]
