"""
Endpoint URL construction.
"""

from typing import Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlsplit, urlunsplit

from .exceptions import ConfigurationError

QueryParameters = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _split_absolute(url: str):
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ConfigurationError(f"Invalid URL {url!r}: {e}")
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(f"URL must be absolute: {url!r}")
    return parts


def path_segment(value: str) -> str:
    """
    Percent-encode a value for use as a single URL path segment.

    Slashes, "?" and "#" are escaped, and "." or ".." are escaped so they
    cannot be resolved as dot segments.
    """
    segment = quote(str(value), safe='')
    if segment in ('.', '..'):
        segment = segment.replace('.', '%2E')
    return segment


def encode_query(query_params: QueryParameters) -> str:
    """
    Percent-encode query parameters, keeping the order they were given in.

    Keys and values are encoded independently (RFC 3986, spaces as %20).
    """
    if isinstance(query_params, Mapping):
        query_params = query_params.items()
    return '&'.join(
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
        for key, value in query_params
    )


def build_url(endpoint: str, query_params: Optional[QueryParameters] = None) -> str:
    """
    Append query parameters to an absolute endpoint URL.

    Parameters are added after any query string already present.

    Raises:
        ConfigurationError: If endpoint is not an absolute URL
    """
    parts = _split_absolute(endpoint)
    if not query_params:
        return endpoint

    encoded = encode_query(query_params)
    if not encoded:
        return endpoint
    query = f"{parts.query}&{encoded}" if parts.query else encoded
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


class URLs:
    """Resource URLs relative to an API base URL."""

    def __init__(self, base_url: str):
        parts = _split_absolute(base_url)
        if parts.scheme.lower() not in ('http', 'https'):
            raise ConfigurationError(f"base_url must be an http or https URL: {base_url!r}")
        self.base_url = base_url[:-1] if base_url.endswith('/') else base_url

    @property
    def comparisons(self) -> str:
        return f"{self.base_url}/comparisons"

    @property
    def exports(self) -> str:
        return f"{self.base_url}/exports"

    def comparison(self, identifier: str) -> str:
        return f"{self.comparisons}/{path_segment(identifier)}"

    def export(self, identifier: str) -> str:
        return f"{self.exports}/{path_segment(identifier)}"

    def comparison_viewer(self, account_id: str, identifier: str) -> str:
        return f"{self.comparisons}/viewer/{path_segment(account_id)}/{path_segment(identifier)}"
