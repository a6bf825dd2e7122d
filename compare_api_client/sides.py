"""
Comparison inputs ("sides").

A side is either a document uploaded with the request (FileSide) or a URL
the service downloads itself (URLSide). Both contribute prefixed form fields
to the create-comparison request; only file sides contribute file parts.
"""

import os
from dataclasses import dataclass
from typing import BinaryIO, Dict, Optional, Union

from .constants import SIDE_NAMES
from .exceptions import ValidationError
from .validation import normalize_file_type, validate_source_url

FileContent = Union[bytes, BinaryIO]


def _check_side_name(side_name: str) -> None:
    if side_name not in SIDE_NAMES:
        raise ValidationError(f"side_name must be one of {SIDE_NAMES}, got {side_name!r}")


class Side:
    """One of the two documents being compared."""

    file_type: str
    display_name: Optional[str]

    def fields(self) -> Dict[str, Optional[str]]:
        """Unprefixed form fields; implemented by each side variant."""
        raise NotImplementedError

    def files(self) -> Dict[str, FileContent]:
        """Unprefixed file parts; implemented by each side variant."""
        raise NotImplementedError

    def form_data(self, side_name: str) -> Dict[str, Optional[str]]:
        """Form fields for this side, keyed as ``<side_name>.<field>``."""
        _check_side_name(side_name)
        return {f"{side_name}.{key}": value for key, value in self.fields().items()}

    def file_content(self, side_name: str) -> Dict[str, FileContent]:
        """File parts for this side, keyed as ``<side_name>.<field>``."""
        _check_side_name(side_name)
        return {f"{side_name}.{key}": value for key, value in self.files().items()}

    @staticmethod
    def from_url(source_url: str, file_type: str, display_name: Optional[str] = None) -> "URLSide":
        """Side fetched by the service from an http(s) URL."""
        return URLSide(
            source_url=source_url,
            file_type=file_type,
            display_name=display_name,
        )

    @staticmethod
    def from_bytes(data: bytes, file_type: str, display_name: Optional[str] = None) -> "FileSide":
        """Side uploaded from an in-memory document."""
        return FileSide(content=bytes(data), file_type=file_type,
                        display_name=display_name)

    @staticmethod
    def from_stream(stream: BinaryIO, file_type: str, display_name: Optional[str] = None) -> "FileSide":
        """Side uploaded from an open binary stream. The caller keeps ownership of the stream."""
        return FileSide(content=stream, file_type=file_type,
                        display_name=display_name)

    @staticmethod
    def from_file(path: Union[str, os.PathLike], file_type: Optional[str] = None,
                  display_name: Optional[str] = None) -> "FileSide":
        """
        Side uploaded from a local file.

        When file_type is omitted it is inferred from the file extension.
        """
        if file_type is None:
            file_type = os.path.splitext(os.fspath(path))[1]
            if not file_type:
                raise ValidationError(
                    "Could not infer the file extension from the given path. "
                    "Please provide the file type explicitly."
                )
        file_type = normalize_file_type(file_type)
        with open(path, 'rb') as f:
            content = f.read()
        return FileSide(content=content, file_type=file_type, display_name=display_name)


@dataclass(frozen=True)
class FileSide(Side):
    content: FileContent
    file_type: str
    display_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'file_type', normalize_file_type(self.file_type))

    def fields(self) -> Dict[str, Optional[str]]:
        return {
            'file_type': self.file_type,
            'display_name': self.display_name,
        }

    def files(self) -> Dict[str, FileContent]:
        return {'file': self.content}


@dataclass(frozen=True)
class URLSide(Side):
    source_url: str
    file_type: str
    display_name: Optional[str] = None

    def __post_init__(self):
        validate_source_url(self.source_url)
        object.__setattr__(self, 'file_type', normalize_file_type(self.file_type))

    def fields(self) -> Dict[str, Optional[str]]:
        return {
            'source_url': self.source_url,
            'file_type': self.file_type,
            'display_name': self.display_name,
        }

    def files(self) -> Dict[str, FileContent]:
        return {}
