"""
Records returned by the comparison API (Pydantic v2).

Field names follow the wire format; python-side names differ only where
the wire name would shadow a common builtin meaning (``public``).
"""

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExportKind(str, Enum):
    """Rendering modes for a comparison export."""

    SINGLE_PAGE = "single_page"
    COMBINED = "combined"
    LEFT = "left"
    RIGHT = "right"


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_json(self) -> str:
        """Indented JSON using wire field names, with null fields omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def __str__(self) -> str:
        return self.to_json()


class ComparisonSide(_Record):
    """One side of an existing comparison, as reported by the API."""

    file_type: str
    source_url: Optional[str] = None
    display_name: Optional[str] = None


class Comparison(_Record):
    """A comparison between two documents."""

    identifier: str
    left: ComparisonSide
    right: ComparisonSide
    is_public: bool = Field(alias="public")
    creation_time: datetime.datetime
    expiry_time: Optional[datetime.datetime] = None
    ready_time: Optional[datetime.datetime] = None
    failed: Optional[bool] = None
    error_message: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.ready_time is not None

    @model_validator(mode="after")
    def _check_status(self) -> "Comparison":
        if self.ready:
            if self.failed is None:
                raise ValueError("failed must not be null once the comparison is ready")
        elif self.failed is not None:
            raise ValueError("failed must be null while the comparison is not ready")

        if self.error_message is None:
            if self.failed:
                raise ValueError("error_message must not be null if failed is true")
        elif not self.failed:
            raise ValueError("error_message must be null if failed is false or null")
        return self


class ComparisonList(_Record):
    """Body of the list-comparisons response."""

    results: List[Comparison]


class Export(_Record):
    """An export of a comparison to a downloadable document."""

    identifier: str
    comparison: str
    url: Optional[str] = None
    kind: str
    ready: bool
    include_cover_page: bool = True
    failed: Optional[bool] = None
    error_message: Optional[str] = None
