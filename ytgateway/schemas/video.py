"""Video Action Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - SearchRequest.keyword: non-empty string
    - SearchRequest.page >= 1 (default 1); pageSize 1..50 (default 20)
    - Integer fields take whole numbers: 2.0 is accepted; 2.5, "2" and true are rejected
    - UrlRequest.url must parse as an absolute URL; the original string is kept
"""

from datetime import datetime

from pydantic import (
    AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from ytgateway.core.domain_types import DownloadId, DownloadStatus

MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 20

_url_adapter = TypeAdapter(AnyUrl)


class SearchRequest(BaseModel):
    """Search body: keyword plus 1-based pagination."""
    model_config = ConfigDict(populate_by_name=True)

    keyword: str
    page: int = Field(1, gt=0)
    page_size: int = Field(
        DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize",
    )

    @field_validator("page", "page_size", mode="before")
    @classmethod
    def reject_strings_and_booleans(cls, v):
        if isinstance(v, (str, bool)):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return v

    @field_validator("keyword")
    @classmethod
    def keyword_not_empty(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("keyword_required", "Keyword is required")
        return v


class UrlRequest(BaseModel):
    """Body carrying a single video URL."""
    url: str

    @field_validator("url")
    @classmethod
    def url_is_valid(cls, v: str) -> str:
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise PydanticCustomError("url_parsing", "Invalid URL provided")
        return v


class InfoRequest(UrlRequest):
    """Metadata lookup body."""


class DownloadRequest(UrlRequest):
    """Download body, same shape as InfoRequest."""


class DownloadTicket(BaseModel):
    """Placeholder payload returned by the download action."""
    model_config = ConfigDict(populate_by_name=True)

    url: str
    status: DownloadStatus = DownloadStatus.QUEUED
    download_id: DownloadId = Field(alias="downloadId")
    started_at: datetime = Field(alias="startedAt")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
