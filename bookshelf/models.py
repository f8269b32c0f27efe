"""
API models and schemas for the Bookshelf API.

Attributes use snake_case in Python and camelCase on the wire
(``pageCount``, ``readPage``, ``insertedAt`` ...).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


TRUE_FLAGS = frozenset({"1", "true", "yes", "on"})
FALSE_FLAGS = frozenset({"0", "false", "no", "off"})


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """
    Parse a boolean query parameter.

    Args:
        value: Raw query string value, or None when the parameter is absent

    Returns:
        True or False, or None when the parameter is absent or blank

    Raises:
        ValueError: If the value is not a recognized boolean spelling
    """
    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        return None
    if normalized in TRUE_FLAGS:
        return True
    if normalized in FALSE_FLAGS:
        return False
    raise ValueError(f"Unrecognized boolean value: {value!r}")


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Base model exchanging camelCase keys with clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseStatus(str, Enum):
    """Response envelope status."""
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


class BookPayload(CamelModel):
    """Request body for creating or updating a book."""
    name: Optional[str] = Field(None, description="Book title")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: Optional[int] = Field(None, ge=0, description="Total number of pages")
    read_page: Optional[int] = Field(None, ge=0, description="Last page read")
    reading: Optional[bool] = Field(None, description="Whether the book is being read")


class Book(CamelModel):
    """A stored book record."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., min_length=1, description="Book title")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: int = Field(0, ge=0, description="Total number of pages")
    read_page: int = Field(0, ge=0, description="Last page read")
    finished: bool = Field(..., description="Whether readPage equals pageCount")
    reading: Optional[bool] = Field(None, description="Whether the book is being read")
    inserted_at: str = Field(..., description="Creation timestamp")
    updated_at: str = Field(..., description="Last update timestamp")

    def summarize(self) -> "BookSummary":
        """Reduce the record to its list projection."""
        return BookSummary(id=self.id, name=self.name, publisher=self.publisher)


class BookSummary(CamelModel):
    """Reduced book projection returned by the list endpoint."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Book title")
    publisher: Optional[str] = Field(None, description="Publisher name")


class BookFilters(BaseModel):
    """Parsed filters for book listing."""
    name: Optional[str] = Field(None, description="Case-insensitive substring of the name")
    reading: Optional[bool] = Field(None, description="Filter by reading flag")
    finished: Optional[bool] = Field(None, description="Filter by finished flag")

    def matches(self, book: Book) -> bool:
        """Check whether a book satisfies every filter that is set."""
        if self.name and self.name.casefold() not in book.name.casefold():
            return False
        if self.reading is not None and book.reading != self.reading:
            return False
        if self.finished is not None and book.finished != self.finished:
            return False
        return True


class MessageResponse(BaseModel):
    """Plain message response."""
    message: str = Field(..., description="Greeting message")


class ActionResponse(BaseModel):
    """Successful action acknowledgement."""
    status: ResponseStatus = Field(ResponseStatus.SUCCESS, description="Response status")
    message: str = Field(..., description="Outcome message")


class BookIdData(CamelModel):
    book_id: str = Field(..., description="Identifier of the created book")


class BookCreatedResponse(BaseModel):
    """Response for a newly created book."""
    status: ResponseStatus = Field(ResponseStatus.SUCCESS, description="Response status")
    message: str = Field(..., description="Outcome message")
    data: BookIdData


class BookListData(BaseModel):
    books: List[BookSummary] = Field(..., description="Matching books")


class BookListResponse(BaseModel):
    """Response for book listing."""
    status: ResponseStatus = Field(ResponseStatus.SUCCESS, description="Response status")
    data: BookListData


class BookDetailData(BaseModel):
    book: Book


class BookDetailResponse(BaseModel):
    """Response for a single book."""
    status: ResponseStatus = Field(ResponseStatus.SUCCESS, description="Response status")
    data: BookDetailData


class FailResponse(BaseModel):
    """Client-caused failure."""
    status: ResponseStatus = Field(ResponseStatus.FAIL, description="Response status")
    message: str = Field(..., description="Failure reason")


class ErrorResponse(BaseModel):
    """Unexpected server-side failure."""
    status: ResponseStatus = Field(ResponseStatus.ERROR, description="Response status")
    message: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")
