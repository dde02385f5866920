"""
Pydantic models for book data.

``BookBase`` holds the fields shared by requests and responses,
``BookCreate`` is the POST payload and ``BookRead`` extends the base
with the storage-assigned ``id``.  ``BookUpdate`` makes every field
optional and is used for both PUT and PATCH; only fields the client
actually sent are applied.
"""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictBool, field_validator


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def _iso_date(value: Any) -> Any:
    # Only ISO-8601 strings or dates; numbers would otherwise be read as
    # unix timestamps.
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError("must be an ISO-8601 date string")


class BookBase(BaseModel):
    title: str = Field(..., example="The Great Gatsby")
    author: str = Field(..., example="F. Scott Fitzgerald")
    published_date: date = Field(..., example="1925-04-10")
    isbn: str = Field(..., example="9780743273565")
    available: StrictBool = Field(True, example=True)

    @field_validator("title", "author", "isbn")
    @classmethod
    def non_empty(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("published_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _iso_date(v)


class BookCreate(BookBase):
    """Schema for creating a book.  ``available`` defaults to true."""
    pass


class BookRead(BookBase):
    """Schema for reading a book from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class BookUpdate(BaseModel):
    """Schema for updating a book.

    All fields are optional.  Fields left out of the request keep their
    stored value; explicit ``null`` is rejected since every book field
    is required.
    """

    title: str | None = None
    author: str | None = None
    published_date: date | None = None
    isbn: str | None = None
    available: StrictBool | None = None

    @field_validator("title", "author", "isbn")
    @classmethod
    def non_empty(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v)

    @field_validator("published_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _iso_date(v)

    def changes(self) -> dict:
        """Return the fields the client sent, rejecting explicit nulls."""
        data = self.model_dump(exclude_unset=True)
        nulls = sorted(k for k, v in data.items() if v is None)
        if nulls:
            raise ValueError(f"Fields may not be null: {', '.join(nulls)}")
        return data


class BookCreated(BaseModel):
    id: int
    message: str = Field(..., example="Book created successfully")


class MessageResponse(BaseModel):
    message: str
