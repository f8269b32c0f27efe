"""
In-memory book store.

Holds every book record for the lifetime of the process. Records are kept in
insertion order and all access goes through a single lock.
"""

import secrets
import string
from datetime import datetime, timezone
from enum import Enum
from threading import Lock
from typing import Callable, Dict, List, Optional

import structlog

from bookshelf.models import Book, BookFilters, BookPayload, format_timestamp

logger = structlog.get_logger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits + "_-"

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def generate_book_id(size: int = 21) -> str:
    """Generate a random URL-safe identifier."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookStoreError(Exception):
    """Base class for store errors."""


class BookNotFoundError(BookStoreError):
    """Raised when no book has the requested id."""

    def __init__(self, book_id: str):
        super().__init__(f"Book with ID '{book_id}' not found")
        self.book_id = book_id


class ValidationReason(str, Enum):
    """Why a payload was rejected."""
    MISSING_NAME = "missing_name"
    INVALID_PAGE_RANGE = "invalid_page_range"


class BookValidationError(BookStoreError):
    """Raised when a payload would produce an invalid record."""

    def __init__(self, reason: ValidationReason):
        super().__init__(reason.value)
        self.reason = reason


class BookStore:
    """Process-local collection of book records."""

    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None
    ):
        self._id_generator = id_generator or generate_book_id
        self._clock = clock or utc_now
        self._lock = Lock()
        self._books: Dict[str, Book] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    def __contains__(self, book_id: object) -> bool:
        with self._lock:
            return book_id in self._books

    @staticmethod
    def _validate(name: Optional[str], page_count: int, read_page: int) -> None:
        if not name:
            raise BookValidationError(ValidationReason.MISSING_NAME)
        if read_page > page_count:
            raise BookValidationError(ValidationReason.INVALID_PAGE_RANGE)

    def _new_id(self) -> str:
        book_id = self._id_generator()
        while book_id in self._books:
            logger.warning("Generated book id collided, retrying", book_id=book_id)
            book_id = self._id_generator()
        return book_id

    def create(self, payload: BookPayload) -> Book:
        """
        Validate a payload and store it as a new book.

        Args:
            payload: Submitted book fields

        Returns:
            The stored record with id, timestamps and finished flag assigned

        Raises:
            BookValidationError: If the name is missing or readPage > pageCount
        """
        page_count = payload.page_count if payload.page_count is not None else 0
        read_page = payload.read_page if payload.read_page is not None else 0
        self._validate(payload.name, page_count, read_page)

        with self._lock:
            timestamp = format_timestamp(self._clock())
            book = Book(
                id=self._new_id(),
                name=payload.name,
                year=payload.year,
                author=payload.author,
                summary=payload.summary,
                publisher=payload.publisher,
                page_count=page_count,
                read_page=read_page,
                finished=page_count == read_page,
                reading=payload.reading,
                inserted_at=timestamp,
                updated_at=timestamp,
            )
            self._books[book.id] = book

        logger.debug("Book created", book_id=book.id, name=book.name)
        return book

    def list(self, filters: Optional[BookFilters] = None) -> List[Book]:
        """Return books matching the filters, in insertion order."""
        with self._lock:
            books = list(self._books.values())
        if filters is None:
            return books
        return [book for book in books if filters.matches(book)]

    def get(self, book_id: str) -> Book:
        """Return the book with the given id or raise BookNotFoundError."""
        with self._lock:
            book = self._books.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def update(self, book_id: str, payload: BookPayload) -> Book:
        """
        Replace a book's fields with the submitted values.

        Absent or falsy submitted values keep the stored value. The id and
        insertedAt are preserved, finished is recomputed and updatedAt
        refreshed.

        Raises:
            BookNotFoundError: If no book has the given id
            BookValidationError: If the name is missing or the merged
                readPage exceeds the merged pageCount
        """
        with self._lock:
            current = self._books.get(book_id)
            if current is None:
                raise BookNotFoundError(book_id)

            page_count = payload.page_count or current.page_count
            read_page = payload.read_page or current.read_page
            self._validate(payload.name, page_count, read_page)

            updated_at = max(format_timestamp(self._clock()), current.inserted_at)
            book = Book(
                id=current.id,
                name=payload.name,
                year=payload.year or current.year,
                author=payload.author or current.author,
                summary=payload.summary or current.summary,
                publisher=payload.publisher or current.publisher,
                page_count=page_count,
                read_page=read_page,
                finished=page_count == read_page,
                reading=payload.reading or current.reading,
                inserted_at=current.inserted_at,
                updated_at=updated_at,
            )
            self._books[book_id] = book

        logger.debug("Book updated", book_id=book_id)
        return book

    def delete(self, book_id: str) -> Book:
        """Remove and return the book with the given id."""
        with self._lock:
            book = self._books.pop(book_id, None)
        if book is None:
            raise BookNotFoundError(book_id)
        logger.debug("Book deleted", book_id=book_id)
        return book

    def clear(self) -> None:
        with self._lock:
            self._books.clear()
