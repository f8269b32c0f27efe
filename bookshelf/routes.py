"""
Book routes for the Bookshelf API.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from bookshelf import messages
from bookshelf.models import (
    ActionResponse, BookCreatedResponse, BookDetailData, BookDetailResponse,
    BookFilters, BookIdData, BookListData, BookListResponse, BookPayload,
    ErrorResponse, FailResponse, MessageResponse, parse_flag
)
from bookshelf.store import BookNotFoundError, BookStore, BookValidationError, ValidationReason

logger = structlog.get_logger(__name__)

router = APIRouter()

ADD_FAILURES = {
    ValidationReason.MISSING_NAME: messages.ADD_MISSING_NAME,
    ValidationReason.INVALID_PAGE_RANGE: messages.ADD_INVALID_PAGE_RANGE,
}

UPDATE_FAILURES = {
    ValidationReason.MISSING_NAME: messages.UPDATE_MISSING_NAME,
    ValidationReason.INVALID_PAGE_RANGE: messages.UPDATE_INVALID_PAGE_RANGE,
}


def get_book_store(request: Request) -> BookStore:
    """Resolve the store owned by the running application."""
    return request.app.state.book_store


def respond(model, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    # Unset optional fields are left out of the body, not rendered as null
    return JSONResponse(
        status_code=status_code,
        content=model.model_dump(mode="json", by_alias=True, exclude_none=True)
    )


def fail(message: str, status_code: int) -> JSONResponse:
    return respond(FailResponse(message=message), status_code)


def _filter_flag(param: str, value: Optional[str]) -> Optional[bool]:
    try:
        return parse_flag(value)
    except ValueError:
        logger.warning("Ignoring unrecognized filter value", param=param, value=value)
        return None


@router.get("/", response_model=MessageResponse, tags=["Health"])
async def root():
    """Root endpoint, doubles as a liveness check."""
    return respond(MessageResponse(message=messages.HELLO))


@router.post(
    "/books",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": FailResponse}, 500: {"model": ErrorResponse}},
    tags=["Books"]
)
async def add_book(payload: BookPayload, store: BookStore = Depends(get_book_store)):
    """
    Add a new book.

    - **name** is required
    - **readPage** must not be greater than **pageCount**
    """
    try:
        book = store.create(payload)
    except BookValidationError as e:
        return fail(ADD_FAILURES[e.reason], status.HTTP_400_BAD_REQUEST)
    except Exception:
        logger.exception("Failed to add book")
        return respond(
            ErrorResponse(message=messages.ADD_ERROR),
            status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return respond(
        BookCreatedResponse(message=messages.ADD_SUCCESS, data=BookIdData(book_id=book.id)),
        status.HTTP_201_CREATED
    )


@router.get("/books", response_model=BookListResponse, tags=["Books"])
async def list_books(
    name: Optional[str] = None,
    reading: Optional[str] = None,
    finished: Optional[str] = None,
    store: BookStore = Depends(get_book_store)
):
    """
    List book summaries.

    - **name**: case-insensitive substring of the book name
    - **reading**: 1/0 (also true/false, yes/no, on/off)
    - **finished**: 1/0 (also true/false, yes/no, on/off)
    """
    filters = BookFilters(
        name=name or None,
        reading=_filter_flag("reading", reading),
        finished=_filter_flag("finished", finished),
    )
    books = store.list(filters)
    return respond(BookListResponse(data=BookListData(books=[book.summarize() for book in books])))


@router.get(
    "/books/{book_id}",
    response_model=BookDetailResponse,
    responses={404: {"model": FailResponse}},
    tags=["Books"]
)
async def get_book(book_id: str, store: BookStore = Depends(get_book_store)):
    """Get a single book by ID."""
    try:
        book = store.get(book_id)
    except BookNotFoundError:
        return fail(messages.BOOK_NOT_FOUND, status.HTTP_404_NOT_FOUND)
    return respond(BookDetailResponse(data=BookDetailData(book=book)))


@router.put(
    "/books/{book_id}",
    response_model=ActionResponse,
    responses={400: {"model": FailResponse}, 404: {"model": FailResponse}},
    tags=["Books"]
)
async def update_book(book_id: str, payload: BookPayload, store: BookStore = Depends(get_book_store)):
    """
    Update a book.

    Omitted fields keep their stored value. **name** is required and
    **readPage** must not be greater than **pageCount**.
    """
    try:
        store.update(book_id, payload)
    except BookNotFoundError:
        return fail(messages.UPDATE_NOT_FOUND, status.HTTP_404_NOT_FOUND)
    except BookValidationError as e:
        return fail(UPDATE_FAILURES[e.reason], status.HTTP_400_BAD_REQUEST)
    return respond(ActionResponse(message=messages.UPDATE_SUCCESS))


@router.delete(
    "/books/{book_id}",
    response_model=ActionResponse,
    responses={404: {"model": FailResponse}},
    tags=["Books"]
)
async def delete_book(book_id: str, store: BookStore = Depends(get_book_store)):
    """Delete a book by ID."""
    try:
        store.delete(book_id)
    except BookNotFoundError:
        return fail(messages.DELETE_NOT_FOUND, status.HTTP_404_NOT_FOUND)
    return respond(ActionResponse(message=messages.DELETE_SUCCESS))
