"""
Unit tests for Pydantic models and helpers.
Tests data validation, serialization, and edge cases.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from bookshelf.models import (
    Book, BookFilters, BookPayload, ErrorResponse, ResponseStatus,
    format_timestamp, parse_flag
)


@pytest.fixture
def book():
    return Book(
        id="abc",
        name="Dune",
        publisher="Chilton Books",
        page_count=10,
        read_page=10,
        finished=True,
        reading=False,
        inserted_at="2024-01-01T00:00:00.000Z",
        updated_at="2024-01-01T00:00:00.000Z"
    )


class TestParseFlag:
    """Test cases for boolean query parsing."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
    def test_true_values(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "False", "no", "off"])
    def test_false_values(self, value):
        assert parse_flag(value) is False

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_absent_values(self, value):
        assert parse_flag(value) is None

    def test_unrecognized_value(self):
        with pytest.raises(ValueError) as exc_info:
            parse_flag("maybe")
        assert "maybe" in str(exc_info.value)


class TestFormatTimestamp:
    """Test cases for timestamp rendering."""

    def test_utc_with_milliseconds(self):
        moment = datetime(2024, 3, 5, 7, 8, 9, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-03-05T07:08:09.123Z"

    def test_converts_other_timezones(self):
        moment = datetime(2024, 3, 5, 9, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2024-03-05T07:00:00.000Z"

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"


class TestBookPayload:
    """Test cases for BookPayload model."""

    def test_camel_case_keys(self):
        payload = BookPayload.model_validate({"name": "Dune", "pageCount": 5, "readPage": 2})
        assert payload.page_count == 5
        assert payload.read_page == 2

    def test_everything_optional(self):
        payload = BookPayload()
        assert payload.name is None
        assert payload.page_count is None

    def test_negative_page_count_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            BookPayload(name="Dune", pageCount=-1)
        assert "greater than or equal to 0" in str(exc_info.value)

    def test_server_fields_ignored(self):
        payload = BookPayload.model_validate({"name": "Dune", "id": "forged", "finished": True})
        assert "id" not in payload.model_dump()
        assert "finished" not in payload.model_dump()


class TestBook:
    """Test cases for Book model."""

    def test_serializes_with_camel_case(self, book):
        data = book.model_dump(by_alias=True)

        assert data["pageCount"] == 10
        assert data["readPage"] == 10
        assert data["insertedAt"] == "2024-01-01T00:00:00.000Z"
        assert data["updatedAt"] == "2024-01-01T00:00:00.000Z"
        assert "page_count" not in data

    def test_is_immutable(self, book):
        with pytest.raises(ValidationError):
            book.id = "other"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Book(
                id="abc",
                name="",
                finished=True,
                inserted_at="2024-01-01T00:00:00.000Z",
                updated_at="2024-01-01T00:00:00.000Z"
            )

    def test_summarize(self, book):
        summary = book.summarize()
        assert summary.model_dump() == {"id": "abc", "name": "Dune", "publisher": "Chilton Books"}


class TestBookFilters:
    """Test cases for BookFilters model."""

    def test_no_filters_match_everything(self, book):
        assert BookFilters().matches(book)

    def test_name_substring(self, book):
        assert BookFilters(name="DUN").matches(book)
        assert not BookFilters(name="war").matches(book)

    def test_flags(self, book):
        assert BookFilters(finished=True, reading=False).matches(book)
        assert not BookFilters(reading=True).matches(book)
        assert not BookFilters(finished=False).matches(book)


class TestResponses:
    """Test cases for response envelopes."""

    def test_error_response_defaults(self):
        response = ErrorResponse(message="boom")
        assert response.status == ResponseStatus.ERROR
        assert response.model_dump(mode="json", exclude_none=True) == {"status": "error", "message": "boom"}
