"""Tests for status classification in fakewebservices.errors."""

from __future__ import annotations

import logging

import httpx
import pytest

from fakewebservices.errors import (
    GenericAPIError,
    ResourceNotFound,
    Unauthorized,
    check_response,
)
from fakewebservices.schemas.jsonapi import JSONAPIError


class TestCheckResponse:
    @pytest.mark.parametrize("status_code", [200, 201, 204, 299])
    def test_success_passes(self, status_code: int) -> None:
        assert check_response(httpx.Response(status_code)) is None

    def test_unauthorized_ignores_body(self) -> None:
        response = httpx.Response(401, json={"errors": [{"title": "Token expired"}]})
        with pytest.raises(Unauthorized) as exc_info:
            check_response(response)
        assert str(exc_info.value) == "unauthorized"

    def test_not_found_ignores_body(self) -> None:
        with pytest.raises(ResourceNotFound) as exc_info:
            check_response(httpx.Response(404, json={"errors": [{"title": "gone"}]}))
        assert str(exc_info.value) == "resource not found"

    def test_errors_document(self) -> None:
        response = httpx.Response(
            422,
            json={
                "errors": [
                    {"status": "422", "title": "Invalid size", "detail": "size must be positive"},
                    {"status": 422, "title": "Name is taken"},
                ]
            },
        )
        with pytest.raises(GenericAPIError) as exc_info:
            check_response(response)

        error = exc_info.value
        assert [entry.title for entry in error.errors] == ["Invalid size", "Name is taken"]
        assert str(error) == "Invalid size\n\nsize must be positive\nName is taken"

    def test_undecodable_body_uses_status_line(self) -> None:
        with pytest.raises(GenericAPIError) as exc_info:
            check_response(httpx.Response(500, text="upstream exploded"))
        assert str(exc_info.value) == "500 Internal Server Error"
        assert exc_info.value.errors == []

    def test_truncated_errors_document_uses_status_line(self, caplog: pytest.LogCaptureFixture) -> None:
        response = httpx.Response(502, content=b'{"errors": [{"title": "Bad gat')
        with caplog.at_level(logging.DEBUG, logger="fakewebservices.errors"):
            with pytest.raises(GenericAPIError) as exc_info:
                check_response(response)
        assert str(exc_info.value) == "502 Bad Gateway"
        assert exc_info.value.__cause__ is None
        assert "Undecodable error body for 502 Bad Gateway" in caplog.text

    def test_empty_errors_uses_status_line(self) -> None:
        with pytest.raises(GenericAPIError, match="400 Bad Request"):
            check_response(httpx.Response(400, json={"errors": []}))

    def test_non_errors_json_uses_status_line(self) -> None:
        with pytest.raises(GenericAPIError, match="409 Conflict"):
            check_response(httpx.Response(409, json={"message": "conflict"}))


class TestGenericAPIError:
    def test_message_is_built_from_entries(self) -> None:
        error = GenericAPIError(
            400,
            [JSONAPIError(title="First"), JSONAPIError(title="Second", detail="More")],
            status_line="400 Bad Request",
        )
        assert error.message == "First\nSecond\n\nMore"
        assert error.status_code == 400

    def test_status_line_defaults_to_code(self) -> None:
        assert str(GenericAPIError(418)) == "418"
