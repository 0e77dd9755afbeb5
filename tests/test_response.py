"""Tests for the response envelope helpers."""

import re

from contactdesk.api.errors import format_validation_errors
from contactdesk.api.response import create_response, error_response, success_response, utc_timestamp

TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestEnvelope:
    def test_timestamp_format(self):
        assert TIMESTAMP.match(utc_timestamp())

    def test_create_response(self):
        body = create_response(True, [1, 2], "Listed")

        assert body["success"] is True
        assert body["data"] == [1, 2]
        assert body["message"] == "Listed"
        assert TIMESTAMP.match(body["timestamp"])

    def test_defaults(self):
        assert success_response({"id": 1})["message"] == "Success"
        error = error_response()
        assert error["success"] is False
        assert error["data"] is None
        assert error["message"] == "Error"


class TestFormatValidationErrors:
    def test_strips_location_prefix(self):
        errors = [
            {"loc": ("body", "firstName"), "msg": "String should have at least 2 characters"},
            {"loc": ("query", "status"), "msg": "Input should be 'TODO'"},
        ]

        assert format_validation_errors(errors) == [
            {"field": "firstName", "message": "String should have at least 2 characters"},
            {"field": "status", "message": "Input should be 'TODO'"},
        ]

    def test_nested_path(self):
        errors = [{"loc": ("body", "address", "zipCode"), "msg": "Field required"}]

        assert format_validation_errors(errors)[0]["field"] == "address.zipCode"

    def test_value_error_prefix_removed(self):
        errors = [{"loc": ("body", "email"), "msg": "Value error, Field cannot be null"}]

        assert format_validation_errors(errors)[0]["message"] == "Field cannot be null"

    def test_whole_body_error(self):
        errors = [{"loc": ("body",), "msg": "Field required"}]

        assert format_validation_errors(errors) == [{"field": "", "message": "Field required"}]
