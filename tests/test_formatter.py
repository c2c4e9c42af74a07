"""Tests for common_log/formatter.py"""

import json

import pytest

from common_log.formatter import format_error, format_json, format_text, get_formatter
from common_log.parser import ParseError, parse_common_log
from common_log.pipeline import ParsedLine


@pytest.fixture
def entry(valid_line):
    return parse_common_log(valid_line)


class TestFormatText:
    def test_fields_in_order(self, entry):
        assert format_text(entry) == "127.0.0.1 2024-01-01T12:00:00+00:00 GET /api 200 1234"


class TestFormatJson:
    def test_valid_json_object(self, entry):
        data = json.loads(format_json(entry))
        assert data == {
            "ip": "127.0.0.1",
            "timestamp": "2024-01-01T12:00:00+00:00",
            "method": "GET",
            "path": "/api",
            "status": 200,
            "size": 1234,
        }

    def test_single_line(self, entry):
        assert "\n" not in format_json(entry)


class TestFormatError:
    def test_location_and_reason(self):
        parsed = ParsedLine(source="a.log", line_number=7, line="x", result=ParseError.INVALID_TIMESTAMP)
        assert format_error(parsed) == "a.log:7: Invalid timestamp"


class TestGetFormatter:
    def test_text(self):
        assert get_formatter("text") is format_text

    def test_json(self):
        assert get_formatter("json") is format_json

    def test_default_is_text(self):
        assert get_formatter() is format_text

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_formatter("xml")
