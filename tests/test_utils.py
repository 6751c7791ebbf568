"""Tests for parsing, formatting and config helpers."""

from datetime import date, datetime

import pytest

from utils.config import DEFAULT_API_BASE_URL, load_settings
from utils.formatting import format_date, format_rupee, to_date, to_date_str
from utils.parsing import parse_float, parse_int, to_display_str


class TestParsing:
    @pytest.mark.parametrize(
        "value, expected",
        [("12.5", 12.5), ("12abc", 12.0), (" 3", 3.0), (".5", 0.5), ("", 0.0), (None, 0.0),
         ("abc", 0.0), (7, 7.0), (float("nan"), 0.0), ("-2.5", -2.5)],
    )
    def test_parse_float(self, value, expected):
        assert parse_float(value) == expected

    @pytest.mark.parametrize("value, expected", [("10.7", 10), ("10", 10), ("", 0), (None, 0), (3.9, 3), ("x", 0)])
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected

    def test_display_str(self):
        assert to_display_str(0) == ""
        assert to_display_str(None) == ""
        assert to_display_str(25.0) == "25"
        assert to_display_str(2.5) == "2.5"
        assert to_display_str("100.00") == "100.00"


class TestFormatting:
    def test_rupee(self):
        assert format_rupee(1234567.5) == "₹1,234,567.50"
        assert format_rupee("12") == "₹12.00"
        assert format_rupee(None) == "₹0.00"

    def test_to_date(self):
        assert to_date("2024-03-12T22:30:00.000Z") == date(2024, 3, 12)
        assert to_date(datetime(2024, 1, 2, 23, 59)) == date(2024, 1, 2)
        assert to_date("not a date") is None
        assert to_date("") is None

    def test_date_strings(self):
        assert to_date_str("2024-03-12T00:00:00") == "2024-03-12"
        assert to_date_str(None) == ""
        assert format_date("2024-03-05") == "05 Mar 2024"
        assert format_date(None) == "-"


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.setattr("utils.config.load_dotenv", lambda: False)
        monkeypatch.delenv("API_BASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = load_settings()

        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.log_level == "INFO"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setattr("utils.config.load_dotenv", lambda: False)
        monkeypatch.setenv("API_BASE_URL", "http://orders.internal:8080/api/")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = load_settings()

        assert settings.api_base_url == "http://orders.internal:8080/api"
        assert settings.log_level == "DEBUG"
