from datetime import date

import pytest

from ledger.parsers.locale import (
    day_key,
    format_locale_date,
    format_locale_number,
    month_key,
    parse_locale_date,
    parse_locale_number,
    year_key,
)


class TestParseLocaleDate:
    def test_valid_date(self):
        assert parse_locale_date("15.03.2024") == date(2024, 3, 15)

    def test_surrounding_whitespace(self):
        assert parse_locale_date("  01.01.2024 ") == date(2024, 1, 1)

    def test_single_digit_parts(self):
        assert parse_locale_date("5.3.2024") == date(2024, 3, 5)

    @pytest.mark.parametrize("value", [None, "", "   ", "2024-03-15", "15.03", "aa.03.2024", "Total"])
    def test_unusable_values(self, value):
        assert parse_locale_date(value) is None

    def test_out_of_range_day_rolls_over(self):
        assert parse_locale_date("31.04.2024") == date(2024, 5, 1)

    def test_day_zero_rolls_back(self):
        assert parse_locale_date("00.03.2024") == date(2024, 2, 29)

    def test_month_thirteen_rolls_into_next_year(self):
        assert parse_locale_date("01.13.2024") == date(2025, 1, 1)


class TestParseLocaleNumber:
    def test_thousands_and_decimal_comma(self):
        assert parse_locale_number("1'234,56") == 1234.56

    def test_plain_integer(self):
        assert parse_locale_number("45") == 45.0

    def test_thousands_without_decimals(self):
        assert parse_locale_number("1'234,00") == 1234.0

    def test_negative(self):
        assert parse_locale_number("-12,30") == -12.3

    @pytest.mark.parametrize("value", [None, "", "  ", "abc", "CHF"])
    def test_unusable_values_are_zero(self, value):
        assert parse_locale_number(value) == 0.0

    def test_trailing_garbage_is_ignored(self):
        assert parse_locale_number("12,50 CHF") == 12.5


def test_format_locale_date():
    assert format_locale_date(date(2024, 3, 5)) == "05.03.2024"


def test_format_locale_number():
    assert format_locale_number(1234.5) == "1234,50"
    assert format_locale_number(0.0) == ""
    assert format_locale_number(None) == ""


def test_format_then_parse_keeps_value():
    assert parse_locale_number(format_locale_number(1234.5)) == 1234.5


def test_bucket_keys():
    value = date(2024, 3, 5)
    assert year_key(value) == "2024"
    assert month_key(value) == "2024-03"
    assert day_key(value) == "2024-03-05"
