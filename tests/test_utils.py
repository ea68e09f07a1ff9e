"""Tests for shared utility functions."""

from datetime import date, datetime, time

from salon_scheduling.utils import format_hhmm, parse_unavailable_weekdays, sunday_weekday


class TestParseUnavailableWeekdays:
    def test_single_day(self):
        assert parse_unavailable_weekdays("1") == frozenset({1})

    def test_comma_separated_with_spaces(self):
        assert parse_unavailable_weekdays(" 0, 6 ") == frozenset({0, 6})

    def test_blank_and_none(self):
        assert parse_unavailable_weekdays("") == frozenset()
        assert parse_unavailable_weekdays(None) == frozenset()

    def test_ignores_invalid_tokens(self):
        assert parse_unavailable_weekdays("1,,x,9,-1") == frozenset({1})

    def test_duplicates_collapse(self):
        assert parse_unavailable_weekdays("3,3") == frozenset({3})


class TestSundayWeekday:
    def test_sunday_is_zero(self):
        assert sunday_weekday(date(2026, 3, 1)) == 0

    def test_monday_is_one(self):
        assert sunday_weekday(date(2026, 3, 2)) == 1

    def test_saturday_is_six(self):
        assert sunday_weekday(date(2026, 3, 7)) == 6


class TestFormatHHMM:
    def test_datetime(self):
        assert format_hhmm(datetime(2026, 3, 2, 9, 5)) == "09:05"

    def test_time(self):
        assert format_hhmm(time(14, 30)) == "14:30"
