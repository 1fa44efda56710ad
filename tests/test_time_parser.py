"""Tests for loose time-of-day parsing and slot labels."""

import pytest

from talent_dispatch.scheduling.time_parser import (
    ParsedTime,
    UnparseableTimeError,
    format_slot_label,
    normalize_hour,
    parse_time,
    try_normalize_hour,
)


class TestNormalizeHour:
    @pytest.mark.parametrize("text,expected", [
        ("8:00 am", 8),
        ("8:30 AM", 8),
        ("8 am", 8),
        ("8am", 8),
        ("2 PM", 14),
        ("2:45 pm", 14),
        ("11:59 pm", 23),
        ("10:30 a.m.", 10),
        ("14:00", 14),
        ("9", 9),
        ("07:15:00", 7),
        ("  3 pm  ", 15),
    ])
    def test_accepted_forms(self, text, expected):
        assert normalize_hour(text) == expected

    def test_midnight(self):
        assert normalize_hour("12:00 am") == 0

    def test_noon(self):
        assert normalize_hour("12:00 pm") == 12
        assert normalize_hour("12pm") == 12

    def test_minutes_are_kept_on_parse(self):
        assert parse_time("8:15 pm") == ParsedTime(hour=20, minute=15)


class TestUnparseable:
    @pytest.mark.parametrize("text", [
        "", "   ", "noon", "morning", "13 pm", "0 am", "24:00",
        "8:60 am", "8:5 am", "8 xm", "abc 8 am",
    ])
    def test_rejected(self, text):
        with pytest.raises(UnparseableTimeError):
            parse_time(text)

    def test_none_rejected(self):
        with pytest.raises(UnparseableTimeError):
            normalize_hour(None)

    def test_error_keeps_text(self):
        with pytest.raises(UnparseableTimeError) as exc_info:
            parse_time("whenever")
        assert exc_info.value.time_text == "whenever"

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_time("late")

    def test_try_normalize_returns_none(self):
        assert try_normalize_hour("sometime") is None
        assert try_normalize_hour(None) is None


class TestSlotLabels:
    @pytest.mark.parametrize("hour,label", [
        (0, "12 AM"), (8, "8 AM"), (11, "11 AM"),
        (12, "12 PM"), (14, "2 PM"), (23, "11 PM"),
    ])
    def test_format(self, hour, label):
        assert format_slot_label(hour) == label

    def test_every_label_normalizes_back_to_its_hour(self):
        for hour in range(24):
            assert normalize_hour(format_slot_label(hour)) == hour

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_out_of_range(self, hour):
        with pytest.raises(ValueError):
            format_slot_label(hour)
