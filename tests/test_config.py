"""Tests for configuration loading and validation."""

import pytest

from talent_dispatch.config import (
    AppConfig,
    BackendConfig,
    CalendarConfig,
    SuggestionConfig,
    _safe_bool,
    _safe_float,
    _safe_int,
    _validate_config,
)


def _suggestions(**overrides) -> SuggestionConfig:
    values = dict(perfect_threshold=100, good_threshold=75, partial_threshold=50,
                  include_pending=True, max_results=0)
    values.update(overrides)
    return SuggestionConfig(**values)


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="sunday", first_slot_hour=8, last_slot_hour=18),
            suggestions=_suggestions(),
            backend=BackendConfig(timeout_seconds=5.0),
        )
        _validate_config(config)  # should not raise

    def test_invalid_week_start(self):
        config = AppConfig(calendar=CalendarConfig(week_start="friday"), suggestions=_suggestions())
        with pytest.raises(ValueError, match="CALENDAR_WEEK_START"):
            _validate_config(config)

    def test_slot_hour_out_of_range(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="monday", first_slot_hour=8, last_slot_hour=24),
            suggestions=_suggestions(),
        )
        with pytest.raises(ValueError, match="CALENDAR_LAST_SLOT_HOUR"):
            _validate_config(config)

    def test_first_hour_after_last(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="sunday", first_slot_hour=18, last_slot_hour=8),
            suggestions=_suggestions(),
        )
        with pytest.raises(ValueError, match="must not be after"):
            _validate_config(config)

    def test_thresholds_must_descend(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="sunday", first_slot_hour=8, last_slot_hour=18),
            suggestions=_suggestions(good_threshold=100),
        )
        with pytest.raises(ValueError, match="strictly descending"):
            _validate_config(config)

    def test_partial_threshold_positive(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="sunday", first_slot_hour=8, last_slot_hour=18),
            suggestions=_suggestions(partial_threshold=0),
        )
        with pytest.raises(ValueError, match="MATCH_PARTIAL_THRESHOLD"):
            _validate_config(config)

    def test_negative_max_results(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="sunday", first_slot_hour=8, last_slot_hour=18),
            suggestions=_suggestions(max_results=-1),
        )
        with pytest.raises(ValueError, match="SUGGEST_MAX_RESULTS"):
            _validate_config(config)

    def test_backend_timeout_positive(self):
        config = AppConfig(
            calendar=CalendarConfig(week_start="sunday", first_slot_hour=8, last_slot_hour=18),
            suggestions=_suggestions(),
            backend=BackendConfig(timeout_seconds=0),
        )
        with pytest.raises(ValueError, match="BACKEND_TIMEOUT_SECONDS"):
            _validate_config(config)


class TestSafeParsers:
    def test_safe_int_valid(self, monkeypatch):
        monkeypatch.setenv("TEST_INT_VAR", "42")
        assert _safe_int("TEST_INT_VAR", "0") == 42

    def test_safe_int_default(self, monkeypatch):
        monkeypatch.delenv("TEST_INT_VAR", raising=False)
        assert _safe_int("TEST_INT_VAR", "7") == 7

    def test_safe_int_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_INT_VAR", "abc")
        with pytest.raises(ValueError, match="TEST_INT_VAR"):
            _safe_int("TEST_INT_VAR", "0")

    def test_safe_float_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_FLOAT_VAR", "fast")
        with pytest.raises(ValueError, match="TEST_FLOAT_VAR"):
            _safe_float("TEST_FLOAT_VAR", "1.0")

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("YES", True), ("1", True),
        ("false", False), ("no", False), ("0", False),
    ])
    def test_safe_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("TEST_BOOL_VAR", raw)
        assert _safe_bool("TEST_BOOL_VAR", "true") is expected

    def test_safe_bool_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_BOOL_VAR", "maybe")
        with pytest.raises(ValueError, match="TEST_BOOL_VAR"):
            _safe_bool("TEST_BOOL_VAR", "true")
