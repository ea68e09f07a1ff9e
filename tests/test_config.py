"""Tests for configuration loading and validation."""

import pytest

from salon_scheduling.config import AppConfig, BusinessConfig, SchedulingConfig, _validate_config


def _config(business: BusinessConfig = None, scheduling: SchedulingConfig = None) -> AppConfig:
    return AppConfig(
        business=business or BusinessConfig(),
        scheduling=scheduling or SchedulingConfig(),
        log_level="INFO",
    )


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_defaults(self):
        config = AppConfig()
        assert config.scheduling.slot_interval_minutes == 30
        assert config.scheduling.backtracking_max_items == 20
        assert config.scheduling.backtracking_max_lanes == 4

    def test_unknown_timezone(self):
        config = _config(business=BusinessConfig(timezone="Mars/Olympus_Mons"))
        with pytest.raises(ValueError, match="BUSINESS_TIMEZONE"):
            _validate_config(config)

    def test_weekday_open_after_close(self):
        config = _config(business=BusinessConfig(weekday_open_hour=19, weekday_close_hour=9))
        with pytest.raises(ValueError, match="WEEKDAY hours"):
            _validate_config(config)

    def test_sunday_close_past_midnight(self):
        config = _config(business=BusinessConfig(sunday_open_hour=11, sunday_close_hour=25))
        with pytest.raises(ValueError, match="SUNDAY hours"):
            _validate_config(config)

    def test_close_at_midnight_allowed(self):
        config = _config(business=BusinessConfig(weekday_open_hour=9, weekday_close_hour=24))
        _validate_config(config)

    def test_invalid_slot_interval(self):
        config = _config(scheduling=SchedulingConfig(slot_interval_minutes=20))
        with pytest.raises(ValueError, match="SLOT_INTERVAL_MINUTES"):
            _validate_config(config)

    def test_negative_buffer(self):
        config = _config(scheduling=SchedulingConfig(default_buffer_hours=-1.0))
        with pytest.raises(ValueError, match="DEFAULT_BUFFER_HOURS"):
            _validate_config(config)

    def test_zero_backtracking_cutoff(self):
        config = _config(scheduling=SchedulingConfig(backtracking_max_lanes=0))
        with pytest.raises(ValueError, match="BACKTRACKING_MAX_LANES"):
            _validate_config(config)

    def test_safe_int_parsing(self):
        from salon_scheduling.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_rejects_garbage(self, monkeypatch):
        from salon_scheduling.config import _safe_int

        monkeypatch.setenv("SALON_TEST_INT", "nine")
        with pytest.raises(ValueError, match="SALON_TEST_INT"):
            _safe_int("SALON_TEST_INT", "9")

    def test_safe_float_parsing(self):
        from salon_scheduling.config import _safe_float

        assert _safe_float("NONEXISTENT_VAR_12345", "1.5") == pytest.approx(1.5)
