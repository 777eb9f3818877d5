"""
Tests for centralized configuration.
"""
import pytest
from chartwise.core.config import Settings, get_settings, reload_settings


def test_settings_defaults(monkeypatch):
    """Test that settings have sensible defaults."""
    for name in ("MAX_DATASET_ROWS", "RATE_LIMIT_PER_MINUTE", "LOG_LEVEL", "DIVERSITY_THRESHOLD",
                 "TYPE_RATIO_THRESHOLD", "DONUT_MAX_CARDINALITY", "INLINE_CHART_DATA"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.max_dataset_rows == 50000
    assert settings.rate_limit_per_minute == 60
    assert settings.log_level == "INFO"
    assert settings.type_ratio_threshold == 0.8
    assert settings.diversity_threshold == 5
    assert settings.donut_max_cardinality == 8
    assert settings.infer_boolean_columns is True
    assert settings.inline_chart_data is True


def test_settings_from_env(monkeypatch):
    """Test loading settings from environment variables."""
    monkeypatch.setenv("MAX_DATASET_ROWS", "100")
    monkeypatch.setenv("DIVERSITY_THRESHOLD", "3")
    monkeypatch.setenv("TYPE_RATIO_THRESHOLD", "0.6")
    monkeypatch.setenv("INLINE_CHART_DATA", "false")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    try:
        settings = reload_settings()

        assert settings.max_dataset_rows == 100
        assert settings.diversity_threshold == 3
        assert settings.type_ratio_threshold == 0.6
        assert settings.inline_chart_data is False
        assert settings.log_level == "DEBUG"
    finally:
        monkeypatch.undo()
        reload_settings()


@pytest.mark.parametrize("raw, expected", [
    ("1", True), ("yes", True), ("On", True), ("0", False), ("no", False), ("", False),
])
def test_boolean_flags(monkeypatch, raw, expected):
    monkeypatch.setenv("INFER_BOOLEAN_COLUMNS", raw)

    assert Settings.from_env().infer_boolean_columns is expected


def test_settings_validation():
    """Test that settings validate input ranges."""
    with pytest.raises(ValueError):
        Settings(max_dataset_rows=0)  # Below minimum

    with pytest.raises(ValueError):
        Settings(type_ratio_threshold=1.0)  # Must stay below 1

    with pytest.raises(ValueError):
        Settings(diversity_threshold=-1)

    with pytest.raises(ValueError):
        Settings(donut_max_cardinality=1)

    with pytest.raises(ValueError):
        Settings(log_level="INVALID")  # Invalid log level


def test_settings_properties():
    """Test computed properties."""
    settings = Settings(allowed_origins="http://a.example, http://b.example,,")

    assert settings.allowed_origins_list == ["http://a.example", "http://b.example"]


def test_settings_singleton():
    """Test that get_settings returns singleton."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
