"""Tests for settings loading."""

import pytest

from dsmr.config import Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in (
        "DSMR_STANDARD_UTC_OFFSET",
        "DSMR_DAYLIGHT_UTC_OFFSET",
        "DSMR_PARSE_FAILURE_EXIT_CODE",
    ):
        monkeypatch.delenv(var, raising=False)
    # Keep load_dotenv() away from any .env in the working tree
    monkeypatch.chdir(tmp_path)


def test_defaults():
    assert load_settings() == Settings(
        standard_utc_offset_hours=1,
        daylight_utc_offset_hours=2,
        parse_failure_exit_code=42,
    )


def test_yaml_file(tmp_path):
    config = tmp_path / "dsmr.yaml"
    config.write_text("standard_utc_offset: 0\ndaylight_utc_offset: 1\n")

    settings = load_settings(config)

    assert settings.standard_utc_offset_hours == 0
    assert settings.daylight_utc_offset_hours == 1
    assert settings.parse_failure_exit_code == 42


def test_environment_overrides_file(tmp_path, monkeypatch):
    config = tmp_path / "dsmr.yaml"
    config.write_text("parse_failure_exit_code: 3\n")
    monkeypatch.setenv("DSMR_PARSE_FAILURE_EXIT_CODE", "7")

    assert load_settings(config).parse_failure_exit_code == 7


def test_empty_file_uses_defaults(tmp_path):
    config = tmp_path / "dsmr.yaml"
    config.write_text("")

    assert load_settings(config) == Settings()


def test_non_integer_rejected(monkeypatch):
    monkeypatch.setenv("DSMR_STANDARD_UTC_OFFSET", "one")

    with pytest.raises(ValueError, match="must be an integer"):
        load_settings()


def test_offset_out_of_range(tmp_path):
    config = tmp_path / "dsmr.yaml"
    config.write_text("daylight_utc_offset: 30\n")

    with pytest.raises(ValueError, match="between -23 and 23"):
        load_settings(config)


def test_timestamp_converter_uses_offsets():
    settings = Settings(standard_utc_offset_hours=0, daylight_utc_offset_hours=0)
    convert = settings.timestamp_converter()

    assert convert(2023, 1, 1, 0, 0, 0, True) == 1672531200
