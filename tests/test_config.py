"""Tests for configuration, warning logging and timezone helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from coltypes.core.config import ColTypesConfig, load_config
from coltypes.exceptions import ConfigurationError
from coltypes.utils.logging import WarningLog, get_logger, get_warning_log
from coltypes.utils.timezones import (
    apply_timezone,
    format_date,
    format_datetime,
    format_offset,
    localize,
    parse_offset,
    resolve_timezone,
    to_datetime,
)


class FakeLogger:
    def __init__(self):
        self.messages = []

    def warning(self, message):
        self.messages.append(message)


class TestConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in (
            "COLTYPES_LOG_LEVEL",
            "COLTYPES_LOG_FORMAT",
            "COLTYPES_TIMEZONE",
            "COLTYPES_DEFAULT_DIALECT",
            "COLTYPES_MSSQL_NO_TIMEZONE",
            "COLTYPES_ORACLE_NO_TIMEZONE",
        ):
            monkeypatch.delenv(name, raising=False)
        cfg = load_config()
        assert cfg.log_level == "INFO"
        assert cfg.log_format == "text"
        assert cfg.timezone == "+00:00"
        assert cfg.default_dialect == "mysql"
        assert cfg.mssql_no_timezone is False
        assert cfg.oracle_no_timezone is False

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("COLTYPES_LOG_LEVEL", "debug")
        monkeypatch.setenv("COLTYPES_TIMEZONE", "Europe/Paris")
        monkeypatch.setenv("COLTYPES_DEFAULT_DIALECT", "Postgres")
        monkeypatch.setenv("COLTYPES_MSSQL_NO_TIMEZONE", "yes")
        monkeypatch.setenv("COLTYPES_ORACLE_NO_TIMEZONE", "1")
        cfg = load_config()
        assert cfg.log_level == "DEBUG"
        assert cfg.timezone == "Europe/Paris"
        assert cfg.default_dialect == "postgres"
        assert cfg.mssql_no_timezone is True
        assert cfg.oracle_no_timezone is True

    @pytest.mark.parametrize(
        "name,value",
        [
            ("COLTYPES_LOG_LEVEL", "LOUD"),
            ("COLTYPES_LOG_FORMAT", "xml"),
            ("COLTYPES_DEFAULT_DIALECT", "db2"),
            ("COLTYPES_TIMEZONE", "  "),
        ],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            load_config()

    def test_as_dict(self):
        cfg = ColTypesConfig(timezone="+01:00", default_dialect="sqlite")
        result = cfg.as_dict()
        assert result["timezone"] == "+01:00"
        assert result["default_dialect"] == "sqlite"
        assert set(result) == {
            "log_level",
            "log_format",
            "timezone",
            "default_dialect",
            "mssql_no_timezone",
            "oracle_no_timezone",
        }


class TestWarningLog:
    """Test deduplicated dialect warnings."""

    def test_warns_once(self):
        logger = FakeLogger()
        log = WarningLog(logger)
        assert log.warn("http://docs", "TEXT length ignored")
        assert not log.warn("http://docs", "TEXT length ignored")
        assert logger.messages == ["TEXT length ignored >> Check: http://docs"]
        assert log.seen("TEXT length ignored")
        assert len(log) == 1

    def test_without_link(self):
        logger = FakeLogger()
        WarningLog(logger).warn("", "plain")
        assert logger.messages == ["plain"]

    def test_dedupe_ignores_link(self):
        log = WarningLog(FakeLogger())
        log.warn("http://a", "same")
        assert not log.warn("http://b", "same")

    def test_process_log(self):
        assert get_warning_log() is get_warning_log()

    def test_default_logger(self):
        assert WarningLog().logger is not None
        assert get_logger("coltypes.tests") is not None


class TestTimezones:
    """Test timezone resolution and formatting."""

    def test_parse_offset(self):
        assert parse_offset("+02:00") == timezone(timedelta(hours=2))
        assert parse_offset("-0530") == timezone(-timedelta(hours=5, minutes=30))
        assert parse_offset("UTC") is None

    def test_resolve_named_zone(self):
        zone = resolve_timezone("Europe/Paris")
        assert datetime(2020, 1, 1, tzinfo=zone).utcoffset() == timedelta(hours=1)

    def test_resolve_default(self, utc):
        assert resolve_timezone() == timezone.utc

    def test_unknown_zone(self):
        with pytest.raises(ConfigurationError, match="Unknown timezone: Mars/Olympus"):
            resolve_timezone("Mars/Olympus")

    def test_to_datetime(self):
        assert to_datetime(datetime(2020, 1, 1)) == datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert to_datetime(date(2020, 1, 1)) == datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert to_datetime("2020-01-01T10:00:00+02:00").utcoffset() == timedelta(hours=2)

    def test_to_datetime_rejects_other_values(self):
        with pytest.raises(TypeError):
            to_datetime(object())

    def test_apply_timezone(self):
        value = apply_timezone(datetime(2020, 1, 1, tzinfo=timezone.utc), "+05:30")
        assert (value.hour, value.minute) == (5, 30)

    def test_localize(self):
        assert localize("2020-01-01 10:00:00", "+03:00").utcoffset() == timedelta(hours=3)
        aware = datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert localize(aware, "+03:00") is aware

    def test_format_offset(self):
        assert format_offset(datetime(2020, 1, 1, tzinfo=timezone(timedelta(hours=-3, minutes=-30)))) == "-03:30"
        assert format_offset(datetime(2020, 1, 1, tzinfo=timezone.utc)) == "+00:00"

    def test_format_datetime(self):
        value = datetime(2020, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        assert format_datetime(value) == "2020-01-02 03:04:05.678"
        assert format_datetime(value, milliseconds=False, offset=True) == "2020-01-02 03:04:05 +00:00"

    def test_format_date(self):
        assert format_date(datetime(2020, 1, 2, 23, 0)) == "2020-01-02"
        assert format_date("2020-01-02") == "2020-01-02"
