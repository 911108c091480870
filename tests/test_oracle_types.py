"""Tests for the Oracle dialect."""

from datetime import date, datetime, time, timezone

import pytest

from coltypes.core.config import config
from coltypes.models.keys import TypeKey
from coltypes.types import (
    BIGINT,
    BLOB,
    BOOLEAN,
    CHAR,
    DATE,
    DATEONLY,
    DECIMAL,
    DOUBLE,
    ENUM,
    FLOAT,
    INTEGER,
    NOW,
    REAL,
    STRING,
    TEXT,
    TIME,
    UUID,
)


@pytest.fixture
def no_timezone(monkeypatch):
    monkeypatch.setattr(config, "oracle_no_timezone", True)


class TestOracleToSql:
    """Test Oracle DDL rendering."""

    @pytest.mark.parametrize(
        "data_type,expected",
        [
            (STRING(), "NVARCHAR2(255)"),
            (STRING(100, True), "RAW(100)"),
            (CHAR(5), "CHAR(5)"),
            (CHAR(5, True), "RAW(5)"),
            (TEXT(), "CLOB"),
            (BLOB(), "BLOB"),
            (BOOLEAN(), "NUMBER(1)"),
            (UUID(), "NVARCHAR2(36)"),
            (NOW(), "CURRENT_TIMESTAMP"),
            (TIME(), "TIMESTAMP WITH LOCAL TIME ZONE"),
            (DATE(), "TIMESTAMP WITH LOCAL TIME ZONE"),
            (DATEONLY(), "DATE"),
            (DECIMAL(), "NUMBER"),
            (DECIMAL(10, 2), "NUMBER(10,2)"),
            (DECIMAL(8), "NUMBER(8)"),
            (INTEGER(), "INTEGER"),
            (INTEGER(11).unsigned(), "INTEGER(11)"),
            (REAL(), "REAL"),
            (FLOAT(), "FLOAT"),
            (FLOAT(10), "FLOAT(10)"),
            (DOUBLE(12), "NUMBER(15,5)"),
            (ENUM("a"), "NVARCHAR2(255)"),
        ],
    )
    def test_render(self, oracle, data_type, expected):
        assert oracle.to_sql(data_type) == expected

    def test_date_without_timezone(self, oracle, no_timezone):
        assert oracle.to_sql(DATE()) == "TIMESTAMP"

    def test_bigint(self, oracle, warnings):
        assert oracle.to_sql(BIGINT()) == "NUMBER(19)"
        assert warnings.seen("Oracle does not support BIGINT. Plain `NUMBER(19)` will be used instead.")

    def test_integer_zerofill(self, oracle, warnings):
        assert oracle.to_sql(INTEGER().zerofill()) == "INTEGER"
        assert warnings.seen("ORACLE does not support INTEGER with options. Plain `INTEGER` will be used instead.")

    def test_long_strings_warn(self, oracle, warnings):
        assert oracle.to_sql(STRING(5000)) == "NVARCHAR2(5000)"
        assert oracle.to_sql(STRING(3000, True)) == "RAW(3000)"
        assert len(warnings) == 1
        assert oracle.to_sql(STRING(3000)) == "NVARCHAR2(3000)"
        assert len(warnings) == 1

    @pytest.mark.parametrize(
        "length,expected,message",
        [
            ("tiny", "NVARCHAR2(256)", "`NVARCHAR(256)` will be used instead."),
            ("medium", "NVARCHAR2(2000)", "`NVARCHAR(2000)` will be used instead."),
            ("long", "NVARCHAR2(4000)", "`NVARCHAR(4000)` will be used instead."),
        ],
    )
    def test_sized_text(self, oracle, warnings, length, expected, message):
        assert oracle.to_sql(TEXT(length)) == expected
        assert warnings.seen(
            f"ORACLE does not support TEXT with the `length` = `{length}` option. {message}"
        )

    def test_text_with_length(self, oracle, warnings):
        assert oracle.to_sql(TEXT(500)) == "NVARCHAR2(500)"
        assert warnings.seen("As parameter length has been given, NVARCHAR2(length) will be used")

    @pytest.mark.parametrize(
        "length,expected", [("tiny", "RAW(256)"), (100, "RAW(100)"), (5000, "RAW(2000)"), ("long", "RAW(2000)")]
    )
    def test_sized_blob(self, oracle, warnings, length, expected):
        assert oracle.to_sql(BLOB(length)) == expected
        assert len(warnings) == 1


class TestOracleLiterals:
    """Test Oracle literal rendering."""

    def test_date(self, oracle):
        value = datetime(2020, 1, 1, 10, tzinfo=timezone.utc)
        assert oracle.literal(DATE(), value, {"timezone": "+00:00"}) == (
            "TO_TIMESTAMP_TZ('2020-01-01 10:00:00.000 +00:00','YYYY-MM-DD HH24:MI:SS.FFTZH:TZM')"
        )

    def test_date_without_timezone(self, oracle, no_timezone):
        value = datetime(2020, 1, 1, 10, tzinfo=timezone.utc)
        assert oracle.literal(DATE(), value, {"timezone": "+02:00"}) == (
            "TO_TIMESTAMP('2020-01-01 12:00:00.000','YYYY-MM-DD HH24:MI:SS.FF')"
        )

    def test_dateonly(self, oracle):
        assert oracle.literal(DATEONLY(), date(2020, 1, 2)) == "TO_DATE('2020/01/02','YYYY/MM/DD')"

    def test_time(self, oracle):
        assert oracle.literal(TIME(), time(10, 30), {"timezone": "+00:00"}) == (
            "TO_TIMESTAMP_TZ('10:30:00.000 +00:00','HH24:MI:SS.FFTZH:TZM')"
        )

    @pytest.mark.parametrize("value,expected", [(True, "1"), (False, "0"), ("0", "0"), ("yes", "1")])
    def test_boolean(self, oracle, value, expected):
        assert oracle.literal(BOOLEAN(), value) == expected

    def test_now(self, oracle):
        assert oracle.stringify(NOW(), "now") == (
            "SELECT TO_CHAR(SYSDATE, 'YYYY-MM-DD HH24:MI:SS') \"NOW\" FROM DUAL;"
        )

    def test_strings(self, oracle):
        assert oracle.literal(STRING(), "it's") == "'it''s'"
        assert oracle.literal(STRING(2, True), b"\x01\xff") == "hextoraw('01ff')"

    def test_blob(self, oracle):
        assert oracle.literal(BLOB(), b"\x01") == "hextoraw('01')"


class TestOracleParse:
    """Test decoding of Oracle driver values."""

    def test_dateonly(self, oracle):
        assert oracle.parse("DATE", datetime(2020, 1, 2, 0, 0)) == "2020-01-02"

    def test_codes(self, oracle):
        assert oracle.from_source("NVARCHAR2") is TypeKey.STRING
        assert oracle.from_source("TIMESTAMP WITH LOCAL TIME ZONE") is TypeKey.DATE
        assert oracle.from_source("RAW") is TypeKey.CHAR

    def test_unsupported_keys(self, oracle):
        assert not oracle.supports(TypeKey.BIGINT)
        assert not oracle.supports(TypeKey.GEOMETRY)
