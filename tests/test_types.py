"""Tests for the base column types (no dialect)."""

import math
from datetime import date, datetime, timedelta, timezone

import pydantic
import pytest

from coltypes.exceptions import SchemaError, ValidationError
from coltypes.models.keys import TypeKey
from coltypes.models.options import TypeOptions
from coltypes.types import (
    ARRAY,
    BLOB,
    BOOLEAN,
    CHAR,
    DATE,
    DATEONLY,
    DECIMAL,
    DOUBLE,
    ENUM,
    FLOAT,
    GEOMETRY,
    INTEGER,
    JSON,
    NOW,
    NUMBER,
    RANGE,
    STRING,
    TEXT,
    TIME,
    VIRTUAL,
)


class TestConstruction:
    """Test the equivalent constructor call forms."""

    def test_positional_keyword_and_mapping_forms_match(self):
        forms = [STRING(100, True), STRING(length=100, binary=True), STRING({"length": 100, "binary": True})]
        assert {str(t) for t in forms} == {"VARCHAR(100) BINARY"}

    def test_options_instance_passes_through(self):
        options = TypeOptions(length=20, binary=True)
        assert STRING(options).options == options
        assert DATE(options).options is options

    def test_string_default_length(self):
        assert STRING().length == 255
        assert str(CHAR()) == "CHAR(255)"

    def test_unknown_option_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            STRING(colour="red")

    def test_options_are_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            STRING().options.length = 10

    def test_class_subtype_is_instantiated(self):
        array = ARRAY(INTEGER)
        assert isinstance(array.subtype, INTEGER)

    def test_geometry_option_aliases(self):
        geometry = GEOMETRY({"type": "POINT", "srid": 4326})
        assert geometry.geometry_type == "POINT"
        assert geometry.srid == 4326

    def test_virtual(self):
        virtual = VIRTUAL(INTEGER, ["first", "last"])
        assert isinstance(virtual.return_type, INTEGER)
        assert virtual.fields == ("first", "last")
        assert VIRTUAL().fields == ()

    def test_repr_does_not_render(self):
        assert repr(ARRAY()) == "<ARRAY ARRAY>"


class TestToSql:
    """Test default DDL rendering."""

    @pytest.mark.parametrize(
        "data_type,expected",
        [
            (STRING(100), "VARCHAR(100)"),
            (CHAR(10).binary(), "CHAR(10) BINARY"),
            (TEXT(), "TEXT"),
            (TEXT("tiny"), "TINYTEXT"),
            (TEXT("Medium"), "MEDIUMTEXT"),
            (TEXT({"length": "long"}), "LONGTEXT"),
            (NUMBER(10, 2, unsigned=True), "NUMBER(10,2) UNSIGNED"),
            (INTEGER(), "INTEGER"),
            (INTEGER(11), "INTEGER(11)"),
            (FLOAT(10, 2), "FLOAT(10,2)"),
            (DOUBLE(), "DOUBLE PRECISION"),
            (DECIMAL(), "DECIMAL"),
            (DECIMAL(10), "DECIMAL(10)"),
            (DECIMAL(10, 2), "DECIMAL(10,2)"),
            (BOOLEAN(), "TINYINT(1)"),
            (TIME(), "TIME"),
            (DATE(), "DATETIME"),
            (DATEONLY(), "DATE"),
            (NOW(), "NOW"),
            (BLOB(), "BLOB"),
            (BLOB("tiny"), "TINYBLOB"),
            (ENUM("a", "b"), "ENUM('a', 'b')"),
            (ARRAY(DECIMAL(10, 2)), "DECIMAL(10,2)[]"),
            (RANGE(), "int4range"),
            (RANGE(DATE), "tstzrange"),
            (RANGE(DATEONLY), "daterange"),
        ],
    )
    def test_render(self, data_type, expected):
        assert data_type.to_sql() == expected

    def test_array_without_subtype(self):
        with pytest.raises(SchemaError):
            ARRAY().to_sql()

    def test_range_cast_type(self):
        assert RANGE().to_cast_type() == "integer"
        assert RANGE({"subtype": DECIMAL}).to_cast_type() == "numeric"

    def test_range_rejects_unsupported_subtype(self):
        with pytest.raises(SchemaError, match="Unsupported range subtype"):
            RANGE(STRING)

    def test_keys(self):
        assert STRING().key is TypeKey.STRING
        assert CHAR().key is TypeKey.CHAR
        assert DOUBLE.key.value == "DOUBLE PRECISION"


class TestEnumValues:
    """Test ENUM value forms."""

    def test_forms(self):
        expected = ("a", "b", "c")
        assert ENUM("a", "b", "c").values == expected
        assert ENUM(["a", "b"], "c").values == expected
        assert ENUM({"values": ["a", "b", "c"]}).values == expected

    def test_empty(self):
        assert ENUM().values == ()


class TestStringify:
    """Test literal stringification."""

    def test_json_is_compact(self):
        assert JSON().stringify({"a": [1, 2], "b": "é"}) == '{"a":[1,2],"b":"é"}'

    def test_json_non_finite_becomes_null(self):
        assert JSON().stringify({"a": math.nan, "b": [math.inf, -math.inf], "c": 1.5}) == '{"a":null,"b":[null,null],"c":1.5}'
        assert JSON().stringify(math.nan) == "null"

    def test_blob_hex(self):
        assert BLOB().stringify(bytes([0xAB, 0xCD])) == "X'abcd'"
        assert BLOB().stringify([1, 2]) == "X'0102'"
        assert BLOB().stringify("ab") == "X'6162'"

    def test_float_non_finite(self):
        assert FLOAT().stringify(math.nan) == "'NaN'"
        assert FLOAT().stringify(math.inf) == "'Infinity'"
        assert FLOAT().stringify(-math.inf) == "'-Infinity'"
        assert FLOAT().stringify("abc") == "'NaN'"
        assert FLOAT().stringify(1.5) == 1.5

    def test_date_in_timezone(self):
        value = datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert DATE().stringify(value, {"timezone": "+02:00"}) == "2020-01-01 02:00:00.000 +02:00"

    def test_naive_date_is_utc(self):
        value = datetime(2020, 1, 1, 12, 30)
        assert DATE().stringify(value, {"timezone": "-05:30"}) == "2020-01-01 07:00:00.000 -05:30"

    def test_dateonly(self):
        assert DATEONLY().stringify(date(2020, 1, 2)) == "2020-01-02"
        assert DATEONLY().stringify(datetime(2020, 1, 2, 23, 0)) == "2020-01-02"


class TestSanitize:
    """Test sanitization right after assignment."""

    def test_date_string_becomes_datetime(self):
        result = DATE().sanitize("2020-01-01 10:00:00")
        assert result == datetime(2020, 1, 1, 10, tzinfo=timezone.utc)

    def test_date_raw_is_untouched(self):
        assert DATE().sanitize("2020-01-01", {"raw": True}) == "2020-01-01"

    @pytest.mark.parametrize("value", ["not a date", object()])
    def test_date_unparseable_is_left_for_validation(self, value):
        assert DATE().sanitize(value) is value
        with pytest.raises(ValidationError):
            DATE().validate(value)

    def test_date_empty_is_untouched(self):
        assert DATE().sanitize(None) is None
        assert DATE().sanitize("") == ""

    def test_dateonly(self):
        assert DATEONLY().sanitize(datetime(2020, 1, 2, 5)) == "2020-01-02"

    @pytest.mark.parametrize(
        "value,expected",
        [("true", True), ("false", False), (1, True), (0, False), (b"\x01", True), (b"\x00", False)],
    )
    def test_boolean(self, value, expected):
        assert BOOLEAN().sanitize(value) is expected

    def test_boolean_unrecognized_passes_through(self):
        assert BOOLEAN().sanitize("yes") == "yes"
        assert BOOLEAN().sanitize(None) is None


class TestIsChanged:
    """Test dirty checking."""

    def test_date_same_instant(self):
        a = datetime(2020, 1, 1, tzinfo=timezone.utc)
        b = datetime(2020, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
        assert not DATE().is_changed(a, b)

    def test_date_changed(self):
        a = datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert DATE().is_changed(a, a + timedelta(seconds=1))

    def test_empty_values(self):
        assert not DATE().is_changed(None, None)
        assert DATE().is_changed("", None)

    def test_dateonly(self):
        assert not DATEONLY().is_changed("2020-01-01", "2020-01-01")
        assert DATEONLY().is_changed("2020-01-02", "2020-01-01")

    def test_default(self):
        assert STRING().is_changed("a", "b")
        assert not STRING().is_changed("a", "a")
