"""Tests for textual type expressions."""

import pytest

from coltypes.exceptions import SchemaError, UnsupportedModifierError
from coltypes.models.keys import TypeKey
from coltypes.types import ARRAY, DATE, DECIMAL, DOUBLE, ENUM, GEOMETRY, RANGE, parse_type_expression


class TestParseTypeExpression:
    """Test building column types from text."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("INTEGER", "INTEGER"),
            ("INTEGER(11) UNSIGNED ZEROFILL", "INTEGER(11) UNSIGNED ZEROFILL"),
            ("DECIMAL(10,2) UNSIGNED", "DECIMAL(10,2)"),
            ("DECIMAL PRECISION(10) SCALE(2)", "DECIMAL(10,2)"),
            ("STRING(64) BINARY", "VARCHAR(64) BINARY"),
            ("string(10) binary", "VARCHAR(10) BINARY"),
            ("TEXT('tiny')", "TINYTEXT"),
            ("ARRAY(DECIMAL(10,2))", "DECIMAL(10,2)[]"),
            ("ARRAY(ARRAY(INTEGER))", "INTEGER[][]"),
        ],
    )
    def test_render(self, expression, expected):
        assert str(parse_type_expression(expression)) == expected

    def test_decimal_flags_render_on_mysql(self, mysql):
        data_type = parse_type_expression("DECIMAL(10,2) UNSIGNED")
        assert data_type.options.unsigned
        assert mysql.to_sql(data_type) == "DECIMAL(10,2) UNSIGNED"

    def test_aliases(self):
        assert isinstance(parse_type_expression("DOUBLE PRECISION"), DOUBLE)
        assert isinstance(parse_type_expression("double  precision"), DOUBLE)
        assert isinstance(parse_type_expression("NUMERIC(5)"), DECIMAL)

    def test_enum_values(self):
        data_type = parse_type_expression("ENUM('a,b', \"c\")")
        assert isinstance(data_type, ENUM)
        assert data_type.values == ("a,b", "c")

    def test_range_subtype(self):
        data_type = parse_type_expression("RANGE(DATE)")
        assert isinstance(data_type, RANGE)
        assert isinstance(data_type.subtype, DATE)

    def test_array_subtype(self):
        data_type = parse_type_expression("ARRAY(STRING(20))")
        assert isinstance(data_type, ARRAY)
        assert data_type.subtype.options.length == 20

    def test_geometry_arguments(self):
        data_type = parse_type_expression("GEOMETRY(POINT, 4326)")
        assert isinstance(data_type, GEOMETRY)
        assert data_type.geometry_type == "POINT"
        assert data_type.srid == 4326
        assert data_type.key is TypeKey.GEOMETRY


class TestParseErrors:
    """Test malformed expressions."""

    def test_unknown_type(self):
        with pytest.raises(SchemaError, match="Unknown column type: WIDGET"):
            parse_type_expression("WIDGET")

    def test_unbalanced(self):
        with pytest.raises(SchemaError, match="Unbalanced parentheses"):
            parse_type_expression("STRING(10")

    def test_invalid(self):
        with pytest.raises(SchemaError, match="Invalid type expression"):
            parse_type_expression("(10)")

    def test_unknown_modifier(self):
        with pytest.raises(UnsupportedModifierError, match="Unknown modifier: SHINY"):
            parse_type_expression("INTEGER SHINY")

    def test_modifier_on_wrong_family(self):
        with pytest.raises(UnsupportedModifierError, match="UNSIGNED is not defined for STRING"):
            parse_type_expression("STRING(10) UNSIGNED")
