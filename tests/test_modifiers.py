"""Tests for family-restricted modifiers."""

import pytest

from coltypes.exceptions import SchemaError, UnsupportedModifierError
from coltypes.types import CHAR, DECIMAL, FLOAT, INTEGER, MODIFIERS, STRING, TEXT, apply_modifier


class TestBuilderMethods:
    """Test modifier builder methods."""

    def test_modifiers_chain(self):
        assert str(INTEGER(11).unsigned().zerofill()) == "INTEGER(11) UNSIGNED ZEROFILL"

    def test_modifiers_return_new_instance(self):
        base = INTEGER(11)
        modified = base.unsigned()
        assert modified is not base
        assert str(base) == "INTEGER(11)"
        assert not base.options.unsigned

    def test_binary(self):
        assert str(STRING(64).binary()) == "VARCHAR(64) BINARY"
        assert str(CHAR(2).binary()) == "CHAR(2) BINARY"

    def test_precision_and_scale(self):
        assert str(DECIMAL().with_precision(10).with_scale(2)) == "DECIMAL(10,2)"

    def test_float_flags(self):
        assert str(FLOAT(10, 2).unsigned()) == "FLOAT(10,2) UNSIGNED"

    def test_not_defined_on_other_families(self):
        with pytest.raises(AttributeError):
            STRING().unsigned()
        with pytest.raises(AttributeError):
            INTEGER().binary()
        with pytest.raises(AttributeError):
            TEXT().zerofill()

    def test_bound_type_stays_bound(self, mysql):
        bound = mysql.extend(INTEGER(11))
        modified = bound.unsigned()
        assert modified.dialect is mysql
        assert modified.to_sql() == "INTEGER(11) UNSIGNED"


class TestApplyModifier:
    """Test modifiers applied by name."""

    def test_by_name(self):
        assert str(apply_modifier(INTEGER(), "unsigned")) == "INTEGER UNSIGNED"
        assert apply_modifier(DECIMAL(), "PRECISION", 12).options.precision == 12

    def test_not_defined_for_family(self):
        with pytest.raises(UnsupportedModifierError, match="UNSIGNED is not defined for STRING"):
            apply_modifier(STRING(), "UNSIGNED")

    def test_unknown(self):
        with pytest.raises(UnsupportedModifierError, match="Unknown modifier"):
            apply_modifier(INTEGER(), "SIGNED")

    def test_is_schema_error(self):
        assert issubclass(UnsupportedModifierError, SchemaError)

    def test_registry(self):
        assert set(MODIFIERS) == {"UNSIGNED", "ZEROFILL", "BINARY", "PRECISION", "SCALE"}
