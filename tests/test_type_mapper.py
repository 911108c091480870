"""Tests for the dialect type registry."""

import pytest

from coltypes.core.type_mapper import TypeMapper
from coltypes.dialects import MAPPERS, get_dialect
from coltypes.dialects.mysql.type_mapper import DATE as MySQLDATE
from coltypes.exceptions import TypeMappingError
from coltypes.models.keys import Dialect, TypeKey
from coltypes.types import ARRAY, DATE, FLOAT, HSTORE, INTEGER, STRING, TEXT
from coltypes.utils.logging import WarningLog


class TestGetDialect:
    """Test the dialect registry."""

    def test_process_wide_instances(self):
        assert get_dialect("postgres") is get_dialect("POSTGRES")
        assert get_dialect(Dialect.MYSQL) is get_dialect("mysql")

    def test_own_warning_log_builds_new_mapper(self):
        log = WarningLog()
        mapper = get_dialect("sqlite", log)
        assert mapper is not get_dialect("sqlite")
        assert mapper.warnings is log

    def test_unknown_dialect(self):
        with pytest.raises(TypeMappingError):
            get_dialect("db2")

    def test_every_dialect_has_a_mapper(self):
        assert set(MAPPERS) == set(Dialect)
        for dialect, mapper_class in MAPPERS.items():
            assert issubclass(mapper_class, TypeMapper)
            assert mapper_class.dialect is dialect
            assert mapper_class.DOCS_URL


class TestTypeCodes:
    """Test physical type code lookup."""

    def test_names_are_normalized(self, mysql, sqlite):
        assert mysql.from_source("NEWDECIMAL") is TypeKey.DECIMAL
        assert mysql.from_source("newdecimal") is TypeKey.DECIMAL
        assert sqlite.from_source("VARCHAR(255)") is TypeKey.STRING
        assert sqlite.from_source("Double Precision") is TypeKey.DOUBLE

    def test_integer_codes(self, postgres):
        assert postgres.from_source(1184) is TypeKey.DATE
        assert postgres.from_source(1185) is TypeKey.DATE
        assert postgres.from_source(23) is TypeKey.INTEGER

    def test_first_registration_wins(self, mysql):
        assert mysql.from_source("TINY") is TypeKey.TINYINT
        assert mysql.from_source("BLOB") is TypeKey.BLOB
        assert mysql.from_source("DOUBLE") is TypeKey.REAL

    def test_unknown_code(self, mysql):
        with pytest.raises(TypeMappingError, match="Unknown mysql type code: WHATEVER"):
            mysql.from_source("WHATEVER")

    def test_supports(self, mysql):
        assert not mysql.supports(TypeKey.UUID)
        assert mysql.supports(TypeKey.DATE)
        assert mysql.supports(TypeKey.HSTORE)

    def test_type_codes(self, mysql):
        assert mysql.type_codes(TypeKey.DECIMAL).codes == ("NEWDECIMAL",)
        assert mysql.type_codes(TypeKey.UUID) is None


class TestRegistry:
    """Test variant registration and extension."""

    def test_register_is_idempotent(self, mysql):
        assert not mysql.register(TypeKey.DATE, DATE)
        assert mysql.colspecs[TypeKey.DATE] is MySQLDATE
        assert mysql.register(TypeKey.HSTORE, HSTORE)

    def test_type_class_falls_back_to_base(self, mysql):
        assert mysql.type_class(TypeKey.DATE) is MySQLDATE
        assert mysql.type_class(TypeKey.STRING) is STRING

    def test_extend_keeps_options(self, mysql):
        extended = mysql.extend(DATE(3))
        assert isinstance(extended, MySQLDATE)
        assert extended.options.length == 3
        assert extended.dialect is mysql

    def test_extend_is_idempotent(self, mysql):
        extended = mysql.extend(DATE())
        assert mysql.extend(extended) is extended

    def test_extend_across_dialects(self, mysql, postgres):
        extended = postgres.extend(mysql.extend(DATE(3)))
        assert extended.dialect is postgres
        assert extended.to_sql() == "TIMESTAMP WITH TIME ZONE"

    def test_extend_nested(self, postgres, warnings):
        extended = postgres.extend(ARRAY(INTEGER(11)))
        assert extended.subtype.dialect is postgres
        assert extended.subtype.options.length is None
        assert extended.to_sql() == "INTEGER[]"
        assert warnings.seen(
            "PostgreSQL does not support INTEGER with options. Plain `INTEGER` will be used instead."
        )

    def test_type_for_is_cached(self, sqlite):
        assert sqlite.type_for(TypeKey.DATE) is sqlite.type_for(TypeKey.DATE)


class TestBehavior:
    """Test per-call behavior through the mapper."""

    def test_call_options_fill_defaults(self, mysql, utc):
        options = mysql.call_options()
        assert options.timezone == "+00:00"
        assert options.escape("it's") == "'it\\'s'"

    def test_call_options_keep_explicit_values(self, mysql):
        assert mysql.call_options({"timezone": "+05:00"}).timezone == "+05:00"

    def test_literal(self, postgres):
        assert postgres.literal(STRING(), "it's") == "'it''s'"
        assert postgres.literal(INTEGER(), None) == "NULL"
        assert postgres.literal(INTEGER(), 5) == "5"

    def test_literal_self_escaping(self, mysql):
        assert mysql.literal(FLOAT(), float("nan")) == "'NaN'"
        assert mysql.literal(FLOAT(), 2.5) == "2.5"

    def test_parse(self, postgres):
        assert postgres.parse(23, "42") == 42
        assert postgres.parse(1007, ["1", None, "3"]) == [1, None, 3]
        assert postgres.parse(23, None) is None

    def test_parse_unknown_code(self, postgres):
        with pytest.raises(TypeMappingError):
            postgres.parse(99999, "x")

    def test_warnings_are_deduplicated(self, postgres, warnings):
        postgres.to_sql(TEXT(10))
        postgres.to_sql(TEXT(20))
        assert len(warnings) == 1
