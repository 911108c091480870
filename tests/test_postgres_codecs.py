"""Tests for PostgreSQL range and hstore text codecs."""

import math

import pytest

from coltypes.dialects.postgres import hstore, range as pg_range
from coltypes.dialects.postgres.range import Range
from coltypes.exceptions import EncodingError


class TestRangeStringify:
    """Test range encoding."""

    def test_default_inclusivity(self):
        assert pg_range.stringify([1, 10]) == "[1,10)"

    def test_unbounded(self):
        assert pg_range.stringify([None, None]) == "[,)"

    def test_infinite_bounds(self):
        assert pg_range.stringify([-math.inf, math.inf]) == "[-infinity,infinity)"

    def test_bound_overrides(self):
        value = [{"value": 1, "inclusive": False}, None]
        assert pg_range.stringify(value) == "(1,)"

    def test_strings_are_quoted(self):
        assert pg_range.stringify(["a", "b"]) == '["a","b")'

    def test_empty(self):
        assert pg_range.stringify([]) == "empty"
        assert pg_range.stringify(Range(empty=True)) == "empty"

    def test_none(self):
        assert pg_range.stringify(None) is None

    def test_wrong_length(self):
        with pytest.raises(EncodingError, match="range array length must be 0"):
            pg_range.stringify([1])

    def test_not_a_sequence(self):
        with pytest.raises(EncodingError, match="range must be an array"):
            pg_range.stringify("[1,2)")


class TestRangeParse:
    """Test range decoding."""

    def test_bounds_and_inclusivity(self):
        assert pg_range.parse("(1,10]", int) == Range(1, 10, (False, True))

    def test_without_parser(self):
        assert pg_range.parse("[a,b)") == Range("a", "b")

    def test_quoted_bounds(self):
        result = pg_range.parse('["2020-01-01 00:00:00+00","2020-02-01 00:00:00+00")')
        assert result.lower == "2020-01-01 00:00:00+00"
        assert result.upper == "2020-02-01 00:00:00+00"

    def test_unbounded_and_infinite(self):
        result = pg_range.parse("[,infinity)", int)
        assert result.lower is None
        assert result.upper == math.inf

    def test_empty(self):
        result = pg_range.parse("empty")
        assert result.empty
        assert result.bounds == []

    def test_none(self):
        assert pg_range.parse(None) is None

    def test_non_range_text_is_returned(self):
        assert pg_range.parse("[5]") == "[5]"


class TestHstore:
    """Test hstore encoding and decoding."""

    def test_stringify(self):
        assert hstore.stringify({"a": "1", "b": None}) == '"a"=>"1","b"=>NULL'

    def test_stringify_non_strings(self):
        assert hstore.stringify({"n": 2}) == '"n"=>"2"'

    def test_stringify_escapes(self):
        assert hstore.stringify({"q": 'say "hi"'}) == '"q"=>"say \\"hi\\""'
        assert hstore.stringify({"s": "it's"}) == "\"s\"=>\"it''s\""

    def test_parse(self):
        assert hstore.parse('"a"=>"1", "b"=>NULL') == {"a": "1", "b": None}

    def test_parse_escaped_quotes(self):
        assert hstore.parse('"q"=>"say \\"hi\\""') == {"q": 'say "hi"'}

    def test_empty(self):
        assert hstore.stringify({}) == ""
        assert hstore.parse("") == {}

    def test_none(self):
        assert hstore.stringify(None) is None
        assert hstore.parse(None) is None
