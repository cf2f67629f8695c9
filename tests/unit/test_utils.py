"""
Unit tests for value casting and delimiter splitting.
"""

import pytest

from curlmapper.core.utils import cast_value, pick_token, split_list, strip_wrapping, to_number


# ===================
# NUMBERS
# ===================

class TestNumberCast:

    @pytest.mark.parametrize("raw,expected", [
        ("", 0),
        ("abc", 0),
        ("12.5", 12.5),
        (" 7 ", 7),
        ("-3", -3),
        ("1e3", 1000.0),
        ("nan", 0),
        ("inf", 0),
        ("1_000", 0),
    ])
    def test_number(self, raw, expected):
        assert cast_value(raw, "number") == expected

    def test_integer_text_stays_int(self):
        assert isinstance(cast_value("42", "number"), int)

    def test_array_number_element(self):
        assert cast_value("3.5", "array_number") == 3.5

    def test_to_number_reports_failure(self):
        assert to_number("x") is None
        assert to_number("") is None

    def test_fallback_hook_called_only_for_bad_text(self):
        seen = []
        cast_value("", "number", on_fallback=lambda t, s: seen.append((t, s)))
        cast_value("oops", "number", on_fallback=lambda t, s: seen.append((t, s)))
        assert seen == [("number", "oops")]


# ===================
# BOOLEANS, OBJECTS, STRINGS
# ===================

class TestOtherCasts:

    @pytest.mark.parametrize("raw,expected", [
        ("TRUE", True),
        ("true", True),
        ("1", True),
        ("no", False),
        ("yes", False),
        ("", False),
        ("0", False),
    ])
    def test_boolean(self, raw, expected):
        assert cast_value(raw, "boolean") is expected

    def test_object(self):
        assert cast_value('{"a": 1}', "object") == {"a": 1}
        assert cast_value("", "object") == {}
        assert cast_value("{bad", "object") == {}

    def test_array_object(self):
        assert cast_value('[{"a": 1}]', "array_object") == [{"a": 1}]
        assert cast_value("", "array_object") == []
        assert cast_value("nope", "array_object") == []

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "-Infinity", '{"a": NaN}', "[1, Infinity]"])
    def test_non_finite_json_degrades(self, raw):
        assert cast_value(raw, "object") == {}
        assert cast_value(raw, "array_object") == []

    def test_deeply_nested_json_degrades(self):
        seen = []
        assert cast_value("[" * 100000, "object", on_fallback=lambda t, s: seen.append(t)) == {}
        assert cast_value("[" * 100000, "array_object") == []
        assert seen == ["object"]

    def test_string_is_trimmed(self):
        assert cast_value("  hi  ", "string") == "hi"
        assert cast_value(" x ", "array_string") == "x"

    def test_structured_values_pass_through(self):
        value = {"a": [1]}
        assert cast_value(value, "number") is value
        assert cast_value([1, 2], "string") == [1, 2]

    def test_none_passes_through(self):
        assert cast_value(None, "number") is None

    def test_non_string_scalars(self):
        assert cast_value(5, "number") == 5
        assert cast_value(True, "boolean") is True
        assert cast_value(2.5, "string") == "2.5"


# ===================
# SPLITTING
# ===================

class TestSplitting:

    def test_split_list_trims_and_keeps_empty_parts(self):
        assert split_list("a | b ||c", "|") == ["a", "b", "", "c"]

    def test_split_list_without_separator(self):
        assert split_list(" a,b ", "") == ["a,b"]

    @pytest.mark.parametrize("token,expected", [
        ("(HAN*SGN)", "HAN*SGN"),
        (" [{x}] ", "x"),
        ("((a*b", "a*b"),
        ("plain", "plain"),
        ("()", ""),
    ])
    def test_strip_wrapping(self, token, expected):
        assert strip_wrapping(token) == expected

    def test_pick_token(self):
        assert pick_token("(A*1)", "*", 1) == "1"
        assert pick_token("A*1", "*", 5) == ""
        assert pick_token("A*1", "*", -1) == ""
