"""
Unit tests for static mapping validation.
"""

import pytest

from curlmapper.core.exceptions import MappingError
from curlmapper.core.validation import validate_mappings


class TestValidateMappings:

    def test_valid_schema(self):
        ok, errors = validate_mappings([
            {"jsonPath": "customer.name", "csvHeader": "Name"},
            {"jsonPath": "customer.email", "csvHeader": "Email"},
            {"jsonPath": "items[].id", "dataType": "array_number", "csvHeader": "Ids"},
            {"jsonPath": "items[].qty", "dataType": "array_number", "csvHeader": "Qty"},
            {"jsonPath": "legs", "dataType": "array_object", "csvHeader": "Route",
             "internalFields": [{"key": "from", "index": 0}]},
        ])
        assert ok is True
        assert errors == []

    def test_duplicate_path(self):
        ok, errors = validate_mappings([{"jsonPath": "a"}, {"jsonPath": "a"}])
        assert not ok
        assert errors == ["$[1].jsonPath: Duplicate jsonPath 'a' (also mapping #0)"]

    def test_value_then_children(self):
        ok, errors = validate_mappings([{"jsonPath": "a"}, {"jsonPath": "a.b"}])
        assert not ok
        assert "'a' is a value in mapping #0 but has children here" in errors[0]

    def test_children_then_value(self):
        ok, errors = validate_mappings([{"jsonPath": "a.b"}, {"jsonPath": "a"}])
        assert not ok
        assert "'a' has children in mapping #0 but is a value here" in errors[0]

    def test_array_vs_array_of_objects(self):
        ok, errors = validate_mappings([{"jsonPath": "items[]"}, {"jsonPath": "items[].id"}])
        assert not ok
        assert "used as array in mapping #0 and as array of objects here" in errors[0]

    def test_array_object_leaf_accepts_element_properties(self):
        mappings = [
            {"jsonPath": "legs", "dataType": "array_object", "csvHeader": "Route",
             "internalFields": [{"key": "from", "index": 0}, {"key": "to", "index": 1}]},
            {"jsonPath": "legs[].price", "dataType": "array_number", "csvHeader": "Prices"},
        ]
        assert validate_mappings(mappings) == (True, [])
        assert validate_mappings(list(reversed(mappings))) == (True, [])

    def test_scalar_list_leaf_rejects_element_properties(self):
        ok, errors = validate_mappings([
            {"jsonPath": "tags", "dataType": "array_string", "csvHeader": "Tags"},
            {"jsonPath": "tags[].x", "dataType": "array_string", "csvHeader": "X"},
        ])
        assert not ok
        assert "'tags' is used as leaf in mapping #0 and as array of objects here" in errors[0]

    def test_array_vs_object(self):
        ok, errors = validate_mappings([{"jsonPath": "items[].id"}, {"jsonPath": "items.id"}])
        assert not ok
        assert len(errors) == 1

    def test_malformed_paths(self):
        ok, errors = validate_mappings([{"jsonPath": ""}, {"jsonPath": "a..b"}, {"jsonPath": "a[1]"}])
        assert not ok
        assert [e.split(":")[0] for e in errors] == ["$[0].jsonPath", "$[1].jsonPath", "$[2].jsonPath"]

    def test_option_checks(self):
        ok, errors = validate_mappings([
            {"jsonPath": "a", "internalFields": [{"key": "x", "index": 0}]},
            {"jsonPath": "b", "transformation": {"enabled": True, "itemIndex": -1}},
            {"jsonPath": "c", "dataType": "array_object", "internalFields": [{"key": "", "index": -2}]},
        ])
        assert not ok
        joined = "\n".join(errors)
        assert "$[0].internalFields" in joined
        assert "$[1].transformation.itemIndex" in joined
        assert "$[2].internalFields[0].key" in joined
        assert "$[2].internalFields[0].index" in joined

    def test_structural_misuse_is_reported(self):
        ok, errors = validate_mappings("not a list")
        assert not ok
        assert errors[0].startswith("$: ")

    def test_raise_on_error(self):
        with pytest.raises(MappingError, match="Duplicate jsonPath"):
            validate_mappings([{"jsonPath": "a"}, {"jsonPath": "a"}], raise_on_error=True)
