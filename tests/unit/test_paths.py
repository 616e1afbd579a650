"""
Unit tests for key path extraction, lookup and copy-on-write assignment.
"""
import pytest

from i18n_manager.core.exceptions import MalformedInputError
from i18n_manager.core.tree.paths import (
    KeyPath,
    MISSING,
    ValueType,
    as_key_path,
    extract_paths,
    get_value_by_path,
    is_leaf,
    resolve_path,
    set_value_by_path,
    value_type,
)


def dotted(paths):
    return [str(p) for p in paths]


class TestKeyPath:
    """Tests for KeyPath."""

    def test_parse_and_str(self):
        path = KeyPath.parse("a.b.c")
        assert path.segments == ("a", "b", "c")
        assert str(path) == "a.b.c"
        assert path.key == "c"
        assert len(path) == 3

    def test_parent_and_child(self):
        path = KeyPath(("a", "b"))
        assert path.parent == KeyPath(("a",))
        assert KeyPath(("a",)).parent is None
        assert path.child("c") == KeyPath.parse("a.b.c")

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            KeyPath(())

    def test_as_key_path_accepts_all_forms(self):
        expected = KeyPath(("x", "y"))
        assert as_key_path("x.y") == expected
        assert as_key_path(["x", "y"]) == expected
        assert as_key_path(expected) is expected


class TestValueType:
    """Tests for value classification."""

    def test_scalars(self):
        assert value_type("hi") is ValueType.STRING
        assert value_type(3) is ValueType.NUMBER
        assert value_type(2.5) is ValueType.NUMBER
        assert value_type([1, 2]) is ValueType.ARRAY
        assert value_type({}) is ValueType.OBJECT
        assert value_type(MISSING) is ValueType.UNDEFINED

    def test_bool_is_not_number(self):
        assert value_type(True) is ValueType.BOOLEAN
        assert value_type(False) is ValueType.BOOLEAN

    def test_null_is_object(self):
        assert value_type(None) is ValueType.OBJECT

    def test_is_leaf(self):
        assert is_leaf("x")
        assert is_leaf({})
        assert is_leaf([{"a": 1}])
        assert not is_leaf({"a": 1})


class TestExtractPaths:
    """Tests for extract_paths."""

    def test_nested_document_with_intermediates(self):
        doc = {"a": {"b": "x", "c": {"d": 1}}, "e": True}
        assert dotted(extract_paths(doc)) == ["a", "a.b", "a.c", "a.c.d", "e"]

    def test_leaves_only(self):
        doc = {"a": {"b": "x", "c": {"d": 1}}, "e": True}
        assert dotted(extract_paths(doc, include_intermediate=False)) == ["a.b", "a.c.d", "e"]

    def test_arrays_are_not_descended(self):
        doc = {"list": [{"inner": "x"}, "y"]}
        assert dotted(extract_paths(doc)) == ["list"]

    def test_empty_mapping_is_a_leaf(self):
        assert dotted(extract_paths({"empty": {}})) == ["empty"]

    def test_empty_document_yields_nothing(self):
        assert list(extract_paths({})) == []

    def test_non_mapping_document_yields_nothing(self):
        assert list(extract_paths(["a"])) == []
        assert list(extract_paths(None)) == []

    def test_each_call_is_independent(self):
        doc = {"a": "x", "b": "y"}
        first = extract_paths(doc)
        next(first)
        assert dotted(extract_paths(doc)) == ["a", "b"]

    def test_depth_guard(self):
        doc = {"a": {"b": {"c": "deep"}}}
        assert dotted(extract_paths(doc, max_depth=3))[-1] == "a.b.c"
        with pytest.raises(MalformedInputError):
            list(extract_paths(doc, max_depth=2))

    def test_non_string_keys_are_stringified(self):
        assert dotted(extract_paths({1: "one"})) == ["1"]


class TestResolvePath:
    """Tests for resolve_path and get_value_by_path."""

    def test_existing_leaf(self):
        assert resolve_path({"a": {"b": "x"}}, "a.b") == (True, "x")

    def test_null_value_exists(self):
        exists, value = resolve_path({"a": None}, "a")
        assert exists is True
        assert value is None

    def test_missing_final_key(self):
        assert resolve_path({"a": {}}, "a.b") == (False, MISSING)

    def test_intermediate_not_a_mapping(self):
        assert resolve_path({"a": "text"}, "a.b") == (False, MISSING)

    def test_arrays_are_not_indexed(self):
        assert resolve_path({"a": ["x"]}, "a.0") == (False, MISSING)

    def test_get_value_default(self):
        assert get_value_by_path({"a": 1}, "b", default="fallback") == "fallback"
        assert get_value_by_path({"a": 1}, "a") == 1


class TestSetValueByPath:
    """Tests for copy-on-write assignment."""

    def test_input_left_untouched(self):
        doc = {"a": {"b": "x"}}
        new_doc = set_value_by_path(doc, "a.b", "y")
        assert doc == {"a": {"b": "x"}}
        assert new_doc == {"a": {"b": "y"}}

    def test_ancestors_copied_siblings_shared(self):
        sibling = {"keep": "me"}
        doc = {"a": {"b": "x"}, "other": sibling}
        new_doc = set_value_by_path(doc, "a.b", "y")
        assert new_doc is not doc
        assert new_doc["a"] is not doc["a"]
        assert new_doc["other"] is sibling

    def test_creates_missing_intermediates(self):
        new_doc = set_value_by_path({}, "a.b.c", "v")
        assert new_doc == {"a": {"b": {"c": "v"}}}

    def test_replaces_non_mapping_intermediate(self):
        new_doc = set_value_by_path({"a": "text"}, "a.b", "v")
        assert new_doc == {"a": {"b": "v"}}

    def test_none_document(self):
        assert set_value_by_path(None, "k", 1) == {"k": 1}
