"""Unit tests for delta merging and Change."""

import pytest

from dbtrigger.events import Change, apply_change, prune_nulls


class TestApplyChange:
    """Tests for apply_change()."""

    def test_merges_nested_mappings(self):
        assert apply_change({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}}) == {
            "a": 1,
            "b": {"c": 2, "d": 3},
        }

    def test_none_deletes_key(self):
        assert apply_change({"a": 1, "b": 2}, {"a": None}) == {"b": 2}

    def test_nested_none_deletes_key(self):
        assert apply_change({"a": {"b": 1, "c": 2}}, {"a": {"b": None}}) == {"a": {"c": 2}}

    def test_scalar_delta_replaces(self):
        assert apply_change({"a": 1}, "value") == "value"

    def test_mapping_delta_over_scalar(self):
        assert apply_change(5, {"a": 1}) == {"a": 1}

    def test_none_delta(self):
        """A None delta removes the value entirely."""
        assert apply_change({"a": 1}, None) is None

    def test_nulls_in_source_are_pruned(self):
        assert apply_change({"a": None, "b": 1}, {"c": 2}) == {"b": 1, "c": 2}

    def test_nulls_under_new_child_are_pruned(self):
        """A mapping added where nothing existed loses its None leaves too."""
        assert apply_change({"x": 1}, {"a": {"b": None, "c": 1}}) == {"x": 1, "a": {"c": 1}}

    def test_nulls_pruned_when_source_missing(self):
        assert apply_change(None, {"a": None, "b": {"c": None}}) == {"b": {}}

    def test_inputs_are_not_modified(self):
        src = {"a": {"b": 1}}
        delta = {"a": {"c": 2}}

        apply_change(src, delta)

        assert src == {"a": {"b": 1}}
        assert delta == {"a": {"c": 2}}


class TestPruneNulls:
    """Tests for prune_nulls()."""

    def test_removes_nested_nulls(self):
        assert prune_nulls({"a": None, "b": {"c": None, "d": 1}}) == {"b": {"d": 1}}

    def test_scalars_unchanged(self):
        assert prune_nulls(3) == 3


class TestChange:
    """Tests for the Change container."""

    def test_fields(self):
        change = Change(before=1, after=2)

        assert change.before == 1
        assert change.after == 2

    def test_is_immutable(self):
        change = Change(before=1, after=2)

        with pytest.raises(AttributeError):
            change.after = 3
