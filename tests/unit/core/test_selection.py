"""
Unit tests for the Selection Reconciler and selection stores.
"""

from unittest.mock import MagicMock

import pytest

from varpanel.core.constants import ALL_VALUE_PARAMETER, NO_VALUE_PARAMETER
from varpanel.core.selection import (
    InMemorySelectionStore,
    QueryStringSelectionStore,
    SelectionReconciler,
    reconcile_selection,
    update_variable_options,
)
from varpanel.core.types import VariableType
from varpanel.core.variables import to_runtime_variable


def last_commit(store: InMemorySelectionStore):
    return store.writes[-1]


class TestMultiSelect:

    @pytest.fixture
    def variable(self, make_variable):
        return make_variable("x", ["optA", "optB", "v1", "v2"], selected=["optA"])

    def test_seeds_from_variable_when_store_has_no_entry(self, variable):
        """Selected upstream but never stored: the selection is kept and extended."""
        store = InMemorySelectionStore()
        reconcile_selection(["optB"], variable, store)
        assert last_commit(store) == ("x", ["optB", "optA"])

    def test_empty_entry_does_not_seed(self, variable):
        store = InMemorySelectionStore({"x": []})
        reconcile_selection(["optB"], variable, store)
        assert last_commit(store) == ("x", ["optB"])

    def test_full_deselect(self, variable):
        store = InMemorySelectionStore({"x": ["v1", "v2"]})
        reconcile_selection(["v1", "v2"], variable, store)
        assert last_commit(store) == ("x", [])

    def test_partial_deselect(self, variable):
        store = InMemorySelectionStore({"x": ["v1", "v2"]})
        reconcile_selection(["v2"], variable, store)
        assert last_commit(store) == ("x", ["v1"])

    def test_partial_overlap_adds(self, variable):
        store = InMemorySelectionStore({"x": ["v1"]})
        reconcile_selection(["v1", "v2"], variable, store)
        assert last_commit(store) == ("x", ["v1", "v2"])

    def test_new_values_lead(self, variable):
        store = InMemorySelectionStore({"x": ["v1"]})
        reconcile_selection(["v2", "optB"], variable, store)
        assert last_commit(store) == ("x", ["v2", "optB", "v1"])

    @pytest.mark.parametrize("requested", [
        ["deviceA", "All"],
        ["all"],
        ["v1", "ALL"],
        [ALL_VALUE_PARAMETER],
    ])
    def test_all_absorbs_everything(self, variable, requested):
        store = InMemorySelectionStore({"x": ["v1", "v2"]})
        reconcile_selection(requested, variable, store)
        assert last_commit(store) == ("x", "All")

    def test_all_is_stable(self, variable):
        store = InMemorySelectionStore()
        reconcile_selection(["All"], variable, store)
        reconcile_selection(["All"], variable, store)
        assert store.writes == [("x", "All"), ("x", "All")]

    def test_same_state_same_commit(self, variable):
        first = InMemorySelectionStore({"x": ["v1"]})
        second = InMemorySelectionStore({"x": ["v1"]})

        reconcile_selection(["v2"], variable, first)
        reconcile_selection(["v2"], variable, second)

        assert first.writes == second.writes

    def test_stored_all_is_dropped(self, variable):
        store = InMemorySelectionStore({"x": ["All"]})
        reconcile_selection(["v1"], variable, store)
        assert last_commit(store) == ("x", ["v1"])

    def test_stored_value_starting_with_all_is_kept(self, variable):
        store = InMemorySelectionStore({"x": ["allow"]})
        reconcile_selection(["b"], variable, store)
        assert last_commit(store) == ("x", ["b", "allow"])

    def test_empty_sentinel_clears(self, variable):
        store = InMemorySelectionStore({"x": ["v1"]})
        reconcile_selection([NO_VALUE_PARAMETER], variable, store)
        assert last_commit(store) == ("x", "")

    def test_seed_skips_all_option(self, make_variable):
        variable = to_runtime_variable(
            make_variable("x", ["v1", "v2"], include_all=True, current=[ALL_VALUE_PARAMETER])
        )
        store = InMemorySelectionStore()

        reconcile_selection(["v1"], variable, store)

        assert last_commit(store) == ("x", ["v1"])

    def test_keep_selection_deselects_from_all(self, make_variable):
        variable = to_runtime_variable(
            make_variable("x", ["v1", "v2", "v3"], include_all=True, current=[ALL_VALUE_PARAMETER])
        )
        store = InMemorySelectionStore()

        reconcile_selection(["v1"], variable, store, keep_selection=True)

        assert last_commit(store) == ("x", ["v2", "v3"])

    def test_keep_selection_without_all(self, variable):
        store = InMemorySelectionStore({"x": ["v1"]})
        reconcile_selection(["v2"], variable, store, keep_selection=True)
        assert last_commit(store) == ("x", ["v2", "v1"])


class TestOtherKinds:

    def test_single_all(self, make_variable):
        variable = make_variable("x", ["v1", "v2"], multi=False)
        store = InMemorySelectionStore()

        reconcile_selection(["all"], variable, store)

        assert store.writes == [("x", "All")]

    def test_single_commits_first_value(self, make_variable):
        variable = make_variable("x", ["v1", "v2"], selected=["v1"], multi=False)
        store = InMemorySelectionStore({"x": ["v1"]})

        reconcile_selection(["v2", "v1"], variable, store)

        assert store.writes == [("x", "v2")]

    def test_single_empty_request(self, make_variable):
        store = InMemorySelectionStore()
        reconcile_selection([], make_variable("x", ["v1"], multi=False), store)
        assert store.writes == []

    def test_text_is_verbatim(self, make_variable):
        variable = make_variable("q", [], multi=False, type=VariableType.TEXTBOX)
        store = InMemorySelectionStore()

        reconcile_selection(["all", "ignored"], variable, store)

        assert store.writes == [("q", "all")]

    @pytest.mark.parametrize("variable_type", [VariableType.CONSTANT, VariableType.INTERVAL, VariableType.ADHOC])
    def test_unsupported_kind_is_noop(self, make_variable, variable_type):
        store = InMemorySelectionStore()
        reconcile_selection(["v1"], make_variable("x", ["v1"], type=variable_type), store)
        assert store.writes == []

    def test_missing_variable_is_noop(self):
        store = InMemorySelectionStore()
        SelectionReconciler(store).reconcile(["v1"], None)
        assert store.writes == []


class TestQueryStringSelectionStore:

    def test_tri_state_read(self):
        store = QueryStringSelectionStore("?var-x=a&var-x=b&var-y=&other=1")

        assert store.read("x") == ["a", "b"]
        assert store.read("y") == []
        assert store.read("z") is None

    def test_write_and_render(self):
        store = QueryStringSelectionStore("var-x=a")

        store.write("x", [])
        store.write("y", "All")
        store.write("z", ["b", "c"])

        assert store.read("x") == []
        assert store.read("y") == ["All"]
        assert store.to_query() == "var-x=&var-y=All&var-z=b&var-z=c"

    def test_blank_string_write_is_empty_entry(self):
        store = QueryStringSelectionStore()
        store.write("x", "")
        assert store.read("x") == []

    def test_reconcile_round_trip(self, make_variable):
        store = QueryStringSelectionStore("var-x=v1")
        variable = make_variable("x", ["v1", "v2"], selected=["v1"])

        reconcile_selection(["v1"], variable, store)

        assert store.to_query() == "var-x="


class TestUpdateVariableOptions:

    @pytest.fixture
    def reconciler(self):
        return MagicMock()

    @pytest.fixture
    def variable(self, make_variable):
        return make_variable("x", ["a", "b"], include_all=True)

    def test_removed_values(self, reconciler, variable):
        update_variable_options(["a", "b"], ["a"], variable, reconciler)
        reconciler.reconcile.assert_called_once_with(["b"], variable)

    def test_cleared_with_empty_value(self, reconciler, variable):
        update_variable_options(["a"], [], variable, reconciler, empty_value_enabled=True)
        reconciler.reconcile.assert_called_once_with([NO_VALUE_PARAMETER], variable)

    def test_cleared_falls_back_to_all(self, reconciler, variable):
        update_variable_options(["a"], [], variable, reconciler)
        reconciler.reconcile.assert_called_once_with([ALL_VALUE_PARAMETER], variable)

    def test_value_picked_while_all_active(self, reconciler, variable):
        update_variable_options([ALL_VALUE_PARAMETER], [ALL_VALUE_PARAMETER, "a"], variable, reconciler)
        reconciler.reconcile.assert_called_once_with(["a"], variable)

    def test_all_picked(self, reconciler, variable):
        update_variable_options(["a"], ["a", ALL_VALUE_PARAMETER], variable, reconciler)
        reconciler.reconcile.assert_called_once_with([ALL_VALUE_PARAMETER], variable)

    def test_single_value(self, reconciler, variable):
        update_variable_options([], "b", variable, reconciler)
        reconciler.reconcile.assert_called_once_with(["b"], variable)
