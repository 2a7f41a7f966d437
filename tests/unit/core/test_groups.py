"""
Unit tests for tab ordering and pinning.
"""

import pytest

from varpanel.core.groups import prepare_sorted_groups, safe_pinned_groups, toggle_pinned_group
from varpanel.core.types import LevelsGroup


@pytest.fixture
def groups():
    return [LevelsGroup(name=name) for name in ("A", "B", "C")]


def names(groups):
    return [group.name for group in groups]


class TestPinnedGroups:

    def test_disabled(self):
        assert safe_pinned_groups(["A"], pin_tabs_enabled=False) == []

    def test_coerces_stored_values(self):
        assert safe_pinned_groups(["A", 3, "B"], pin_tabs_enabled=True) == ["A", "B"]
        assert safe_pinned_groups({"0": "A", "1": "B"}, pin_tabs_enabled=True) == ["A", "B"]
        assert safe_pinned_groups("A", pin_tabs_enabled=True) == []

    def test_toggle(self):
        assert toggle_pinned_group(["A"], "B") == ["A", "B"]
        assert toggle_pinned_group(["A", "B"], "A") == ["B"]
        assert toggle_pinned_group(None, "A") == ["A"]


class TestPrepareSortedGroups:

    def test_pinning_disabled(self, groups):
        assert names(prepare_sorted_groups(groups, ["C"])) == ["A", "B", "C"]

    def test_pinned_first_in_order(self, groups):
        result = prepare_sorted_groups(groups, ["C"], current_group="B", pin_tabs_enabled=True)
        assert names(result) == ["C", "A", "B"]

    def test_active_follows_pinned(self, groups):
        result = prepare_sorted_groups(
            groups, ["C"], current_group="B", pin_tabs_enabled=True, tabs_in_order=False
        )
        assert names(result) == ["C", "B", "A"]

    def test_unknown_pinned_names_are_ignored(self, groups):
        result = prepare_sorted_groups(groups, ["Z", "B"], pin_tabs_enabled=True)
        assert names(result) == ["B", "A", "C"]

    def test_no_groups(self):
        assert prepare_sorted_groups([], ["A"], pin_tabs_enabled=True) == []
