"""
Cascading Updater.

A click on a group node covers several leaf values that may be bound to
different variables at different depths (a country variable above a device
variable, say). The updater fans the click out into one reconcile call per
affected variable, so each variable is committed independently.
"""

import logging
from typing import List, Optional, Tuple

from .selection import SelectionReconciler
from .tree import LevelValues, convert_tree_to_plain, get_filtered_tree
from .types import BoundVariable, TableItem
from .variables import VariableResolver

logger = logging.getLogger(__name__)


def _unselected_values(values: List[str], variable: Optional[BoundVariable]) -> List[str]:
    """Keep values that are options of `variable` and not selected yet."""
    if variable is None:
        return []
    if not variable.has_options:
        return [value for value in values if value]
    return [
        value for value in values
        if any(option.text == value and not option.selected for option in variable.options)
    ]


class CascadingUpdater:
    """Expands a clicked node into per-variable reconcile calls."""

    def __init__(self, variables: VariableResolver, reconciler: SelectionReconciler):
        self.variables = variables
        self.reconciler = reconciler

    def levels_for(self, item: TableItem, tree: List[TableItem]) -> List[LevelValues]:
        """Per-depth values of the branches `item` covers, root first."""
        return convert_tree_to_plain(get_filtered_tree(tree, item.leaf_values()))

    def plan(
        self,
        item: TableItem,
        tree: List[TableItem],
        origin: Optional[str],
    ) -> List[Tuple[Optional[str], List[str]]]:
        """
        Work out the reconcile calls for a click without committing them.

        Levels bound to a variable other than `origin` only carry values not
        selected yet; the origin variable gets the clicked values unfiltered
        and comes last.
        """
        calls: List[Tuple[Optional[str], List[str]]] = []

        for level in self.levels_for(item, tree):
            if level.variable is None or level.variable == origin:
                continue
            values = _unselected_values(level.values, self.variables.get(level.variable))
            if values:
                calls.append((level.variable, values))

        calls.append((origin, item.leaf_values()))
        return calls

    def on_change(
        self,
        item: TableItem,
        tree: List[TableItem],
        origin: Optional[str],
        keep_selection: bool = False,
    ) -> None:
        calls = self.plan(item, tree, origin)
        logger.debug(f"Cascading click on {item.value!r} into {len(calls)} update(s)")

        for name, values in calls:
            self.reconciler.reconcile(
                values,
                self.variables.get(name),
                keep_selection=keep_selection and name == origin,
            )
