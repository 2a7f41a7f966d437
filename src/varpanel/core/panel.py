"""
Variable Panel.

Ties the engines together the way a rendering layer uses them: build the
table for the active levels group, and turn clicks into store writes.
Nothing is cached; every call rebuilds from the current frames and
variable state.
"""

import logging
from typing import List, Optional

from ..config import PanelOptions
from .annotate import RawItem, get_item_with_status, make_item_factory
from .cascade import CascadingUpdater
from .constants import ALL_VALUE, normalize_option_value
from .favorites import FavoritesStore
from .frames import FrameSet
from .groups import prepare_sorted_groups, toggle_pinned_group
from .selection import SelectionReconciler, SelectionStore, update_variable_options
from .status import StatusResolver
from .tree import build_tree, to_plain_array
from .types import BoundVariable, Level, LevelsGroup, TableItem, VariableKind
from .variables import VariableResolver, is_variable_all_selected

logger = logging.getLogger(__name__)


class VariablePanel:

    def __init__(
        self,
        options: PanelOptions,
        frames: FrameSet,
        variables: VariableResolver,
        store: SelectionStore,
        favorites: Optional[FavoritesStore] = None,
    ):
        self.options = options
        self.frames = frames
        self.variables = variables
        self.favorites = favorites
        self.reconciler = SelectionReconciler(store)
        self.updater = CascadingUpdater(variables, self.reconciler)
        self.current_group: Optional[str] = options.groups[0].name if options.groups else None
        self.pinned_groups: List[str] = list(options.pinned_groups)

    # =========================================================================
    # Groups
    # =========================================================================

    def levels(self, group: Optional[str] = None) -> List[Level]:
        levels_group = self.options.get_group(group or self.current_group)
        return list(levels_group.items) if levels_group else []

    def sorted_groups(self) -> List[LevelsGroup]:
        return prepare_sorted_groups(
            self.options.groups,
            self.pinned_groups,
            current_group=self.current_group,
            pin_tabs_enabled=self.options.pin_tabs,
            tabs_in_order=self.options.tabs_in_order,
        )

    def toggle_pin(self, group_name: str) -> List[str]:
        self.pinned_groups = toggle_pinned_group(self.pinned_groups, group_name)
        return self.pinned_groups

    # =========================================================================
    # Table
    # =========================================================================

    def runtime_variable(self, levels: Optional[List[Level]] = None) -> Optional[BoundVariable]:
        """The variable the panel selects into: the last level's, or the configured one."""
        levels = self.levels() if levels is None else levels
        name = levels[-1].name if levels else self.options.variable
        return self.variables.get(name)

    def _status_resolver(self) -> StatusResolver:
        return StatusResolver.from_frames(
            self.frames,
            name=self.options.name,
            status=self.options.status,
            style=self.options.status_style,
        )

    def table_data(self, levels: Optional[List[Level]] = None) -> List[TableItem]:
        levels = self.levels() if levels is None else levels
        variable = self.runtime_variable(levels)
        if variable is None:
            return []

        is_selected_all = variable.has_options and variable.is_all_option_selected
        status = self._status_resolver()

        def annotate(raw: RawItem, children: Optional[List[TableItem]] = None) -> TableItem:
            return get_item_with_status(
                raw,
                status=status.resolve(raw.value),
                children=children,
                is_selected_all=is_selected_all,
                favorites_enabled=self.options.favorites,
            )

        if levels and variable.has_options:
            rows = build_tree(
                self.frames,
                levels,
                make_item_factory(
                    self.variables,
                    status,
                    favorites=self.favorites,
                    is_selected_all=is_selected_all,
                    favorites_enabled=self.options.favorites,
                ),
            )
            if rows is not None:
                if len(levels) == 1 and variable.multi and variable.include_all:
                    all_item = annotate(RawItem(
                        value=ALL_VALUE,
                        selected=is_selected_all,
                        variable=self.variables.get(levels[0].name),
                        name=levels[0].name,
                        label=ALL_VALUE,
                    ))
                    return [all_item] + rows
                return rows

        if variable.has_options:
            return [
                annotate(RawItem(
                    value=normalize_option_value(option.value),
                    selected=option.selected,
                    variable=variable,
                    is_favorite=bool(self.favorites and self.favorites.is_added(variable.name, option.value)),
                    name=variable.name,
                    label=option.text,
                ))
                for option in variable.options
            ]

        if variable.kind == VariableKind.TEXT:
            current = variable.current_values()
            value = current[0] if current else ""
            return [annotate(RawItem(value=value, variable=variable, name=variable.name, label=value))]

        return []

    # =========================================================================
    # Interaction
    # =========================================================================

    def on_change(
        self,
        item: TableItem,
        levels: Optional[List[Level]] = None,
        keep_selection: bool = False,
    ) -> None:
        """Commit a click on `item`, cascading to every variable it covers."""
        levels = self.levels() if levels is None else levels
        variable = self.runtime_variable(levels)
        tree = self.table_data(levels)
        self.updater.on_change(
            item,
            tree,
            variable.name if variable else None,
            keep_selection=keep_selection,
        )

    def on_click(self, item: TableItem, levels: Optional[List[Level]] = None) -> None:
        """Re-click on an already selected single-select item re-commits it."""
        levels = self.levels() if levels is None else levels
        variable = self.runtime_variable(levels)
        if (
            item.selected
            and variable is not None
            and variable.kind == VariableKind.SINGLE
            and item.variable == variable.name
        ):
            self.on_change(item, levels)

    def on_options_change(self, value: str | List[str], levels: Optional[List[Level]] = None) -> None:
        """Commit the full value list reported by a multi-select widget."""
        variable = self.runtime_variable(levels)
        update_variable_options(
            variable.current_values() if variable else [],
            value,
            variable,
            self.reconciler,
            empty_value_enabled=self.options.empty_value,
        )

    def is_all_selected(self, levels: Optional[List[Level]] = None) -> bool:
        return is_variable_all_selected(self.runtime_variable(levels))

    def select_all(self, levels: Optional[List[Level]] = None) -> None:
        """Header "select all": a synthetic root covering every row."""
        tree = self.table_data(levels)
        root = TableItem(
            value="",
            label="",
            child_values=to_plain_array(tree),
            selected=self.is_all_selected(levels),
        )
        self.on_change(root, levels)

    def toggle_favorite(self, item: TableItem) -> None:
        if self.favorites is None or not item.can_be_favorite:
            return
        if item.is_favorite:
            self.favorites.remove(item.name, item.value)
        else:
            self.favorites.add(item.name, item.value)
