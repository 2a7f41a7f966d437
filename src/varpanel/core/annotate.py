"""
Item Annotator.

Stamps selection, favorite and status annotations onto a tree node. The
panel's item factory wraps get_item_with_status with lookups against the
variable registry, favorites store and status resolver.
"""

from dataclasses import dataclass
from typing import List, Optional

from .constants import ALL_VALUE
from .favorites import FavoritesStore
from .status import StatusResolver
from .tree import ItemFactory, Row, cell_text
from .types import BoundVariable, Status, StatusStyleMode, TableItem
from .variables import VariableResolver


@dataclass
class RawItem:
    """Per-node input to the annotator."""
    value: str
    selected: bool = False
    variable: Optional[BoundVariable] = None
    is_favorite: bool = False
    name: Optional[str] = None
    label: Optional[str] = None


def is_item_selectable(value: str, variable: Optional[BoundVariable], children: Optional[List[TableItem]]) -> bool:
    """Only leaves whose value is an option of an option-bearing variable can be selected."""
    if children is not None:
        return False
    if variable is None or not variable.has_options:
        return False
    return variable.get_option(value) is not None


def get_item_with_status(
    item: RawItem,
    status: Status,
    children: Optional[List[TableItem]] = None,
    is_selected_all: bool = False,
    favorites_enabled: bool = False,
) -> TableItem:
    selectable = is_item_selectable(item.value, item.variable, children)

    if selectable:
        selected = is_selected_all or item.selected
    elif children:
        selected = all(child.selected for child in children)
    else:
        selected = False

    can_be_favorite = favorites_enabled and selectable and item.value != ALL_VALUE

    return TableItem(
        value=item.value,
        label=item.label if item.label is not None else item.value,
        selected=selected,
        selectable=selectable,
        show_status=status.exist,
        status=status.value if status.exist else None,
        status_color=status.color if status.exist else None,
        status_mode=status.mode if status.exist else StatusStyleMode.IMAGE,
        status_image=status.image if status.exist else None,
        is_favorite=item.is_favorite if can_be_favorite else None,
        can_be_favorite=can_be_favorite,
        name=item.name,
        variable=item.variable.name if item.variable else None,
    )


def make_item_factory(
    variables: VariableResolver,
    status_resolver: StatusResolver,
    favorites: Optional[FavoritesStore] = None,
    is_selected_all: bool = False,
    favorites_enabled: bool = False,
) -> ItemFactory:
    """
    Build the item factory used for grouped panels.

    Each level key names the variable its values are checked against.
    """

    def get_item(row: Row, key: str, children: Optional[List[TableItem]] = None) -> TableItem:
        value = cell_text(row.get(key))
        level_variable = variables.get(key)
        option = level_variable.get_option(value) if level_variable and level_variable.has_options else None

        return get_item_with_status(
            RawItem(
                value=value,
                selected=bool(option and option.selected),
                variable=level_variable,
                is_favorite=bool(favorites and favorites.is_added(key, value)),
                name=key,
                label=option.text if option else value,
            ),
            status=status_resolver.resolve(value),
            children=children,
            is_selected_all=is_selected_all,
            favorites_enabled=favorites_enabled,
        )

    return get_item
