"""
Tree Builder.

Turns a columnar frame plus an ordered list of levels into a nested list of
TableItem nodes. Rows are grouped recursively by each level's column; the
last level produces the leaves. Every node comes from an injected item
factory, so different callers can stamp their own selection and favorite
semantics onto the same shape.

Also provides the helpers the cascading updater and the rendering layer use
on a built tree: filtering by target values, flattening per depth, and the
row filters of the table view.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from .frames import FrameSet
from .types import Level, StatusStyleMode, TableItem

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
ItemFactory = Callable[[Row, str, Optional[List[TableItem]]], TableItem]


def cell_text(value: Any) -> str:
    """Render a cell as the string value used for matching and display."""
    if value is None:
        return ""
    return str(value)


def default_item(row: Row, key: str, children: Optional[List[TableItem]] = None) -> TableItem:
    """Item factory making every row a selectable, unselected item."""
    value = cell_text(row.get(key))
    return TableItem(
        value=value,
        label=value,
        selected=False,
        selectable=True,
        show_status=False,
        status_mode=StatusStyleMode.COLOR,
        name=key,
    )


def group_by(rows: List[Row], key: str) -> Dict[str, List[Row]]:
    """Group rows by the text of `key`, keeping first-seen order.

    Cells are keyed by `cell_text`, so 1 and "1" land in the same group.
    """
    groups: Dict[str, List[Row]] = {}
    for row in rows:
        groups.setdefault(cell_text(row.get(key)), []).append(row)
    return groups


def to_plain_array(children: List[TableItem]) -> List[str]:
    """Concatenate each child's child_values, or its own value for leaves."""
    values: List[str] = []
    for child in children:
        if child.child_values is not None:
            values.extend(child.child_values)
        else:
            values.append(child.value)
    return values


def get_group_array(rows: List[Row], keys: List[str], get_item: ItemFactory) -> List[TableItem]:
    """Recursively group `rows` by `keys`, shallowest key first."""
    current_key = keys[0]

    if len(keys) == 1:
        items = (get_item(row, current_key, None) for row in rows)
        return [item for item in items if item.selectable]

    result = []
    for group_key, group_rows in group_by(rows, current_key).items():
        children = get_group_array(group_rows, keys[1:], get_item)
        item = get_item({current_key: group_key}, current_key, children)

        child_values = list(item.child_values or []) + to_plain_array(children)
        child_selected_count = (item.child_selected_count or 0) + sum(
            child.child_selected_count
            if child.child_selected_count is not None
            else int(child.selected)
            for child in children
        )
        child_favorites_count = (item.child_favorites_count or 0) + sum(
            child.child_favorites_count or int(bool(child.is_favorite))
            for child in children
        )

        item = item.model_copy(update={
            "child_values": child_values,
            "child_selected_count": child_selected_count,
            "child_favorites_count": child_favorites_count,
            "children": children,
        })

        if item.child_values or item.selectable:
            result.append(item)

    return result


def build_tree(
    frames: FrameSet,
    levels: List[Level],
    item_factory: Optional[ItemFactory] = None,
) -> Optional[List[TableItem]]:
    """
    Build the selection tree for `levels`.

    Returns None when the frame of the last level is missing, which means
    "data not yet available"; an empty frame yields an empty list.
    """
    if not levels:
        return []

    last_level = levels[-1]
    frame = frames.find_source(last_level.source)
    if frame is None:
        logger.debug(f"No frame for source {last_level.source!r}, tree not built")
        return None

    rows = frame.to_rows()
    return get_group_array(rows, [level.name for level in levels], item_factory or default_item)


def get_filtered_tree(rows: List[TableItem], values: Iterable[str]) -> List[TableItem]:
    """
    Keep only the branches that reach one of `values`.

    Groups survive when their child_values intersect the targets (with their
    children filtered the same way); leaves survive when their value is a target.
    """
    targets = set(values)
    result = []
    for row in rows:
        if row.children is not None:
            if not targets.intersection(row.child_values or []):
                continue
            children = get_filtered_tree(row.children, targets)
            result.append(row.model_copy(update={"children": children}))
        elif row.value in targets:
            result.append(row)
    return result


@dataclass
class LevelValues:
    """Values found at one depth of a tree, with the variable they belong to."""
    variable: Optional[str] = None
    values: List[str] = field(default_factory=list)


def convert_tree_to_plain(
    rows: List[TableItem],
    result: Optional[List[LevelValues]] = None,
    depth: int = 0,
) -> List[LevelValues]:
    """Flatten a tree into one LevelValues per depth, root first."""
    if result is None:
        result = []

    for row in rows:
        if len(result) <= depth:
            result.append(LevelValues())
        level = result[depth]
        level.variable = row.variable
        level.values.append(row.value)

        if row.children:
            convert_tree_to_plain(row.children, result, depth + 1)

    return result


def iter_tree(rows: List[TableItem], depth: int = 0):
    """Yield (depth, item) pairs depth-first."""
    for row in rows:
        yield depth, row
        if row.children:
            yield from iter_tree(row.children, depth + 1)


# =========================================================================
# Table row filters
# =========================================================================

def value_filter(item: TableItem, search_term: str) -> bool:
    """Match groups on any child value, leaves on their label."""
    term = search_term.lower()
    if item.child_values is not None:
        return any(term in value.lower() for value in item.child_values)
    return term in (item.label or item.value).lower()


def favorite_filter(item: TableItem, enabled: bool) -> bool:
    if not enabled:
        return True
    if item.child_values is not None:
        return (item.child_favorites_count or 0) > 0
    return bool(item.is_favorite)


def selected_filter(item: TableItem, enabled: bool) -> bool:
    if not enabled:
        return True
    if item.child_values is not None:
        return (item.child_selected_count or 0) > 0
    return item.selected


def status_sort_key(item: TableItem) -> float:
    return item.status if item.status is not None else 0


def first_selected_index(rows: List[TableItem]) -> int:
    """Index of the first selected leaf among visible rows, -1 if none."""
    for index, row in enumerate(rows):
        if row.children is not None:
            continue
        if row.selected:
            return index
    return -1


def filter_tree(
    rows: List[TableItem],
    search: str = "",
    favorites_only: bool = False,
    selected_only: bool = False,
    sort_by_status: bool = False,
) -> List[TableItem]:
    """Apply the table filters at every depth, optionally sorting by status."""
    result = []
    for row in rows:
        if search and not value_filter(row, search):
            continue
        if not favorite_filter(row, favorites_only) or not selected_filter(row, selected_only):
            continue
        if row.children:
            row = row.model_copy(update={
                "children": filter_tree(row.children, search, favorites_only, selected_only, sort_by_status),
            })
        result.append(row)

    if sort_by_status:
        result.sort(key=status_sort_key)
    return result
