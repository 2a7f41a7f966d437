"""Ordering of levels groups (tabs), with optional pinning."""

from typing import Any, List, Optional

from .types import LevelsGroup


def safe_pinned_groups(pinned: Any, pin_tabs_enabled: bool = False) -> List[str]:
    """Coerce a stored pinned-groups value into a list of names."""
    if not pin_tabs_enabled:
        return []
    if isinstance(pinned, list):
        return [name for name in pinned if isinstance(name, str)]
    if isinstance(pinned, dict):
        return [name for name in pinned.values() if isinstance(name, str)]
    return []


def toggle_pinned_group(pinned: Any, group_name: str) -> List[str]:
    """Pin `group_name`, or unpin it if already pinned."""
    current = safe_pinned_groups(pinned, pin_tabs_enabled=True)
    if group_name in current:
        return [name for name in current if name != group_name]
    return current + [group_name]


def prepare_sorted_groups(
    groups: List[LevelsGroup],
    pinned: List[str],
    current_group: Optional[str] = None,
    pin_tabs_enabled: bool = False,
    tabs_in_order: bool = True,
) -> List[LevelsGroup]:
    """
    Order tabs with pinned groups first.

    With `tabs_in_order` the unpinned groups keep their configured order;
    otherwise the active group follows the pinned ones directly.
    """
    if not groups:
        return []
    if not pin_tabs_enabled:
        return list(groups)

    by_name = {group.name: group for group in groups}
    pinned_groups = [by_name[name] for name in pinned if name in by_name]

    if tabs_in_order:
        return pinned_groups + [group for group in groups if group.name not in pinned]

    result = list(pinned_groups)
    active = by_name.get(current_group) if current_group else None
    if active is not None and active.name not in pinned:
        result.append(active)

    result.extend(
        group for group in groups
        if group.name not in pinned and group.name != current_group
    )
    return result
