"""
Core modules for varpanel.

This package contains the two engines and their building blocks:
- types: Data structures (Level, BoundVariable, TableItem, etc.)
- tree / annotate / status: Selection tree construction
- selection / cascade: Selection reconciliation
"""

from .cascade import CascadingUpdater
from .selection import (
    InMemorySelectionStore, QueryStringSelectionStore,
    SelectionReconciler, SelectionStore, reconcile_selection,
)
from .status import StatusResolver
from .tree import build_tree, convert_tree_to_plain, get_filtered_tree
from .types import (
    BoundVariable, Level, LevelsGroup, Status, TableItem,
    VariableKind, VariableOption, VariableType,
)
from .variables import VariableRegistry

__all__ = [
    # Types
    "BoundVariable", "Level", "LevelsGroup", "Status", "TableItem",
    "VariableKind", "VariableOption", "VariableType",
    # Tree
    "build_tree", "convert_tree_to_plain", "get_filtered_tree", "StatusResolver",
    # Selection
    "SelectionStore", "InMemorySelectionStore", "QueryStringSelectionStore",
    "SelectionReconciler", "reconcile_selection", "CascadingUpdater",
    "VariableRegistry",
]
