"""
varpanel - hierarchical variable selection for dashboards.

Builds a selection tree from columnar data grouped by levels, and reconciles
clicks on that tree into committed values for one or many bound variables.

Key Components:
- core.tree: Tree construction from frames and levels
- core.selection: Selection reconciliation against a shared store
- core.cascade: Fan-out of group clicks across per-level variables
- core.panel: Orchestration used by rendering layers

Usage:
    from varpanel import build_tree, Level

    rows = build_tree(frames, [Level(name="country"), Level(name="device")])
"""

__version__ = "0.1.0"

from .core.selection import reconcile_selection
from .core.tree import build_tree
from .core.types import BoundVariable, Level, LevelsGroup, TableItem, VariableOption

__all__ = [
    "__version__",
    "build_tree",
    "reconcile_selection",
    "BoundVariable",
    "Level",
    "LevelsGroup",
    "TableItem",
    "VariableOption",
]
