"""
Selection Reconciler.

Translates a requested set of values for one variable into the value set to
commit to the external selection store. The store, not the in-memory
variable snapshot, is the source of truth for pending changes, so the
reconciler re-reads it right before every write.

Stores expose a tri-state read: None when the store has no entry for the
variable at all, an empty list when the entry exists but is empty.
"""

import logging
from typing import Dict, List, Optional, Protocol
from urllib.parse import parse_qsl, urlencode

from .constants import (
    ALL_VALUE,
    ALL_VALUE_PARAMETER,
    NO_VALUE_PARAMETER,
    VARIABLE_QUERY_PREFIX,
    is_all_value,
)
from .types import BoundVariable, VariableKind

logger = logging.getLogger(__name__)


class SelectionStore(Protocol):
    """Shared location/query-like state holding committed selections."""

    def read(self, name: str) -> Optional[List[str]]:
        ...

    def write(self, name: str, value: str | List[str]) -> None:
        ...


class InMemorySelectionStore:
    """Dict-backed store, mainly for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, List[str]]] = None):
        self._values: Dict[str, List[str]] = {
            name: list(values) for name, values in (initial or {}).items()
        }
        self.writes: List[tuple] = []

    def read(self, name: str) -> Optional[List[str]]:
        values = self._values.get(name)
        return list(values) if values is not None else None

    def write(self, name: str, value: str | List[str]) -> None:
        self.writes.append((name, value))
        self._values[name] = [value] if isinstance(value, str) else list(value)


class QueryStringSelectionStore:
    """
    Store backed by a URL query string (`var-<name>=value&var-<name>=...`).

    A blank parameter (`var-name=`) is an existing but empty entry.
    """

    def __init__(self, query: str = ""):
        self._params: Dict[str, List[str]] = {}
        for key, value in parse_qsl(query.lstrip("?"), keep_blank_values=True):
            values = self._params.setdefault(key, [])
            if value != "":
                values.append(value)

    def read(self, name: str) -> Optional[List[str]]:
        values = self._params.get(f"{VARIABLE_QUERY_PREFIX}{name}")
        return list(values) if values is not None else None

    def write(self, name: str, value: str | List[str]) -> None:
        values = [value] if isinstance(value, str) else list(value)
        self._params[f"{VARIABLE_QUERY_PREFIX}{name}"] = [v for v in values if v != ""]

    def to_query(self) -> str:
        pairs = []
        for key, values in self._params.items():
            if not values:
                pairs.append((key, ""))
            pairs.extend((key, value) for value in values)
        return urlencode(pairs)


def _unique(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


class SelectionReconciler:
    """
    Computes and commits the final selection for one variable per call.

    Missing variables and unsupported variable kinds are silent no-ops.
    """

    def __init__(self, store: SelectionStore):
        self.store = store

    def reconcile(
        self,
        values: List[str],
        variable: Optional[BoundVariable],
        keep_selection: bool = False,
    ) -> None:
        if variable is None:
            logger.debug("No variable to reconcile, skipping")
            return

        kind = variable.kind
        if kind == VariableKind.MULTI:
            self._reconcile_multi(values, variable, keep_selection)
        elif kind == VariableKind.SINGLE:
            self._reconcile_single(values, variable)
        elif kind == VariableKind.TEXT:
            if values:
                self._commit(variable.name, values[0])
        else:
            logger.debug(f"Variable {variable.name} of type {variable.type} is not selectable, skipping")

    def _commit(self, name: str, value: str | List[str]) -> None:
        logger.debug(f"Committing {name} = {value!r}")
        self.store.write(name, value)

    def _reconcile_single(self, values: List[str], variable: BoundVariable) -> None:
        if not values:
            return

        value = values[0]
        if is_all_value(value):
            value = ALL_VALUE
        elif value == NO_VALUE_PARAMETER:
            value = ""
        self._commit(variable.name, value)

    def _reconcile_multi(self, values: List[str], variable: BoundVariable, keep_selection: bool) -> None:
        name = variable.name

        if keep_selection and variable.include_all and self._is_all_active(variable):
            excluded = set(values)
            self._commit(name, [
                option.value
                for option in variable.options
                if option.value != ALL_VALUE_PARAMETER and option.value not in excluded
            ])
            return

        if any(is_all_value(value) for value in values):
            self._commit(name, ALL_VALUE)
            return

        if any(value == NO_VALUE_PARAMETER for value in values):
            self._commit(name, "")
            return

        stored = self.store.read(name)
        selected = [value for value in (stored or []) if not is_all_value(value)]

        # Selected upstream but never written to the store
        if stored is None:
            selected = [
                option.text
                for option in variable.selected_options()
                if option.value != ALL_VALUE_PARAMETER
            ]

        already_selected = [value for value in values if value in selected]

        if len(already_selected) == len(values):
            self._commit(name, [value for value in selected if value not in already_selected])
            return

        self._commit(name, _unique(values + selected))

    @staticmethod
    def _is_all_active(variable: BoundVariable) -> bool:
        return variable.is_all_option_selected or ALL_VALUE_PARAMETER in variable.current_values()


def reconcile_selection(
    values: List[str],
    variable: Optional[BoundVariable],
    store: SelectionStore,
    keep_selection: bool = False,
) -> None:
    """Functional entry point for a single reconciliation."""
    SelectionReconciler(store).reconcile(values, variable, keep_selection=keep_selection)


def update_variable_options(
    previous_values: List[str],
    value: str | List[str],
    variable: Optional[BoundVariable],
    reconciler: SelectionReconciler,
    empty_value_enabled: bool = False,
) -> None:
    """
    Turn a widget's full new value list into one reconcile call.

    Multi-select widgets report the whole selection after a change; this
    works out which values were added or removed and how "All" interacts.
    """
    updated_values = value if isinstance(value, list) else [value]

    if len(previous_values) > len(updated_values):
        if not updated_values and empty_value_enabled:
            reconciler.reconcile([NO_VALUE_PARAMETER], variable)
            return

        if not updated_values and variable is not None and variable.multi and variable.include_all:
            reconciler.reconcile([ALL_VALUE_PARAMETER], variable)
            return

        removed = [item for item in previous_values if item not in updated_values]
        reconciler.reconcile(removed, variable)
        return

    if len(updated_values) > 1 and ALL_VALUE_PARAMETER in updated_values:
        if ALL_VALUE_PARAMETER in previous_values:
            # Picking a value while All is active replaces All
            reconciler.reconcile([item for item in updated_values if item != ALL_VALUE_PARAMETER], variable)
        else:
            reconciler.reconcile([ALL_VALUE_PARAMETER], variable)
        return

    reconciler.reconcile(updated_values, variable)
