"""
Runtime variables.

Normalizes raw variable definitions (adding the synthetic "All" option where
the host omits it) and keeps them in a registry that tree nodes resolve by
name. The registry is rebuilt, or re-synced from the selection store, on
every refresh instead of being mutated by the reconciler.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol

import yaml
from pydantic import ValidationError

from .constants import ALL_VALUE, ALL_VALUE_PARAMETER, is_all_value
from .result import Err, LoadError, Ok, Result
from .selection import SelectionStore
from .types import BoundVariable, VariableOption, VariableType

logger = logging.getLogger(__name__)


class VariableResolver(Protocol):
    """Anything that resolves a variable name to its latest state."""

    def get(self, name: Optional[str]) -> Optional[BoundVariable]:
        ...


def to_runtime_variable(variable: BoundVariable) -> BoundVariable:
    """
    Prepend the "All" option to include-all variables that lack it.

    The synthetic option is selected when the current value holds the All token.
    """
    if not variable.has_options or not variable.include_all or not variable.options:
        return variable
    if variable.options[0].value == ALL_VALUE_PARAMETER:
        return variable

    all_option = VariableOption(
        value=ALL_VALUE_PARAMETER,
        text=ALL_VALUE,
        selected=ALL_VALUE_PARAMETER in variable.current_values(),
    )
    data = variable.model_dump()
    data["options"] = [all_option.model_dump()] + data["options"]
    return BoundVariable.model_validate(data)


def is_variable_all_selected(variable: Optional[BoundVariable]) -> bool:
    """Check whether every option of a variable is effectively selected."""
    if variable is None or not variable.has_options:
        return False

    if isinstance(variable.current, list):
        if variable.include_all:
            if variable.is_all_option_selected:
                return True
            return len(variable.current) == len(variable.options) - 1
        return len(variable.current) == len(variable.options)

    return variable.current == ALL_VALUE_PARAMETER


def apply_selection(variable: BoundVariable, values: List[str]) -> BoundVariable:
    """Return a copy of `variable` with its selection replaced by `values`."""
    data = variable.model_dump()

    if variable.type == VariableType.TEXTBOX:
        data["current"] = values[0] if values else ""
        return BoundVariable.model_validate(data)

    if not variable.has_options:
        return variable

    select_all = any(is_all_value(value) for value in values)
    wanted = set(values)
    current: List[str] = []
    for option in data["options"]:
        if select_all:
            option["selected"] = option["value"] == ALL_VALUE_PARAMETER
        else:
            option["selected"] = option["value"] != ALL_VALUE_PARAMETER and (
                option["value"] in wanted or option["text"] in wanted
            )
        if option["selected"]:
            current.append(option["value"])

    if select_all and not current:
        current = [ALL_VALUE_PARAMETER]

    if variable.multi:
        data["current"] = current
    else:
        data["current"] = current[0] if current else None
    return BoundVariable.model_validate(data)


class VariableRegistry:
    """
    Name -> BoundVariable lookup.

    Implements VariableResolver, so it can be handed to the item factory and
    the cascading updater directly.
    """

    def __init__(self, variables: Iterable[BoundVariable] = ()):
        self._variables: Dict[str, BoundVariable] = {}
        for variable in variables:
            self.set(variable)

    @classmethod
    def from_dicts(cls, items: Iterable[Dict[str, Any]]) -> "VariableRegistry":
        return cls(BoundVariable.model_validate(item) for item in items)

    def set(self, variable: BoundVariable) -> None:
        self._variables[variable.name] = to_runtime_variable(variable)

    def get(self, name: Optional[str]) -> Optional[BoundVariable]:
        if not name:
            return None
        return self._variables.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._variables

    def __iter__(self) -> Iterator[BoundVariable]:
        return iter(self._variables.values())

    def __len__(self) -> int:
        return len(self._variables)

    @property
    def names(self) -> List[str]:
        return list(self._variables)

    def sync(self, store: SelectionStore) -> None:
        """
        Refresh option selection from the store.

        Variables the store has no entry for keep their current state.
        """
        for name, variable in list(self._variables.items()):
            values = store.read(name)
            if values is None:
                continue
            self._variables[name] = apply_selection(variable, values)
            logger.debug(f"Synced variable {name} from store: {values}")


def load_variables(path: str | Path) -> Result[VariableRegistry, LoadError]:
    """Load a registry from a JSON or YAML list of variable definitions."""
    variables_path = Path(path)
    if not variables_path.exists():
        return Err(LoadError(f"Variables file not found: {variables_path}", path=str(variables_path)))

    try:
        text = variables_path.read_text()
        if variables_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or []
        else:
            data = json.loads(text)
        if isinstance(data, dict):
            data = data.get("variables", [])
        return Ok(VariableRegistry.from_dicts(data))
    except (json.JSONDecodeError, yaml.YAMLError, ValidationError) as e:
        return Err(LoadError(f"Invalid variables file: {e}", path=str(variables_path), cause=e))
