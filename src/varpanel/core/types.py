"""
Core type definitions for varpanel.

Levels describe how tabular rows are grouped, bound variables carry the
external selection state, and TableItem is the annotated tree node handed to
the rendering layer.
"""

from enum import StrEnum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .constants import ALL_VALUE_PARAMETER, normalize_option_value


class VariableType(StrEnum):
    """Dashboard variable types as reported by the host."""
    QUERY = "query"
    ADHOC = "adhoc"
    CONSTANT = "constant"
    DATASOURCE = "datasource"
    INTERVAL = "interval"
    TEXTBOX = "textbox"
    CUSTOM = "custom"
    SYSTEM = "system"


class VariableKind(StrEnum):
    """How a variable is reconciled. Closed set, derived from type and multi."""
    SINGLE = "single"
    MULTI = "multi"
    TEXT = "text"
    UNSUPPORTED = "unsupported"


class StatusStyleMode(StrEnum):
    """How a status value is displayed next to an item."""
    COLOR = "color"
    IMAGE = "image"


class Level(BaseModel):
    """
    One grouping level of the tree.

    `source` is a frame refId, or the frame's position when frames carry no refId.
    """
    name: str
    source: str | int = 0

    model_config = ConfigDict(frozen=True)


class LevelsGroup(BaseModel):
    """A named, ordered list of levels shown as one tab."""
    name: str
    items: List[Level] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class VariableOption(BaseModel):
    value: str
    text: str
    selected: bool = False


class BoundVariable(BaseModel):
    """
    External selection state for one named variable.

    Options are looked up by their normalized value, so the internal All token
    is found under its display string as well.
    """
    name: str
    type: VariableType = VariableType.CUSTOM
    label: Optional[str] = None
    multi: bool = False
    include_all: bool = False
    options: List[VariableOption] = Field(default_factory=list)
    current: str | List[str] | None = None

    model_config = ConfigDict(extra="ignore")

    _option_index: Dict[str, int] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        index: Dict[str, int] = {}
        for position, option in enumerate(self.options):
            index.setdefault(option.value, position)
            index.setdefault(normalize_option_value(option.value), position)
        self._option_index = index

    @property
    def kind(self) -> VariableKind:
        if self.type in (VariableType.CUSTOM, VariableType.QUERY):
            return VariableKind.MULTI if self.multi else VariableKind.SINGLE
        if self.type == VariableType.TEXTBOX:
            return VariableKind.TEXT
        return VariableKind.UNSUPPORTED

    @property
    def has_options(self) -> bool:
        """Custom and query variables expose a selectable option list."""
        return self.type in (VariableType.CUSTOM, VariableType.QUERY)

    def get_option(self, value: str) -> Optional[VariableOption]:
        position = self._option_index.get(value)
        if position is None:
            return None
        return self.options[position]

    def selected_options(self) -> List[VariableOption]:
        return [option for option in self.options if option.selected]

    @property
    def is_all_option_selected(self) -> bool:
        option = self.get_option(ALL_VALUE_PARAMETER)
        return bool(option and option.selected)

    def current_values(self) -> List[str]:
        if self.current is None:
            return []
        if isinstance(self.current, list):
            return list(self.current)
        return [self.current]


class StatusStyleThreshold(BaseModel):
    value: float
    image: str = ""
    color: Optional[str] = None


class StatusStyleOptions(BaseModel):
    mode: StatusStyleMode = StatusStyleMode.COLOR
    thresholds: List[StatusStyleThreshold] = Field(default_factory=list)


class Status(BaseModel):
    """
    Result of a status lookup.

    `exist=False` means "no usable status", never an error.
    """
    exist: bool = False
    value: Optional[float] = None
    color: Optional[str] = None
    mode: StatusStyleMode = StatusStyleMode.COLOR
    image: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TableItem(BaseModel):
    """
    One node of the selection tree.

    Nodes are immutable and rebuilt wholesale whenever data or variable state
    changes. `variable` holds the bound variable's name, resolved on demand.
    """
    value: str
    label: str = ""
    selected: bool = False
    selectable: bool = False
    show_status: bool = False
    status: Optional[float] = None
    status_color: Optional[str] = None
    status_mode: StatusStyleMode = StatusStyleMode.COLOR
    status_image: Optional[str] = None
    is_favorite: Optional[bool] = None
    can_be_favorite: bool = False
    child_values: Optional[List[str]] = None
    child_selected_count: Optional[int] = None
    child_favorites_count: Optional[int] = None
    children: Optional[List["TableItem"]] = None
    name: Optional[str] = None
    variable: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_group(self) -> bool:
        return self.children is not None

    def leaf_values(self) -> List[str]:
        """Values a click on this node targets."""
        if self.child_values is not None:
            return list(self.child_values)
        return [self.value]


TableItem.model_rebuild()
