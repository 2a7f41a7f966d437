"""
Columnar frame model.

A FrameSet is what a data refresh delivers: a list of frames, each a list of
equally long named columns. Numeric columns may carry a display mapping that
turns a value into a color, which is what the status resolver reads.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .result import Err, LoadError, Ok, Result

logger = logging.getLogger(__name__)


class FieldType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TIME = "time"
    OTHER = "other"


@dataclass(frozen=True)
class DisplayValue:
    """Display form of a single cell."""
    text: str
    color: Optional[str] = None
    numeric: Optional[float] = None


DisplayFn = Callable[[Any], Optional[DisplayValue]]


@dataclass(frozen=True)
class ColorStep:
    """
    A color threshold step.

    A step with `value=None` is the base step and matches any number.
    """
    color: str
    value: Optional[float] = None


def threshold_color_display(steps: List[ColorStep]) -> DisplayFn:
    """
    Build a display mapping coloring a number by the greatest step <= value.

    Non-numeric input maps to None, which callers read as "no display".
    """
    base = [step for step in steps if step.value is None]
    ordered = sorted(
        (step for step in steps if step.value is not None),
        key=lambda step: step.value,
    )

    def display(value: Any) -> Optional[DisplayValue]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None

        active = base[-1] if base else None
        for step in ordered:
            if value >= step.value:
                active = step
            else:
                break

        return DisplayValue(
            text=str(value),
            color=active.color if active else None,
            numeric=float(value),
        )

    return display


@dataclass
class FieldColumn:
    name: str
    type: FieldType
    values: List[Any] = field(default_factory=list)
    display: Optional[DisplayFn] = None


@dataclass
class DataFrame:
    fields: List[FieldColumn] = field(default_factory=list)
    ref_id: Optional[str] = None

    @property
    def length(self) -> int:
        if not self.fields:
            return 0
        return max(len(column.values) for column in self.fields)

    def to_rows(self) -> List[Dict[str, Any]]:
        """Materialize the frame as one dict per row (column name -> cell)."""
        rows = []
        for index in range(self.length):
            rows.append({
                column.name: column.values[index] if index < len(column.values) else None
                for column in self.fields
            })
        return rows


@dataclass
class FrameSet:
    series: List[DataFrame] = field(default_factory=list)

    def find_source(self, source: str | int) -> Optional[DataFrame]:
        """
        Find the frame a level reads from.

        Frames with a refId match on it; frames without one match on position.
        """
        for index, frame in enumerate(self.series):
            if frame.ref_id is None:
                if index == source:
                    return frame
            elif frame.ref_id == source:
                return frame
        return None


def _infer_type(values: List[Any]) -> FieldType:
    for value in values:
        if value is None:
            continue
        if isinstance(value, bool):
            return FieldType.BOOLEAN
        if isinstance(value, (int, float)):
            return FieldType.NUMBER
        if isinstance(value, str):
            return FieldType.STRING
        return FieldType.OTHER
    return FieldType.STRING


def _color_step(data: Dict[str, Any]) -> ColorStep:
    value = data.get("value")
    if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
        raise ValueError(f"Threshold value must be a number, got {value!r}")
    return ColorStep(color=data["color"], value=value)


def frames_from_dict(data: Dict[str, Any]) -> FrameSet:
    """
    Build a FrameSet from plain data.

    Expected format:
    {
        "series": [
            {"refId": "A", "fields": [
                {"name": "device", "type": "string", "values": [...]},
                {"name": "value", "type": "number", "values": [...],
                 "thresholds": [{"value": null, "color": "green"}, ...]}
            ]}
        ]
    }
    """
    series = []
    for frame_data in data.get("series", []):
        columns = []
        for field_data in frame_data.get("fields", []):
            values = list(field_data.get("values", []))
            raw_type = field_data.get("type")
            column_type = FieldType(raw_type) if raw_type else _infer_type(values)

            display = None
            thresholds = field_data.get("thresholds")
            if thresholds:
                display = threshold_color_display([_color_step(step) for step in thresholds])

            columns.append(FieldColumn(
                name=field_data["name"],
                type=column_type,
                values=values,
                display=display,
            ))
        series.append(DataFrame(fields=columns, ref_id=frame_data.get("refId")))
    return FrameSet(series=series)


def load_frames(path: str | Path) -> Result[FrameSet, LoadError]:
    """Load a FrameSet from a JSON file."""
    frames_path = Path(path)
    if not frames_path.exists():
        return Err(LoadError(f"Frames file not found: {frames_path}", path=str(frames_path)))

    try:
        data = json.loads(frames_path.read_text())
        return Ok(frames_from_dict(data))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.debug(f"Failed to parse frames from {frames_path}: {e}")
        return Err(LoadError(f"Invalid frames file: {e}", path=str(frames_path), cause=e))
