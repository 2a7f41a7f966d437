"""Shared fixtures: a country/device frame and the variables bound to it."""

from typing import Iterable, Optional

import pytest

from varpanel.core.frames import (
    ColorStep,
    DataFrame,
    FieldColumn,
    FieldType,
    FrameSet,
    threshold_color_display,
)
from varpanel.core.types import BoundVariable, VariableOption, VariableType
from varpanel.core.variables import VariableRegistry


@pytest.fixture
def device_frames() -> FrameSet:
    """Three devices in two countries, with a numeric status column."""
    return FrameSet(series=[
        DataFrame(
            ref_id="A",
            fields=[
                FieldColumn("country", FieldType.STRING, ["USA", "USA", "Japan"]),
                FieldColumn("device", FieldType.STRING, ["device1", "device11", "device12"]),
                FieldColumn(
                    "value",
                    FieldType.NUMBER,
                    [10, 85, 50],
                    display=threshold_color_display([ColorStep("green"), ColorStep("red", 80)]),
                ),
            ],
        ),
    ])


@pytest.fixture
def make_variable():
    def _make(
        name: str,
        values: Iterable[str],
        selected: Iterable[str] = (),
        multi: bool = True,
        include_all: bool = False,
        type: VariableType = VariableType.CUSTOM,
        current: Optional[object] = None,
    ) -> BoundVariable:
        selected = list(selected)
        if current is None:
            current = selected if multi else (selected[0] if selected else None)
        return BoundVariable(
            name=name,
            type=type,
            multi=multi,
            include_all=include_all,
            options=[VariableOption(value=v, text=v, selected=v in selected) for v in values],
            current=current,
        )

    return _make


@pytest.fixture
def registry(make_variable) -> VariableRegistry:
    return VariableRegistry([
        make_variable("country", ["USA", "Japan"]),
        make_variable("device", ["device1", "device11", "device12"]),
    ])
