"""
Status Resolver.

Correlates a tree value with a numeric status column by name: the value is
looked up in a string "names" column, and the number at the same row is run
through the status column's display mapping to get a color (or an image when
the panel uses image thresholds).
"""

import logging
from typing import Any, List, Optional

from .frames import FieldColumn, FieldType, FrameSet
from .types import Status, StatusStyleMode, StatusStyleOptions, StatusStyleThreshold

logger = logging.getLogger(__name__)


def get_active_threshold(
    value: float,
    thresholds: List[StatusStyleThreshold],
) -> Optional[StatusStyleThreshold]:
    """Return the threshold with the greatest value <= `value`, if any."""
    active = None
    for threshold in sorted(thresholds, key=lambda t: t.value):
        if value >= threshold.value:
            active = threshold
        else:
            break
    return active


def _find_column(frames: FrameSet, column_type: FieldType, name: Optional[str]) -> Optional[FieldColumn]:
    for frame in frames.series:
        for column in frame.fields:
            if column.type == column_type and (not name or column.name == name):
                return column
    return None


class StatusResolver:
    """
    Pure lookup from value to Status over two parallel columns.

    Either column may be missing, in which case every lookup reports
    `exist=False`.
    """

    def __init__(
        self,
        names: Optional[FieldColumn] = None,
        status: Optional[FieldColumn] = None,
        style: Optional[StatusStyleOptions] = None,
    ):
        self.names = names
        self.status = status
        self.style = style or StatusStyleOptions()

    @classmethod
    def from_frames(
        cls,
        frames: FrameSet,
        name: Optional[str] = None,
        status: Optional[str] = None,
        style: Optional[StatusStyleOptions] = None,
    ) -> "StatusResolver":
        """
        Pick the first string column and the first number column across frames.

        `name` and `status` restrict the choice to columns with that name.
        """
        return cls(
            names=_find_column(frames, FieldType.STRING, name),
            status=_find_column(frames, FieldType.NUMBER, status),
            style=style,
        )

    def _index_of(self, value: Any) -> int:
        if self.names is None:
            return -1
        try:
            return self.names.values.index(value)
        except ValueError:
            return -1

    def resolve(self, value: Any) -> Status:
        index = self._index_of(value)
        if index < 0:
            return Status(exist=False)

        if self.status is None or index >= len(self.status.values):
            return Status(exist=False)

        raw_value = self.status.values[index]
        display = self.status.display(raw_value) if self.status.display else None
        if raw_value is None or display is None:
            return Status(exist=False)

        image = None
        if self.style.mode == StatusStyleMode.IMAGE:
            threshold = get_active_threshold(raw_value, self.style.thresholds)
            if threshold is not None:
                image = threshold.image

        return Status(
            exist=True,
            value=raw_value,
            color=display.color or "",
            mode=self.style.mode,
            image=image,
        )

    __call__ = resolve
