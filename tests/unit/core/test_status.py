"""
Unit tests for the Status Resolver.
"""

import pytest

from varpanel.core.frames import DataFrame, FieldColumn, FieldType, FrameSet
from varpanel.core.status import StatusResolver, get_active_threshold
from varpanel.core.types import StatusStyleMode, StatusStyleOptions, StatusStyleThreshold

IMAGE_STYLE = StatusStyleOptions(
    mode=StatusStyleMode.IMAGE,
    thresholds=[
        StatusStyleThreshold(value=80, image="alert.svg"),
        StatusStyleThreshold(value=0, image="ok.svg"),
    ],
)


class TestGetActiveThreshold:

    def test_greatest_threshold_below_value(self):
        assert get_active_threshold(85, IMAGE_STYLE.thresholds).image == "alert.svg"
        assert get_active_threshold(80, IMAGE_STYLE.thresholds).image == "alert.svg"
        assert get_active_threshold(79.9, IMAGE_STYLE.thresholds).image == "ok.svg"

    def test_none_qualifies(self):
        assert get_active_threshold(-1, IMAGE_STYLE.thresholds) is None
        assert get_active_threshold(5, []) is None


class TestStatusResolver:

    @pytest.fixture
    def resolver(self, device_frames):
        return StatusResolver.from_frames(device_frames, name="device")

    def test_resolves_value_and_color(self, resolver):
        status = resolver.resolve("device11")

        assert status.exist is True
        assert status.value == 85
        assert status.color == "red"
        assert status.mode == StatusStyleMode.COLOR
        assert status.image is None

    def test_base_color(self, resolver):
        assert resolver("device1").color == "green"

    def test_absent_value(self, resolver):
        assert resolver.resolve("device99").exist is False

    def test_defaults_to_first_string_column(self, device_frames):
        resolver = StatusResolver.from_frames(device_frames)

        assert resolver.names.name == "country"
        assert resolver.resolve("Japan").value == 50

    def test_image_mode(self, device_frames):
        resolver = StatusResolver.from_frames(device_frames, name="device", style=IMAGE_STYLE)

        assert resolver.resolve("device11").image == "alert.svg"
        assert resolver.resolve("device1").image == "ok.svg"
        assert resolver.resolve("device1").mode == StatusStyleMode.IMAGE

    def test_image_mode_without_qualifying_threshold(self, device_frames):
        style = StatusStyleOptions(
            mode=StatusStyleMode.IMAGE,
            thresholds=[StatusStyleThreshold(value=20, image="warn.svg")],
        )
        status = StatusResolver.from_frames(device_frames, name="device", style=style).resolve("device1")

        assert status.exist is True
        assert status.image is None

    def test_missing_display_mapping(self):
        frames = FrameSet(series=[DataFrame(fields=[
            FieldColumn("host", FieldType.STRING, ["a"]),
            FieldColumn("load", FieldType.NUMBER, [1.5]),
        ])])
        assert StatusResolver.from_frames(frames).resolve("a").exist is False

    def test_missing_raw_value(self, device_frames):
        resolver = StatusResolver.from_frames(device_frames, name="device")
        resolver.status.values[0] = None

        assert resolver.resolve("device1").exist is False

    def test_no_status_column(self):
        frames = FrameSet(series=[DataFrame(fields=[FieldColumn("host", FieldType.STRING, ["a"])])])
        assert StatusResolver.from_frames(frames).resolve("a").exist is False

    def test_no_columns_at_all(self):
        assert StatusResolver().resolve("anything").exist is False
