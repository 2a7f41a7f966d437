"""Panel files on disk, as the CLI commands read them."""

import json
from pathlib import Path
from typing import Dict

import pytest

PANEL_YAML = """
name: device
favorites: true
groups:
  - name: By country
    items:
      - {name: country, source: A}
      - {name: device, source: A}
  - name: Devices
    items:
      - {name: device, source: A}
"""

FRAMES = {
    "series": [
        {
            "refId": "A",
            "fields": [
                {"name": "country", "values": ["USA", "USA", "Japan"]},
                {"name": "device", "values": ["device1", "device11", "device12"]},
                {
                    "name": "value",
                    "type": "number",
                    "values": [10, 85, 50],
                    "thresholds": [{"color": "green"}, {"value": 80, "color": "red"}],
                },
            ],
        }
    ]
}

VARIABLES = [
    {
        "name": "country",
        "type": "custom",
        "multi": True,
        "options": [{"value": "USA", "text": "USA"}, {"value": "Japan", "text": "Japan"}],
    },
    {
        "name": "device",
        "type": "custom",
        "multi": True,
        "options": [
            {"value": "device1", "text": "device1"},
            {"value": "device11", "text": "device11"},
            {"value": "device12", "text": "device12"},
        ],
    },
]


@pytest.fixture
def panel_files(tmp_path) -> Dict[str, Path]:
    config = tmp_path / "panel.yaml"
    config.write_text(PANEL_YAML)

    frames = tmp_path / "frames.json"
    frames.write_text(json.dumps(FRAMES))

    variables = tmp_path / "variables.json"
    variables.write_text(json.dumps(VARIABLES))

    return {"config": config, "frames": frames, "variables": variables}


@pytest.fixture
def panel_args(panel_files):
    return [
        "-c", str(panel_files["config"]),
        "-f", str(panel_files["frames"]),
        "-V", str(panel_files["variables"]),
    ]
