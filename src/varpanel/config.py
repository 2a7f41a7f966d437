"""
Panel configuration.

Panel options live in a YAML file (by default `.varpanel/panel.yaml`):

    variable: device
    name: device
    status: value
    favorites: true
    status_style:
      mode: image
      thresholds:
        - {value: 0, image: ok.svg}
        - {value: 80, image: alert.svg}
    groups:
      - name: By country
        items:
          - {name: country, source: A}
          - {name: device, source: A}
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.result import Err, LoadError, Ok, Result
from .core.types import LevelsGroup, StatusStyleOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".varpanel/panel.yaml")


class PanelOptions(BaseModel):
    """Options controlling how the panel builds its table."""
    # Variable used when no levels group is configured
    variable: Optional[str] = None
    groups: List[LevelsGroup] = Field(default_factory=list)

    # Column filters for the status lookup
    name: Optional[str] = None
    status: Optional[str] = None
    status_style: StatusStyleOptions = Field(default_factory=StatusStyleOptions)

    favorites: bool = False
    show_name: bool = False
    empty_value: bool = False

    # Tabs
    pin_tabs: bool = False
    pinned_groups: List[str] = Field(default_factory=list)
    tabs_in_order: bool = True

    def get_group(self, name: Optional[str]) -> Optional[LevelsGroup]:
        for group in self.groups:
            if group.name == name:
                return group
        return None


def load_panel_options(path: str | Path | None = None) -> Result[PanelOptions, LoadError]:
    """Read and validate panel options from YAML."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return Err(LoadError(f"Configuration file not found: {config_path}", path=str(config_path)))

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        return Err(LoadError(f"Invalid YAML in {config_path}: {e}", path=str(config_path), cause=e))

    try:
        options = PanelOptions.model_validate(data)
    except ValidationError as e:
        return Err(LoadError(f"Invalid panel options: {e}", path=str(config_path), cause=e))

    logger.debug(f"Loaded panel options from {config_path}: {len(options.groups)} group(s)")
    return Ok(options)
