"""
Select Command - Apply a click to the selection state.

Finds the clicked value in the tree (a group or a leaf), runs the cascading
update against a query-string store, and prints the resulting query.
"""

import logging
from typing import List, Optional, Tuple

import click
from pydantic import BaseModel, Field

from ...core.exceptions import PanelError, VariableNotFoundError
from ...core.panel import VariablePanel
from ...core.selection import SelectionStore
from ...core.tree import iter_tree
from ...core.types import TableItem
from ..renderers import JsonRenderer
from ..utils import build_panel, echo_error, echo_info, echo_success

logger = logging.getLogger(__name__)


class Commit(BaseModel):
    variable: str
    value: str | List[str]


class SelectResponse(BaseModel):
    clicked: List[str]
    query: str
    commits: List[Commit] = Field(default_factory=list)


class _RecordingStore:
    """Forwards writes to a backing store while recording them."""

    def __init__(self, backing: SelectionStore):
        self.backing = backing
        self.writes: List[Tuple[str, str | List[str]]] = []

    def read(self, name: str) -> Optional[List[str]]:
        return self.backing.read(name)

    def write(self, name: str, value: str | List[str]) -> None:
        self.writes.append((name, value))
        self.backing.write(name, value)


def find_item(panel: VariablePanel, value: str) -> Optional[TableItem]:
    """First node (depth-first) whose value or label matches."""
    for _, item in iter_tree(panel.table_data()):
        if item.value == value or item.label == value:
            return item
    return None


def apply_clicks(
    panel: VariablePanel,
    store: SelectionStore,
    values: Tuple[str, ...],
    keep_selection: bool,
) -> List[str]:
    """
    Click each value in turn; unknown values are clicked as bare leaves.

    Variables are re-synced from the store between clicks, as a host refresh would.
    """
    levels = panel.levels()
    variable = panel.runtime_variable(levels)
    if variable is None:
        raise VariableNotFoundError(levels[-1].name if levels else panel.options.variable or "")

    clicked = []
    for value in values:
        item = find_item(panel, value)
        if item is None:
            logger.debug(f"{value!r} not in tree, selecting it directly")
            item = TableItem(value=value, label=value, variable=variable.name)
        panel.on_change(item, keep_selection=keep_selection)
        panel.variables.sync(store)
        clicked.append(item.value)
    return clicked


@click.command("select")
@click.argument("values", nargs=-1, required=True)
@click.option("-c", "--config", "config_path", default=None,
              help="Panel options YAML (default: .varpanel/panel.yaml)")
@click.option("-f", "--frames", "frames_path", required=True, help="Frames JSON file")
@click.option("-V", "--variables", "variables_path", required=True,
              help="Variables JSON/YAML file")
@click.option("-q", "--query", default="", help="Current selection as a URL query string")
@click.option("-g", "--group", default=None, help="Levels group (tab) to use")
@click.option("--keep", "keep_selection", is_flag=True,
              help="Deselect from an active All instead of replacing it")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def select(
    values: Tuple[str, ...],
    config_path: Optional[str],
    frames_path: str,
    variables_path: str,
    query: str,
    group: Optional[str],
    keep_selection: bool,
    as_json: bool,
) -> None:
    """
    Click VALUES in the tree and print the updated selection query.
    """
    renderer = JsonRenderer("select")
    error_to_report = None
    response = None

    try:
        panel, store = build_panel(config_path, frames_path, variables_path, query, group=group)
        recorder = _RecordingStore(store)
        panel.reconciler.store = recorder

        clicked = apply_clicks(panel, store, values, keep_selection)
        response = SelectResponse(
            clicked=clicked,
            query=store.to_query(),
            commits=[Commit(variable=name, value=value) for name, value in recorder.writes],
        )
    except PanelError as e:
        error_to_report = e

    if as_json:
        if error_to_report:
            renderer.render_error(error_to_report)
        else:
            renderer.render_success(response)
        return

    if error_to_report:
        echo_error(str(error_to_report))
        return

    for commit in response.commits:
        echo_info(f"{commit.variable} = {commit.value}")
    echo_success(response.query or "(empty selection)")
