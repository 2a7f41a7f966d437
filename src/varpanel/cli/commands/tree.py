"""
Tree Command - Render the selection tree for the active levels group.
"""

import logging
from typing import List, Optional

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.tree import Tree

from ...core.exceptions import PanelError
from ...core.tree import filter_tree
from ...core.types import TableItem
from ..renderers import JsonRenderer
from ..utils import build_panel, echo_error, echo_warning

logger = logging.getLogger(__name__)

console = Console()


class TreeResponse(BaseModel):
    group: Optional[str] = None
    variable: Optional[str] = None
    rows: List[TableItem] = Field(default_factory=list)


def format_item(item: TableItem, show_name: bool = False) -> str:
    """One-line rich markup for a node."""
    if item.selectable or item.is_group:
        marker = "[green]\\[x][/green]" if item.selected else "[ ]"
    else:
        marker = "   "

    text = item.label or item.value
    if show_name and item.name:
        text = f"{item.name}: {text}"
    if item.selected:
        text = f"[bold]{text}[/bold]"

    parts = [marker, text]
    if item.show_status:
        if item.status_image:
            parts.append(f"[dim]({item.status}, {item.status_image})[/dim]")
        else:
            parts.append(f"[{item.status_color or 'white'}]●[/] [dim]{item.status}[/dim]")
    if item.is_favorite:
        parts.append("[yellow]★[/yellow]")
    if item.child_values is not None:
        parts.append(f"[dim]{item.child_selected_count or 0}/{len(item.child_values)}[/dim]")
    return " ".join(parts)


def render_tree(rows: List[TableItem], title: str, show_name: bool = False) -> Tree:
    root = Tree(f"[bold blue]{title}[/bold blue]")

    def add(branch: Tree, items: List[TableItem]) -> None:
        for item in items:
            child = branch.add(format_item(item, show_name))
            if item.children:
                add(child, item.children)

    add(root, rows)
    return root


@click.command("tree")
@click.option("-c", "--config", "config_path", default=None,
              help="Panel options YAML (default: .varpanel/panel.yaml)")
@click.option("-f", "--frames", "frames_path", required=True, help="Frames JSON file")
@click.option("-V", "--variables", "variables_path", required=True,
              help="Variables JSON/YAML file")
@click.option("-q", "--query", default="", help="Current selection as a URL query string")
@click.option("-g", "--group", default=None, help="Levels group (tab) to render")
@click.option("--favorites-file", default=None, help="JSON file holding favorites")
@click.option("--search", default="", help="Only show rows matching this text")
@click.option("--favorites-only", is_flag=True, help="Only show favorites")
@click.option("--selected-only", is_flag=True, help="Only show selected rows")
@click.option("--sort-status", is_flag=True, help="Sort rows by status value")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tree(
    config_path: Optional[str],
    frames_path: str,
    variables_path: str,
    query: str,
    group: Optional[str],
    favorites_file: Optional[str],
    search: str,
    favorites_only: bool,
    selected_only: bool,
    sort_status: bool,
    as_json: bool,
) -> None:
    """
    Render the selection tree built from frames and variables.
    """
    renderer = JsonRenderer("tree")
    error_to_report = None
    response = None

    try:
        panel, _ = build_panel(config_path, frames_path, variables_path, query, favorites_file, group)
        rows = filter_tree(
            panel.table_data(),
            search=search,
            favorites_only=favorites_only,
            selected_only=selected_only,
            sort_by_status=sort_status,
        )
        variable = panel.runtime_variable()
        response = TreeResponse(
            group=panel.current_group,
            variable=variable.name if variable else None,
            rows=rows,
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

    if not response.rows:
        echo_warning("No rows to display. Check the levels sources and variable options.")
        return

    title = response.group or response.variable or "variables"
    console.print(render_tree(response.rows, title, show_name=panel.options.show_name))
