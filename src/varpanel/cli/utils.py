"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing plus the loading sequence every command shares: panel
options, frames and variables from disk, selection state from a query string.
"""

from typing import Optional, Tuple

import click

from ..config import load_panel_options
from ..core.exceptions import ConfigNotFoundError, GroupNotFoundError, PanelError
from ..core.favorites import JsonFileFavorites
from ..core.frames import load_frames
from ..core.panel import VariablePanel
from ..core.result import LoadError
from ..core.selection import QueryStringSelectionStore
from ..core.variables import load_variables


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def _load_error(error: LoadError) -> PanelError:
    return PanelError(error.message)


def _config_error(error: LoadError) -> PanelError:
    if error.missing:
        return ConfigNotFoundError(error.path or "")
    return PanelError(error.message)


def build_panel(
    config_path: Optional[str],
    frames_path: str,
    variables_path: str,
    query: str = "",
    favorites_path: Optional[str] = None,
    group: Optional[str] = None,
) -> Tuple[VariablePanel, QueryStringSelectionStore]:
    """
    Load everything a command needs and return a ready panel.

    Variables are synced from the query string first, so the tree reflects
    the selection the query holds.

    Raises:
        PanelError: When a file is missing or invalid, or the group is unknown.
    """
    options = load_panel_options(config_path).unwrap_or_raise(_config_error)
    frames = load_frames(frames_path).unwrap_or_raise(_load_error)
    registry = load_variables(variables_path).unwrap_or_raise(_load_error)

    store = QueryStringSelectionStore(query)
    registry.sync(store)

    favorites = JsonFileFavorites(favorites_path) if favorites_path else None
    panel = VariablePanel(options, frames, registry, store, favorites=favorites)

    if group is not None:
        if options.get_group(group) is None:
            raise GroupNotFoundError(group)
        panel.current_group = group

    return panel, store
