"""
Exceptions raised at the edges of varpanel.

The core engines never raise for missing data or variables; these are used by
the CLI to report user errors in a uniform way.
"""


class PanelError(Exception):
    """Base class for varpanel errors."""

    code = "PANEL_ERROR"


class ConfigNotFoundError(PanelError):
    code = "CONFIG_NOT_FOUND"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Configuration file not found: {path}")


class GroupNotFoundError(PanelError):
    code = "GROUP_NOT_FOUND"

    def __init__(self, group: str):
        self.group = group
        super().__init__(f"Levels group not found: {group}")


class VariableNotFoundError(PanelError):
    code = "VARIABLE_NOT_FOUND"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable not found: {name}")
