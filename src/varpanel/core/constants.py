"""
Sentinel values shared by the tree builder and the reconciler.

The "All" option travels through two spellings: the internal token used in
variable option values, and the display string written to the selection store.
"""

# Display string for the "every option" choice
ALL_VALUE = "All"

# Internal option value for the "every option" choice
ALL_VALUE_PARAMETER = "$__all"

# Internal option value meaning "clear the selection"
NO_VALUE_PARAMETER = "$__empty"

# Prefix used for variables in URL query strings
VARIABLE_QUERY_PREFIX = "var-"


def is_all_value(value: str) -> bool:
    """Check whether a requested value means "All" (case-insensitive)."""
    return value == ALL_VALUE_PARAMETER or value.lower() == ALL_VALUE.lower()


def normalize_option_value(value: str) -> str:
    """Map the internal All token to its display string."""
    if value == ALL_VALUE_PARAMETER:
        return ALL_VALUE
    return value
