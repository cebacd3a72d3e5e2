"""
Behaviour switches of an interface.

Flags compose with `|`:
    >>> Configuration.FAIL_ON_MISSING_OPTION | Configuration.ALLOW_UNKNOWN_ARGUMENTS
"""
from enum import IntFlag


class Configuration(IntFlag):
    """
    Bit flags consumed by the parser and by the exit helpers.

    - PRINT_HELP_ON_EXIT: print the manual before reporting any parse failure.
    - PRINT_HELP_FOR_NO_SELECTION: print the manual when no command was selected.
    - FAIL_ON_MISSING_OPTION: a pass without a command fails (NoCommandSelectedError).
    - ALLOW_UNKNOWN_ARGUMENTS: unrecognized tokens go to `unparsed_arguments`.
    """
    PRINT_HELP_ON_EXIT          = 1
    PRINT_HELP_FOR_NO_SELECTION = 2
    FAIL_ON_MISSING_OPTION      = 4
    ALLOW_UNKNOWN_ARGUMENTS     = 8

    DEFAULT = PRINT_HELP_ON_EXIT | PRINT_HELP_FOR_NO_SELECTION | FAIL_ON_MISSING_OPTION | ALLOW_UNKNOWN_ARGUMENTS


__all__ = (
    "Configuration",
)
