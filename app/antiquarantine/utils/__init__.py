"""Utility modules for aq.

This module exports commonly used utility functions.
"""

from antiquarantine.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_path,
    print_success,
    print_warning,
    styled,
)
from antiquarantine.utils.logging import configure_logging
from antiquarantine.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_path",
    "print_success",
    "print_warning",
    "styled",
    "run_command",
]
