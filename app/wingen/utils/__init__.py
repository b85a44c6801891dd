"""Utility modules for wingen.

This module exports commonly used utility functions.
"""

from wingen.utils.formatting import (
    console,
    create_table,
    err_console,
    format_provider,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_table",
    "err_console",
    "format_provider",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
