"""Utility modules for fsguard.

This module exports commonly used utility functions.
"""

from fsguard.utils.formatting import (
    console,
    create_table,
    err_console,
    format_size,
    print_error,
    print_failures,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_table",
    "err_console",
    "format_size",
    "print_error",
    "print_failures",
    "print_info",
    "print_success",
    "print_warning",
]
