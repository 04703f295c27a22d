"""Utility functions for the generator."""

from .formatters import (
    BuiltinFormatter,
    PrettierFormatter,
    get_formatter,
    format_typescript_code,
)

__all__ = [
    "BuiltinFormatter",
    "PrettierFormatter",
    "get_formatter",
    "format_typescript_code",
]
