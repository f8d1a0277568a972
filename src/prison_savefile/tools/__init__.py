"""
prison_savefile.tools - Savefile Utilities

This module contains the tools built on the tree model:
- format: savefile writer/formatter
- query: navigate and search parsed trees
"""

# Formatter
from .format import (
    SaveFormatter, FormatOptions, format_node, format_file, quote_string, write_file, check_formatted,
)

# Query (function-based)
from .query import find_by_path, find_all_by_path, search_values, get_all_keys

__all__ = [
    # Format
    "SaveFormatter",
    "FormatOptions",
    "format_node",
    "format_file",
    "quote_string",
    "write_file",
    "check_formatted",
    # Query
    "find_by_path",
    "find_all_by_path",
    "search_values",
    "get_all_keys",
]
