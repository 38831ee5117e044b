"""
IconScope index file support.

Scanner and parser for the INI/desktop-entry subset used by
index.theme files.
"""

from iconscope.index.parser import parse_theme_index
from iconscope.index.scanner import (
    consume_ignored_lines,
    is_end_of_section,
    read_section,
    seek_next_key_value,
    seek_next_section,
)

__all__ = [
    "consume_ignored_lines",
    "is_end_of_section",
    "parse_theme_index",
    "read_section",
    "seek_next_key_value",
    "seek_next_section",
]
