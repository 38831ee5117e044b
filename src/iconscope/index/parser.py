"""
Theme index parser.

Turns the text of an index.theme file into a ThemeIndex: the header
metadata from the first section (conventionally [Icon Theme]) and one
ThemeDirectorySection for every later section, in file order.
"""

from __future__ import annotations

import re

from iconscope.core.models import ScanDiagnostic, ThemeDirectorySection, ThemeIndex
from iconscope.index.scanner import (
    SectionEntries,
    consume_line,
    consume_section,
    read_section,
    seek_next_section,
)

# Leading integer of a value, read the way sscanf("%i") would.
_LEADING_INT = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9]\d*)")


def parse_int(value: str | None, default: int) -> int:
    """
    Parse the leading integer of value.

    Returns default when value is missing or does not start with a number.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        number = int(digits, 16)
    elif digits.startswith("0"):
        number = int(digits, 8)
    else:
        number = int(digits, 10)
    return -number if sign == "-" else number


def parse_list(value: str | None) -> list[str]:
    """Split a comma separated list, dropping empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _apply_header(index: ThemeIndex, entries: SectionEntries) -> None:
    index.name = entries.first("Name")
    index.comment = entries.first("Comment")
    index.inherits = parse_list(entries.first("Inherits"))
    index.directories = parse_list(entries.first("Directories"))
    index.scaled_directories = parse_list(entries.first("ScaledDirectories"))


def build_section(path: str, entries: SectionEntries) -> ThemeDirectorySection:
    """Build a directory section from its recognized keys."""
    section = ThemeDirectorySection(path=path)
    for key, value in entries.pairs:
        if key == "Size":
            section.size = parse_int(value, -1)
        elif key == "MinSize":
            section.min_size = parse_int(value, -1)
        elif key == "MaxSize":
            section.max_size = parse_int(value, -1)
        elif key == "Threshold":
            section.threshold = parse_int(value, 2)
        elif key == "Scale":
            section.scale = parse_int(value, 1)
        elif key == "Type":
            section.type = value
        elif key == "Context":
            section.context = value
    return section


def _skip_broken_section(text: str, cursor: int) -> int:
    # Drop the bad header line and the entries that belong to it.
    return consume_section(text, consume_line(text, cursor))


def parse_theme_index(text: str, source: str | None = None) -> ThemeIndex:
    """
    Parse the contents of an index.theme file.

    Syntax problems never abort the parse; they are collected in
    ThemeIndex.diagnostics and everything read before (and after) them
    stays available.
    """
    diagnostics: list[ScanDiagnostic] = []
    index = ThemeIndex(diagnostics=diagnostics)

    header = seek_next_section(text, 0, diagnostics, source)
    if header.at_end:
        return index

    if header.ok:
        entries = read_section(text, header.cursor, diagnostics, source)
        index.header = header.name
        _apply_header(index, entries)
        cursor = entries.cursor
    else:
        cursor = _skip_broken_section(text, header.cursor)

    while cursor < len(text):
        result = seek_next_section(text, cursor, diagnostics, source)
        if result.at_end:
            break
        if not result.ok:
            cursor = _skip_broken_section(text, result.cursor)
            continue

        entries = read_section(text, result.cursor, diagnostics, source)
        index.sections.append(build_section(result.name, entries))
        cursor = entries.cursor

    return index
