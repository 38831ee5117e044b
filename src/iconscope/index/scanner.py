"""
INI/desktop file scanner.

Cursor based helpers that walk an in-memory INI or desktop-entry buffer
one line at a time. The cursor is an offset into the buffer; every
function takes a cursor and returns the advanced one, so a whole file
can be printed back like this:

    cursor = 0
    while cursor < len(text):
        header = seek_next_section(text, cursor)
        if header.at_end:
            break
        print(f"[{header.name}]")
        entries = read_section(text, header.cursor)
        for key, value in entries.pairs:
            print(f"{key}={value}")
        cursor = entries.cursor

Malformed lines never raise. They are recorded as ScanDiagnostic
entries in the caller's list (when one is given), logged, and scanning
continues from the next line.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from iconscope.core.logging import get_logger
from iconscope.core.models import ScanDiagnostic

logger = get_logger(__name__)

SECTION_START = "["
SECTION_END = "]"
COMMENT_CHARS = ";#"
INLINE_SPACES = " \t"


@dataclass(frozen=True)
class SectionResult:
    """Outcome of seek_next_section()."""

    name: str | None
    cursor: int
    at_end: bool = False

    @property
    def ok(self) -> bool:
        return self.name is not None


@dataclass(frozen=True)
class KeyValueResult:
    """Outcome of seek_next_key_value()."""

    key: str | None
    value: str | None
    cursor: int
    end_of_section: bool = False

    @property
    def ok(self) -> bool:
        return self.key is not None


@dataclass
class SectionEntries:
    """All key/value pairs of one section, in file order."""

    pairs: list[tuple[str, str]] = field(default_factory=list)
    cursor: int = 0

    def first(self, key: str) -> str | None:
        """Value of the first occurrence of key, later duplicates ignored."""
        for k, v in self.pairs:
            if k == key:
                return v
        return None


def line_end(buffer: str, cursor: int) -> int:
    """Offset of the newline ending the current line, or len(buffer)."""
    end = buffer.find("\n", cursor)
    return len(buffer) if end == -1 else end


def consume_line(buffer: str, cursor: int) -> int:
    """Advance to the first character of the next line."""
    end = buffer.find("\n", cursor)
    return len(buffer) if end == -1 else end + 1


def consume_spaces(buffer: str, cursor: int) -> int:
    length = len(buffer)
    while cursor < length and buffer[cursor] in INLINE_SPACES:
        cursor += 1
    return cursor


def is_end_of_line(buffer: str, cursor: int) -> bool:
    """True at a line break (LF or CRLF) or at the end of the buffer."""
    if cursor >= len(buffer):
        return True
    if buffer[cursor] == "\n":
        return True
    if buffer[cursor] == "\r":
        return cursor + 1 == len(buffer) or buffer[cursor + 1] == "\n"
    return False


def is_end_of_section(buffer: str, cursor: int) -> bool:
    return cursor >= len(buffer) or buffer[cursor] == SECTION_START


def consume_ignored_lines(buffer: str, cursor: int) -> int:
    """Skip blank lines and ';' or '#' comment lines."""
    length = len(buffer)
    while cursor < length:
        start = consume_spaces(buffer, cursor)
        if not is_end_of_line(buffer, start) and buffer[start] not in COMMENT_CHARS:
            break
        cursor = consume_line(buffer, cursor)
    return cursor


def consume_section(buffer: str, cursor: int) -> int:
    """Skip every line up to the next one starting with '['."""
    length = len(buffer)
    while cursor < length and buffer[cursor] != SECTION_START:
        cursor = consume_line(buffer, cursor)
    return cursor


def location(buffer: str, cursor: int) -> tuple[int, int]:
    """1-based (line, column) of a cursor."""
    line = buffer.count("\n", 0, cursor) + 1
    column = cursor - (buffer.rfind("\n", 0, cursor) + 1) + 1
    return line, column


def report_syntax_error(
    buffer: str,
    cursor: int,
    message: str,
    diagnostics: list[ScanDiagnostic] | None = None,
    source: str | None = None,
) -> ScanDiagnostic:
    line, column = location(buffer, cursor)
    diagnostic = ScanDiagnostic(line=line, column=column, message=message, source=source)
    logger.warning(
        "Syntax error in INI/desktop file",
        source=source,
        line=line,
        column=column,
        detail=message,
    )
    if diagnostics is not None:
        diagnostics.append(diagnostic)
    return diagnostic


def seek_next_section(
    buffer: str,
    cursor: int,
    diagnostics: list[ScanDiagnostic] | None = None,
    source: str | None = None,
) -> SectionResult:
    """
    Find the next [section] header at or after cursor.

    On success the returned cursor points at the line after the header.
    A header whose ']' is missing, or is not immediately followed by the
    end of the line, is reported and returned unresolved with the cursor left
    at the start of that header line.
    """
    cursor = consume_section(buffer, cursor)
    if cursor >= len(buffer):
        return SectionResult(name=None, cursor=cursor, at_end=True)

    end = line_end(buffer, cursor)
    close = buffer.find(SECTION_END, cursor + 1, end)
    if close == -1:
        report_syntax_error(buffer, end, "missing ']' in section header", diagnostics, source)
        return SectionResult(name=None, cursor=cursor)

    if not is_end_of_line(buffer, close + 1):
        report_syntax_error(
            buffer, close + 1, "unexpected text after section header", diagnostics, source
        )
        return SectionResult(name=None, cursor=cursor)

    return SectionResult(name=buffer[cursor + 1 : close], cursor=consume_line(buffer, close))


def seek_next_key_value(
    buffer: str,
    cursor: int,
    diagnostics: list[ScanDiagnostic] | None = None,
    source: str | None = None,
) -> KeyValueResult:
    """
    Parse one key=value line starting at cursor.

    Spaces around '=' are skipped, so "Size = 48" and "Size=48" give the
    same pair. At the start of a new section nothing is consumed and
    end_of_section is set. A line without '=' is reported and skipped.
    """
    if is_end_of_section(buffer, cursor):
        return KeyValueResult(key=None, value=None, cursor=cursor, end_of_section=True)

    end = line_end(buffer, cursor)
    start = consume_spaces(buffer, cursor)
    pos = start
    while pos < end and buffer[pos] not in "= \t\r":
        pos += 1
    key = buffer[start:pos]

    pos = consume_spaces(buffer, pos)
    if pos >= end or buffer[pos] != "=":
        report_syntax_error(buffer, pos, "expected '=' after key", diagnostics, source)
        return KeyValueResult(key=None, value=None, cursor=consume_line(buffer, cursor))
    if not key:
        report_syntax_error(buffer, start, "missing key before '='", diagnostics, source)
        return KeyValueResult(key=None, value=None, cursor=consume_line(buffer, cursor))

    pos = consume_spaces(buffer, pos + 1)
    value = buffer[pos:end].rstrip(" \t\r")
    return KeyValueResult(key=key, value=value, cursor=consume_line(buffer, cursor))


def read_section(
    buffer: str,
    cursor: int,
    diagnostics: list[ScanDiagnostic] | None = None,
    source: str | None = None,
) -> SectionEntries:
    """Collect the key/value pairs from cursor up to the next section."""
    entries = SectionEntries(cursor=cursor)
    while True:
        cursor = consume_ignored_lines(buffer, cursor)
        if is_end_of_section(buffer, cursor):
            break
        result = seek_next_key_value(buffer, cursor, diagnostics, source)
        cursor = result.cursor
        if result.ok:
            entries.pairs.append((result.key, result.value))
    entries.cursor = cursor
    return entries
