"""Source position tracking for diagnostics and output mapping.

Provides PosInfo for locating a point in the original source, across
inclusion boundaries.

Thread Safety:
PosInfo is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PosInfo:
    """Position in an original source file.

    Lines and columns are 1-indexed.

    Attributes:
        source_name: Name of the source (file path or logical name)
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Examples:
            >>> pos = PosInfo("lib/defs.h", 3, 7)
            >>> str(pos)
            'lib/defs.h:3:7'

    """

    source_name: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as ``name:line:column``."""
        return f"{self.source_name}:{self.line}:{self.column}"

    def offset_in(self, data: str, offset: int) -> PosInfo | None:
        """Locate a character of a span that starts at this position.

        Args:
            data: Text of the span starting at this position
            offset: Index into data

        Returns:
            Position of data[offset], or None if offset is outside data.
        """
        if offset < 0 or offset >= len(data):
            return None
        prefix = data[:offset]
        newlines = prefix.count("\n")
        if newlines == 0:
            return PosInfo(self.source_name, self.line, self.column + offset)
        return PosInfo(
            self.source_name,
            self.line + newlines,
            offset - prefix.rfind("\n"),
        )

    def offset_in_lc(self, data: str, line: int, column: int) -> PosInfo | None:
        """Locate a line/column of a span that starts at this position.

        Args:
            data: Text of the span starting at this position
            line: Line within data (1-indexed)
            column: Column within that line (1-indexed)

        Returns:
            Position of the addressed character, or None if out of bounds.
        """
        offset = line_col_to_offset(data, line, column)
        if offset is None:
            return None
        return self.offset_in(data, offset)


def line_col_to_offset(text: str, line: int, column: int) -> int | None:
    """Convert a 1-indexed line/column into a flat offset into text.

    The column may address the newline that ends the line, but not beyond.

    Args:
        text: Text to index
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Returns:
        Offset into text, or None if the line or column does not exist.
    """
    if line < 1 or column < 1:
        return None
    start = 0
    for _ in range(line - 1):
        nl = text.find("\n", start)
        if nl == -1:
            return None
        start = nl + 1
    end = text.find("\n", start)
    if end == -1:
        end = len(text)
    offset = start + column - 1
    if offset > end:
        return None
    return offset
