"""Typed output tree nodes for preline.

All nodes are frozen dataclasses with slots. A parse produces one File
node per processed file; its children are the Text and Comment spans that
survived preprocessing, and File nodes for included files, in output order.

Node Hierarchy:
Node (base)
├── Text
├── Comment
└── File

Every node can:
- render itself to the processed text
- report its rendered length
- map an offset or line/column in its rendered text back to the
  position in the original source it came from

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from preline.commenters import Commenter
from preline.location import PosInfo, line_col_to_offset

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes.

    All nodes track their position in the original source.

    """

    location: PosInfo

    def render(self) -> str:
        """Processed text of this node."""
        raise NotImplementedError

    @property
    def length(self) -> int:
        """Length of the rendered text."""
        return len(self.render())

    def offset(self, offset: int) -> PosInfo | None:
        """Original position of the character at offset in the rendered text.

        Args:
            offset: Index into render() (0-indexed)

        Returns:
            Position in the original source, or None if offset is outside
            the rendered text.
        """
        raise NotImplementedError

    def offset_lc(self, line: int, column: int) -> PosInfo | None:
        """Original position of a line/column in the rendered text.

        Args:
            line: Line in render() (1-indexed)
            column: Column in that line (1-indexed)

        Returns:
            Position in the original source, or None if out of bounds.
        """
        offset = line_col_to_offset(self.render(), line, column)
        if offset is None:
            return None
        return self.offset(offset)


# =============================================================================
# Leaf Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text passed through to the output."""

    content: str

    def render(self) -> str:
        return self.content

    @property
    def length(self) -> int:
        return len(self.content)

    def offset(self, offset: int) -> PosInfo | None:
        return self.location.offset_in(self.content, offset)


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """A kept comment, delimiters included.

    Stripped comments never become nodes.

    """

    content: str
    commenter: Commenter | None = None

    def render(self) -> str:
        return self.content

    @property
    def length(self) -> int:
        return len(self.content)

    def offset(self, offset: int) -> PosInfo | None:
        return self.location.offset_in(self.content, offset)


# =============================================================================
# File Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class File(Node):
    """A processed file.

    For the top-level file, location is the start of the file itself. For
    included files, location is the directive that included it.

    Attributes:
        name: Name of the file as resolved from the directive (or as given
            to the top-level parse)
        path: Canonical path used to detect repeated requires
        children: Text, Comment and File nodes in output order

    """

    name: str
    path: str
    children: tuple[Node, ...] = ()

    def render(self) -> str:
        return "".join(child.render() for child in self.children)

    @property
    def length(self) -> int:
        return sum(child.length for child in self.children)

    def offset(self, offset: int) -> PosInfo | None:
        if offset < 0:
            return None
        for child in self.children:
            child_len = child.length
            if offset < child_len:
                return child.offset(offset)
            offset -= child_len
        return None

    def leaves(self) -> Iterator[Text | Comment]:
        """Yield Text and Comment nodes in output order, flattening includes."""
        for child in self.children:
            if isinstance(child, File):
                yield from child.leaves()
            elif isinstance(child, Text | Comment):
                yield child

    def files(self) -> Iterator[File]:
        """Yield included File nodes depth-first, in output order."""
        for child in self.children:
            if isinstance(child, File):
                yield child
                yield from child.files()


__all__ = [
    "Comment",
    "File",
    "Node",
    "Text",
]
