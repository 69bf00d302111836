"""Comment delimiter definitions consulted by the lexer.

A Commenter describes one comment style: a begin delimiter and either an
end delimiter or "rest of the line". Triggers are not recognized inside
comments, and comments can optionally be stripped from the output.

Thread Safety:
Commenter and CommenterRegistry are immutable. Safe to share.

Example:
    >>> registry = CommenterRegistry([C_COMMENT, CPP_COMMENT])
    >>> registry.first("// note").begin
    '//'
    >>> registry.first("plain") is None
    True
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Commenter:
    """A recognized comment style.

    Attributes:
        begin: Delimiter that opens the comment
        end: Delimiter that closes the comment. Empty means the comment runs
            to the end of the line; the newline itself is not part of it.
        strip: Drop the comment from the output instead of keeping it

    """

    begin: str
    end: str = ""
    strip: bool = False

    def __post_init__(self) -> None:
        if not self.begin:
            msg = "Commenter begin delimiter must not be empty"
            raise ValueError(msg)

    def is_comment(self, text: str, pos: int = 0) -> bool:
        """Whether text at pos starts with this commenter's begin delimiter."""
        return text.startswith(self.begin, pos)

    def stripped(self, strip: bool = True) -> Commenter:
        """Copy of this commenter with the strip flag set."""
        return dataclasses.replace(self, strip=strip)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Commenter:
        """Create a Commenter from a mapping with begin/end/strip keys."""
        return cls(
            begin=data["begin"],
            end=data.get("end", ""),
            strip=bool(data.get("strip", False)),
        )


def prefix_commenter(prefix: str, *, strip: bool = False) -> Commenter:
    """Create a commenter that runs from prefix to the end of the line."""
    return Commenter(begin=prefix, strip=strip)


LISP_COMMENT = prefix_commenter(";")
CPP_COMMENT = prefix_commenter("//")
SHELL_COMMENT = prefix_commenter("#")
C_COMMENT = Commenter(begin="/*", end="*/")


class CommenterRegistry:
    """Ordered, immutable collection of commenters.

    The first commenter whose begin delimiter matches wins, so more
    specific delimiters must be registered before their prefixes.
    """

    __slots__ = ("_commenters",)

    def __init__(self, commenters: Iterable[Commenter] = ()) -> None:
        self._commenters: tuple[Commenter, ...] = tuple(commenters)

    def first(self, text: str, pos: int = 0) -> Commenter | None:
        """Return the first commenter matching text at pos.

        Args:
            text: Text to inspect
            pos: Position in text to match at

        Returns:
            Matching commenter, or None if no comment starts at pos.
        """
        for commenter in self._commenters:
            if text.startswith(commenter.begin, pos):
                return commenter
        return None

    def is_comment(self, text: str, pos: int = 0) -> bool:
        """Whether any registered comment starts in text at pos."""
        return self.first(text, pos) is not None

    def with_commenter(self, commenter: Commenter) -> CommenterRegistry:
        """Return a new registry with commenter appended."""
        return CommenterRegistry((*self._commenters, commenter))

    def __iter__(self) -> Iterator[Commenter]:
        return iter(self._commenters)

    def __len__(self) -> int:
        return len(self._commenters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommenterRegistry):
            return NotImplemented
        return self._commenters == other._commenters

    def __hash__(self) -> int:
        return hash(self._commenters)

    def __repr__(self) -> str:
        return f"CommenterRegistry({list(self._commenters)!r})"
