"""Token and TokenType definitions for the preline lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, value, and source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from preline.location import PosInfo


class TokenType(Enum):
    """Token types produced by the lexer."""

    # Stream structure
    EOF = auto()
    ERROR = auto()  # Lexical error, value is the message

    # Plain content
    TEXT = auto()
    COMMENT = auto()

    # Directive lines
    ACTION_BEGIN = auto()  # The trigger
    IDENTIFIER = auto()  # Command name
    STRING = auto()  # "quoted argument", value is unescaped
    ACTION_END = auto()  # \n or \r\n


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The token text (unescaped for STRING, message for ERROR)
        lineno: Start line number (1-indexed)
        col: Start column (1-indexed)
        offset: Absolute start position in source
        source_name: Name of the scanned source

    """

    type: TokenType
    value: str
    lineno: int
    col: int
    offset: int
    source_name: str = ""

    @property
    def location(self) -> PosInfo:
        """Position where this token starts."""
        return PosInfo(self.source_name, self.lineno, self.col)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"
