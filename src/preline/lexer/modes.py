"""Lexer operating modes.

This module defines the finite state machine modes for the lexer.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes based on context:
    - TEXT: Plain text, looking for triggers at line starts and comments
    - COMMENT: At the begin delimiter of a registered comment
    - ACTION_BEGIN: At a trigger that starts a directive line
    - INSIDE_ACTION: Between the trigger and the end of a directive line
    - SHEBANG: Inside a ``<trigger>!`` line
    - DONE: Input exhausted or a lexical error was reported

    """

    TEXT = auto()
    COMMENT = auto()
    ACTION_BEGIN = auto()
    INSIDE_ACTION = auto()
    SHEBANG = auto()
    DONE = auto()


# Whitespace skipped before a trigger and between directive arguments
BLANK_CHARS = frozenset(" \t")

SHEBANG_MARKER = "!"
