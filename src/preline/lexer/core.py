"""State-machine lexer for trigger-directive preprocessing.

Scanning is driven by an explicit LexerMode and a single loop: each mode
handler yields the tokens it produced and selects the next mode. No handler
calls another, so long inputs never grow the call stack.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from preline.commenters import CommenterRegistry
from preline.config import get_config
from preline.lexer.modes import BLANK_CHARS, LexerMode
from preline.lexer.scanners import (
    ActionScannerMixin,
    CommentScannerMixin,
    TextScannerMixin,
)
from preline.tokens import Token, TokenType


class Lexer(
    TextScannerMixin,
    CommentScannerMixin,
    ActionScannerMixin,
):
    """State-machine lexer for trigger-directive preprocessing.

    Usage:
            >>> lexer = Lexer('a\\n# include "b"\\n', "main")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(TEXT, 'a\\n', 1:1)
        Token(ACTION_BEGIN, '#', 2:1)
        Token(IDENTIFIER, 'include', 2:3)
        Token(STRING, 'b', 2:11)
        Token(ACTION_END, '\\n', 2:14)
        Token(EOF, '', 3:1)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_name",
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_trigger",
        "_commenters",
        "_saved_pos",
        "_saved_lineno",
        "_saved_col",
    )

    def __init__(
        self,
        source: str,
        source_name: str = "",
        *,
        trigger: str | None = None,
        commenters: CommenterRegistry | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Trigger and commenters default to the active PreprocessConfig.

        Args:
            source: Text to scan
            source_name: Name reported in token locations
            trigger: String that begins a directive line
            commenters: Comment styles to recognize
        """
        if trigger is None or commenters is None:
            config = get_config()
            trigger = trigger if trigger is not None else config.trigger
            commenters = commenters if commenters is not None else config.commenters
        self._source = source
        self._source_len = len(source)
        self._source_name = source_name
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = LexerMode.TEXT
        self._trigger = trigger
        self._commenters = commenters

        # Start of the token currently being built
        self._saved_pos = 0
        self._saved_lineno = 1
        self._saved_col = 1

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        The stream ends with an EOF token, or with an ERROR token if the
        input is malformed.

        Yields:
            Token objects one at a time
        """
        while self._mode is not LexerMode.DONE:
            yield from self._dispatch_mode()

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to appropriate scanner based on current mode."""
        mode = self._mode
        if mode is LexerMode.TEXT:
            yield from self._scan_text()
        elif mode is LexerMode.COMMENT:
            yield from self._scan_comment()
        elif mode is LexerMode.ACTION_BEGIN:
            yield from self._scan_action_begin()
        elif mode is LexerMode.INSIDE_ACTION:
            yield from self._scan_inside_action()
        elif mode is LexerMode.SHEBANG:
            yield from self._scan_shebang()

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _peek(self, ahead: int = 0) -> str:
        """Character at the current position plus ahead, or "" past the end."""
        pos = self._pos + ahead
        if pos >= self._source_len:
            return ""
        return self._source[pos]

    def _advance(self) -> str:
        """Advance position by one character, updating line/column."""
        if self._pos >= self._source_len:
            return ""
        char = self._source[self._pos]
        self._pos += 1
        if char == "\n":
            self._lineno += 1
            self._col = 1
        else:
            self._col += 1
        return char

    def _skip_to(self, target: int) -> None:
        """Move position forward to target, updating line/column.

        Args:
            target: New position (must not be before the current one)
        """
        if target <= self._pos:
            return
        segment = self._source[self._pos : target]
        newline_count = segment.count("\n")
        if newline_count > 0:
            self._lineno += newline_count
            self._col = len(segment) - segment.rfind("\n")
        else:
            self._col += len(segment)
        self._pos = target

    def _blank_run_end(self, pos: int) -> int:
        """Position after the run of spaces and tabs starting at pos."""
        source = self._source
        end = self._source_len
        while pos < end and source[pos] in BLANK_CHARS:
            pos += 1
        return pos

    def _at_line_start(self, pos: int) -> bool:
        """Whether pos is the first position of a line."""
        return pos == 0 or self._source[pos - 1] == "\n"

    # =========================================================================
    # Token creation
    # =========================================================================

    def _save_location(self) -> None:
        """Mark the current position as the start of the next token."""
        self._saved_pos = self._pos
        self._saved_lineno = self._lineno
        self._saved_col = self._col

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create a Token starting at the saved location."""
        return Token(
            type=token_type,
            value=value,
            lineno=self._saved_lineno,
            col=self._saved_col,
            offset=self._saved_pos,
            source_name=self._source_name,
        )

    def _make_token_at_current(self, token_type: TokenType, value: str) -> Token:
        """Create a Token at the current position (for EOF and similar)."""
        return Token(
            type=token_type,
            value=value,
            lineno=self._lineno,
            col=self._col,
            offset=self._pos,
            source_name=self._source_name,
        )

    def _error(self, message: str) -> Token:
        """Create an ERROR token at the saved location and stop scanning."""
        self._mode = LexerMode.DONE
        return self._make_token(TokenType.ERROR, message)

    def _eof(self) -> Token:
        """Create the EOF token and stop scanning."""
        self._mode = LexerMode.DONE
        return self._make_token_at_current(TokenType.EOF, "")
