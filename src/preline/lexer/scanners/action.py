"""Directive line (action) scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from preline.lexer.modes import BLANK_CHARS, SHEBANG_MARKER, LexerMode
from preline.tokens import Token, TokenType


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char == "_"


class ActionScannerMixin:
    """Mixin providing directive line scanning logic.

    Scans a directive line after its trigger:
    - bare identifiers (the command name)
    - double-quoted strings with backslash escapes
    - the line end (``\\n`` or ``\\r\\n``)

    A ``<trigger>!`` on the first line is a shebang and is skipped whole.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _lineno: int
    _mode: LexerMode
    _trigger: str

    def _save_location(self) -> None:
        raise NotImplementedError

    def _skip_to(self, target: int) -> None:
        raise NotImplementedError

    def _peek(self, ahead: int = 0) -> str:
        raise NotImplementedError

    def _blank_run_end(self, pos: int) -> int:
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        raise NotImplementedError

    def _error(self, message: str) -> Token:
        raise NotImplementedError

    def _scan_action_begin(self) -> Iterator[Token]:
        """Consume the trigger and emit ACTION_BEGIN.

        Yields:
            ACTION_BEGIN token, or nothing when the line is a shebang.
        """
        self._save_location()
        after = self._pos + len(self._trigger)
        if self._source.startswith(SHEBANG_MARKER, after):
            self._mode = LexerMode.SHEBANG
            return
        self._skip_to(after)
        yield self._make_token(TokenType.ACTION_BEGIN, self._trigger)
        self._mode = LexerMode.INSIDE_ACTION

    def _scan_shebang(self) -> Iterator[Token]:
        """Skip a shebang line, including its newline.

        Yields:
            Nothing, or an ERROR token if the shebang is not on line 1.
        """
        if self._lineno != 1:
            yield self._error("shebang only allowed on the first line")
            return
        idx = self._source.find("\n", self._pos)
        self._skip_to(idx + 1 if idx != -1 else self._source_len)
        self._mode = LexerMode.TEXT

    def _scan_inside_action(self) -> Iterator[Token]:
        """Scan the next token of a directive line.

        Blanks between tokens are skipped without producing tokens.

        Yields:
            One IDENTIFIER, STRING, ACTION_END or ERROR token.
        """
        self._skip_to(self._blank_run_end(self._pos))
        self._save_location()
        char = self._peek()

        if char == "":
            yield self._error("unexpected EOF")
        elif char == "\n":
            self._skip_to(self._pos + 1)
            yield self._make_token(TokenType.ACTION_END, "\n")
            self._mode = LexerMode.TEXT
        elif char == "\r":
            if self._peek(1) != "\n":
                yield self._error("malformed end-of-line")
                return
            self._skip_to(self._pos + 2)
            yield self._make_token(TokenType.ACTION_END, "\r\n")
            self._mode = LexerMode.TEXT
        elif char == '"':
            yield self._scan_quoted()
        elif _is_identifier_char(char):
            yield self._scan_identifier()
        else:
            yield self._error(f"unexpected character {char!r}")

    def _scan_identifier(self) -> Token:
        """Scan a run of identifier characters."""
        source = self._source
        end = self._pos
        while end < self._source_len and _is_identifier_char(source[end]):
            end += 1
        value = source[self._pos : end]
        self._skip_to(end)
        return self._make_token(TokenType.IDENTIFIER, value)

    def _scan_quoted(self) -> Token:
        """Scan a double-quoted string.

        A backslash escapes any following character except a newline.
        The token value is the unescaped content without quotes.

        Returns:
            STRING token, or ERROR token if the string is not terminated
            on the same line.
        """
        source = self._source
        source_len = self._source_len
        pos = self._pos + 1
        chars: list[str] = []

        while True:
            if pos >= source_len:
                return self._error("unterminated quoted string")
            char = source[pos]
            if char == "\\":
                if pos + 1 >= source_len or source[pos + 1] == "\n":
                    return self._error("unterminated quoted string")
                chars.append(source[pos + 1])
                pos += 2
                continue
            if char == "\n":
                return self._error("unterminated quoted string")
            if char == '"':
                pos += 1
                break
            chars.append(char)
            pos += 1

        self._skip_to(pos)
        return self._make_token(TokenType.STRING, "".join(chars))
