"""Text mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from preline.commenters import CommenterRegistry
from preline.lexer.modes import LexerMode
from preline.tokens import Token, TokenType


class TextScannerMixin:
    """Mixin providing text mode scanning logic.

    Buffers plain text until one of:
    - a trigger at the start of a line (after optional spaces/tabs)
    - the begin delimiter of a registered comment
    - end of input

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _saved_pos: int
    _mode: LexerMode
    _trigger: str
    _commenters: CommenterRegistry

    def _save_location(self) -> None:
        raise NotImplementedError

    def _skip_to(self, target: int) -> None:
        raise NotImplementedError

    def _advance(self) -> str:
        raise NotImplementedError

    def _blank_run_end(self, pos: int) -> int:
        raise NotImplementedError

    def _at_line_start(self, pos: int) -> bool:
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        raise NotImplementedError

    def _eof(self) -> Token:
        raise NotImplementedError

    def _scan_text(self) -> Iterator[Token]:
        """Scan plain text up to the next directive, comment, or end of input.

        Blanks in front of a trigger belong to the directive line and are
        dropped with it. Blanks examined without finding a trigger stay in
        the text.

        Yields:
            TEXT token for buffered text (if any), then EOF at end of input.
        """
        self._save_location()
        source = self._source
        trigger = self._trigger
        commenters = self._commenters

        while self._pos < self._source_len:
            pos = self._pos
            blank_end = self._blank_run_end(pos)

            if source.startswith(trigger, blank_end) and self._at_line_start(pos):
                if pos > self._saved_pos:
                    yield self._make_token(TokenType.TEXT, source[self._saved_pos : pos])
                self._skip_to(blank_end)
                self._mode = LexerMode.ACTION_BEGIN
                return

            if commenters.is_comment(source, blank_end):
                self._skip_to(blank_end)
                if blank_end > self._saved_pos:
                    yield self._make_token(
                        TokenType.TEXT, source[self._saved_pos : blank_end]
                    )
                self._mode = LexerMode.COMMENT
                return

            self._skip_to(blank_end)
            self._advance()

        if self._pos > self._saved_pos:
            yield self._make_token(TokenType.TEXT, source[self._saved_pos : self._pos])
        yield self._eof()
