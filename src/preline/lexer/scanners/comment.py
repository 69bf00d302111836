"""Comment mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator

from preline.commenters import CommenterRegistry
from preline.lexer.modes import LexerMode
from preline.tokens import Token, TokenType


class CommentScannerMixin:
    """Mixin providing comment mode scanning logic.

    Consumes one comment, from its begin delimiter to its end delimiter
    (or the end of the line for prefix comments). A comment left open at
    end of input is accepted as-is.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _saved_pos: int
    _mode: LexerMode
    _commenters: CommenterRegistry

    def _save_location(self) -> None:
        raise NotImplementedError

    def _skip_to(self, target: int) -> None:
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        raise NotImplementedError

    def _eof(self) -> Token:
        raise NotImplementedError

    def _scan_comment(self) -> Iterator[Token]:
        """Scan the comment starting at the current position.

        Yields:
            COMMENT token unless the commenter strips, then EOF if the
            comment ran to the end of input.
        """
        self._save_location()
        source = self._source
        commenter = self._commenters.first(source, self._pos)
        if commenter is None:
            # Entered without a matching commenter; nothing to consume.
            self._mode = LexerMode.TEXT
            return

        body_start = self._pos + len(commenter.begin)
        if commenter.end:
            idx = source.find(commenter.end, body_start)
            end = idx + len(commenter.end) if idx != -1 else self._source_len
        else:
            # Prefix comments stop before the newline
            idx = source.find("\n", body_start)
            end = idx if idx != -1 else self._source_len

        self._skip_to(end)
        if not commenter.strip:
            yield self._make_token(TokenType.COMMENT, source[self._saved_pos : end])

        if self._pos >= self._source_len:
            yield self._eof()
        else:
            self._mode = LexerMode.TEXT
