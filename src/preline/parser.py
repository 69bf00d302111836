"""Directive parser producing the output tree.

Consumes the token stream of one file and appends Text, Comment and File
nodes to the file under construction in the session. Include and require
directives hand over to the IncludeResolver, which runs a nested Parser
for the included file before this one continues.

Directives:
- ``<trigger> include "<path>"``: splice in a file, every time
- ``<trigger> require "<path>"``: splice in a file once per top-level parse
- ``<trigger> error "<message>"``: abort with message

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per file.
The resulting tree is immutable and thread-safe.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from preline.errors import DirectiveSyntaxError, ErrorDirective, LexError
from preline.lexer import Lexer
from preline.location import PosInfo
from preline.nodes import Comment, Text
from preline.tokens import Token, TokenType

if TYPE_CHECKING:
    from preline.resolver import IncludeResolver


class Parser:
    """Parser for one file's token stream.

    Usage:
            >>> session = ParseSession()
            >>> resolver = IncludeResolver(session)
            >>> root = resolver.parse_source("text\\n", "main", "main", PosInfo("main", 1, 1))
            >>> root.render()
            'text\\n'

    """

    __slots__ = (
        "_source",
        "_source_name",
        "_resolver",
        "_tokens",
        "_current",
        "_commands",
    )

    def __init__(self, source: str, source_name: str, resolver: IncludeResolver) -> None:
        """Initialize parser with source text.

        Args:
            source: File content
            source_name: Name reported in positions
            resolver: Resolver bound to the active session; nodes are added
                to the session's current file
        """
        self._source = source
        self._source_name = source_name
        self._resolver = resolver
        self._tokens: Iterator[Token] = iter(())
        self._current: Token | None = None
        self._commands: dict[str, Callable[[Token, PosInfo], None]] = {
            "include": self._parse_include,
            "require": self._parse_require,
            "error": self._parse_error,
        }

    def parse(self) -> None:
        """Parse the source, appending nodes to the session's current file.

        Raises:
            PreprocessError: On any lexical, syntax, depth or load error,
                here or in an included file.
        """
        session = self._resolver.session
        config = session.config
        lexer = Lexer(
            self._source,
            self._source_name,
            trigger=config.trigger,
            commenters=config.commenters,
        )
        self._tokens = lexer.tokenize()
        self._advance()

        while True:
            token = self._peek()
            if token.type is TokenType.TEXT:
                session.append(Text(location=token.location, content=token.value))
                self._advance()
            elif token.type is TokenType.COMMENT:
                commenter = config.commenters.first(token.value)
                session.append(
                    Comment(location=token.location, content=token.value, commenter=commenter)
                )
                self._advance()
            elif token.type is TokenType.ACTION_BEGIN:
                self._parse_action()
            elif token.type is TokenType.EOF:
                return
            else:
                msg = f"unexpected token {token.type.name}"
                raise DirectiveSyntaxError(msg, token.location)

    # =========================================================================
    # Token navigation
    # =========================================================================

    def _peek(self) -> Token:
        if self._current is None:
            msg = "token stream ended without EOF"
            raise LexError(msg, PosInfo(self._source_name, 1, 1))
        return self._current

    def _advance(self) -> Token:
        """Move to the next token, raising on lexical errors."""
        token = next(self._tokens, None)
        if token is not None and token.type is TokenType.ERROR:
            raise LexError(token.value, token.location)
        self._current = token
        return self._peek()

    # =========================================================================
    # Directives
    # =========================================================================

    def _parse_action(self) -> None:
        """Parse a directive line, from ACTION_BEGIN through ACTION_END."""
        begin = self._peek()
        command = self._advance()
        if command.type is not TokenType.IDENTIFIER:
            raise DirectiveSyntaxError("expecting command identifier", command.location)

        handler = self._commands.get(command.value)
        if handler is None:
            raise DirectiveSyntaxError(f"unknown command {command.value}", command.location)

        argument = self._expect_argument(command)
        handler(argument, begin.location)
        self._advance()

    def _expect_argument(self, command: Token) -> Token:
        """Consume the single string argument and the line end of a command.

        Leaves the parser on the ACTION_END token.
        """
        argument = self._advance()
        if argument.type is TokenType.ACTION_END:
            msg = f"command {command.value} is missing its string argument"
            raise DirectiveSyntaxError(msg, argument.location)
        end = self._advance()
        if argument.type is not TokenType.STRING or end.type is not TokenType.ACTION_END:
            msg = f"command {command.value} takes a single string argument"
            raise DirectiveSyntaxError(msg, argument.location)
        return argument

    def _parse_include(self, argument: Token, location: PosInfo) -> None:
        self._resolver.include(argument.value, location, unique=False)

    def _parse_require(self, argument: Token, location: PosInfo) -> None:
        self._resolver.include(argument.value, location, unique=True)

    def _parse_error(self, argument: Token, location: PosInfo) -> None:
        raise ErrorDirective(argument.value, location)
