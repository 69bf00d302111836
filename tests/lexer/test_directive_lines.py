"""Tests for directive line scanning: identifiers, strings, line ends, shebangs."""

import pytest

from preline.lexer import Lexer
from preline.tokens import Token, TokenType


def _tokens(source: str, **kwargs) -> list[Token]:  # type: ignore[no-untyped-def]
    return list(Lexer(source, "main", **kwargs).tokenize())


class TestArguments:
    """Quoted strings and identifiers."""

    def test_escapes_are_removed(self) -> None:
        """Backslash escapes any character; the value is unescaped."""
        tokens = _tokens('# error "say \\"hi\\" \\\\ ok"\n')
        string = next(t for t in tokens if t.type == TokenType.STRING)
        assert string.value == 'say "hi" \\ ok'

    def test_empty_string(self) -> None:
        """An empty quoted string is a valid STRING token."""
        tokens = _tokens('# include ""\n')
        assert tokens[2].type == TokenType.STRING
        assert tokens[2].value == ""

    def test_comment_markers_inside_string_are_literal(self) -> None:
        """String content is opaque."""
        tokens = _tokens('# error "/* # not a directive */"\n')
        assert tokens[2].value == "/* # not a directive */"

    def test_identifier_characters(self) -> None:
        """Identifiers are runs of letters, digits and underscores."""
        tokens = _tokens("# do_it2 now\n")
        idents = [t.value for t in tokens if t.type == TokenType.IDENTIFIER]
        assert idents == ["do_it2", "now"]

    def test_tabs_between_tokens(self) -> None:
        """Tabs separate directive tokens like spaces."""
        tokens = _tokens('#\tinclude\t"x"\t\n')
        assert [t.type for t in tokens] == [
            TokenType.ACTION_BEGIN,
            TokenType.IDENTIFIER,
            TokenType.STRING,
            TokenType.ACTION_END,
            TokenType.EOF,
        ]


class TestLexicalErrors:
    """Malformed directive lines end the stream with an ERROR token."""

    @pytest.mark.parametrize(
        ("source", "message"),
        [
            ('# include "abc\n', "unterminated quoted string"),
            ('# include "abc', "unterminated quoted string"),
            ('# include "ab\\\ncd"\n', "unterminated quoted string"),
            ('# include "ab\\', "unterminated quoted string"),
            ('# include "a"\rx', "malformed end-of-line"),
            ('# include "a"', "unexpected EOF"),
            ("# include <a>\n", "unexpected character '<'"),
        ],
    )
    def test_error_message(self, source: str, message: str) -> None:
        """Each malformation reports a specific message."""
        tokens = _tokens(source)
        assert tokens[-1].type == TokenType.ERROR
        assert tokens[-1].value == message

    def test_error_ends_stream(self) -> None:
        """Nothing, not even EOF, follows an ERROR token."""
        tokens = _tokens('# include "abc\nmore text\n')
        assert sum(1 for t in tokens if t.type == TokenType.ERROR) == 1
        assert all(t.type != TokenType.EOF for t in tokens)

    def test_unterminated_string_location(self) -> None:
        """The error points at the opening quote."""
        tokens = _tokens('x\n# include "abc\n')
        error = tokens[-1]
        assert (error.lineno, error.col) == (2, 11)


class TestShebang:
    """``<trigger>!`` lines."""

    def test_shebang_on_first_line_skipped(self) -> None:
        """A first-line shebang produces no tokens at all."""
        tokens = _tokens("#!/usr/bin/env tool --flag \"x\n'body\n")
        assert [(t.type, t.value) for t in tokens] == [
            (TokenType.TEXT, "'body\n"),
            (TokenType.EOF, ""),
        ]
        assert tokens[0].location.line == 2

    def test_shebang_only(self) -> None:
        """A file holding just a shebang renders empty."""
        tokens = _tokens("#!/bin/sh")
        assert [t.type for t in tokens] == [TokenType.EOF]

    def test_shebang_after_first_line_is_error(self) -> None:
        """Shebangs are only valid on line 1."""
        tokens = _tokens("x\n#!/bin/sh\n")
        error = tokens[-1]
        assert error.type == TokenType.ERROR
        assert error.value == "shebang only allowed on the first line"
        assert (error.lineno, error.col) == (2, 1)

    def test_shebang_with_custom_trigger(self) -> None:
        """The marker follows whatever the trigger is."""
        tokens = _tokens("%!interp\nbody", trigger="%")
        assert [t.value for t in tokens] == ["body", ""]
