"""
preline: line-oriented text preprocessor for Python

Scans text for directive lines that start with a trigger string (``#`` by
default), splices in other files, and keeps every span of the output
traceable back to the file, line and column it came from.

Quick Start:
    >>> from preline import parse_string
    >>> root = parse_string("main", "hello\\n")
    >>> root.render()
    'hello\\n'

Directives:
    # include "path"     splice in a file, every time
    # require "path"     splice in a file once per top-level parse
    # error "message"    abort processing with message
    #!...                shebang, ignored on the first line

Comments:
    >>> from preline import Preprocessor, CPP_COMMENT
    >>> pre = Preprocessor()
    >>> pre.add_commenter(CPP_COMMENT, strip=True)
    >>> pre.parse_string("main", "// gone\\nkept\\n").render()
    '\\nkept\\n'
"""

from __future__ import annotations

import dataclasses

from preline.commenters import (
    C_COMMENT,
    CPP_COMMENT,
    LISP_COMMENT,
    SHELL_COMMENT,
    Commenter,
    CommenterRegistry,
    prefix_commenter,
)
from preline.config import (
    DEFAULT_MAX_INCLUDE_DEPTH,
    DEFAULT_TRIGGER,
    PreprocessConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from preline.errors import (
    DirectiveSyntaxError,
    ErrorDirective,
    IncludeDepthError,
    LexError,
    LoadError,
    PrelineError,
    PreprocessError,
)
from preline.lexer import Lexer
from preline.loader import FileLoader, LocalFileLoader, MappingFileLoader
from preline.location import PosInfo
from preline.nodes import Comment, File, Node, Text
from preline.parser import Parser
from preline.resolver import IncludeResolver, ParseSession
from preline.serialization import from_dict, from_json, to_dict, to_json
from preline.tokens import Token, TokenType
from preline.visitor import BaseVisitor

__version__ = "0.1.0"


def parse(
    path: str,
    *,
    config: PreprocessConfig | None = None,
    loader: FileLoader | None = None,
) -> File:
    """Preprocess a file and everything it includes.

    Args:
        path: Path of the top-level file
        config: Configuration (uses the active context config if None)
        loader: File loader (reads the local filesystem if None)

    Returns:
        Root File node

    Raises:
        PreprocessError: If anything in the file or its includes fails;
            no partial tree is returned.

    Example:
        >>> root = parse("templates/page.html")
        >>> text = root.render()
    """
    session = ParseSession(config if config is not None else get_config(), loader)
    return IncludeResolver(session).load_root(path)


def parse_string(
    name: str,
    content: str,
    *,
    config: PreprocessConfig | None = None,
    loader: FileLoader | None = None,
) -> File:
    """Preprocess in-memory content under a logical name.

    Includes are resolved relative to the directory part of name, or to
    the working directory if name has none.

    Args:
        name: Logical name, used in positions and for resolving includes
        content: Text to preprocess
        config: Configuration (uses the active context config if None)
        loader: File loader for includes (reads the local filesystem if None)

    Returns:
        Root File node

    Raises:
        PreprocessError: If anything in the content or its includes fails.
    """
    session = ParseSession(config if config is not None else get_config(), loader)
    return IncludeResolver(session).parse_source(content, name, name, PosInfo(name, 1, 1))


class Preprocessor:
    """High-level preprocessor holding a configuration.

    Usage:
        >>> pre = Preprocessor(trigger="%")
        >>> pre.add_commenter(C_COMMENT, strip=True)
        >>> root = pre.parse("main.txt")
        >>> output = root.render()

        >>> # Or straight to text
        >>> output = pre.process("main.txt")

    Thread Safety:
        Each call creates its own parse session. Safe to use one
        Preprocessor from several threads as long as add_commenter is not
        called concurrently.

    """

    __slots__ = ("_config", "_loader")

    def __init__(
        self,
        *,
        trigger: str = DEFAULT_TRIGGER,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
        commenters: CommenterRegistry | None = None,
        loader: FileLoader | None = None,
    ) -> None:
        """Initialize preprocessor.

        Args:
            trigger: String that begins a directive line
            max_include_depth: Maximum file nesting, the top-level file included
            commenters: Comment styles to recognize
            loader: File loader (reads the local filesystem if None)
        """
        self._config = PreprocessConfig(
            trigger=trigger,
            max_include_depth=max_include_depth,
            commenters=commenters if commenters is not None else CommenterRegistry(),
        )
        self._loader = loader

    @property
    def config(self) -> PreprocessConfig:
        return self._config

    def add_commenter(self, commenter: Commenter, strip: bool = False) -> None:
        """Recognize another comment style.

        Args:
            commenter: Comment style; its own strip flag is overridden
            strip: Drop comments of this style from the output
        """
        commenters = self._config.commenters.with_commenter(commenter.stripped(strip))
        self._config = dataclasses.replace(self._config, commenters=commenters)

    def parse(self, path: str) -> File:
        """Preprocess a file. See :func:`parse`."""
        return parse(path, config=self._config, loader=self._loader)

    def parse_string(self, name: str, content: str) -> File:
        """Preprocess in-memory content. See :func:`parse_string`."""
        return parse_string(name, content, config=self._config, loader=self._loader)

    def process(self, path: str) -> str:
        """Preprocess a file and return the rendered output."""
        return self.parse(path).render()


__all__ = [  # noqa: RUF022 grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_string",
    "Preprocessor",
    # Nodes
    "Node",
    "File",
    "Text",
    "Comment",
    # Commenters
    "Commenter",
    "CommenterRegistry",
    "prefix_commenter",
    "C_COMMENT",
    "CPP_COMMENT",
    "LISP_COMMENT",
    "SHELL_COMMENT",
    # Parser components
    "Lexer",
    "Parser",
    "IncludeResolver",
    "ParseSession",
    # Loading
    "FileLoader",
    "LocalFileLoader",
    "MappingFileLoader",
    # Errors
    "PrelineError",
    "PreprocessError",
    "LexError",
    "DirectiveSyntaxError",
    "IncludeDepthError",
    "ErrorDirective",
    "LoadError",
    # Visitor
    "BaseVisitor",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "PreprocessConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
    # Location
    "PosInfo",
    # Tokens
    "Token",
    "TokenType",
]
