"""Modular state-machine lexer for the preline preprocessor.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum, character constants
└── scanners/            # Mode-specific scanners
    ├── text.py          # Text mode (trigger and comment detection)
    ├── comment.py       # Comment mode
    └── action.py        # Directive lines and shebangs

Usage:
    >>> from preline.lexer import Lexer
    >>> lexer = Lexer("hello\\n", "main")
    >>> for token in lexer.tokenize():
    ...     print(token)
Token(TEXT, 'hello\\n', 1:1)
Token(EOF, '', 2:1)

"""

from preline.lexer.core import Lexer
from preline.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
