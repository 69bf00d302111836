"""Mode-specific scanners for the preline lexer.

Each scanner is a mixin that provides scanning logic for a group of
lexer modes (TEXT, COMMENT, ACTION_BEGIN/INSIDE_ACTION/SHEBANG).
"""

from __future__ import annotations

from preline.lexer.scanners.action import ActionScannerMixin
from preline.lexer.scanners.comment import CommentScannerMixin
from preline.lexer.scanners.text import TextScannerMixin

__all__ = [
    "ActionScannerMixin",
    "CommentScannerMixin",
    "TextScannerMixin",
]
