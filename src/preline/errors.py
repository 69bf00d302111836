"""Exception classes for preline.

Every fatal condition of a parse is reported through one of these classes.
Errors raised while scanning or parsing carry the PosInfo of the point
where the problem was detected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preline.location import PosInfo


class PrelineError(Exception):
    """Base exception for all preline errors.

    Subclass this for specific error categories.
    """

    pass


class PreprocessError(PrelineError):
    """Error that aborts a preprocessing run.

    Raised when the scanner or parser encounters invalid input, or when
    an included file cannot be processed.
    """

    def __init__(self, message: str, location: PosInfo | None = None) -> None:
        """Initialize error with optional location.

        Args:
            message: Error description
            location: Position in the original source where the error was
                detected (optional)
        """
        self.message = message
        self.location = location
        super().__init__(message)

    def __str__(self) -> str:
        """Format as ``name:line:column: message`` when located."""
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"


class LexError(PreprocessError):
    """Malformed directive line.

    Unterminated quoted strings, malformed line endings, unexpected
    characters or end of input inside a directive, and shebang lines
    after the first line.
    """


class DirectiveSyntaxError(PreprocessError):
    """Well-formed tokens that do not make a valid directive.

    Unknown commands, missing or wrongly typed arguments, and missing
    line ends after the argument.
    """


class IncludeDepthError(PreprocessError):
    """Nesting of include/require directives exceeded the configured maximum."""


class ErrorDirective(PreprocessError):
    """Raised by an ``error "<message>"`` directive.

    The message is passed through verbatim.
    """


class LoadError(PreprocessError):
    """A file could not be read.

    Raised by file loaders; the parser attaches the location of the
    directive that requested the file.
    """

    def __init__(
        self,
        message: str,
        location: PosInfo | None = None,
        *,
        path: str | None = None,
    ) -> None:
        """Initialize load error.

        Args:
            message: Error description
            location: Position of the requesting directive (optional)
            path: Path that failed to load (optional)
        """
        self.path = path
        super().__init__(message, location)
