"""File loading for the top-level parse and for included files.

The parser reads files through a FileLoader so it can run against the
local filesystem or against in-memory content. A loader has two duties:

- read: return the content of a path, or raise LoadError
- canonical: return the identity used to detect repeated requires; this
  never fails and degrades to a less precise identity instead

Thread Safety:
LocalFileLoader and MappingFileLoader hold no mutable state.

"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from preline.errors import LoadError
from preline.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class FileLoader(Protocol):
    """Protocol for file loaders."""

    def read(self, path: str) -> str:
        """Return the content of path.

        Raises:
            LoadError: If the file cannot be read.
        """
        ...

    def canonical(self, path: str) -> str:
        """Return a best-effort canonical identity for path."""
        ...


class LocalFileLoader:
    """Loads files from the local filesystem.

    Content is decoded without newline translation, so ``\\r\\n`` line
    endings reach the lexer unchanged.

    """

    __slots__ = ("_encoding",)

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def read(self, path: str) -> str:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise LoadError(f"cannot read {path}: {reason}", path=path) from exc
        try:
            return data.decode(self._encoding)
        except UnicodeDecodeError as exc:
            raise LoadError(
                f"cannot decode {path} as {self._encoding}: {exc.reason}", path=path
            ) from exc

    def canonical(self, path: str) -> str:
        """Absolute, symlink-resolved path.

        Falls back to the absolute path if symlinks cannot be resolved.
        """
        try:
            return os.path.realpath(path, strict=True)
        except OSError as exc:
            absolute = os.path.abspath(path)
            logger.warning("cannot resolve %s (%s); using %s", path, exc, absolute)
            return absolute


class MappingFileLoader:
    """Loads files from an in-memory mapping of path to content.

    Paths are normalized with POSIX rules before lookup, so ``a/../b``
    and ``./b`` both find ``b``.

    Example:
        >>> loader = MappingFileLoader({"main": '# include "lib"\\n', "lib": "x"})
        >>> loader.read("./lib")
        'x'

    """

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, str]) -> None:
        self._files = {posixpath.normpath(name): content for name, content in files.items()}

    def read(self, path: str) -> str:
        try:
            return self._files[posixpath.normpath(path)]
        except KeyError:
            raise LoadError(f"cannot read {path}: no such file", path=path) from None

    def canonical(self, path: str) -> str:
        return posixpath.normpath(path)
