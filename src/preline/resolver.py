"""Include resolution and per-parse session state.

A ParseSession holds everything that lives for exactly one top-level
parse: the active configuration, the file loader, the canonical paths
already required, and the stack of files under construction. The
IncludeResolver turns include/require directives into File nodes using
that session, recursing into the parser for each included file.

Thread Safety:
A session belongs to one top-level parse. Never share a session between
concurrent parses; independent sessions share no state.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from preline.config import PreprocessConfig, get_config
from preline.errors import IncludeDepthError, LoadError
from preline.loader import FileLoader, LocalFileLoader
from preline.location import PosInfo
from preline.nodes import File, Node
from preline.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class FileFrame:
    """A file whose children are still being collected.

    Frozen into an immutable File node once the file is fully parsed.

    """

    location: PosInfo
    name: str
    path: str
    children: list[Node] = field(default_factory=list)

    def freeze(self) -> File:
        """Create the immutable File node for this frame."""
        return File(
            location=self.location,
            name=self.name,
            path=self.path,
            children=tuple(self.children),
        )


class ParseSession:
    """Mutable state of one top-level parse.

    Attributes:
        config: Configuration captured when the session was created
        loader: File loader for the top-level file and all includes
        visited: Canonical paths already processed by require
        depth: Number of files currently being parsed

    """

    __slots__ = ("config", "loader", "visited", "depth", "_frames")

    def __init__(
        self,
        config: PreprocessConfig | None = None,
        loader: FileLoader | None = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.loader: FileLoader = loader if loader is not None else LocalFileLoader()
        self.visited: set[str] = set()
        self.depth = 0
        self._frames: list[FileFrame] = []

    @property
    def current(self) -> FileFrame | None:
        """The innermost file under construction, if any."""
        return self._frames[-1] if self._frames else None

    def push(self, frame: FileFrame) -> None:
        """Enter a file."""
        self._frames.append(frame)
        self.depth += 1

    def pop(self) -> FileFrame:
        """Leave the innermost file."""
        self.depth -= 1
        return self._frames.pop()

    def append(self, node: Node) -> None:
        """Add a node to the innermost file under construction."""
        frame = self.current
        if frame is None:
            msg = "no file is being parsed"
            raise RuntimeError(msg)
        frame.children.append(node)


class IncludeResolver:
    """Resolves include/require directives into File nodes.

    Paths are resolved relative to the directory of the including file;
    absolute paths are used as given.

    """

    __slots__ = ("_session",)

    def __init__(self, session: ParseSession) -> None:
        self._session = session

    @property
    def session(self) -> ParseSession:
        return self._session

    def resolve_name(self, requested: str) -> str:
        """Path of a requested file, relative to the including file's directory."""
        frame = self._session.current
        if frame is None:
            return requested
        return str(Path(frame.name).parent / requested)

    def include(self, requested: str, location: PosInfo, *, unique: bool) -> File | None:
        """Process an include (unique=False) or require (unique=True).

        The new File node is appended to the current file.

        Args:
            requested: Path as written in the directive
            location: Position of the directive
            unique: Skip the file if its canonical path was already required

        Returns:
            The included File node, or None if a require was skipped.

        Raises:
            IncludeDepthError: If the maximum include depth is reached.
            LoadError: If the file cannot be read.
        """
        session = self._session
        max_depth = session.config.max_include_depth
        if session.depth >= max_depth:
            msg = f"maximum include depth reached ({max_depth})"
            raise IncludeDepthError(msg, location)

        name = self.resolve_name(requested)
        canonical = session.loader.canonical(name)

        if unique:
            if canonical in session.visited:
                logger.debug("%s: skipping %s, already required", location, name)
                return None
            session.visited.add(canonical)

        source = self._read(name, location)
        return self.parse_source(source, name, canonical, location)

    def load_root(self, path: str) -> File:
        """Read and parse the top-level file.

        The top-level file counts as required, so a later require of the
        same file is a no-op.
        """
        session = self._session
        canonical = session.loader.canonical(path)
        session.visited.add(canonical)
        location = PosInfo(path, 1, 1)
        source = self._read(path, location)
        return self.parse_source(source, path, canonical, location)

    def parse_source(self, source: str, name: str, path: str, location: PosInfo) -> File:
        """Parse source as a file nested in the current one (if any).

        Args:
            source: File content
            name: Name reported in positions inside the file
            path: Canonical identity of the file
            location: Position of the including directive, or of the file
                itself for a top-level parse

        Returns:
            The completed File node.
        """
        # Import here to avoid circular import at module load
        from preline.parser import Parser

        session = self._session
        frame = FileFrame(location=location, name=name, path=path)
        session.push(frame)
        logger.debug("entering %s (depth %d)", name, session.depth)
        try:
            Parser(source, name, self).parse()
        finally:
            session.pop()
            logger.debug("leaving %s", name)

        node = frame.freeze()
        parent = session.current
        if parent is not None:
            parent.children.append(node)
        return node

    def _read(self, name: str, location: PosInfo) -> str:
        try:
            return self._session.loader.read(name)
        except LoadError as exc:
            if exc.location is None:
                exc.location = location
            raise
