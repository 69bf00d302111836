"""Tree visitor for preline output trees.

Provides a base visitor class with match-based dispatch.

Example, listing every file that contributed to the output:

    class FileCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_file(self, node: File) -> None:
            self.names.append(node.name)

    collector = FileCollector()
    collector.visit(root)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from typing import Generic, TypeVar

from preline.nodes import Comment, File, Node, Text

T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children of File
    nodes are walked automatically after the ``visit_file`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        if isinstance(node, File):
            for child in node.children:
                self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_file(self, node: File) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case File():
                return self.visit_file(node)
            case Text():
                return self.visit_text(node)
            case Comment():
                return self.visit_comment(node)
            case _:
                return self.visit_default(node)
