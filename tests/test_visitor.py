"""Tests for preline.visitor: BaseVisitor dispatch and tree walking."""

from preline import CPP_COMMENT, MappingFileLoader, Preprocessor
from preline.nodes import Comment, File, Node, Text
from preline.visitor import BaseVisitor


def _tree() -> File:
    files = {"a": 'A\n# include "b"\n', "b": "// b note\nB\n"}
    pre = Preprocessor(loader=MappingFileLoader(files))
    pre.add_commenter(CPP_COMMENT)
    return pre.parse_string("root", 'r // root note\n# include "a"\n')


class _Collector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.seen: list[str] = []

    def visit_file(self, node: File) -> None:
        self.seen.append(f"file:{node.name}")

    def visit_text(self, node: Text) -> None:
        self.seen.append(f"text:{node.content!r}")

    def visit_comment(self, node: Comment) -> None:
        self.seen.append(f"comment:{node.content}")


class TestBaseVisitor:
    """Dispatch and traversal order."""

    def test_visits_in_output_order(self) -> None:
        collector = _Collector()
        collector.visit(_tree())
        assert collector.seen == [
            "file:root",
            "text:'r '",
            "comment:// root note",
            "text:'\\n'",
            "file:a",
            "text:'A\\n'",
            "file:b",
            "comment:// b note",
            "text:'\\nB\\n'",
        ]

    def test_default_handler(self) -> None:
        """Unhandled types fall through to visit_default."""

        class CountAll(BaseVisitor[None]):
            def __init__(self) -> None:
                self.count = 0

            def visit_default(self, node: Node) -> None:
                self.count += 1

        visitor = CountAll()
        visitor.visit(_tree())
        assert visitor.count == 9

    def test_return_value_of_root(self) -> None:
        class Namer(BaseVisitor[str]):
            def visit_file(self, node: File) -> str:
                return node.name

        assert Namer().visit(_tree()) == "root"

    def test_source_names_of_leaves(self) -> None:
        """A visitor can attribute every output span to its file."""

        class Attribution(BaseVisitor[None]):
            def __init__(self) -> None:
                self.spans: list[tuple[str, str]] = []

            def visit_text(self, node: Text) -> None:
                self.spans.append((node.location.source_name, node.content))

        visitor = Attribution()
        visitor.visit(_tree())
        assert ("b", "\nB\n") in visitor.spans
        assert ("a", "A\n") in visitor.spans
