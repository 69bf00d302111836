"""Tests for file loaders and preprocessing files on disk."""

import logging
import os
from pathlib import Path

import pytest

from preline import (
    FileLoader,
    LoadError,
    LocalFileLoader,
    MappingFileLoader,
    PosInfo,
    Preprocessor,
    parse,
)


class TestMappingFileLoader:
    """In-memory loader."""

    def test_read_normalizes_paths(self) -> None:
        loader = MappingFileLoader({"lib/a": "A", "./b": "B"})
        assert loader.read("lib/../lib/a") == "A"
        assert loader.read("b") == "B"
        assert loader.read("./lib/a") == "A"

    def test_missing_path(self) -> None:
        loader = MappingFileLoader({})
        with pytest.raises(LoadError, match="no such file") as exc_info:
            loader.read("gone")
        assert exc_info.value.path == "gone"
        assert exc_info.value.location is None

    def test_canonical(self) -> None:
        loader = MappingFileLoader({})
        assert loader.canonical("a/./b/../c") == "a/c"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MappingFileLoader({}), FileLoader)
        assert isinstance(LocalFileLoader(), FileLoader)


class TestLocalFileLoader:
    """Filesystem loader."""

    def test_read_preserves_line_endings(self, tmp_path: Path) -> None:
        target = tmp_path / "crlf.txt"
        target.write_bytes(b"a\r\nb\r\n")
        assert LocalFileLoader().read(str(target)) == "a\r\nb\r\n"

    def test_read_missing(self, tmp_path: Path) -> None:
        target = str(tmp_path / "missing.txt")
        with pytest.raises(LoadError, match="cannot read") as exc_info:
            LocalFileLoader().read(target)
        assert exc_info.value.path == target
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_read_directory(self, tmp_path: Path) -> None:
        with pytest.raises(LoadError):
            LocalFileLoader().read(str(tmp_path))

    def test_decode_error(self, tmp_path: Path) -> None:
        target = tmp_path / "latin.txt"
        target.write_bytes("caf\xe9".encode("latin-1"))
        with pytest.raises(LoadError, match="cannot decode"):
            LocalFileLoader().read(str(target))
        assert LocalFileLoader(encoding="latin-1").read(str(target)) == "caf\xe9"

    def test_canonical_resolves_symlinks(self, tmp_path: Path) -> None:
        target = tmp_path / "real.txt"
        target.write_text("x")
        link = tmp_path / "link.txt"
        link.symlink_to(target)
        loader = LocalFileLoader()
        assert loader.canonical(str(link)) == loader.canonical(str(target))
        assert loader.canonical(str(target)) == os.path.realpath(target)

    def test_canonical_fallback_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unresolvable path degrades to its absolute form with a warning."""
        missing = str(tmp_path / "nope" / "file.txt")
        with caplog.at_level(logging.WARNING, logger="preline"):
            result = LocalFileLoader().canonical(missing)
        assert result == os.path.abspath(missing)
        assert any("cannot resolve" in r.getMessage() for r in caplog.records)
        assert all(r.name == "preline.loader" for r in caplog.records)


class TestFilesOnDisk:
    """End-to-end preprocessing of real files."""

    def test_include_relative_to_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Includes resolve against the including file, not the working directory."""
        src = tmp_path / "src"
        (src / "lib").mkdir(parents=True)
        (src / "main.txt").write_text('top\n# include "lib/a.txt"\n')
        (src / "lib" / "a.txt").write_text('# include "b.txt"\n')
        (src / "lib" / "b.txt").write_text("B\n")
        monkeypatch.chdir(tmp_path)

        root = parse(str(src / "main.txt"))
        assert root.render() == "top\nB\n"
        assert [Path(f.name).name for f in root.files()] == ["a.txt", "b.txt"]

    def test_require_through_symlink_once(self, tmp_path: Path) -> None:
        """require identifies files by canonical path, so aliases count as one."""
        (tmp_path / "lib.txt").write_text("LIB\n")
        (tmp_path / "alias.txt").symlink_to(tmp_path / "lib.txt")
        main = tmp_path / "main.txt"
        main.write_text('# require "lib.txt"\n# require "alias.txt"\nend\n')

        assert Preprocessor().process(str(main)) == "LIB\nend\n"

    def test_top_level_file_counts_as_required(self, tmp_path: Path) -> None:
        main = tmp_path / "main.txt"
        main.write_text('a\n# require "main.txt"\nb\n')
        assert Preprocessor().process(str(main)) == "a\nb\n"

    def test_crlf_directives(self, tmp_path: Path) -> None:
        (tmp_path / "c.txt").write_bytes(b"C\r\n")
        main = tmp_path / "main.txt"
        main.write_bytes(b'# include "c.txt"\r\nx\r\n')
        assert Preprocessor().process(str(main)) == "C\r\nx\r\n"

    def test_missing_top_level_file(self, tmp_path: Path) -> None:
        missing = str(tmp_path / "missing.txt")
        with pytest.raises(LoadError) as exc_info:
            parse(missing)
        assert exc_info.value.location == PosInfo(missing, 1, 1)

    def test_missing_include_reports_directive(self, tmp_path: Path) -> None:
        main = tmp_path / "main.txt"
        main.write_text('ok\n  # include "missing.txt"\n')
        with pytest.raises(LoadError) as exc_info:
            parse(str(main))
        err = exc_info.value
        assert err.location == PosInfo(str(main), 2, 3)
        assert err.path == str(tmp_path / "missing.txt")
        assert str(err).startswith(f"{main}:2:3: cannot read")

    def test_custom_loader_used_for_top_level(self) -> None:
        pre = Preprocessor(loader=MappingFileLoader({"main": '# include "x"\n', "x": "X"}))
        assert pre.process("main") == "X"
