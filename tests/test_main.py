"""Tests for treelang_file_reader.read_tree_file and the treelang_main.main command line."""

from __future__ import annotations

import pytest

from treelang_file_reader import read_tree_file
from treelang_main import main
from tree_indent import Indent
from tree_parser import parse_tree


# ---------------------------------------------------------------------------
# File reading
# ---------------------------------------------------------------------------

class TestReadTreeFile:
    def test_reads_content_unchanged(self, tree_file, sample_source):
        source = read_tree_file(tree_file)
        assert source.content == sample_source
        assert source.name == tree_file

    def test_wrong_extension_raises(self, write_tree):
        path = write_tree("a", name="doc.txt")
        with pytest.raises(ValueError, match=".tree"):
            read_tree_file(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_tree_file(str(tmp_path / "missing.tree"))

    def test_crlf_is_preserved(self, write_tree):
        source = read_tree_file(write_tree("a:\r\n  b\r\n"))
        assert source.content == "a:\r\n  b\r\n"
        tree = parse_tree(source, Indent.spaces(2))
        assert len(tree[0].children) == 1
        assert source.byte_offset_on_line(tree[0].children[0].location) == 2


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------

class TestMain:
    def test_success(self, tree_file, capsys):
        assert main([tree_file]) == 0
        out = capsys.readouterr().out
        assert "Parsed 2 root node(s)" in out
        assert "(2 space(s) indentation)" in out
        assert "server main: (localhost 8080)\n  route /health:\n    respond 200 [ok]\n" in out

    def test_parse_error(self, write_tree, capsys):
        path = write_tree("abc:\n  def 23abc\n")
        assert main([path]) == 1
        out = capsys.readouterr().out
        assert "Parse error: Line 2: invalid integer format '23abc'" in out
        assert f" --> {path}:2:7" in out
        assert " 2 |   def 23abc\n   |       ^^^^^\n" in out

    def test_tabs_flag(self, write_tree, capsys):
        path = write_tree("a:\n\tb\n")
        assert main([path, "--tabs"]) == 0
        assert "(tabs indentation)" in capsys.readouterr().out

    def test_tabs_rejected_with_default_spaces(self, write_tree, capsys):
        path = write_tree("a:\n\tb\n")
        assert main([path]) == 1
        assert "invalid indentation characters" in capsys.readouterr().out

    def test_spaces_flag(self, write_tree, capsys):
        path = write_tree("a:\n    b\n")
        assert main([path, "--spaces", "4"]) == 0
        assert "a:\n    b\n" in capsys.readouterr().out

    def test_zero_spaces_rejected(self, tree_file, capsys):
        assert main([tree_file, "--spaces", "0"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_wrong_extension(self, write_tree, capsys):
        assert main([write_tree("a", name="doc.cfg")]) == 1
        assert "Error reading tree file" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.tree")]) == 1
        assert "Tree file not found" in capsys.readouterr().out

    def test_empty_document(self, write_tree, capsys):
        assert main([write_tree("; nothing here\n")]) == 0
        assert "contains no nodes" in capsys.readouterr().out

    def test_missing_argument_exits(self):
        with pytest.raises(SystemExit):
            main([])

    def test_deeply_nested_document(self, write_tree, capsys):
        line = "x " + "(" * 3000 + ")" * 3000 + "\n"
        assert main([write_tree(line)]) == 0
        assert capsys.readouterr().out.endswith(line)
