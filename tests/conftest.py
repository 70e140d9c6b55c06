"""Shared pytest fixtures for the tree parser test suite."""

from __future__ import annotations

import pytest

from tree_indent import Indent


@pytest.fixture
def indent() -> Indent:
    """The two-space indentation most tests are written in."""
    return Indent.spaces(2)


@pytest.fixture
def sample_source() -> str:
    """A small document exercising directives, statements, groups and comments."""
    return (
        "; settings for the demo\n"
        "server main: (localhost 8080)\n"
        "  route /health:\n"
        "    respond 200 [ok]\n"
        "\n"
        "  limit -1 ; unlimited\n"
        "log level: debug\n"
    )


@pytest.fixture
def write_tree(tmp_path):
    """Return a helper that writes *content* to a .tree file and returns its path."""

    def _write(content: str, name: str = "doc.tree") -> str:
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return str(path)

    return _write


@pytest.fixture
def tree_file(write_tree, sample_source) -> str:
    """*sample_source* written to a temporary .tree file."""
    return write_tree(sample_source)
