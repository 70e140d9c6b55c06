"""Entry point for the tree document checker.

Usage
-----
.. code-block:: console

    python treelang_main.py docs/example.tree
    python treelang_main.py docs/example.tree --tabs
    python treelang_main.py docs/example.tree --spaces 4 --verbose

The script:

1. Reads the ``.tree`` file via :func:`~treelang_file_reader.read_tree_file`.
2. Parses it via :func:`~tree_parser.parse_tree`.
3. Prints a summary and the document in canonical form, or the first parse
   error with a source snippet pointing at it.
"""

from __future__ import annotations

import argparse
import logging
import sys

from tree_errors import ParseError
from tree_indent import Indent
from tree_nodes import format_tree
from tree_parser import parse_tree
from treelang_file_reader import read_tree_file

DEFAULT_SPACES = 2


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treelang",
        description="Parse an indentation-structured .tree document.",
    )
    parser.add_argument("file", help="path to the .tree document")
    indent = parser.add_mutually_exclusive_group()
    indent.add_argument("--tabs", action="store_true", help="indent with one tab per level")
    indent.add_argument(
        "--spaces",
        type=int,
        default=DEFAULT_SPACES,
        metavar="N",
        help=f"indent with N spaces per level (default: {DEFAULT_SPACES})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Check a ``.tree`` document from the command line.

    Args:
        argv: Argument list (defaults to :data:`sys.argv` when ``None``).

    Returns:
        Exit code: ``0`` on success, ``1`` on any error.
    """
    args = _build_arg_parser().parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        indent = Indent.tabs() if args.tabs else Indent.spaces(args.spaces)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1

    # ------------------------------------------------------------------ #
    # Step 1 – read the .tree file                                        #
    # ------------------------------------------------------------------ #
    try:
        source = read_tree_file(args.file)
    except (ValueError, FileNotFoundError, IOError) as exc:
        print(f"Error reading tree file: {exc}")
        return 1

    # ------------------------------------------------------------------ #
    # Step 2 – parse into a tree                                          #
    # ------------------------------------------------------------------ #
    try:
        tree = parse_tree(source, indent)
    except ParseError as exc:
        print(f"Parse error: {exc}")
        print(f" --> {source.location_label(exc.location)}")
        print(exc.render(source), end="")
        return 1

    # ------------------------------------------------------------------ #
    # Step 3 – report results                                             #
    # ------------------------------------------------------------------ #
    if not tree.roots:
        print(f"Warning: '{args.file}' contains no nodes.")
        return 0

    print(f"Parsed {len(tree)} root node(s) from '{args.file}' ({indent} indentation).")
    print()
    print(format_tree(tree, indent), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
