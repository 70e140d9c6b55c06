import logging
import os
import sys

from tree_source import SourceText

logger = logging.getLogger(__name__)

TREE_SUFFIX = ".tree"


def read_tree_file(file_path: str) -> SourceText:
    """Read a .tree document and return it as a :class:`~tree_source.SourceText`.

    The text is returned unchanged: blank lines, comments and indentation
    are all significant to positions, so nothing is stripped here.

    Args:
        file_path: Path to the ``.tree`` file.

    Returns:
        The file content, named after *file_path* for diagnostics.

    Raises:
        ValueError: If *file_path* does not end with ``.tree``.
        FileNotFoundError: If *file_path* does not exist on disk.
        IOError: If the file cannot be read for any other reason.
    """
    if not file_path.endswith(TREE_SUFFIX):
        raise ValueError(f"Expected a {TREE_SUFFIX} file, got: '{file_path}'")

    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Tree file not found: '{file_path}'")

    # newline="" keeps "\r\n" intact so byte offsets match the file on disk.
    with open(file_path, "r", encoding="utf-8", newline="") as fh:
        content = fh.read()

    logger.debug("Read %d character(s) from %s", len(content), file_path)
    return SourceText(content, name=file_path)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python treelang_file_reader.py <file_path>")
        sys.exit(1)

    try:
        source = read_tree_file(sys.argv[1])
        lines = source.content.splitlines()
        print(f"Successfully read {len(lines)} line(s):")
        for ln in lines:
            print(f"  {ln}")
    except (ValueError, FileNotFoundError, IOError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)
