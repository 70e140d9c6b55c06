"""Parser for indentation-structured tree documents.

Converts source text into a :class:`~tree_nodes.Tree`.  The text is
processed one line at a time:

1. Blank and comment-only lines are skipped.
2. :meth:`~tree_indent.Indent.extract` strips the indentation and reports
   the line's depth.
3. :func:`parse_node` turns the rest of the line into a
   :class:`~tree_nodes.Node`.
4. :class:`DepthStack` attaches the node to its parent.

Line syntax
-----------
``word 23 -1.5 (nested [items {here}])``
    A statement: a sequence of items.
``signature items: argument items``
    A directive.  Lines indented one level deeper become its children.
``; text``
    A comment, running to the end of the line.

A token that starts with a digit or ``-`` must be a valid number: ``23abc``
and ``-`` are errors, not words.
"""

from __future__ import annotations

import logging
import math
import re
import struct
from fractions import Fraction

from tree_errors import (
    EmptyDirectiveSignature,
    IndentDepth,
    InvalidFloat,
    InvalidInt,
    StatementWithChild,
    UnclosedGroup,
    UnexpectedChar,
)
from tree_indent import Indent
from tree_input import COMMENT, Input, is_whitespace
from tree_nodes import (
    GROUP_KINDS,
    Directive,
    Float,
    Int,
    Item,
    Node,
    Statement,
    Tree,
    Word,
)
from tree_source import Offset, SourceText, Span

logger = logging.getLogger(__name__)

DIRECTIVE = ":"

_GROUPS: dict[str, type] = {kind.open: kind for kind in GROUP_KINDS}

_STRUCTURE_CHARS: frozenset[str] = frozenset(
    [COMMENT, DIRECTIVE]
    + [kind.open for kind in GROUP_KINDS]
    + [kind.close for kind in GROUP_KINDS]
)

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1


def _is_word_char(c: str) -> bool:
    return not is_whitespace(c) and c not in _STRUCTURE_CHARS


_FLOAT32_INF_BITS = 0x7F800000


def _float32_bits(value: float) -> int:
    try:
        return struct.unpack("<I", struct.pack("<f", value))[0]
    except OverflowError:
        return _FLOAT32_INF_BITS


def _float32_exact(bits: int) -> Fraction:
    # Overflow rounds as if the next exponent step were representable.
    if bits == _FLOAT32_INF_BITS:
        return Fraction(2 ** 128)
    return Fraction(struct.unpack("<f", struct.pack("<I", bits))[0])


def _to_float32(literal: str) -> float:
    """Round the decimal *literal* to the nearest single-precision value.

    Rounding is done once, from the exact decimal value, with ties to even.
    Magnitudes past the largest finite value become infinite.
    """
    approx = float(literal)
    if approx == 0.0:
        return approx
    if abs(approx) >= 2.0 ** 128:
        return math.copysign(math.inf, approx)

    exact = abs(Fraction(literal))
    bits = _float32_bits(abs(approx))
    nearest = _float32_exact(bits)
    if nearest != exact:
        other_bits = bits + 1 if nearest < exact else bits - 1
        other = _float32_exact(other_bits)
        error, other_error = abs(nearest - exact), abs(other - exact)
        if other_error < error or (other_error == error and other_bits % 2 == 0):
            bits = other_bits

    if bits == _FLOAT32_INF_BITS:
        value = math.inf
    else:
        value = struct.unpack("<f", struct.pack("<I", bits))[0]
    return math.copysign(value, approx)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

def _parse_number(value: str, span: Span) -> Item:
    """Parse a token that starts with a digit or ``-``."""
    if "." in value:
        if not _FLOAT_RE.fullmatch(value):
            raise InvalidFloat(span, value)
        return Item(kind=Float(_to_float32(value)), location=span)
    if not _INT_RE.fullmatch(value):
        raise InvalidInt(span, value)
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        raise InvalidInt(span, value)
    return Item(kind=Int(number), location=span)


def _parse_token(cursor: Input) -> tuple[Item, Input]:
    first = cursor.next_char()
    taken = cursor.take_while(_is_word_char)
    if taken is None:
        raise UnexpectedChar(cursor.offset, first)
    value, span, rest = taken
    if value[0] in "0123456789-":
        return _parse_number(value, span), rest
    return Item(kind=Word(value), location=span), rest


def _parse_group(cursor: Input) -> tuple[Item, Input]:
    """Parse a group starting at *cursor*, including any nested groups.

    Open groups are kept on an explicit stack of ``(kind, open_offset,
    items)`` frames, so nesting depth is not bounded by the interpreter's
    recursion limit.
    """
    frames: list[tuple[type, Offset, list[Item]]] = []
    rest = cursor
    while True:
        first = rest.next_char()
        if first in _GROUPS:
            kind = _GROUPS[first]
            frames.append((kind, rest.offset, []))
            rest = rest.skip_literal(kind.open)
        else:
            item, rest = _parse_token(rest)
            frames[-1][2].append(item)

        while True:
            kind, open_offset, items = frames[-1]
            rest = rest.skip_whitespace_and_comments()
            if rest.is_empty():
                raise UnclosedGroup(open_offset, kind.close)
            after_close = rest.skip_literal(kind.close)
            if after_close is None:
                break
            frames.pop()
            rest = after_close
            group = Item(kind=kind(items), location=open_offset.span(1))
            if not frames:
                return group, rest
            frames[-1][2].append(group)


def parse_item(cursor: Input) -> tuple[Item, Input]:
    """Parse one item from the front of *cursor*.

    *cursor* must not be empty and must not start with whitespace.

    Returns:
        ``(item, rest)``.

    Raises:
        UnexpectedChar: If the next character cannot start an item.
        UnclosedGroup: If a group is still open at the end of the line.
        InvalidInt: If a numeric-looking token is not a valid integer.
        InvalidFloat: If a numeric-looking token with ``.`` is not a valid float.
    """
    first = cursor.next_char()
    assert first is not None, "empty cursor reached parse_item"

    if first in _GROUPS:
        return _parse_group(cursor)
    return _parse_token(cursor)


def parse_all_items(cursor: Input) -> list[Item]:
    """Parse items until *cursor* is exhausted."""
    items: list[Item] = []
    while True:
        cursor = cursor.skip_whitespace_and_comments()
        if cursor.is_empty():
            return items
        item, cursor = parse_item(cursor)
        items.append(item)


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

def parse_node(cursor: Input) -> Node:
    """Parse one de-indented line into a statement or directive node.

    Raises:
        EmptyDirectiveSignature: If the line starts with ``:``.
        ParseError: Any error from :func:`parse_item`.
    """
    location = cursor.offset
    items: list[Item] = []
    while True:
        cursor = cursor.skip_whitespace_and_comments()
        if cursor.is_empty():
            return Node(kind=Statement(signature=items), location=location)
        rest = cursor.skip_literal(DIRECTIVE)
        if rest is not None:
            if not items:
                raise EmptyDirectiveSignature(location)
            directive = Directive(signature=items, arguments=parse_all_items(rest))
            return Node(kind=directive, location=location)
        item, cursor = parse_item(cursor)
        items.append(item)


# ---------------------------------------------------------------------------
# Tree assembly
# ---------------------------------------------------------------------------

class DepthStack:
    """Assembles nodes into a tree from their depths, in source order.

    ``levels[d]`` is the currently open node at depth ``d``.  A node stays
    open, and can still receive children, until a line at the same or a
    shallower depth arrives.
    """

    def __init__(self) -> None:
        self.tree = Tree()
        self.levels: list[Node] = []

    def insert(self, depth: int, node: Node) -> None:
        """Open *node* at *depth*, closing any deeper nodes first.

        Raises:
            IndentDepth: If *depth* skips a level.
            StatementWithChild: If closing a node attaches it to a statement.
        """
        self.vacate_level(depth)
        if depth != len(self.levels):
            raise IndentDepth(node.location)
        self.levels.append(node)

    def vacate_level(self, depth: int) -> None:
        """Close open nodes until only *depth* levels remain."""
        while len(self.levels) > depth:
            node = self.levels.pop()
            if not self.levels:
                self.tree.roots.append(node)
                continue
            parent = self.levels[-1].kind
            if isinstance(parent, Statement):
                raise StatementWithChild(node.location)
            parent.children.append(node)

    def into_tree(self) -> Tree:
        self.vacate_level(0)
        return self.tree


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_tree(source: str | SourceText, indent: Indent) -> Tree:
    """Parse a whole document into a :class:`~tree_nodes.Tree`.

    Args:
        source: The document text, optionally wrapped in a
            :class:`~tree_source.SourceText`.
        indent: The indentation unit the document uses.

    Returns:
        The tree of root nodes.  Positions in it refer to *source*.

    Raises:
        ParseError: On the first syntax error; no partial tree is returned.
    """
    source = SourceText.coerce(source)
    logger.debug("Parsing %s with %s indentation", source.name, indent)

    stack = DepthStack()
    cursor: Input | None = Input.new(source.content)
    while cursor is not None:
        line, cursor = cursor.split_line()
        if line.skip_whitespace_and_comments().is_empty():
            continue
        depth, line = indent.extract(line)
        stack.insert(depth, parse_node(line))

    tree = stack.into_tree()
    logger.debug("Parsed %d root node(s) from %s", len(tree), source.name)
    return tree
