"""Tree node definitions for parsed tree documents.

A document parses into a :class:`Tree` of :class:`Node` objects.  Every line
of the document becomes one node; its indentation decides where in the tree
it lands.

Node kinds
----------

:class:`Statement`
    A leaf line: ``signature items``.  Statements cannot have children.
:class:`Directive`
    ``signature items: argument items`` followed by zero or more child
    lines indented one level deeper.

Item kinds
----------

Each line is a sequence of :class:`Item` objects whose ``kind`` is one of

**Scalars**
    :class:`Word`, :class:`Int` (32-bit signed), :class:`Float` (single
    precision)

**Groups**
    :class:`Parentheses`, :class:`Brackets`, :class:`Braces`, each holding a
    nested list of items.

Positions
---------

``Node.location`` is the :class:`~tree_source.Offset` of the first character
after the indentation.  ``Item.location`` is the :class:`~tree_source.Span`
of the token; for groups it covers only the opening delimiter.

Helper utilities
----------------
:func:`format_tree`
    Serialize a tree back to canonical source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Iterator, Union

from tree_indent import Indent
from tree_source import Offset, Span

if TYPE_CHECKING:
    from tree_source import SourceText

# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


@dataclass
class Word:
    value: str


@dataclass
class Int:
    value: int


@dataclass
class Float:
    value: float


@dataclass
class Parentheses:
    items: list[Item] = field(default_factory=list)

    open: ClassVar[str] = "("
    close: ClassVar[str] = ")"


@dataclass
class Brackets:
    items: list[Item] = field(default_factory=list)

    open: ClassVar[str] = "["
    close: ClassVar[str] = "]"


@dataclass
class Braces:
    items: list[Item] = field(default_factory=list)

    open: ClassVar[str] = "{"
    close: ClassVar[str] = "}"


GROUP_KINDS: tuple[type, ...] = (Parentheses, Brackets, Braces)

ItemKind = Union[Word, Int, Float, Parentheses, Brackets, Braces]


@dataclass
class Item:
    """One token of a line together with its source span."""

    kind: ItemKind
    location: Span


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass
class Statement:
    signature: list[Item] = field(default_factory=list)


@dataclass
class Directive:
    """A line with a ``:``; indented lines below it become its children."""

    signature: list[Item] = field(default_factory=list)
    arguments: list[Item] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)


NodeKind = Union[Statement, Directive]


@dataclass
class Node:
    kind: NodeKind
    location: Offset

    @property
    def children(self) -> list[Node]:
        """The directive's children; always empty for a statement."""
        if isinstance(self.kind, Directive):
            return self.kind.children
        return []


@dataclass
class Tree:
    """The root nodes of a parsed document, in source order."""

    roots: list[Node] = field(default_factory=list)

    @classmethod
    def parse(cls, source: str | SourceText, indent: Indent) -> Tree:
        """Parse *source* assuming *indent*; see :func:`~tree_parser.parse_tree`."""
        from tree_parser import parse_tree  # avoid circular import at module level

        return parse_tree(source, indent)

    def __len__(self) -> int:
        return len(self.roots)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.roots)

    def __getitem__(self, index: int) -> Node:
        return self.roots[index]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _format_float(value: float) -> str:
    """Render *value* so that it reads back as a float, never an int."""
    text = repr(value)
    if "." in text:
        return text
    if "e" in text:
        mantissa, _, exponent = text.partition("e")
        return f"{mantissa}.0e{exponent}"
    return text + ".0"


def _format_items(items: list[Item]) -> str:
    """Render *items* space-separated; groups are expanded without recursion."""
    parts: list[str] = []
    pending: list[Item | str] = []
    for index in reversed(range(len(items))):
        pending.append(items[index])
        if index:
            pending.append(" ")
    while pending:
        entry = pending.pop()
        if isinstance(entry, str):
            parts.append(entry)
            continue
        kind = entry.kind
        if isinstance(kind, Word):
            parts.append(kind.value)
        elif isinstance(kind, Int):
            parts.append(str(kind.value))
        elif isinstance(kind, Float):
            parts.append(_format_float(kind.value))
        else:
            pending.append(kind.close)
            for index in reversed(range(len(kind.items))):
                pending.append(kind.items[index])
                if index:
                    pending.append(" ")
            pending.append(kind.open)
    return "".join(parts)


def format_tree(tree: Tree, indent: Indent) -> str:
    """Serialize *tree* to canonical source text.

    One line per node, items separated by single spaces, no comments or
    blank lines.  Parsing the result with the same *indent* gives back a
    tree of the same shape and values.

    Args:
        tree: The tree to render.
        indent: Indentation unit used for each level of depth.

    Returns:
        The document text, newline-terminated (empty for an empty tree).
    """
    out: list[str] = []
    pending = [(root, 0) for root in reversed(tree.roots)]
    while pending:
        node, depth = pending.pop()
        prefix = indent.unit * depth
        kind = node.kind
        if isinstance(kind, Statement):
            out.append(prefix + _format_items(kind.signature))
            continue
        line = prefix + _format_items(kind.signature) + ":"
        if kind.arguments:
            line += " " + _format_items(kind.arguments)
        out.append(line)
        pending.extend((child, depth + 1) for child in reversed(kind.children))
    return "".join(line + "\n" for line in out)
