"""Errors raised while parsing a tree document.

All errors derive from :class:`ParseError`, itself a :exc:`SyntaxError`, so
callers that already handle ``SyntaxError`` keep working.  Parsing stops at
the first error; each one carries the position needed to point at the
offending source:

``location``
    The :class:`~tree_source.Offset` or :class:`~tree_source.Span` that
    :meth:`ParseError.render` underlines.
``line_number``
    The 1-based line the error was found on.

The builtin ``SyntaxError.offset`` attribute (an integer column) is not
used.
"""

from __future__ import annotations

from tree_source import Location, Offset, SourceText, Span


class ParseError(SyntaxError):
    """Base class for every error raised by :func:`~tree_parser.parse_tree`."""

    def __init__(self, message: str, location: Location) -> None:
        super().__init__(f"Line {location.line_number}: {message}")
        self.location = location

    @property
    def line_number(self) -> int:
        return self.location.line_number

    def render(self, source: str | SourceText) -> str:
        """Render the snippet of *source* pointing at this error."""
        return SourceText.coerce(source).section(self.location)


class IndentChars(ParseError):
    """Whitespace left over after stripping whole indentation units."""

    def __init__(self, span: Span) -> None:
        super().__init__(
            "invalid indentation characters. "
            "Indent with whole units only (all tabs, or a fixed number of spaces)",
            span,
        )
        self.span = span


class IndentDepth(ParseError):
    """A line indented more than one level below the previous open node."""

    def __init__(self, offset: Offset) -> None:
        super().__init__("invalid indentation depth", offset)


class StatementWithChild(ParseError):
    """A line indented under a statement, which cannot have children."""

    def __init__(self, child_offset: Offset) -> None:
        super().__init__(
            "child node attached to statement. "
            "End the parent line with ':' to make it a directive",
            child_offset,
        )
        self.child_offset = child_offset


class UnexpectedChar(ParseError):
    def __init__(self, offset: Offset, unexpected: str) -> None:
        super().__init__(f"unexpected character '{unexpected}'", offset)
        self.unexpected = unexpected


class UnclosedGroup(ParseError):
    """End of line reached inside a ``(``, ``[`` or ``{`` group."""

    def __init__(self, open_offset: Offset, missing: str) -> None:
        super().__init__(f"missing closing '{missing}' character", open_offset)
        self.open_offset = open_offset
        self.missing = missing


class InvalidInt(ParseError):
    def __init__(self, span: Span, value: str) -> None:
        super().__init__(f"invalid integer format '{value}'", span)
        self.span = span
        self.value = value


class InvalidFloat(ParseError):
    def __init__(self, span: Span, value: str) -> None:
        super().__init__(f"invalid floating point format '{value}'", span)
        self.span = span
        self.value = value


class EmptyDirectiveSignature(ParseError):
    """A ``:`` with nothing before it on the line."""

    def __init__(self, offset: Offset) -> None:
        super().__init__(
            "empty directive signature. Example: section name: argument",
            offset,
        )
