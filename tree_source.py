"""Source positions and diagnostic snippets for tree documents.

Every node and item produced by :func:`~tree_parser.parse_tree` carries a
position into the buffer it was parsed from:

:class:`Offset`
    A byte position (into the UTF-8 encoding of the source) plus the
    1-based line number it falls on.
:class:`Span`
    An :class:`Offset` plus a length in bytes.

:class:`SourceText` owns one source buffer and turns those coordinates back
into text: the line a position sits on, the column within that line, and a
rendered snippet with a caret underline, e.g.::

     1 | abc:
     2 |   def 23abc
       |       ^^^^^
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, order=True)
class Offset:
    """A byte position plus the line number it falls on."""

    byte: int = 0
    line_number: int = 1

    def increase_bytes(self, count: int) -> Offset:
        return Offset(self.byte + count, self.line_number)

    def increase_line_number(self, count: int) -> Offset:
        return Offset(self.byte, self.line_number + count)

    def span(self, length: int) -> Span:
        """Return a :class:`Span` of *length* bytes starting here."""
        return Span(self, length)


@dataclass(frozen=True)
class Span:
    """A contiguous run of *length* bytes starting at *offset*."""

    offset: Offset
    length: int

    @property
    def line_number(self) -> int:
        return self.offset.line_number

    @property
    def end(self) -> int:
        """Byte position one past the last byte of the span."""
        return self.offset.byte + self.length


Location = Union[Offset, Span]


def _as_offset(location: Location) -> Offset:
    return location.offset if isinstance(location, Span) else location


def _count_digits(n: int) -> int:
    return len(str(n)) if n > 0 else 1


class SourceText:
    """A named source buffer that resolves offsets and spans to text.

    Args:
        content: The full source text.
        name: Label used in diagnostic headers (usually the file path).
    """

    def __init__(self, content: str, name: str = "<source>") -> None:
        self.content = content
        self.name = name
        self._encoded = content.encode("utf-8")

    def __repr__(self) -> str:
        return f"SourceText(name={self.name!r}, bytes={len(self._encoded)})"

    @classmethod
    def coerce(cls, source: str | SourceText) -> SourceText:
        """Wrap a plain string, or return *source* unchanged."""
        return source if isinstance(source, SourceText) else cls(source)

    # ------------------------------------------------------------------ #
    # Line lookups                                                         #
    # ------------------------------------------------------------------ #

    def line_span(self, location: Location) -> Span:
        """Return the span of the whole line containing *location*.

        The span excludes the terminating newline.
        """
        byte = _as_offset(location).byte
        line_start = self._encoded.rfind(b"\n", 0, byte) + 1
        line_end = self._encoded.find(b"\n", line_start)
        if line_end == -1:
            line_end = len(self._encoded)
        line_number = self._encoded.count(b"\n", 0, line_start) + 1
        return Offset(line_start, line_number).span(line_end - line_start)

    def line_span_before(self, location: Location) -> Span | None:
        """Return the span of the line preceding *location*'s line, if any."""
        line_span = self.line_span(location)
        if line_span.offset.byte == 0:
            return None
        previous = Offset(line_span.offset.byte - 1, line_span.line_number - 1)
        return self.line_span(previous)

    def span_str(self, span: Span) -> str:
        """Return the source text covered by *span*."""
        return self._encoded[span.offset.byte:span.end].decode("utf-8")

    def line_str(self, location: Location) -> str:
        return self.span_str(self.line_span(location))

    def line_number(self, location: Location) -> int:
        return _as_offset(location).line_number

    def byte_offset_on_line(self, location: Location) -> int:
        """Return the 0-based byte column of *location* within its line."""
        offset = _as_offset(location)
        return offset.byte - self.line_span(offset).offset.byte

    def location_label(self, location: Location) -> str:
        """Return ``name:line:column`` with a 1-based byte column."""
        line = self.line_number(location)
        column = self.byte_offset_on_line(location) + 1
        return f"{self.name}:{line}:{column}"

    # ------------------------------------------------------------------ #
    # Snippet rendering                                                    #
    # ------------------------------------------------------------------ #

    def _highlight(self, location: Location) -> str:
        offset = _as_offset(location)
        line_start = self.line_span(offset).offset.byte
        lead = self._encoded[line_start:offset.byte].decode("utf-8")
        if isinstance(location, Span):
            carets = len(self.span_str(location))
        else:
            carets = 1
        # Tabs stay tabs, every other character becomes a space.
        padding = "".join("\t" if c == "\t" else " " for c in lead)
        return padding + "^" * carets

    def offset_section(self, offset: Offset) -> str:
        """Render a snippet with a single caret under *offset*."""
        return self.section(offset)

    def span_section(self, span: Span) -> str:
        """Render a snippet with one caret per character of *span*."""
        return self.section(span)

    def section(self, location: Location) -> str:
        """Render the snippet for an :class:`Offset` or :class:`Span`.

        Shows the line before the location (when there is one) as context,
        preceded by an elision marker when even earlier lines exist.

        Returns:
            The rendered lines, each terminated by a newline.
        """
        line_span = self.line_span(location)
        previous = self.line_span_before(line_span)

        first_line_number = previous.line_number if previous else line_span.line_number
        last_line_number = line_span.line_number
        width = _count_digits(last_line_number)

        lines: list[str] = []
        if first_line_number > 1:
            lines.append(f" {first_line_number - 1:>{width}} | ...")
        if previous is not None:
            lines.append(f" {previous.line_number:>{width}} | {self.span_str(previous)}")
        lines.append(f" {last_line_number:>{width}} | {self.span_str(line_span)}")
        lines.append(f" {'':>{width}} | {self._highlight(location)}")
        return "\n".join(lines) + "\n"
