"""Immutable input cursor used by the tree parser.

An :class:`Input` is a window ``text[start:end]`` over the full source plus
the :class:`~tree_source.Offset` of its first character.  Every operation
returns a new cursor; nothing is mutated in place, so a cursor can be kept
around for error reporting or backtracking at no cost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tree_source import Offset, Span

COMMENT = ";"

# Information separators that str.isspace accepts but are not layout whitespace.
_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(c: str) -> bool:
    return c.isspace() and c not in _SEPARATORS


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


@dataclass(frozen=True)
class Input:
    text: str
    start: int
    end: int
    offset: Offset

    @classmethod
    def new(cls, content: str) -> Input:
        """Return a cursor over all of *content*, positioned at line 1."""
        return cls(content, 0, len(content), Offset())

    @property
    def content(self) -> str:
        """The remaining text covered by this cursor."""
        return self.text[self.start:self.end]

    def is_empty(self) -> bool:
        return self.start >= self.end

    def next_char(self) -> str | None:
        return None if self.is_empty() else self.text[self.start]

    def _skip_chars(self, count: int) -> Input:
        skipped = self.text[self.start:self.start + count]
        offset = self.offset.increase_bytes(_utf8_len(skipped))
        offset = offset.increase_line_number(skipped.count("\n"))
        return Input(self.text, self.start + count, self.end, offset)

    def _truncate(self, count: int) -> Input:
        return Input(self.text, self.start, self.start + count, self.offset)

    def to_end(self) -> Input:
        return self._skip_chars(self.end - self.start)

    def split_line(self) -> tuple[Input, Input | None]:
        """Split off the first line.

        Returns:
            ``(line, rest)`` where *line* excludes the ``\\n`` and *rest*
            starts on the next line, or ``(self, None)`` when no newline is
            left.
        """
        index = self.text.find("\n", self.start, self.end)
        if index == -1:
            return self, None
        length = index - self.start
        return self._truncate(length), self._skip_chars(length + 1)

    def skip_whitespace_and_comments(self) -> Input:
        """Skip leading whitespace, and the rest of the input if a comment follows."""
        index = self.start
        while index < self.end and is_whitespace(self.text[index]):
            index += 1
        if self.text.startswith(COMMENT, index, self.end):
            return self.to_end()
        return self._skip_chars(index - self.start)

    def skip_literal(self, literal: str) -> Input | None:
        """Return the cursor past *literal*, or ``None`` if it does not come next.

        *literal* is usually a single character; a longer string must match
        in full.
        """
        if self.text.startswith(literal, self.start, self.end):
            return self._skip_chars(len(literal))
        return None

    def take_while(self, predicate: Callable[[str], bool]) -> tuple[str, Span, Input] | None:
        """Take the longest prefix whose characters all satisfy *predicate*.

        Returns:
            ``(taken, span, rest)``, or ``None`` if not even the first
            character matches.
        """
        index = self.start
        while index < self.end and predicate(self.text[index]):
            index += 1
        if index == self.start:
            return None
        taken = self.text[self.start:index]
        span = self.offset.span(_utf8_len(taken))
        return taken, span, self._skip_chars(index - self.start)

    def leading_whitespace_span(self) -> Span | None:
        taken = self.take_while(is_whitespace)
        return taken[1] if taken is not None else None
