"""Indentation settings and depth extraction."""

from __future__ import annotations

from dataclasses import dataclass

from tree_errors import IndentChars
from tree_input import Input


@dataclass(frozen=True)
class Indent:
    """One indentation unit: a single tab, or a fixed number of spaces.

    Build instances with :meth:`tabs` or :meth:`spaces`.
    """

    unit: str

    @classmethod
    def tabs(cls) -> Indent:
        return cls("\t")

    @classmethod
    def spaces(cls, count: int) -> Indent:
        """Indentation by *count* spaces.

        Raises:
            ValueError: If *count* is not a positive integer.
        """
        if count <= 0:
            raise ValueError(f"indentation width must be a positive number of spaces, got {count}")
        return cls(" " * count)

    def __str__(self) -> str:
        if self.unit == "\t":
            return "tabs"
        return f"{len(self.unit)} space(s)"

    def extract(self, line: Input) -> tuple[int, Input]:
        """Strip whole indentation units from the front of *line*.

        Returns:
            ``(depth, rest)`` where *depth* is the number of units removed.

        Raises:
            IndentChars: If whitespace remains after the last whole unit,
                e.g. 3 spaces with a 2-space unit or a tab among spaces.
        """
        depth = 0
        while True:
            rest = line.skip_literal(self.unit)
            if rest is None:
                break
            depth += 1
            line = rest
        span = line.leading_whitespace_span()
        if span is not None:
            raise IndentChars(span)
        return depth, line
