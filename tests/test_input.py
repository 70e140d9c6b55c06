"""Tests for the immutable tree_input.Input cursor."""

from __future__ import annotations

import dataclasses

import pytest

from tree_input import Input, is_whitespace
from tree_source import Offset, Span


class TestSplitLine:
    def test_split(self):
        line, rest = Input.new("ab\ncd").split_line()
        assert line.content == "ab"
        assert line.offset == Offset(0, 1)
        assert rest.content == "cd"
        assert rest.offset == Offset(3, 2)

    def test_last_line(self):
        cursor = Input.new("ab")
        line, rest = cursor.split_line()
        assert line.content == "ab"
        assert rest is None

    def test_trailing_newline_leaves_empty_line(self):
        _, rest = Input.new("ab\n").split_line()
        assert rest.is_empty()
        assert rest.offset == Offset(3, 2)

    def test_multibyte_offsets(self):
        _, rest = Input.new("héllo\nx").split_line()
        assert rest.offset == Offset(7, 2)

    def test_line_does_not_see_rest(self):
        line, _ = Input.new("a\n;b").split_line()
        assert line.skip_literal(";") is None
        assert line.to_end().offset == Offset(1, 1)


class TestSkipping:
    def test_whitespace(self):
        cursor = Input.new(" \t abc").skip_whitespace_and_comments()
        assert cursor.content == "abc"
        assert cursor.offset == Offset(3, 1)

    def test_comment_consumes_rest(self):
        cursor = Input.new("  ; note (").skip_whitespace_and_comments()
        assert cursor.is_empty()
        assert cursor.offset == Offset(10, 1)

    def test_nothing_to_skip(self):
        cursor = Input.new("abc")
        assert cursor.skip_whitespace_and_comments() == cursor

    def test_skip_literal(self):
        cursor = Input.new(":rest")
        assert cursor.skip_literal(":").content == "rest"
        assert cursor.skip_literal("(") is None

    def test_skip_literal_sequence(self):
        cursor = Input.new("   x")
        assert cursor.skip_literal("  ").offset == Offset(2, 1)
        assert Input.new(" x").skip_literal("  ") is None


class TestTakeWhile:
    def test_take(self):
        taken, span, rest = Input.new("abc def").take_while(lambda c: c != " ")
        assert taken == "abc"
        assert span == Span(Offset(0, 1), 3)
        assert rest.content == " def"

    def test_take_to_end(self):
        taken, span, rest = Input.new("abc").take_while(str.isalpha)
        assert taken == "abc"
        assert rest.is_empty()

    def test_no_match(self):
        assert Input.new("(abc").take_while(str.isalpha) is None

    def test_span_counts_bytes(self):
        taken, span, rest = Input.new("éa b").take_while(lambda c: c != " ")
        assert taken == "éa"
        assert span.length == 3
        assert rest.offset == Offset(3, 1)

    def test_leading_whitespace_span(self):
        assert Input.new("\t  x").leading_whitespace_span() == Span(Offset(0, 1), 3)
        assert Input.new("x").leading_whitespace_span() is None


class TestValueSemantics:
    def test_operations_do_not_mutate(self):
        cursor = Input.new("  abc")
        cursor.skip_whitespace_and_comments()
        cursor.take_while(str.isspace)
        assert cursor.content == "  abc"
        assert cursor.offset == Offset(0, 1)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Input.new("x").start = 1

    def test_next_char(self):
        assert Input.new("xy").next_char() == "x"
        assert Input.new("").next_char() is None
        assert Input.new("").is_empty()


class TestWhitespace:
    @pytest.mark.parametrize("c", [" ", "\t", "\r", "\x0b", "\x0c", "\u3000", "\u00a0"])
    def test_whitespace(self, c):
        assert is_whitespace(c)

    @pytest.mark.parametrize("c", ["\x1c", "\x1d", "\x1e", "\x1f", "a", ";"])
    def test_not_whitespace(self, c):
        assert not is_whitespace(c)

    def test_separators_are_not_skipped(self):
        cursor = Input.new(" \x1fa").skip_whitespace_and_comments()
        assert cursor.content == "\x1fa"
        assert Input.new("\x1f a").leading_whitespace_span() is None
