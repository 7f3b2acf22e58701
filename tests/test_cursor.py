"""Tests for TextCursor."""

import pytest

from sobre.parsing.cursor import TextCursor


class TestTextCursor:
    def test_defaults(self) -> None:
        cursor = TextCursor("abc")
        assert (cursor.start, cursor.end, cursor.origin) == (0, 3, 0)
        assert cursor.length == 3
        assert not cursor.is_empty

    def test_previous_char_at_origin_is_empty(self) -> None:
        cursor = TextCursor("x abc", start=2)
        assert cursor.previous_char == ""
        assert TextCursor("x abc", start=2, origin=0).previous_char == " "

    def test_current_char_when_exhausted(self) -> None:
        cursor = TextCursor("ab", start=2)
        assert cursor.is_empty
        assert cursor.current_char == ""

    def test_peek_stays_within_window(self) -> None:
        cursor = TextCursor("abcdef", start=1, end=3)
        assert cursor.peek(1) == "c"
        assert cursor.peek(2) == ""

    def test_advance_and_remaining(self) -> None:
        cursor = TextCursor("say hi@example.com", start=4)
        assert cursor.advance(2).current_char == "@"
        assert cursor.remaining() == "@example.com"

    def test_startswith(self) -> None:
        cursor = TextCursor("<mailto:x>", start=1)
        assert cursor.startswith("mailto:")
        assert not cursor.startswith("<")

    @pytest.mark.parametrize(
        ("start", "end", "origin"),
        [(3, 2, None), (0, 10, None), (1, 2, 2), (-1, 2, None)],
    )
    def test_invalid_bounds(self, start: int, end: int, origin: int | None) -> None:
        with pytest.raises(ValueError, match="invalid cursor bounds"):
            TextCursor("abcd", start=start, end=end, origin=origin)
