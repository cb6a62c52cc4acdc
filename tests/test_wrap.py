"""Tests for phosphor.wrap -- tab expansion and width wrapping."""

from __future__ import annotations

from phosphor.format import Wrapping
from phosphor.wrap import PRETTY_BREAKS, RECURSION_DEPTH, wrap_line, wrap_tab_line


class TestWrapTabLineUnchanged:
    """Lines that fit come back unchanged."""

    def test_short_line_returns_none(self) -> None:
        assert wrap_tab_line("hello", 0, Wrapping.WORD, 20) is None

    def test_empty_and_none(self) -> None:
        assert wrap_tab_line("", 0, Wrapping.WORD, 20) is None
        assert wrap_tab_line(None, 0, Wrapping.WORD, 20) is None


class TestWrapTabLineTabs:
    """Tabs expand to the next tab stop."""

    def test_tab_expands_to_next_stop(self) -> None:
        assert wrap_tab_line("a\tb", 0, Wrapping.NONE, 20, tab_size=4) == ("a   b",)

    def test_tab_stop_measured_from_left_column(self) -> None:
        assert wrap_tab_line("a\tb", 2, Wrapping.NONE, 20, tab_size=4) == ("a b",)

    def test_tab_stop_relative_to_start_column(self) -> None:
        assert wrap_tab_line("a\tb", 12, Wrapping.NONE, 20, tab_size=4, start_x=10) == ("a b",)

    def test_leading_tab_is_full_stop(self) -> None:
        assert wrap_tab_line("\tx", 0, Wrapping.NONE, 20, tab_size=8) == ("        x",)


class TestWrapTabLineBreaks:
    """Lines break at spaces, pretty breaks or the width."""

    def test_word_breaks_at_last_space(self) -> None:
        assert wrap_tab_line("aaaa bbbb cccc", 0, Wrapping.WORD, 10) == ("aaaa bbbb", "cccc")

    def test_block_breaks_at_width_without_trimming(self) -> None:
        assert wrap_tab_line("aaaa bbbb cccc", 0, Wrapping.BLOCK, 10) == ("aaaa bbbb ", "cccc")

    def test_pretty_break_after_punctuation(self) -> None:
        assert wrap_tab_line("path/to/some/file", 0, Wrapping.WORD, 10) == ("path/to/", "some/file")

    def test_space_preferred_over_punctuation(self) -> None:
        assert wrap_tab_line("ab-cd efghijk", 0, Wrapping.WORD, 8) == ("ab-cd", "efghijk")

    def test_unbroken_token_cut_at_width(self) -> None:
        assert wrap_tab_line("abcdefghijkl", 0, Wrapping.WORD, 5) == ("abcde", "fghijkl")

    def test_punctuation_at_width_not_a_break(self) -> None:
        assert wrap_tab_line("abcde-fgh", 0, Wrapping.WORD, 5) == ("abcde", "-fgh")

    def test_position_zero_is_not_a_break(self) -> None:
        assert wrap_tab_line(" abcdefgh", 0, Wrapping.WORD, 4) == (" abc", "defgh")

    def test_pretty_break_set(self) -> None:
        assert PRETTY_BREAKS == frozenset("-:=./\\~)|}]")


class TestWrapLine:
    """Whole lines wrap into physical rows."""

    def test_word_wrap_rows(self) -> None:
        assert wrap_line("the quick brown fox jumps", 10) == ["the quick", "brown fox", "jumps"]

    def test_block_wrap_rows(self) -> None:
        assert wrap_line("aaaa bbbb cccc", 10, Wrapping.BLOCK) == ["aaaa bbbb ", "cccc"]

    def test_fragments_keep_all_non_whitespace(self) -> None:
        text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod"
        rows = wrap_line(text, 12)
        assert all(len(row) <= 12 for row in rows)
        assert "".join(rows).replace(" ", "") == text.replace(" ", "")

    def test_tabs_expanded_without_break(self) -> None:
        assert wrap_line("a\tb", 20) == ["a   b"]

    def test_zero_width_returns_text(self) -> None:
        assert wrap_line("abc", 0) == ["abc"]

    def test_depth_limit_keeps_remainder(self) -> None:
        rows = wrap_line("x" * 1000, 1)
        assert len(rows) == RECURSION_DEPTH + 1
        assert rows[-1] == "x" * (1000 - RECURSION_DEPTH)

    def test_restartable(self) -> None:
        assert wrap_line("aaaa bbbb cccc", 10) == wrap_line("aaaa bbbb cccc", 10)
