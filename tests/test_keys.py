"""Tests for phosphor.keys -- raw sequence to key event parsing."""

from __future__ import annotations

from phosphor.keys import ENTER, ESCAPE, SHORTCUT_TOKENS, Key, KeyEvent, parse_key


class TestParseKey:
    """Raw input sequences map to named keys."""

    def test_printable_character(self) -> None:
        assert parse_key("a") == KeyEvent("a", "a")
        assert parse_key("Z") == KeyEvent("Z", "Z")

    def test_enter_and_escape(self) -> None:
        assert parse_key("\r") == ENTER
        assert parse_key("\n") == ENTER
        assert parse_key("\x1b") == ESCAPE

    def test_backspace_variants(self) -> None:
        assert parse_key("\x7f") == KeyEvent(Key.backspace, "\b")
        assert parse_key("\x08") == KeyEvent(Key.backspace, "\b")

    def test_arrows_and_paging(self) -> None:
        assert parse_key("\x1b[A").name == Key.up
        assert parse_key("\x1b[B").name == Key.down
        assert parse_key("\x1bOA").name == Key.up
        assert parse_key("\x1b[5~").name == Key.page_up
        assert parse_key("\x1b[6~").name == Key.page_down
        assert parse_key("\x1b[3~").name == Key.delete

    def test_ctrl_letter(self) -> None:
        assert parse_key("\x03").name == Key.ctrl("c")

    def test_alt_letter(self) -> None:
        assert parse_key("\x1ba").name == Key.alt("a")

    def test_space_and_tab(self) -> None:
        assert parse_key(" ") == KeyEvent(Key.space, " ")
        assert parse_key("\t") == KeyEvent(Key.tab, "\t")

    def test_empty_and_unknown(self) -> None:
        assert parse_key("") is None
        assert parse_key("\x1b[99~") is None


class TestKeyEvent:
    """Key events expose printable characters and literals."""

    def test_printable(self) -> None:
        assert KeyEvent("a", "a").is_printable
        assert KeyEvent(Key.space, " ").is_printable
        assert not KeyEvent(Key.tab, "\t").is_printable
        assert not KeyEvent(Key.up).is_printable

    def test_literal_falls_back_to_name(self) -> None:
        assert KeyEvent("a", "a").literal == "a"
        assert KeyEvent(Key.page_down).literal == "pageDown"

    def test_shortcut_tokens(self) -> None:
        assert SHORTCUT_TOKENS[Key.home] == "Home"
        assert SHORTCUT_TOKENS[Key.page_up] == "PageUp"
        assert Key.up not in SHORTCUT_TOKENS
