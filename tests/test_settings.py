"""Tests for phosphor.settings.ScreenSettings."""

from __future__ import annotations

import logging

from phosphor.format import Wrapping
from phosphor.settings import DEFAULT_WIDTH, ScreenSettings


class TestDefaults:
    """Settings start with the documented defaults."""

    def test_defaults(self) -> None:
        settings = ScreenSettings()
        assert settings.format_width == DEFAULT_WIDTH
        assert settings.tab_size == 4
        assert settings.options.wrapping is Wrapping.WORD
        assert settings.scroll_break is False
        assert settings.scroll_progress == -1
        assert settings.cursor_visible is True
        assert settings.culture is None

    def test_instances_do_not_share_options(self) -> None:
        a = ScreenSettings()
        b = ScreenSettings()
        a.options = a.options.with_wrap(Wrapping.NONE)
        assert b.options.wrapping is Wrapping.WORD

    def test_tab_size_clamped(self) -> None:
        assert ScreenSettings(tab_size=1).effective_tab_size == 2
        assert ScreenSettings(tab_size=40).effective_tab_size == 16
        assert ScreenSettings(tab_size=8).effective_tab_size == 8


class TestFromEnv:
    """Environment variables override the defaults."""

    def test_empty_environment(self) -> None:
        assert ScreenSettings.from_env({}) == ScreenSettings()

    def test_overrides(self) -> None:
        settings = ScreenSettings.from_env(
            {
                "PHOSPHOR_FORMAT_WIDTH": "60",
                "PHOSPHOR_TAB_SIZE": "8",
                "PHOSPHOR_SCROLL_BREAK": "yes",
                "PHOSPHOR_CULTURE": "de_DE.UTF-8",
            }
        )
        assert settings.format_width == 60
        assert settings.tab_size == 8
        assert settings.scroll_break is True
        assert settings.culture == "de_DE.UTF-8"

    def test_invalid_values_logged_and_ignored(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="phosphor.settings"):
            settings = ScreenSettings.from_env(
                {"PHOSPHOR_FORMAT_WIDTH": "wide", "PHOSPHOR_SCROLL_BREAK": "sometimes"}
            )
        assert settings.format_width == DEFAULT_WIDTH
        assert settings.scroll_break is False
        assert "PHOSPHOR_FORMAT_WIDTH" in caplog.text
        assert "PHOSPHOR_SCROLL_BREAK" in caplog.text
