"""Screen configuration knobs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

from phosphor.format import Format, word_wrap

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 100

MIN_TAB_SIZE = 2
MAX_TAB_SIZE = 16

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ScreenSettings:
    """Mutable settings shared by everything printing to one terminal."""

    format_width: int = DEFAULT_WIDTH
    """Cap on the formatted output width. Ignored when 10 or less."""

    tab_size: int = 4
    """Tab stop size; see :attr:`effective_tab_size`."""

    options: Format = field(default_factory=word_wrap)
    """Ambient format. Its alignment positions the whole page."""

    scroll_break: bool = False
    """Pause output with a "More?" prompt when it exceeds the window height."""

    scroll_progress: float = -1.0
    """Percentage shown with the scroll prompt, if 0 or more."""

    cursor_visible: bool = True

    culture: str | None = None
    """Locale name used when parsing numeric input; ``None`` for the C locale."""

    escape_poll_interval: float | None = 0.25
    """Minimum seconds between checks for Escape during output. ``None`` disables."""

    @property
    def effective_tab_size(self) -> int:
        return min(max(self.tab_size, MIN_TAB_SIZE), MAX_TAB_SIZE)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ScreenSettings:
        """Build settings with overrides from ``PHOSPHOR_*`` variables."""
        env = os.environ if environ is None else environ
        settings = cls()

        width = _env_int(env, "PHOSPHOR_FORMAT_WIDTH")
        if width is not None:
            settings.format_width = width

        tab = _env_int(env, "PHOSPHOR_TAB_SIZE")
        if tab is not None:
            settings.tab_size = tab

        raw = env.get("PHOSPHOR_SCROLL_BREAK")
        if raw is not None:
            value = raw.strip().lower()
            if value in _TRUE_VALUES:
                settings.scroll_break = True
            elif value in _FALSE_VALUES:
                settings.scroll_break = False
            else:
                logger.warning("Ignoring PHOSPHOR_SCROLL_BREAK=%r", raw)

        culture = env.get("PHOSPHOR_CULTURE")
        if culture:
            settings.culture = culture

        return settings


def _env_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return None
