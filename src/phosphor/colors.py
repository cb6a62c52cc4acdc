"""Semantic color ids and their default SGR foreground sequences."""

from __future__ import annotations

import enum


class ColorId(enum.Enum):
    """Context-based color ids. Mapped to terminal colors by a palette."""

    BACKGROUND = "background"
    TEXT = "text"
    TITLE = "title"
    INPUT = "input"
    HIGH = "high"
    GRAY = "gray"
    SUCCESS = "success"
    WARNING = "warning"
    CRITICAL = "critical"


RESET = "\x1b[0m"

DEFAULT_PALETTE: dict[ColorId, str] = {
    ColorId.BACKGROUND: "\x1b[49m",
    ColorId.TEXT: "\x1b[39m",
    ColorId.TITLE: "\x1b[96m",
    ColorId.INPUT: "\x1b[97m",
    ColorId.HIGH: "\x1b[1m\x1b[97m",
    ColorId.GRAY: "\x1b[90m",
    ColorId.SUCCESS: "\x1b[32m",
    ColorId.WARNING: "\x1b[33m",
    ColorId.CRITICAL: "\x1b[91m",
}


def sgr(color: ColorId | None, palette: dict[ColorId, str] | None = None) -> str:
    """Return the escape sequence selecting *color*; ``None`` resets."""
    if color is None:
        return RESET
    return (palette or DEFAULT_PALETTE).get(color, RESET)
