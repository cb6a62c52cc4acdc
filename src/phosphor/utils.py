"""Text utilities: truncation, line splitting, width measurement.

Pure functions with no terminal dependency. ``truncate`` and ``split_lines``
are part of the public print contract; the grapheme and width helpers are
used by the prompt editor to erase and redraw its buffer.
"""

from __future__ import annotations

import enum
import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


class Truncation(enum.Enum):
    """Ellipsis policy for :func:`truncate`."""

    SIMPLE = "simple"
    """Cut at the given width."""

    ELLIPSES_END = "ellipses_end"
    """Terminate truncated text with ``...`` when the width is greater than 3."""

    ELLIPSES_CENTER = "ellipses_center"
    """Replace characters in the middle with ``...`` when the width is greater than 4."""


_ELLIPSES = "..."


def truncate(
    text: str | None,
    length: int,
    mode: Truncation = Truncation.SIMPLE,
) -> str | None:
    """Truncate *text* to at most *length* characters according to *mode*.

    Examples with ``ELLIPSES_CENTER``::

        01234567   [5] -> 0...7
        01234567   [6] -> 01...7
        0123456789 [8] -> 012...89
        0123456789 [9] -> 012...789
    """
    if text is None:
        return None

    length = max(length, 0)
    if len(text) <= length:
        return text

    if mode is Truncation.ELLIPSES_CENTER and length > 4:
        left = length // 2 - 1
        right = len(text) - left + (1 if length % 2 == 0 else 0)
        return text[:left] + _ELLIPSES + text[right:]

    if mode is not Truncation.SIMPLE and length > 3:
        return text[: length - 3] + _ELLIPSES

    return text[:length]


def double_space(text: str | None) -> str | None:
    """Insert a space between adjacent visible characters.

    ``"ADAPA"`` becomes ``"A D A P A"``. Runs are broken by anything that is
    not a letter, digit, punctuation or space, so ``"ADA\\nPA"`` becomes
    ``"A D A\\nP A"``. A non-breaking space is doubled with a non-breaking
    space.
    """
    if text is None:
        return None

    parts: list[str] = []
    in_run = False

    for ch in text:
        if ch.isalnum() or _is_punctuation(ch) or ch in (" ", "\u00a0"):
            if in_run:
                parts.append("\u00a0" if ch == "\u00a0" else " ")
            in_run = True
        else:
            in_run = False
        parts.append(ch)

    return "".join(parts)


def _is_punctuation(ch: str) -> bool:
    return unicodedata.category(ch).startswith("P")


# ---------------------------------------------------------------------------
# Line splitting
# ---------------------------------------------------------------------------

# FF and PARAGRAPH SEPARATOR break pages; LF, NEL and LINE SEPARATOR break lines.
_PAGE_SEPARATORS_RE = re.compile("[\x0c\u2029]")
_LINE_SEPARATORS_RE = re.compile("[\n\u0085\u2028]")


def split_lines(text: str | None) -> list[str]:
    """Split *text* into logical lines.

    Page separators produce an extra empty line between the pages. Trailing
    carriage returns are removed from each line. The separators themselves
    are discarded, so the split is lossy but deterministic. ``None`` and the
    empty string give an empty list.
    """
    if not text:
        return []

    pages = _PAGE_SEPARATORS_RE.split(text)
    if len(pages) > 1:
        lines: list[str] = []
        for n, page in enumerate(pages):
            lines.extend(split_lines(page))
            if n < len(pages) - 1:
                lines.append("")
        return lines

    return [line.rstrip("\r") for line in _LINE_SEPARATORS_RE.split(text)]


# ---------------------------------------------------------------------------
# Graphemes and width
# ---------------------------------------------------------------------------


def graphemes(text: str) -> list[str]:
    """Return the grapheme clusters of *text*."""
    return list(grapheme.graphemes(text))


def drop_last_grapheme(text: str) -> str:
    """Return *text* without its final grapheme cluster."""
    if not text:
        return text
    clusters = graphemes(text)
    return text[: len(text) - len(clusters[-1])]


def _grapheme_width(g: str) -> int:
    cp = ord(g[0])
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0

    if len(g) > 1:
        # Emoji presentation, ZWJ sequences and regional indicator pairs.
        for ch in g:
            code = ord(ch)
            if code in (0xFE0F, 0x200D) or 0x1F1E6 <= code <= 0x1F1FF:
                return 2

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str | None) -> int:
    """Return the number of terminal columns *text* occupies."""
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    return sum(_grapheme_width(g) for g in grapheme.graphemes(text))
