"""Print formatting: alignment, case and wrapping.

A :class:`Format` holds at most one value per category. Unset categories
(``None``) defer to the ambient format held in
:class:`~phosphor.settings.ScreenSettings`.

Precedence within a category follows declaration order: when two formats
are combined with ``|`` and both set the same category, the member declared
first wins (``NO_WRAP`` beats ``WORD`` beats ``BLOCK``).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import TypeVar


class Alignment(enum.Enum):
    NONE = "none"
    CENTER = "center"
    RIGHT = "right"


class TextCase(enum.Enum):
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"


class Wrapping(enum.Enum):
    NONE = "none"
    WORD = "word"
    BLOCK = "block"


_E = TypeVar("_E", Alignment, TextCase, Wrapping)


def _first(a: _E | None, b: _E | None) -> _E | None:
    if a is None:
        return b
    if b is None:
        return a
    members = list(type(a))
    return a if members.index(a) <= members.index(b) else b


@dataclass(frozen=True)
class Format:
    """Formatting request for a single print call."""

    align: Alignment | None = None
    case: TextCase | None = None
    wrap: Wrapping | None = None

    def __or__(self, other: Format) -> Format:
        if not isinstance(other, Format):
            return NotImplemented
        return Format(
            align=_first(self.align, other.align),
            case=_first(self.case, other.case),
            wrap=_first(self.wrap, other.wrap),
        )

    def over(self, base: Format) -> Format:
        """Merge this call-site format over the ambient *base*.

        Case and wrapping fall back to *base* when unset here. Alignment is
        not inherited: the ambient alignment positions the whole page and is
        applied through the screen's starting column instead.
        """
        return Format(
            align=self.align,
            case=self.case if self.case is not None else base.case,
            wrap=self.wrap if self.wrap is not None else base.wrap,
        )

    def with_wrap(self, wrap: Wrapping) -> Format:
        return replace(self, wrap=wrap)

    def with_align(self, align: Alignment) -> Format:
        return replace(self, align=align)

    @property
    def alignment(self) -> Alignment:
        return self.align or Alignment.NONE

    @property
    def text_case(self) -> TextCase:
        return self.case or TextCase.NONE

    @property
    def wrapping(self) -> Wrapping:
        return self.wrap or Wrapping.NONE


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def plain() -> Format:
    return Format()


def center() -> Format:
    return Format(align=Alignment.CENTER)


def right() -> Format:
    return Format(align=Alignment.RIGHT)


def upper() -> Format:
    return Format(case=TextCase.UPPER)


def lower() -> Format:
    return Format(case=TextCase.LOWER)


def no_case() -> Format:
    return Format(case=TextCase.NONE)


def no_wrap() -> Format:
    return Format(wrap=Wrapping.NONE)


def word_wrap() -> Format:
    return Format(wrap=Wrapping.WORD)


def block_wrap() -> Format:
    return Format(wrap=Wrapping.BLOCK)
