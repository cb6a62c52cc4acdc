"""Text that is reprinted in place, such as a progress counter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phosphor.colors import ColorId
from phosphor.utils import visible_width

if TYPE_CHECKING:
    from phosphor.context import TerminalContext


class Reprinter:
    """Remembers the cursor position at construction and reprints there.

    Assigning :attr:`text` erases the previous text and prints the new value
    at the same position::

        counter = Reprinter(ctx)
        for n in range(100):
            counter.text = f"{n}%"
    """

    def __init__(self, context: TerminalContext, text: str | None = None, color: ColorId = ColorId.TEXT) -> None:
        self._screen = context.screen
        self._text: str | None = None
        self.color = color

        self._screen.reset()
        self.pos = self._screen.pos

        if text is not None:
            self.text = text

    @property
    def text(self) -> str | None:
        return self._text

    @text.setter
    def text(self, value: str | None) -> None:
        if self._text is not None:
            self._erase(self._text)

        self._screen.print(value, self.color)
        self._text = value

    def clear(self) -> None:
        """Erase the current text and leave the cursor at the start position."""
        if self._text is not None:
            self._erase(self._text)
            self._text = None

    def _erase(self, text: str) -> None:
        self._screen.pos = self.pos

        width = visible_width(text)
        if width > 0:
            self._screen.print(" " * width)
            self._screen.pos = self.pos
