"""Formatted output with cursor tracking, wrapping and scroll-break paging.

:class:`Screen` is the print surface for one :class:`TerminalContext`. Every
print splits its text into logical lines, applies the resolved case and
wrapping, and writes the physical rows while counting how many rows have
been used. That count drives the "More?" pager when scroll-break is on.

Printing can be cancelled by the user, either with Escape during a long
print or by quitting at the pager. Cancellation is reported as
:attr:`PrintOutcome.CANCELLED` and is sticky: later prints do nothing until
:meth:`Screen.reset` or :meth:`Screen.cls` is called.
"""

from __future__ import annotations

import enum
import logging
import sys
import time
import traceback
from typing import TYPE_CHECKING

from phosphor.colors import ColorId
from phosphor.format import Alignment, Format, TextCase, Wrapping
from phosphor.keys import Key
from phosphor.settings import DEFAULT_WIDTH
from phosphor.utils import split_lines
from phosphor.wrap import RECURSION_DEPTH, wrap_tab_line

if TYPE_CHECKING:
    from phosphor.context import TerminalContext
    from phosphor.settings import ScreenSettings
    from phosphor.terminal import Terminal

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "[Cancelled]"
SCROLL_PROMPT = "More? [SPACE to continue, ENTER=all, ESC=quit, *+=1]"
EXCEPTION_BANNER = "-------- EXCEPTION --------"

# Paging is not attempted in windows this short.
MIN_SCROLL_HEIGHT = 5

_MIN_FORMAT_WIDTH = 10


class PrintOutcome(enum.Enum):
    """Result of a print call."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Screen:
    """Print surface bound to a :class:`TerminalContext`."""

    def __init__(self, context: TerminalContext) -> None:
        self._context = context

        self._first_print = True
        self._print_cancelled = False
        self._scroll_escaped = False
        self._scroll_count = 0
        self._line_count = 0
        self._escape_checked = time.monotonic()
        self._color: ColorId | None = None

        # Per-call caches; terminal size queries can be slow
        self._start_x = 0
        self._print_width = DEFAULT_WIDTH
        self._window_width = DEFAULT_WIDTH
        self._window_height = 50

    # -- properties ---------------------------------------------------------

    @property
    def terminal(self) -> Terminal:
        return self._context.terminal

    @property
    def settings(self) -> ScreenSettings:
        return self._context.settings

    @property
    def pos_x(self) -> int:
        return self.terminal.cursor_column

    @pos_x.setter
    def pos_x(self, value: int) -> None:
        self.terminal.cursor_column = value

    @property
    def pos_y(self) -> int:
        return self.terminal.cursor_row

    @pos_y.setter
    def pos_y(self, value: int) -> None:
        self.terminal.cursor_row = value

    @property
    def pos(self) -> tuple[int, int]:
        """Cursor position as ``(column, row)``."""
        return self.terminal.cursor_column, self.terminal.cursor_row

    @pos.setter
    def pos(self, value: tuple[int, int]) -> None:
        self.terminal.move_cursor(value[0], value[1])

    @property
    def terminal_width(self) -> int:
        return self.terminal.columns

    @property
    def actual_width(self) -> int:
        """Width used for wrapping and alignment.

        The smaller of ``format_width`` and ``terminal_width - 1``, or just
        the latter when ``format_width`` is 10 or less.
        """
        sw = self.terminal_width - 1
        fw = self.settings.format_width
        return min(fw, sw) if fw > _MIN_FORMAT_WIDTH else sw

    @property
    def start_x(self) -> int:
        """Column output starts from after a newline.

        Non-zero only when the ambient format centers or right-aligns the
        page within the terminal.
        """
        align = self.settings.options.alignment
        if align is Alignment.NONE:
            return 0

        sw = self.terminal_width - 1
        pw = self.actual_width
        if align is Alignment.CENTER:
            return max((sw - pw) // 2, 0)
        return max(sw - pw, 0)

    @property
    def cursor_visible(self) -> bool:
        return self.settings.cursor_visible

    @cursor_visible.setter
    def cursor_visible(self, value: bool) -> None:
        self.settings.cursor_visible = value
        if value:
            self.terminal.show_cursor()
        else:
            self.terminal.hide_cursor()

    @property
    def line_count(self) -> int:
        """Rows printed since the last :meth:`cls`, including wrapped rows."""
        return self._line_count

    @property
    def is_print_cancelled(self) -> bool:
        return self._print_cancelled

    # -- public API ---------------------------------------------------------

    def print(self, text: object = None, color: ColorId = ColorId.TEXT, fmt: Format | None = None) -> PrintOutcome:
        return self._print(text, color, fmt, feed_end=False)

    def print_line(
        self, text: object = None, color: ColorId = ColorId.TEXT, fmt: Format | None = None
    ) -> PrintOutcome:
        return self._print(text, color, fmt, feed_end=True)

    def print_pause(self, text: str | None, color: ColorId = ColorId.TEXT, delay: float = 1.0) -> PrintOutcome:
        """Print *text* and then sleep for *delay* seconds."""
        if not text or delay < 0:
            return PrintOutcome.COMPLETED

        outcome = self.print(text, color)
        time.sleep(delay)
        return outcome

    def print_exception(self, exc: BaseException, show_stack: bool = False) -> PrintOutcome:
        if not show_stack:
            return self.print_line(str(exc), ColorId.WARNING)

        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self.print_line()
        self.print_line(EXCEPTION_BANNER, ColorId.CRITICAL)
        self.print_line(str(exc), ColorId.WARNING)
        self.print_line()
        self.print_line(stack.rstrip())
        return self.print_line()

    def cls(self) -> None:
        """Clear the terminal and reset the line count and cancel state."""
        self.terminal.clear_screen()
        self.pos_x = self.start_x

        self._line_count = 0
        self._first_print = False
        self.reset()

    def reset(self) -> None:
        """Clear the cancel state and the scroll-break row counter."""
        self._scroll_count = 0
        self._scroll_escaped = False
        self._print_cancelled = False

    # -- private: printing --------------------------------------------------

    def _print(self, text: object, color: ColorId, fmt: Format | None, feed_end: bool) -> PrintOutcome:
        if self._print_cancelled:
            return PrintOutcome.CANCELLED

        if text is not None and not isinstance(text, str):
            text = str(text)

        self._start_x = self.start_x
        self._print_width = self.actual_width
        self._window_width = self.terminal.columns
        self._window_height = self.terminal.rows

        cursor_visible = self.settings.cursor_visible
        if cursor_visible:
            self.terminal.hide_cursor()

        self._color = color
        self.terminal.set_color(color)

        try:
            outcome = PrintOutcome.COMPLETED

            if text:
                if self._first_print:
                    if self.pos_x > self._start_x:
                        self._write_line(handle_scroll=False)
                    else:
                        self.pos_x = self._start_x
                    self._first_print = False

                merged = (fmt or Format()).over(self.settings.options)
                outcome = self._print_lines(split_lines(text), merged)

            if feed_end and outcome is PrintOutcome.COMPLETED:
                outcome = self._write_line()

            return outcome
        finally:
            self._color = None
            self.terminal.set_color(None)
            if cursor_visible:
                self.terminal.show_cursor()

    def _print_lines(self, lines: list[str], fmt: Format) -> PrintOutcome:
        case = fmt.text_case
        last = len(lines) - 1

        for n, line in enumerate(lines):
            if case is TextCase.UPPER:
                line = line.upper()
            elif case is TextCase.LOWER:
                line = line.lower()

            if self._print_fragment(line, fmt) is PrintOutcome.CANCELLED:
                return PrintOutcome.CANCELLED

            if n < last and self._write_line() is PrintOutcome.CANCELLED:
                return PrintOutcome.CANCELLED

        return PrintOutcome.COMPLETED

    def _print_fragment(self, line: str, fmt: Format, depth: int = 0) -> PrintOutcome:
        if not line:
            return PrintOutcome.COMPLETED

        pos_x = self.pos_x
        left = pos_x
        tab_size = self.settings.effective_tab_size

        wrap_width = self._window_width
        remain_width = wrap_width - left

        if fmt.wrapping is not Wrapping.NONE:
            wrap_width = self._print_width
            remain_width = self._start_x + wrap_width - left

        split = wrap_tab_line(line, left, fmt.wrapping, remain_width, tab_size, self._start_x)

        if split is not None:
            if len(split) == 1:
                line = split[0]
            elif depth < RECURSION_DEPTH:
                if self._print_fragment(split[0], fmt, depth + 1) is PrintOutcome.CANCELLED:
                    return PrintOutcome.CANCELLED
                if self._write_line() is PrintOutcome.CANCELLED:
                    return PrintOutcome.CANCELLED
                return self._print_fragment(split[1], fmt, depth + 1)
            else:
                # Too deep; print what is left unwrapped
                expanded = wrap_tab_line(line, left, Wrapping.NONE, sys.maxsize, tab_size, self._start_x)
                line = expanded[0] if expanded else line

        align = fmt.alignment
        if align is Alignment.CENTER:
            left += max(remain_width - len(line), 0) // 2
        elif align is Alignment.RIGHT:
            left += max(remain_width - len(line), 0)

        self.terminal.write(line.rjust(len(line) + left - pos_x))

        if wrap_width > 0:
            delta = max(len(line) + left - self._start_x - 1, 0) // wrap_width
            self._line_count += delta
            self._scroll_count += delta

        return PrintOutcome.COMPLETED

    def _write_line(self, handle_scroll: bool = True) -> PrintOutcome:
        if self._print_cancelled:
            return PrintOutcome.CANCELLED

        self._line_count += 1
        self._scroll_count += 1

        self.terminal.write("\n")
        if self._start_x:
            self.pos_x = self._start_x

        if handle_scroll:
            return self._handle_scroll_break()
        return PrintOutcome.COMPLETED

    # -- private: cancel and scroll-break -----------------------------------

    def _cancel_printing(self) -> PrintOutcome:
        self.terminal.set_color(ColorId.WARNING)

        self._write_line(handle_scroll=False)
        self.terminal.write(CANCELLED_MESSAGE)
        self._write_line(handle_scroll=False)

        self._scroll_escaped = True
        self._scroll_count = 0
        self._print_cancelled = True

        logger.debug("Printing cancelled after %d lines", self._line_count)
        return PrintOutcome.CANCELLED

    def _escape_pressed(self) -> bool:
        interval = self.settings.escape_poll_interval
        if interval is None:
            return False

        now = time.monotonic()
        if now - self._escape_checked < interval:
            return False

        self._escape_checked = now
        return self.terminal.key_available() and self.terminal.read_key().name == Key.escape

    def _handle_scroll_break(self) -> PrintOutcome:
        if self._print_cancelled:
            return PrintOutcome.CANCELLED

        if self._escape_pressed():
            return self._cancel_printing()

        height = self._window_height
        if (
            self._scroll_escaped
            or not self.settings.scroll_break
            or height <= MIN_SCROLL_HEIGHT
            or self._scroll_count < height - 1
        ):
            return PrintOutcome.COMPLETED

        return self._scroll_prompt()

    def _scroll_prompt(self) -> PrintOutcome:
        # Imported here; the prompter prints through this module
        from phosphor.components.prompter import Prompter, PromptStatus, PromptStyle

        settings = self.settings
        initial_pos = self.pos
        scroll_count = self._scroll_count
        color = self._color
        options = settings.options

        try:
            if initial_pos[0] > self._start_x:
                self._write_line(handle_scroll=False)

            self.pos_x = self._start_x
            settings.options = options.with_wrap(Wrapping.NONE)

            prompt = Prompter(self._context, PromptStyle.ANY_KEY)
            prompt.color = ColorId.WARNING
            prompt.prefix = SCROLL_PROMPT
            if settings.scroll_progress >= 0:
                prompt.prefix += f" : {settings.scroll_progress:.1f}%"

            # Keep the prompt's own output from paging again
            self._scroll_escaped = True

            status = prompt.execute()
            key = prompt.input_string.upper()

            if status is PromptStatus.ESCAPED or key == "Q":
                logger.debug("Scroll break: quit")
                return self._cancel_printing()

            if key in (" ", "PAGEDOWN"):
                logger.debug("Scroll break: next page")
                self._scroll_count = 0
                self._scroll_escaped = False
            elif key in ("\r", "\n", "END", "ENTER"):
                logger.debug("Scroll break: continue to end")
                self._scroll_count = 0
                self._scroll_escaped = True
            else:
                self._scroll_count = scroll_count - 1
                self._scroll_escaped = False

            self.pos = initial_pos
            return PrintOutcome.COMPLETED
        finally:
            settings.options = options
            self._color = color
            self.terminal.set_color(color)
