"""Single-line input prompt with validation and history recall.

A :class:`Prompter` prints a prefix, then reads keys until the buffer is
committed with Enter or abandoned with Escape. The buffer is redrawn in
place through the context's :class:`~phosphor.screen.Screen`, so erase and
redraw use the same cursor model as every other print.

Usage::

    prompt = Prompter(ctx, value_type=int)
    prompt.set_min_max_length(1, 4)
    if prompt.execute() is PromptStatus.ENTERED:
        count = prompt.get_value()
"""

from __future__ import annotations

import enum
import time
from typing import TYPE_CHECKING, Any

from phosphor.colors import ColorId
from phosphor.format import Format, Wrapping, block_wrap, no_wrap
from phosphor.history import HistoryCursor
from phosphor.keys import SHORTCUT_TOKENS, Key, KeyEvent
from phosphor.utils import drop_last_grapheme, visible_width
from phosphor.validation import CommitRules, PromptStyle, try_convert

if TYPE_CHECKING:
    from phosphor.context import TerminalContext
    from phosphor.screen import Screen

__all__ = [
    "DEFAULT_FLASH_DELAY",
    "EchoMode",
    "MAX_KEY_REPEAT",
    "PromptStatus",
    "PromptStyle",
    "Prompter",
    "default_prefix",
]

DEFAULT_FLASH_DELAY = 0.4

# Consecutive repeats of one key kept per input batch.
MAX_KEY_REPEAT = 10


class PromptStatus(enum.Enum):
    WAITING = "waiting"
    ESCAPED = "escaped"
    ENTERED = "entered"
    YES = "yes"
    NO = "no"


class EchoMode(enum.Enum):
    """How typed characters are shown."""

    PLAIN = "plain"
    MASKED = "masked"
    HIDDEN = "hidden"


def default_prefix(style: PromptStyle, value_type: type | None = None) -> str:
    if style is PromptStyle.ANY_KEY:
        return "Press any key ... "
    if style is PromptStyle.TEXT:
        return "Input?: " if value_type is None else "Input? [%TYPE%]: "
    if style.is_password:
        return "Password?: "
    if style is PromptStyle.FILE_NAME:
        return "Filename?: "
    if style is PromptStyle.FILE_PATH:
        return "Path?: "
    if style is PromptStyle.CONFIRM:
        return "Confirm? [%Y%/%N%]: "
    return ""


def _rule(name: str) -> property:
    def fget(self: Prompter) -> Any:
        return getattr(self.rules, name)

    def fset(self: Prompter, value: Any) -> None:
        setattr(self.rules, name, value)

    return property(fget, fset, doc=f"Forwarded to ``CommitRules.{name}``.")


class Prompter:
    """Interactive input prompt bound to a :class:`TerminalContext`.

    Creating a prompter resets the screen's cancel state so the prompt is
    never swallowed by an earlier cancelled print.
    """

    min_length = _rule("min_length")
    max_length = _rule("max_length")
    legal_chars = _rule("legal_chars")
    legal_filter = _rule("legal_filter")
    ignore_legal_case = _rule("ignore_legal_case")
    deny_space = _rule("deny_space")
    yes_value = _rule("yes_value")
    no_value = _rule("no_value")
    buffer_history = _rule("buffer_history")
    culture = _rule("culture")

    def __init__(
        self,
        context: TerminalContext,
        style: PromptStyle = PromptStyle.TEXT,
        value_type: type | None = None,
    ) -> None:
        if value_type is not None and not isinstance(value_type, type):
            raise TypeError(f"value_type must be a type, not {type(value_type).__name__}")

        self._context = context
        self.style = style
        self.value_type: type = value_type or str
        self.rules = CommitRules(style=style, value_type=self.value_type, culture=context.settings.culture)

        self.prefix: str | None = default_prefix(style, value_type)
        self.color = ColorId.TEXT
        self.shortcuts = False
        self.flash_delay = DEFAULT_FLASH_DELAY
        self.echo = EchoMode.MASKED if style is PromptStyle.HIDE_PASSWORD else EchoMode.PLAIN
        self.status = PromptStatus.WAITING

        self._input_string: str | None = None
        self._cursor = HistoryCursor(context.history)
        self._format: Format = no_wrap()
        self._last_flash: float | None = None

        context.screen.reset()
        self.pos = context.screen.pos
        self._input_pos = self.pos

    @property
    def _screen(self) -> Screen:
        return self._context.screen

    @property
    def input_string(self) -> str:
        """The committed input, or ``""`` if there is none."""
        return self._input_string or ""

    def set_min_max_length(self, min_length: int, max_length: int) -> None:
        self.min_length = min_length
        self.max_length = max_length

    # -- execution ----------------------------------------------------------

    def execute(self, seed: str | None = None) -> PromptStatus:
        """Run the prompt until input is committed or escaped.

        *seed* pre-fills the edit buffer; it is ignored for password styles.
        Raises :class:`~phosphor.validation.PromptConfigError` if the rules
        are inconsistent.
        """
        self.rules.check()
        self._cursor.reset()

        screen = self._screen
        settings = self._context.settings

        self.pos = screen.pos
        cursor_visible = screen.cursor_visible
        scroll_break = settings.scroll_break
        settings.scroll_break = False

        if settings.options.wrapping is Wrapping.NONE:
            self._format = no_wrap()
        else:
            self._format = block_wrap()

        try:
            if self.style is PromptStyle.ANY_KEY:
                self._input_string = self._read_key(show_key=False)
            else:
                self._input_string = self._read_line(None if self.style.is_password else seed)

            if self._input_string is None:
                self.status = PromptStatus.ESCAPED
            elif self.style is PromptStyle.CONFIRM and self._input_string == self.yes_value:
                self.status = PromptStatus.YES
            elif self.style is PromptStyle.CONFIRM and self._input_string == self.no_value:
                self.status = PromptStatus.NO
            else:
                self.status = PromptStatus.ENTERED

            return self.status
        finally:
            settings.scroll_break = scroll_break
            screen.cursor_visible = cursor_visible

    # -- results ------------------------------------------------------------

    def try_result(self, value_type: type | None = None) -> tuple[bool, Any]:
        """Convert the committed input to *value_type* (default: the prompt's type).

        In confirm style, a ``bool`` target maps the yes answer to ``True``
        and the no answer to ``False``.
        """
        target = value_type or self.value_type

        if self._input_string is None:
            return False, None

        if self.style is PromptStyle.CONFIRM and target is bool:
            if self.status is PromptStatus.YES:
                return True, True
            if self.status is PromptStatus.NO:
                return True, False
            return False, None

        return try_convert(target, self._input_string, self.culture)

    def try_result_range(self, value_type: type | None, low: Any, high: Any) -> tuple[bool, Any]:
        ok, value = self.try_result(value_type)
        if not ok:
            return False, None

        try:
            in_range = low <= value <= high
        except TypeError:
            return False, None
        return (True, value) if in_range else (False, None)

    def get_value(self, value_type: type | None = None) -> Any:
        ok, value = self.try_result(value_type)
        if ok:
            return value

        if self.status is PromptStatus.ESCAPED:
            raise ValueError("User escaped (no value)")

        target = value_type or self.value_type
        raise ValueError(f"Not a valid {target.__name__} value")

    # -- private: input -----------------------------------------------------

    def _read_input_buffer(self) -> list[KeyEvent]:
        """Read one key plus everything already queued behind it."""
        terminal = self._context.terminal

        events = [terminal.read_key()]
        while terminal.key_available():
            events.append(terminal.read_key())

        # Key repeat on a held key can flood the buffer
        kept: list[KeyEvent] = []
        last: str | None = None
        count = 0

        for event in events:
            if event.name == last:
                count += 1
                if count > MAX_KEY_REPEAT:
                    continue
            else:
                count = 0
                last = event.name
            kept.append(event)

        return kept

    def _read_key(self, show_key: bool) -> str | None:
        screen = self._screen
        screen.cursor_visible = show_key
        prefix_width = self._print_prefix(None, 1, 1)

        event = self._context.terminal.read_key()

        if show_key:
            if event.is_printable:
                screen.print(event.char, ColorId.INPUT, self._format)
            screen.print_line()
        else:
            screen.pos = self.pos
            screen.print(" " * prefix_width, ColorId.TEXT, self._format)
            screen.pos = self.pos

        if event.name == Key.escape:
            return None
        return event.literal

    def _read_line(self, seed: str | None) -> str | None:
        screen = self._screen
        screen.cursor_visible = True

        buffer = (seed or "")[: max(self.max_length, 0)]
        self._print_prefix(buffer, self.min_length, self.max_length)

        shortcuts = self.shortcuts and self.style is PromptStyle.TEXT

        while True:
            for event in self._read_input_buffer():
                name = event.name

                if name == Key.escape:
                    screen.print_line()
                    return None

                if name == Key.enter:
                    result = self.rules.accept(buffer)
                    if result is not None:
                        if self.rules.records_history:
                            self._cursor.append(result)
                        screen.print_line()
                        return result
                    self._flash_error(buffer)

                elif name == Key.backspace:
                    if buffer:
                        screen.cursor_visible = False
                        shorter = drop_last_grapheme(buffer)
                        self._redraw(buffer, shorter)
                        buffer = shorter
                        screen.cursor_visible = True

                elif name == Key.delete:
                    self._redraw(buffer, "")
                    buffer = ""

                elif shortcuts and name in SHORTCUT_TOKENS:
                    token = SHORTCUT_TOKENS[name]
                    if not buffer and self.max_length >= len(token):
                        buffer = token
                        screen.print(self._echo_text(token), ColorId.INPUT, self._format)

                elif name in (Key.up, Key.down):
                    recalled = self._cursor.back() if name == Key.up else self._cursor.forward()
                    if recalled is not None:
                        recalled = recalled[: self.max_length]
                        self._redraw(buffer, recalled)
                        buffer = recalled

                elif event.is_printable and len(buffer) < self.max_length:
                    buffer += event.char
                    screen.print(self._echo_text(event.char), ColorId.INPUT, self._format)

    # -- private: output ----------------------------------------------------

    def _echo_text(self, text: str) -> str:
        if self.echo is EchoMode.MASKED:
            return "*" * len(text)
        if self.echo is EchoMode.HIDDEN:
            return ""
        return text

    def _print_prefix(self, seed: str | None, min_length: int, max_length: int) -> int:
        """Print the prefix and seed; return the prefix width in columns."""
        screen = self._screen
        prefix = self.prefix
        width = 0

        if prefix:
            prefix = (
                prefix.replace("%MINLEN%", str(min_length))
                .replace("%MAXLEN%", str(max_length))
                .replace("%Y%", self.yes_value)
                .replace("%N%", self.no_value)
                .replace("%TYPE%", self.value_type.__name__)
            )
            screen.print(prefix, self.color, self._format)
            width = visible_width(prefix)

        self._input_pos = screen.pos
        if seed:
            screen.print(self._echo_text(seed), ColorId.INPUT, self._format)
        return width

    def _redraw(self, old: str, new: str) -> None:
        """Replace the echoed *old* buffer with *new*."""
        screen = self._screen
        old_width = visible_width(self._echo_text(old))

        screen.pos = self._input_pos
        if old_width > visible_width(self._echo_text(new)):
            screen.print(" " * old_width, ColorId.INPUT, self._format)
            screen.pos = self._input_pos

        screen.print(self._echo_text(new), ColorId.INPUT, self._format)

    def _flash_error(self, text: str) -> None:
        """Briefly show the rejected buffer in the critical color."""
        if not text or self.echo is EchoMode.HIDDEN:
            return

        now = time.monotonic()
        if self._last_flash is not None and now - self._last_flash < 2 * self.flash_delay:
            return
        self._last_flash = now

        shown = self._echo_text(text)
        screen = self._screen

        screen.pos = self._input_pos
        screen.print(shown, ColorId.CRITICAL, self._format)

        time.sleep(self.flash_delay)

        screen.pos = self._input_pos
        screen.print(shown, ColorId.INPUT, self._format)
