"""Terminal abstraction for blocking key input and cursor-tracked output.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages cbreak mode, cursor visibility, colors and
screen clearing via ANSI escape sequences.

Every operation degrades to a default value or a no-op when no console is
attached, so code driving a terminal can run headless.
"""

from __future__ import annotations

import codecs
import logging
import os
import re
import select
import sys
import termios
import time
import tty
from typing import IO, Protocol

from phosphor.colors import DEFAULT_PALETTE, ColorId, sgr
from phosphor.keys import ESCAPE, KeyEvent, parse_key
from phosphor.stdin_buffer import StdinBuffer
from phosphor.utils import visible_width

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_CURSOR_FMT = "\x1b[{};{}H"
_CURSOR_QUERY = "\x1b[6n"
_CURSOR_REPORT_RE = re.compile(r"\x1b\[(\d+);(\d+)R")

_DEFAULT_COLUMNS = 80
_DEFAULT_ROWS = 24

# Seconds to wait for the rest of an escape sequence before treating a lone
# ESC as the Escape key.
_SEQUENCE_TIMEOUT = 0.01
_CURSOR_QUERY_TIMEOUT = 0.1


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    @property
    def cursor_column(self) -> int: ...

    @cursor_column.setter
    def cursor_column(self, value: int) -> None: ...

    @property
    def cursor_row(self) -> int: ...

    @cursor_row.setter
    def cursor_row(self, value: int) -> None: ...

    def move_cursor(self, column: int, row: int) -> None: ...

    def write(self, data: str) -> None: ...

    def read_key(self) -> KeyEvent: ...

    def key_available(self) -> bool: ...

    def clear_screen(self) -> None: ...

    def set_color(self, color: ColorId | None) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``.

    The cursor position is tracked locally from the text written through
    :meth:`write`, which avoids a slow round trip to the terminal on every
    query. The model is synchronised with a cursor position report on
    :meth:`start`.
    """

    def __init__(
        self,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        palette: dict[ColorId, str] | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._palette = palette or DEFAULT_PALETTE
        self._original_termios: list | None = None
        self._buffer = StdinBuffer()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._eof = False
        self._column = 0
        self._row = 0
        # Set once the last column is filled; the terminal wraps on the next character
        self._wrap_pending = False
        self._write_log_path: str = os.environ.get("PHOSPHOR_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return _DEFAULT_COLUMNS

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines
        except (ValueError, OSError):
            return _DEFAULT_ROWS

    @property
    def cursor_column(self) -> int:
        return self._column

    @cursor_column.setter
    def cursor_column(self, value: int) -> None:
        self.move_cursor(value, self._row)

    @property
    def cursor_row(self) -> int:
        return self._row

    @cursor_row.setter
    def cursor_row(self, value: int) -> None:
        self.move_cursor(self._column, value)

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enter cbreak mode and synchronise the cursor model."""
        fd = self._input_fd()
        if fd is None or self._original_termios is not None:
            return

        try:
            if not os.isatty(fd):
                return
            self._original_termios = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            self._raw_write(_BRACKETED_PASTE_ENABLE)
        except (OSError, termios.error):
            logger.debug("Console input unavailable; running without cbreak mode")
            self._original_termios = None
            return

        self._sync_cursor()

    def stop(self) -> None:
        """Restore terminal state."""
        self._raw_write(_BRACKETED_PASTE_DISABLE)
        self._raw_write(sgr(None))
        self._raw_write(_SHOW_CURSOR)

        fd = self._input_fd()
        if fd is not None and self._original_termios is not None:
            try:
                termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            except (OSError, termios.error):
                logger.debug("Failed to restore terminal attributes")
        self._original_termios = None
        self._buffer.clear()

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write text at the cursor and advance the cursor model."""
        if not data:
            return

        self._raw_write(data)
        self._advance(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.debug("Cannot append to write log %s", self._write_log_path)

    def move_cursor(self, column: int, row: int) -> None:
        column = min(max(column, 0), max(self.columns - 1, 0))
        row = min(max(row, 0), max(self.rows - 1, 0))
        self._raw_write(_MOVE_CURSOR_FMT.format(row + 1, column + 1))
        self._column = column
        self._row = row
        self._wrap_pending = False

    def clear_screen(self) -> None:
        self._raw_write(_CLEAR_SCREEN)
        self._column = 0
        self._row = 0
        self._wrap_pending = False

    def set_color(self, color: ColorId | None) -> None:
        self._raw_write(sgr(color, self._palette))

    def hide_cursor(self) -> None:
        self._raw_write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._raw_write(_SHOW_CURSOR)

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyEvent:
        """Block until a key is pressed and return it.

        Returns Escape if input is closed or unavailable, so callers waiting
        on a prompt always terminate.
        """
        while True:
            self._settle()

            sequence = self._buffer.pop()
            if sequence is not None:
                event = parse_key(sequence)
                if event is not None:
                    return event
                continue

            if not self._fill(None):
                return ESCAPE

    def key_available(self) -> bool:
        """Return ``True`` if a key can be read without blocking."""
        if not self._buffer.has_ready:
            self._fill(0)
            self._settle()
        return self._buffer.has_ready

    # -- private: input -----------------------------------------------------

    def _input_fd(self) -> int | None:
        try:
            return self._stdin.fileno()
        except (ValueError, OSError):
            return None

    def _fill(self, timeout: float | None) -> bool:
        """Read whatever input is available into the buffer.

        Waits up to *timeout* seconds (forever if ``None``). Returns ``False``
        on timeout, end of input or when no console is attached.
        """
        fd = self._input_fd()
        if fd is None or self._eof:
            return False

        try:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return False
            raw = os.read(fd, 4096)
        except (OSError, ValueError):
            logger.debug("Console input unavailable", exc_info=True)
            self._eof = True
            return False

        if not raw:
            self._eof = True
            return False

        self._buffer.process(self._decoder.decode(raw))
        return True

    def _settle(self) -> None:
        """Resolve an incomplete escape sequence once no more data follows."""
        if self._buffer.has_ready or not self._buffer.has_pending:
            return
        if not self._fill(_SEQUENCE_TIMEOUT) and not self._buffer.has_ready:
            self._buffer.flush()

    def _sync_cursor(self) -> None:
        fd = self._input_fd()
        if fd is None:
            return

        self._raw_write(_CURSOR_QUERY)
        received = ""
        deadline = time.monotonic() + _CURSOR_QUERY_TIMEOUT

        while True:
            match = _CURSOR_REPORT_RE.search(received)
            if match is not None:
                self._row = int(match.group(1)) - 1
                self._column = int(match.group(2)) - 1
                self._wrap_pending = False
                received = received[: match.start()] + received[match.end() :]
                break

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug("No cursor position report; assuming column 0")
                break

            try:
                ready, _, _ = select.select([fd], [], [], remaining)
                if not ready:
                    continue
                raw = os.read(fd, 1024)
            except (OSError, ValueError):
                break
            if not raw:
                break
            received += self._decoder.decode(raw)

        if received:
            # Keys typed while waiting for the report
            self._buffer.process(received)

    # -- private: output ----------------------------------------------------

    def _advance(self, data: str) -> None:
        columns = self.columns
        last_row = max(self.rows - 1, 0)

        for ch in data:
            if ch == "\n":
                self._column = 0
                self._row += 1
                self._wrap_pending = False
            elif ch == "\r":
                self._column = 0
                self._wrap_pending = False
            elif ch == "\b":
                self._column = max(self._column - 1, 0)
                self._wrap_pending = False
            else:
                width = visible_width(ch)
                if width == 0:
                    continue

                # Deferred wrap: the cursor stays on the last column until
                # another character arrives
                if self._wrap_pending or self._column + width > columns:
                    self._column = 0
                    self._row += 1
                    self._wrap_pending = False

                self._column += width
                if self._column >= columns:
                    self._column = columns - 1
                    self._wrap_pending = True

            if self._row > last_row:
                self._row = last_row

    def _raw_write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except (OSError, ValueError):
            pass
