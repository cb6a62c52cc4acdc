"""Keyboard input parsing.

Turns one complete raw input sequence (as split by
:mod:`phosphor.stdin_buffer`) into a :class:`KeyEvent`. Key names use the
same identifiers as the rest of the package: ``"escape"``, ``"enter"``,
``"pageUp"``, ``"ctrl+c"``, or the literal printable character.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    clear = "clear"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    *char* is the literal character produced by the key, or ``""`` for keys
    that produce none (arrows, paging keys, function keys).
    """

    name: str
    char: str = ""

    @property
    def is_printable(self) -> bool:
        return len(self.char) == 1 and self.char >= " " and self.char.isprintable()

    @property
    def literal(self) -> str:
        """The key's character, or its name when it has none."""
        return self.char or self.name


# Keys which a text prompt may accept as literal tokens.
SHORTCUT_TOKENS: dict[str, str] = {
    Key.home: "Home",
    Key.end: "End",
    Key.insert: "Insert",
    Key.page_up: "PageUp",
    Key.page_down: "PageDown",
}

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1bOP": "f1",
    "\x1bOQ": "f2",
    "\x1bOR": "f3",
    "\x1bOS": "f4",
    "\x1b[15~": "f5",
    "\x1b[17~": "f6",
    "\x1b[18~": "f7",
    "\x1b[19~": "f8",
    "\x1b[20~": "f9",
    "\x1b[21~": "f10",
    "\x1b[23~": "f11",
    "\x1b[24~": "f12",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[E": "clear",
    "\x1b[Z": "shift+tab",
}

ESCAPE = KeyEvent(Key.escape, "\x1b")
ENTER = KeyEvent(Key.enter, "\r")


def parse_key(data: str) -> KeyEvent | None:
    """Parse one raw input sequence and return the key, or ``None``."""
    if not data:
        return None

    name = LEGACY_KEY_SEQUENCES.get(data)
    if name is not None:
        return KeyEvent(name)

    if data == "\x1b":
        return ESCAPE
    if data in ("\r", "\n", "\r\n"):
        return ENTER
    if data == "\t":
        return KeyEvent(Key.tab, "\t")
    if data == " ":
        return KeyEvent(Key.space, " ")
    if data in ("\x7f", "\x08"):
        return KeyEvent(Key.backspace, "\b")
    if data == "\x00":
        return KeyEvent("ctrl+space")

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return KeyEvent("ctrl+" + chr(ord(data) + ord("a") - 1))

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x1b":
            return KeyEvent("alt+escape")
        if ch in ("\r", "\n"):
            return KeyEvent("alt+enter")
        if ch.isprintable():
            return KeyEvent("alt+" + ch.lower())

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return KeyEvent(data, data)

    return None
