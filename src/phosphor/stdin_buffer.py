"""StdinBuffer accumulates raw input and yields complete sequences.

Input read from a terminal can arrive in partial chunks, especially escape
sequences. Without buffering, a partial sequence would be misread as an
Escape key followed by ordinary characters.
"""

from __future__ import annotations

import re

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _is_complete_sequence(data: str) -> str:
    """Check if a string is a complete escape sequence or needs more data.

    Returns 'complete', 'incomplete', or 'not-escape'.
    """
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        if after_esc.startswith("[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)

    # OSC, DCS and APC sequences are terminated by ST (or BEL for OSC)
    if after_esc[0] in "]P_":
        if data.endswith(f"{ESC}\\") or (after_esc[0] == "]" and data.endswith("\x07")):
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> str:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    last_char = payload[-1]

    if 0x40 <= ord(last_char) <= 0x7E:
        if payload.startswith("<"):
            return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
        return "complete"

    return "incomplete"


def extract_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is the start of an
    escape sequence still waiting for more data.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "complete":
                sequences.append(candidate)
                pos += seq_end
                break
            seq_end += 1
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Synchronous accumulator for raw terminal input.

    ``process`` feeds decoded text in; ``pop`` hands complete sequences out
    one at a time. A bracketed paste is delivered as its individual
    characters so the prompt sees it as a burst of key presses.
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._ready: list[str] = []
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        self._buffer += data

        if self._paste_mode:
            self._paste_buffer += self._buffer
            self._buffer = ""
            self._finish_paste()
            return

        start_index = self._buffer.find(BRACKETED_PASTE_START)
        if start_index != -1:
            sequences, _ = extract_sequences(self._buffer[:start_index])
            self._ready.extend(sequences)

            self._paste_buffer = self._buffer[start_index + len(BRACKETED_PASTE_START) :]
            self._buffer = ""
            self._paste_mode = True
            self._finish_paste()
            return

        sequences, self._buffer = extract_sequences(self._buffer)
        self._ready.extend(sequences)

    def _finish_paste(self) -> None:
        end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end_index == -1:
            return

        pasted = self._paste_buffer[:end_index]
        remaining = self._paste_buffer[end_index + len(BRACKETED_PASTE_END) :]
        self._paste_mode = False
        self._paste_buffer = ""

        self._ready.extend(ch for ch in pasted if ch not in "\r\n")
        if remaining:
            self.process(remaining)

    def flush(self) -> None:
        """Release an incomplete sequence as-is (called on read timeout)."""
        if self._buffer:
            self._ready.append(self._buffer)
            self._buffer = ""

    @property
    def has_ready(self) -> bool:
        return bool(self._ready)

    @property
    def has_pending(self) -> bool:
        return bool(self._buffer)

    def pop(self) -> str | None:
        """Return the next complete sequence, or ``None``."""
        if not self._ready:
            return None
        return self._ready.pop(0)

    def clear(self) -> None:
        self._buffer = ""
        self._ready.clear()
        self._paste_mode = False
        self._paste_buffer = ""
