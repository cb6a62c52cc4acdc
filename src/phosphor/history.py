"""Bounded store of committed prompt input, browsable with up/down recall."""

from __future__ import annotations

MAX_HISTORY = 32


class PromptHistory:
    """Shared, append-only list of committed input strings.

    One instance is held by a :class:`~phosphor.context.TerminalContext` and
    shared by every prompter created from it. The oldest entry is evicted once
    :data:`MAX_HISTORY` is exceeded.
    """

    def __init__(self, capacity: int = MAX_HISTORY) -> None:
        self._capacity = capacity
        self._entries: list[str] = []

    def append(self, text: str) -> bool:
        """Add *text*; blank strings are ignored. Returns ``True`` if added."""
        if not text or text.isspace():
            return False

        self._entries.append(text)
        if len(self._entries) > self._capacity:
            self._entries.pop(0)
        return True

    def clear(self) -> None:
        self._entries.clear()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

    def __iter__(self):
        return iter(self._entries)


class HistoryCursor:
    """Per-editor recall position over a :class:`PromptHistory`.

    After :meth:`reset` the cursor sits one past the newest entry, so the
    first :meth:`back` yields the most recent input. Moving forward past the
    newest entry yields a single ``""`` step (to clear the edit line) before
    returning ``None``.
    """

    def __init__(self, history: PromptHistory) -> None:
        self._history = history
        self._index = len(history)
        self._forward_last = False

    @property
    def index(self) -> int:
        return self._index

    def reset(self) -> None:
        self._forward_last = False
        self._index = len(self._history)

    def back(self) -> str | None:
        self._forward_last = False

        index = self._index - 1
        if 0 <= index < len(self._history):
            self._index = index
            return self._history[index]
        return None

    def forward(self) -> str | None:
        index = self._index + 1
        if index < 0:
            return None

        if index < len(self._history):
            self._index = index
            return self._history[index]

        if not self._forward_last:
            self._forward_last = True
            self._index = len(self._history)
            return ""
        return None

    def append(self, text: str) -> None:
        """Append to the shared history and move the cursor past the end."""
        if self._history.append(text):
            self.reset()
