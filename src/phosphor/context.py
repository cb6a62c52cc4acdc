"""Owned state shared by everything printing to, or prompting on, one terminal."""

from __future__ import annotations

from phosphor.history import PromptHistory
from phosphor.screen import Screen
from phosphor.settings import ScreenSettings
from phosphor.terminal import ProcessTerminal, Terminal


class TerminalContext:
    """Bundle of terminal, settings, prompt history and screen.

    Pass one context to every prompter and reprinter that should share the
    same cursor model and history. Settings default to
    :meth:`ScreenSettings.from_env`.

    Usage::

        with TerminalContext() as ctx:
            ctx.screen.print_line("Hello", ColorId.TITLE)
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        settings: ScreenSettings | None = None,
        history: PromptHistory | None = None,
    ) -> None:
        self.terminal: Terminal = terminal if terminal is not None else ProcessTerminal()
        self.settings = settings if settings is not None else ScreenSettings.from_env()
        self.history = history if history is not None else PromptHistory()
        self.screen = Screen(self)

    def __enter__(self) -> TerminalContext:
        self.terminal.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.terminal.stop()
