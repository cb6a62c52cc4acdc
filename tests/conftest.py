import pytest

from phosphor.context import TerminalContext
from phosphor.history import PromptHistory
from phosphor.settings import ScreenSettings

from .virtual_terminal import VirtualTerminal


@pytest.fixture
def terminal():
    """An 80x24 in-memory terminal."""
    return VirtualTerminal(rows=24, columns=80)


@pytest.fixture
def settings():
    """Default settings with escape polling off, so queued keys are left alone."""
    return ScreenSettings(escape_poll_interval=None)


@pytest.fixture
def context(terminal, settings):
    return TerminalContext(terminal=terminal, settings=settings, history=PromptHistory())
