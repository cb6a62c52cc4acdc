"""phosphor: console text output with wrapping, paging and validated prompts."""

# Colors
from phosphor.colors import DEFAULT_PALETTE, ColorId

# Components (re-exported from components package)
from phosphor.components import (
    EchoMode,
    PromptStatus,
    PromptStyle,
    Prompter,
    Reprinter,
)

# Context
from phosphor.context import TerminalContext

# Formatting
from phosphor.format import (
    Alignment,
    Format,
    TextCase,
    Wrapping,
    block_wrap,
    center,
    lower,
    no_case,
    no_wrap,
    plain,
    right,
    upper,
    word_wrap,
)

# Prompt history
from phosphor.history import MAX_HISTORY, HistoryCursor, PromptHistory

# Keyboard input handling
from phosphor.keys import Key, KeyEvent, parse_key

# Screen
from phosphor.screen import PrintOutcome, Screen

# Settings
from phosphor.settings import ScreenSettings

# Input buffering
from phosphor.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from phosphor.terminal import ProcessTerminal, Terminal

# Utilities
from phosphor.utils import Truncation, double_space, split_lines, truncate, visible_width

# Validation
from phosphor.validation import (
    ILLEGAL_FILENAME_CHARS,
    ILLEGAL_PATH_CHARS,
    CommitRules,
    PromptConfigError,
    WildcardMatcher,
    try_convert,
)

# Wrapping
from phosphor.wrap import wrap_line, wrap_tab_line

__all__ = [
    # Colors
    "ColorId",
    "DEFAULT_PALETTE",
    # Components
    "EchoMode",
    "PromptStatus",
    "PromptStyle",
    "Prompter",
    "Reprinter",
    # Context
    "TerminalContext",
    # Formatting
    "Alignment",
    "Format",
    "TextCase",
    "Wrapping",
    "block_wrap",
    "center",
    "lower",
    "no_case",
    "no_wrap",
    "plain",
    "right",
    "upper",
    "word_wrap",
    # History
    "HistoryCursor",
    "MAX_HISTORY",
    "PromptHistory",
    # Keys
    "Key",
    "KeyEvent",
    "parse_key",
    # Screen
    "PrintOutcome",
    "Screen",
    # Settings
    "ScreenSettings",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "Truncation",
    "double_space",
    "split_lines",
    "truncate",
    "visible_width",
    # Validation
    "CommitRules",
    "ILLEGAL_FILENAME_CHARS",
    "ILLEGAL_PATH_CHARS",
    "PromptConfigError",
    "WildcardMatcher",
    "try_convert",
    # Wrapping
    "wrap_line",
    "wrap_tab_line",
]
