"""Interactive components built on the screen."""

from phosphor.components.prompter import (
    DEFAULT_FLASH_DELAY,
    EchoMode,
    PromptStatus,
    PromptStyle,
    Prompter,
)
from phosphor.components.reprinter import Reprinter

__all__ = [
    "DEFAULT_FLASH_DELAY",
    "EchoMode",
    "PromptStatus",
    "PromptStyle",
    "Prompter",
    "Reprinter",
]
