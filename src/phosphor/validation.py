"""Commit rules for prompt input: legal characters, wildcard filters,
length bounds and value-type conversion.

Rejection is never an error here. :meth:`CommitRules.accept` returns
``None`` and :func:`try_convert` returns ``(False, None)`` so the prompt can
flash the buffer and keep editing. Only an inconsistent rule set raises,
from :meth:`CommitRules.check`.
"""

from __future__ import annotations

import decimal
import enum
import locale
import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

logger = logging.getLogger(__name__)

ILLEGAL_PATH_CHARS = frozenset('"<>|:*?&\x00')
ILLEGAL_FILENAME_CHARS = ILLEGAL_PATH_CHARS | frozenset("/\\")

DEFAULT_MAX_LENGTH = 255

_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")
_DECIMAL_DIGITS_RE = re.compile(r"[+-]?[0-9]+")
_TRUE_LITERALS = ("true", "1")
_FALSE_LITERALS = ("false", "0")


class PromptConfigError(ValueError):
    """Raised when prompt rules contradict each other."""


class PromptStyle(enum.Enum):
    """Named input modes fixing default validation and echo behavior."""

    ANY_KEY = "any_key"
    TEXT = "text"
    HIDE_PASSWORD = "hide_password"
    SHOW_PASSWORD = "show_password"
    FILE_NAME = "file_name"
    FILE_PATH = "file_path"
    CONFIRM = "confirm"

    @property
    def is_password(self) -> bool:
        return self in (PromptStyle.HIDE_PASSWORD, PromptStyle.SHOW_PASSWORD)

    @property
    def is_path(self) -> bool:
        return self in (PromptStyle.FILE_NAME, PromptStyle.FILE_PATH)

    @property
    def is_text(self) -> bool:
        return self is PromptStyle.TEXT or self.is_password or self.is_path


# ---------------------------------------------------------------------------
# Wildcard matching
# ---------------------------------------------------------------------------


class WildcardMatcher:
    """Anchored glob matcher supporting ``*`` and ``?`` only.

    An empty or ``None`` pattern is equivalent to ``"*"`` and matches any
    string. ``None`` is never matched.
    """

    def __init__(self, pattern: str | None, ignore_case: bool = False) -> None:
        self.pattern = pattern or "*"
        self.ignore_case = ignore_case
        self._regex: re.Pattern[str] | None = None

        if self.pattern != "*":
            flags = re.DOTALL
            if ignore_case:
                flags |= re.IGNORECASE
            self._regex = re.compile(_glob_to_regex(self.pattern), flags)

    def is_match(self, text: str | None) -> bool:
        if text is None:
            return False
        if self._regex is None:
            return True
        return self._regex.fullmatch(text) is not None


def _glob_to_regex(pattern: str) -> str:
    parts = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


# ---------------------------------------------------------------------------
# Value conversion
# ---------------------------------------------------------------------------


@contextmanager
def _numeric_locale(culture: str) -> Iterator[bool]:
    """Temporarily switch ``LC_NUMERIC`` to *culture*.

    Yields ``False`` (and leaves the locale alone) if the culture is not
    installed.
    """
    saved = locale.setlocale(locale.LC_NUMERIC)
    try:
        locale.setlocale(locale.LC_NUMERIC, culture)
    except locale.Error:
        logger.debug("Locale %r unavailable; parsing numbers without it", culture)
        yield False
        return

    try:
        yield True
    finally:
        locale.setlocale(locale.LC_NUMERIC, saved)


def _parse_number(value_type: type, text: str, culture: str | None) -> Any:
    if culture:
        with _numeric_locale(culture) as active:
            if active:
                text = locale.delocalize(text)
    return value_type(text)


def try_convert(value_type: type | None, text: str | None, culture: str | None = None) -> tuple[bool, Any]:
    """Convert prompt *text* to *value_type*.

    Returns ``(True, value)`` on success, otherwise ``(False, None)``.
    Strings are returned untrimmed; every other type parses the trimmed
    text. Integers take ASCII decimal digits or a ``0x`` hex prefix,
    booleans accept ``true``/``false``/``1``/``0`` in any case, and enums
    match member names ignoring case.
    """
    if text is None or value_type is None:
        return False, None

    if value_type is str:
        return True, text

    trimmed = text.strip()

    if value_type is bool:
        lowered = trimmed.lower()
        if lowered in _TRUE_LITERALS:
            return True, True
        if lowered in _FALSE_LITERALS:
            return True, False
        return False, None

    if issubclass(value_type, int) and not issubclass(value_type, enum.Enum):
        if trimmed[:2].lower() == "0x":
            digits = trimmed[2:]
            if _HEX_DIGITS_RE.fullmatch(digits):
                return True, value_type(int(digits, 16))
            return False, None
        if not _DECIMAL_DIGITS_RE.fullmatch(trimmed):
            return False, None

    if issubclass(value_type, enum.Enum):
        folded = trimmed.casefold()
        for member in value_type:
            if member.name.casefold() == folded:
                return True, member

    try:
        if value_type in (float, decimal.Decimal):
            return True, _parse_number(value_type, trimmed, culture)
        return True, value_type(trimmed)
    except (ValueError, TypeError, ArithmeticError):
        return False, None


# ---------------------------------------------------------------------------
# Commit rules
# ---------------------------------------------------------------------------


@dataclass
class CommitRules:
    """Acceptance rules applied to an edit buffer when Enter is pressed."""

    style: PromptStyle = PromptStyle.TEXT
    min_length: int | None = None
    max_length: int = DEFAULT_MAX_LENGTH
    legal_chars: str | None = None
    legal_filter: str | None = None
    ignore_legal_case: bool = False
    deny_space: bool = False
    yes_value: str = "y"
    no_value: str = "N"
    value_type: type = str
    culture: str | None = None
    buffer_history: bool | None = None

    def __post_init__(self) -> None:
        if self.min_length is None:
            self.min_length = 1 if self.style.is_path else 0
        if self.buffer_history is None:
            self.buffer_history = self.style.is_text and not self.style.is_password

    @property
    def combined_legal(self) -> str | None:
        """Legal characters plus the literal characters of the filter."""
        if self.legal_chars and self.legal_filter:
            literal = "".join(c for c in self.legal_filter if c not in "*?")
            return self.legal_chars + literal
        return self.legal_chars or None

    @property
    def records_history(self) -> bool:
        return bool(self.buffer_history) and self.style.is_text

    def check(self) -> None:
        """Raise :class:`PromptConfigError` if the rules are inconsistent."""
        if self.min_length > self.max_length:
            raise PromptConfigError(
                f"min_length ({self.min_length}) cannot be greater than max_length ({self.max_length})"
            )
        if self.yes_value.casefold() == self.no_value.casefold():
            raise PromptConfigError(f"yes_value and no_value cannot be equal ({self.yes_value!r})")

    def accept(self, buffer: str | None) -> str | None:
        """Return the string to commit for *buffer*, or ``None`` to reject."""
        if buffer is None:
            return None

        trimmed = buffer.strip()

        if self.style is PromptStyle.CONFIRM:
            if trimmed.casefold() == self.yes_value.casefold():
                return self.yes_value
            if trimmed.casefold() == self.no_value.casefold():
                return self.no_value
            return None

        if self.deny_space and " " in trimmed:
            return None

        if self.style is PromptStyle.FILE_NAME:
            if any(c in ILLEGAL_FILENAME_CHARS for c in trimmed):
                return None
        elif self.style is PromptStyle.FILE_PATH:
            if any(c in ILLEGAL_PATH_CHARS for c in trimmed):
                return None

        legal = self.combined_legal
        if legal is not None:
            if self.ignore_legal_case:
                folded = legal.casefold()
                if any(c.casefold() not in folded for c in buffer):
                    return None
            elif any(c not in legal for c in buffer):
                return None

        if not WildcardMatcher(self.legal_filter, self.ignore_legal_case).is_match(buffer):
            return None

        if self.style.is_path:
            buffer = trimmed

        if not self.min_length <= len(buffer) <= self.max_length:
            return None

        ok, _ = try_convert(self.value_type, buffer, self.culture)
        return buffer if ok else None
