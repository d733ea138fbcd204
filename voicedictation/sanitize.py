"""Context-aware sanitization of transcribed text before it is typed."""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

from voicedictation.window_detect import AppCategory

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SanitizationRules:
    """Which sanitization steps to apply."""

    escape_shell_chars: bool
    strip_control_chars: bool
    strip_ansi_escapes: bool


def rules_for_category(category: AppCategory) -> SanitizationRules:
    """Return the sanitization rules for an application category."""
    if category is AppCategory.TERMINAL:
        return SanitizationRules(
            escape_shell_chars=True, strip_control_chars=True, strip_ansi_escapes=True
        )
    return SanitizationRules(
        escape_shell_chars=False, strip_control_chars=True, strip_ansi_escapes=True
    )


# ESC followed by a CSI sequence (up to and including its letter terminator),
# an OSC sequence (up to BEL or ESC \), or nothing (a lone ESC).
_ANSI_RE = re.compile(
    r"\x1b(?:\[[^A-Za-z]*[A-Za-z]?|\].*?(?:\x07|\x1b\\|\Z))?",
    re.DOTALL,
)

_KEEP_WHITESPACE = frozenset("\n\t\r ")


def _is_unwanted(ch: str) -> bool:
    code = ord(ch)
    if unicodedata.category(ch) == "Cc":
        return True
    return (
        0x200B <= code <= 0x200D
        or code in (0xFEFF, 0x00AD)
        or 0x202A <= code <= 0x202E
        or 0x2066 <= code <= 0x2069
        or code == 0x061C
        or 0xFE00 <= code <= 0xFE0F
        or code in (0x180E, 0x200E, 0x200F)
    )


_SHELL_ESCAPES = str.maketrans({"$": "\\$", "`": "\\`", "\\": "\\\\", "!": "\\!"})


def strip_ansi_escapes(text: str) -> str:
    """Remove ANSI CSI and OSC escape sequences and lone ESC characters."""
    return _ANSI_RE.sub("", text)


def strip_control_chars(text: str) -> str:
    """Remove control, zero-width, bidi, variation-selector and format characters."""
    return "".join(ch for ch in text if ch in _KEEP_WHITESPACE or not _is_unwanted(ch))


def escape_shell_chars(text: str) -> str:
    """Backslash-escape $, `, \\ and ! for safe terminal input."""
    return text.translate(_SHELL_ESCAPES)


class SanitizationProcessor:
    """Text processor that sanitizes text for a target application."""

    def __init__(
        self,
        category: AppCategory = AppCategory.GENERAL,
        rules: Optional[SanitizationRules] = None,
    ) -> None:
        self.category = category
        self.rules = rules if rules is not None else rules_for_category(category)

    def process(self, text: str) -> str:
        result = text
        if self.rules.strip_ansi_escapes:
            result = strip_ansi_escapes(result)
        if self.rules.strip_control_chars:
            result = strip_control_chars(result)
        # Escaping goes last so the other steps cannot disturb it.
        if self.rules.escape_shell_chars:
            result = escape_shell_chars(result)
        if len(result) != len(text):
            log.debug(
                "Sanitized text for %s: %d -> %d chars",
                self.category.name,
                len(text),
                len(result),
            )
        return result