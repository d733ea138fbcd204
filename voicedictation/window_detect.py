"""Application categories used for context-aware text sanitization."""

from __future__ import annotations

from enum import Enum


class AppCategory(Enum):
    """Kinds of target applications with different sanitization needs."""

    TERMINAL = "terminal"
    BROWSER = "browser"
    EDITOR = "editor"
    CHAT = "chat"
    GENERAL = "general"


_ALIASES = {
    "terminal": AppCategory.TERMINAL,
    "term": AppCategory.TERMINAL,
    "browser": AppCategory.BROWSER,
    "web": AppCategory.BROWSER,
    "editor": AppCategory.EDITOR,
    "code": AppCategory.EDITOR,
    "chat": AppCategory.CHAT,
    "messaging": AppCategory.CHAT,
}


def parse_app_category(text: str) -> AppCategory:
    """Parse a config string; unknown values map to GENERAL."""
    return _ALIASES.get(text.lower(), AppCategory.GENERAL)


async def get_focused_app_category() -> AppCategory:
    """Return the category of the focused application.

    Only manual configuration is supported, so this is always GENERAL.
    """
    return AppCategory.GENERAL