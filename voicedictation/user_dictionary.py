"""User-defined words that the spell checker should accept."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import List, Mapping, Optional, Set, Union

from platformdirs import user_data_path

PathLike = Union[str, Path]

_APP_NAME = "voice-dictation"
_APP_WORDS_FILE = "user_words.txt"
_LOCALE_VARIABLES = ("DICTIONARY", "LC_ALL", "LC_MESSAGES", "LANG")


def read_app_words(path: PathLike) -> Set[str]:
    """Read the application word list; a missing file gives an empty set."""
    path = Path(path)
    if not path.exists():
        return set()
    lines = path.read_text(encoding="utf-8").splitlines()
    return {word for word in (line.strip().lower() for line in lines) if word}


def read_system_words(path: PathLike) -> Set[str]:
    """Read a Hunspell personal dictionary, dropping affix flags and '*' lines."""
    words = set()
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if not entry or entry.startswith("*"):
            continue
        words.add(entry.split("/", 1)[0].lower())
    return words


def _read_system_words_or_empty(path: Optional[Path]) -> Set[str]:
    if path is None:
        return set()
    try:
        return read_system_words(path)
    except (OSError, UnicodeDecodeError):
        return set()


def default_app_words_path() -> Path:
    """Path of the application word list, creating its directory."""
    path = user_data_path(_APP_NAME) / _APP_WORDS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def find_hunspell_personal_dict(
    home: PathLike, environ: Optional[Mapping[str, str]] = None
) -> Optional[Path]:
    """Locate the Hunspell personal dictionary for the current locale.

    The locale comes from the first of DICTIONARY, LC_ALL, LC_MESSAGES and
    LANG that is set; ~/.hunspell_default is the fallback.
    """
    env = os.environ if environ is None else environ
    home = Path(home)
    locale = next((env[name] for name in _LOCALE_VARIABLES if name in env), None)
    if locale is not None:
        candidate = home / f".hunspell_{locale.split('.', 1)[0]}"
        if candidate.exists():
            return candidate
    default = home / ".hunspell_default"
    return default if default.exists() else None


class UserDictionary:
    """Application words (editable) combined with the system Hunspell words.

    Lookups are case-insensitive. Every change to the application words is
    written back to disk at once.
    """

    def __init__(
        self,
        app_words_path: Optional[PathLike] = None,
        system_dict_path: Optional[PathLike] = None,
    ) -> None:
        self.app_words_path = Path(app_words_path) if app_words_path is not None else None
        self.system_dict_path = (
            Path(system_dict_path) if system_dict_path is not None else None
        )
        self._lock = threading.RLock()
        self._app_words: Set[str] = (
            read_app_words(self.app_words_path) if self.app_words_path is not None else set()
        )
        self._system_words: Set[str] = _read_system_words_or_empty(self.system_dict_path)

    def watch_paths(self) -> List[Path]:
        """Files to monitor for dictionary updates."""
        return [p for p in (self.app_words_path, self.system_dict_path) if p is not None]

    def contains(self, word: str) -> bool:
        lowered = word.lower()
        with self._lock:
            return lowered in self._app_words or lowered in self._system_words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def add(self, word: str) -> None:
        """Add a word to the application dictionary; blank words are ignored."""
        lowered = word.strip().lower()
        if not lowered:
            return
        with self._lock:
            self._app_words.add(lowered)
            self._save()

    def remove(self, word: str) -> None:
        with self._lock:
            self._app_words.discard(word.lower())
            self._save()

    def app_words(self) -> List[str]:
        """All application words, sorted."""
        with self._lock:
            return sorted(self._app_words)

    def reload_app_words(self) -> None:
        words = read_app_words(self.app_words_path) if self.app_words_path else set()
        with self._lock:
            self._app_words = words

    def reload_system_words(self) -> None:
        if self.system_dict_path is None:
            return
        words = _read_system_words_or_empty(self.system_dict_path)
        with self._lock:
            self._system_words = words

    def reload_all(self) -> None:
        self.reload_app_words()
        self.reload_system_words()

    def _save(self) -> None:
        if self.app_words_path is None:
            raise OSError("user dictionary has no word list file")
        self.app_words_path.write_text("\n".join(sorted(self._app_words)), encoding="utf-8")


def load_user_dictionary() -> UserDictionary:
    """Load the user's dictionary from its standard locations."""
    return UserDictionary(
        default_app_words_path(),
        find_hunspell_personal_dict(Path.home(), os.environ),
    )