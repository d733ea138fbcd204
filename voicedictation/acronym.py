"""Conversion of spelled-out letter sequences into known acronyms."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

DEFAULT_ACRONYMS = frozenset(
    {
        # Programming and web
        "API", "HTTP", "HTTPS", "URL", "URI", "JSON", "XML", "HTML", "CSS",
        "SQL", "REST", "CRUD", "CLI", "GUI", "SDK", "IDE",
        # File formats and protocols
        "PDF", "CSV", "SVG", "PNG", "JPG", "JPEG", "GIF", "SSH", "FTP",
        "SMTP", "TCP", "UDP", "IP", "DNS",
        # Development tools and concepts
        "GIT", "NPM", "CI", "CD", "AWS", "VPN", "RAM", "CPU", "GPU", "SSD",
        "HDD", "USB",
        # Common tech acronyms
        "AI", "ML", "NLP", "UI", "UX", "QA", "DB", "OS", "VM",
    }
)

_MIN_LETTERS = 2
_MAX_LETTERS = 5


def _is_single_letter(word: str) -> bool:
    return len(word) == 1 and word.isascii() and word.isalpha()


class AcronymProcessor:
    """Turns letter-by-letter patterns such as "a p i" into "API".

    Only sequences of 2 to 5 single letters that spell a known acronym
    are joined; the longest match wins.
    """

    def __init__(self, known_acronyms: Optional[Iterable[str]] = None) -> None:
        if known_acronyms is None:
            self.known_acronyms = DEFAULT_ACRONYMS
        else:
            self.known_acronyms = frozenset(a.upper() for a in known_acronyms)

    def _match(self, words: Sequence[str]) -> Optional[Tuple[str, int]]:
        longest = min(_MAX_LETTERS, len(words))
        for length in range(longest, _MIN_LETTERS - 1, -1):
            candidate = words[:length]
            if not all(_is_single_letter(w) for w in candidate):
                continue
            acronym = "".join(w.upper() for w in candidate)
            if acronym in self.known_acronyms:
                return acronym, length
        return None

    def process(self, text: str) -> str:
        words = text.split()
        result: List[str] = []
        position = 0
        while position < len(words):
            match = self._match(words[position:])
            if match is None:
                result.append(words[position])
                position += 1
            else:
                acronym, consumed = match
                result.append(acronym)
                position += consumed
        return " ".join(result)