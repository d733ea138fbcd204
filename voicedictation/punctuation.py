"""Rule-based capitalization of transcribed text."""

from __future__ import annotations

_TERMINATORS = (".", "?", "!")


def capitalize_first(word: str) -> str:
    """Upper-case the first character of a word."""
    if not word:
        return ""
    return word[0].upper()[0] + word[1:]


def capitalize_pronoun_i(word: str) -> str:
    """Capitalize the pronoun "i", alone or in contractions such as "i'm"."""
    if word == "i":
        return "I"
    if len(word) > 1 and word.startswith("i") and not word[1].isalnum():
        return "I" + word[1:]
    return word


def ends_with_sentence_terminator(word: str) -> bool:
    """Whether a word ends a sentence (with '.', '?' or '!')."""
    return word.endswith(_TERMINATORS)


class PunctuationProcessor:
    """Capitalizes the first word, sentence starts and the pronoun "I".

    Words are re-joined with single spaces.
    """

    def process(self, text: str) -> str:
        words = []
        capitalize_next = True
        for word in text.split():
            processed = (
                capitalize_first(word) if capitalize_next else capitalize_pronoun_i(word)
            )
            words.append(processed)
            capitalize_next = ends_with_sentence_terminator(processed)
        return " ".join(words)