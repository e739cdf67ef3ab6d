from __future__ import annotations

import re
from typing import Callable


WORD_RE = re.compile(r"\S+")


def title_word(word: str) -> str:
    """English title rule: first letter title-folded, the rest lowercased.

    Leading punctuation or digits are kept and skipped over, so ``"(hello"``
    becomes ``"(Hello"``.
    """
    lower = word.lower()
    for index, char in enumerate(lower):
        if char.isalpha():
            return lower[:index] + char.title() + lower[index + 1 :]
    return lower


def to_upper(text: str) -> str:
    return text.upper()


def to_lower(text: str) -> str:
    return text.lower()


def to_title(text: str, *, capitalize: Callable[[str], str] = title_word) -> str:
    return WORD_RE.sub(lambda match: capitalize(match.group(0)), text)


def reverse_text(text: str) -> str:
    return text[::-1]


def trim_text(text: str) -> str:
    return text.strip()
