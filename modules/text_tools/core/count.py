from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict


PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class TextStats:
    words: int
    characters: int
    characters_no_spaces: int
    lines: int
    paragraphs: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "words": self.words,
            "characters": self.characters,
            "charactersNoSpaces": self.characters_no_spaces,
            "lines": self.lines,
            "paragraphs": self.paragraphs,
        }


def count_text(text: str) -> TextStats:
    """Count words, characters, lines and paragraphs of the trimmed text.

    Characters are counted as code points. ``characters_no_spaces`` only drops
    literal spaces and newlines; tabs and other whitespace still count.
    """
    trimmed = text.strip()
    if not trimmed:
        return TextStats(words=0, characters=0, characters_no_spaces=0, lines=0, paragraphs=0)

    paragraphs = [chunk for chunk in PARAGRAPH_SPLIT_RE.split(trimmed) if chunk.strip()]
    no_spaces = trimmed.replace(" ", "").replace("\n", "")

    return TextStats(
        words=len(trimmed.split()),
        characters=len(trimmed),
        characters_no_spaces=len(no_spaces),
        lines=len(trimmed.split("\n")),
        paragraphs=len(paragraphs),
    )
