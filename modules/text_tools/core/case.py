from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Callable, List, Sequence


Capitalizer = Callable[[str], str]


class CaseStyle(str, Enum):
    CAMEL = "camelCase"
    PASCAL = "PascalCase"
    SNAKE = "snake_case"
    KEBAB = "kebab-case"
    CONSTANT = "CONSTANT_CASE"


def _is_word_char(char: str) -> bool:
    return unicodedata.category(char)[0] in ("L", "N")


def _is_hump(previous: str, char: str) -> bool:
    if not previous:
        return False
    return unicodedata.category(previous) == "Ll" and unicodedata.category(char) == "Lu"


def title_first(word: str) -> str:
    """Title-fold the first code point of ``word`` and keep the rest as is."""
    if not word:
        return ""
    return word[0].title() + word[1:]


def tokenize(text: str) -> List[str]:
    """Split text into runs of letters/digits.

    Anything that is not a letter or digit separates tokens and is dropped.
    A lowercase letter followed by an uppercase one also starts a new token,
    so ``"myVarName123"`` gives ``["my", "Var", "Name123"]``. Runs of
    capitals stay together (``"XMLHttp"`` is one token).

    The hump check looks at the previous code point's general category
    (Ll then Lu), not the previous byte; this is a known fragility for
    scripts whose case pairs do not map to Ll/Lu.
    """
    tokens: List[str] = []
    current: List[str] = []
    previous = ""

    for char in text:
        if _is_word_char(char):
            if current and _is_hump(previous, char):
                tokens.append("".join(current))
                current = []
            current.append(char)
        elif current:
            tokens.append("".join(current))
            current = []
        previous = char

    if current:
        tokens.append("".join(current))
    return tokens


def render(
    tokens: Sequence[str],
    style: str | CaseStyle,
    *,
    capitalize: Capitalizer = title_first,
) -> str:
    """Join tokens in ``style``. Unknown styles join the tokens with a space."""
    resolved = parse_style(style)
    lowered = [token.lower() for token in tokens]

    if resolved is CaseStyle.CAMEL:
        if not lowered:
            return ""
        return lowered[0] + "".join(capitalize(token) for token in lowered[1:])
    if resolved is CaseStyle.PASCAL:
        return "".join(capitalize(token) for token in lowered)
    if resolved is CaseStyle.SNAKE:
        return "_".join(lowered)
    if resolved is CaseStyle.KEBAB:
        return "-".join(lowered)
    if resolved is CaseStyle.CONSTANT:
        return "_".join(token.upper() for token in tokens)
    return " ".join(tokens)


def parse_style(style: str | CaseStyle | None) -> CaseStyle | None:
    if style is None:
        return None
    try:
        return CaseStyle(style)
    except ValueError:
        return None


def convert_case(
    text: str,
    style: str | CaseStyle,
    *,
    capitalize: Capitalizer = title_first,
) -> str:
    """Re-case ``text`` into ``style``; unknown styles return the text unchanged."""
    resolved = parse_style(style)
    if resolved is None:
        return text
    return render(tokenize(text), resolved, capitalize=capitalize)
