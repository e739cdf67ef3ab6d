from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Pattern

logger = logging.getLogger(__name__)

PATTERN_CACHE_SIZE = 256


class PatternDefect(AssertionError):
    """An escaped literal failed to compile. Never caused by user input."""


@lru_cache(maxsize=PATTERN_CACHE_SIZE)
def _literal_pattern(find: str) -> Pattern[str]:
    try:
        return re.compile(re.escape(find), re.IGNORECASE)
    except re.error as exc:
        logger.critical("escaped literal failed to compile: %r", find, exc_info=True)
        raise PatternDefect(f"escaped literal failed to compile: {find!r}") from exc


def find_replace(
    text: str,
    find: str,
    replace: str,
    case_sensitive: bool = True,
) -> str:
    """Replace every non-overlapping occurrence of the literal ``find``.

    With ``case_sensitive=False`` matching ignores case, but ``replace`` is
    inserted exactly as given. Backslashes and group references in
    ``replace`` are not expanded.
    """
    if case_sensitive:
        return text.replace(find, replace)
    return _literal_pattern(find).sub(lambda _match: replace, text)
