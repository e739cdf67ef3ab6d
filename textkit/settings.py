from __future__ import annotations

import logging
import os
from typing import Callable, TypeVar

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

N = TypeVar("N", int, float)


def _positive(name: str, default: N | None, cast: Callable[[str], N]) -> N | None:
    """Read a positive number from the environment.

    Unset, blank or unparsable values give ``default``; zero or negative
    values switch the limit off (``None``).
    """
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        return default
    return value if value > 0 else None


def env_int(name: str, default: int | None) -> int | None:
    return _positive(name, default, int)


def env_float(name: str, default: float | None) -> float | None:
    return _positive(name, default, float)


def text_max_chars() -> int | None:
    return env_int("TEXTKIT_TEXT_MAX_CHARS", 200_000)


def log_level() -> int:
    raw = os.getenv("TEXTKIT_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging() -> None:
    logging.basicConfig(format=DEFAULT_LOG_FORMAT, level=log_level())
