from __future__ import annotations

from typing import List


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def remove_duplicate_lines(text: str) -> str:
    seen: set[str] = set()
    kept: List[str] = []

    for line in split_lines(text):
        if line in seen:
            continue
        seen.add(line)
        kept.append(line)

    return "\n".join(kept)


def sort_lines(text: str, ascending: bool = True) -> str:
    # sorted() is stable in both directions, so case-insensitive ties keep input order.
    ordered = sorted(split_lines(text), key=str.lower, reverse=not ascending)
    return "\n".join(ordered)
