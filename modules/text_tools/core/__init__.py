from modules.text_tools.core.case import (
    CaseStyle,
    convert_case,
    parse_style,
    render,
    title_first,
    tokenize,
)
from modules.text_tools.core.count import TextStats, count_text
from modules.text_tools.core.lines import remove_duplicate_lines, sort_lines
from modules.text_tools.core.replace import PatternDefect, find_replace
from modules.text_tools.core.transform import (
    reverse_text,
    title_word,
    to_lower,
    to_title,
    to_upper,
    trim_text,
)

__all__ = [
    "CaseStyle",
    "PatternDefect",
    "TextStats",
    "convert_case",
    "count_text",
    "find_replace",
    "parse_style",
    "remove_duplicate_lines",
    "render",
    "reverse_text",
    "sort_lines",
    "title_first",
    "title_word",
    "to_lower",
    "to_title",
    "to_upper",
    "tokenize",
    "trim_text",
]
