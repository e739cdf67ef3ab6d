from __future__ import annotations

from typing import Callable, Tuple

from fastapi import FastAPI, Form

from modules.text_tools.core import (
    CaseStyle,
    PatternDefect,
    convert_case,
    count_text,
    find_replace,
    parse_style,
    remove_duplicate_lines,
    reverse_text,
    sort_lines,
    to_lower,
    to_title,
    to_upper,
    tokenize,
    trim_text,
)
from textkit.errors import ValidationNormalizeMiddleware, error_response, install_defect_handler
from textkit.settings import text_max_chars

app = FastAPI(title="Text Tools")
app.add_middleware(ValidationNormalizeMiddleware)
install_defect_handler(app, PatternDefect)


def _require_text(text: str | None, label: str = "Text") -> Tuple[str | None, str | None]:
    if text is None:
        return None, f"{label} is required."
    limit = text_max_chars()
    if limit is not None and len(text) > limit:
        return None, f"{label} is too long."
    return text, None


def _simple(text: str | None, transform: Callable[[str], str]):
    value, error = _require_text(text)
    if error:
        return error_response(error)
    return {"result": transform(value)}


@app.get("/styles")
def styles():
    return {"styles": [style.value for style in CaseStyle]}


@app.post("/uppercase")
def uppercase(text: str | None = Form(None)):
    return _simple(text, to_upper)


@app.post("/lowercase")
def lowercase(text: str | None = Form(None)):
    return _simple(text, to_lower)


@app.post("/titlecase")
def titlecase(text: str | None = Form(None)):
    return _simple(text, to_title)


@app.post("/reverse")
def reverse(text: str | None = Form(None)):
    return _simple(text, reverse_text)


@app.post("/trim")
def trim(text: str | None = Form(None)):
    return _simple(text, trim_text)


@app.post("/count")
def count(text: str | None = Form(None)):
    value, error = _require_text(text)
    if error:
        return error_response(error)
    return count_text(value).as_dict()


@app.post("/find-replace")
def replace(
    text: str | None = Form(None),
    find: str = Form(""),
    replace_with: str = Form("", alias="replace"),
    case_sensitive: bool = Form(True),
):
    """Replace a literal. An empty or missing ``find`` inserts ``replace`` between code points."""
    value, error = _require_text(text)
    if error:
        return error_response(error)
    pattern, error = _require_text(find, "Find text")
    if error:
        return error_response(error)
    result = find_replace(value, pattern, replace_with, case_sensitive)
    return {"result": result}


@app.post("/dedupe")
def dedupe(text: str | None = Form(None)):
    value, error = _require_text(text)
    if error:
        return error_response(error)
    output = remove_duplicate_lines(value)
    total = value.count("\n") + 1
    unique = output.count("\n") + 1
    return {
        "result": output,
        "total_lines": total,
        "unique_lines": unique,
        "removed_lines": total - unique,
    }


@app.post("/sort")
def sort(text: str | None = Form(None), ascending: bool = Form(True)):
    value, error = _require_text(text)
    if error:
        return error_response(error)
    return {"result": sort_lines(value, ascending)}


@app.post("/convert-case")
def convert(
    text: str | None = Form(None),
    style: str = Form(CaseStyle.CAMEL.value),
):
    value, error = _require_text(text)
    if error:
        return error_response(error)
    resolved = parse_style(style)
    return {
        "result": convert_case(value, style),
        "style": resolved.value if resolved else style,
        "words": tokenize(value),
    }
