import pytest

from modules.text_tools.core import TextStats, count_text


def test_count_paragraph_scenario():
    text = "Hello world.\n\nSecond paragraph here."
    stats = count_text(text)

    assert stats.words == 5
    assert stats.lines == 3
    assert stats.paragraphs == 2
    assert stats.characters == len(text) == 36
    assert stats.characters_no_spaces == 36 - text.count(" ") - text.count("\n") == 31


def test_count_trims_first():
    stats = count_text("\n\n  one two  \n")
    assert stats == TextStats(words=2, characters=7, characters_no_spaces=6, lines=1, paragraphs=1)


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_count_blank_input(text):
    assert count_text(text) == TextStats(0, 0, 0, 0, 0)


def test_whitespace_only_line_separates_paragraphs():
    stats = count_text("a\n  \nb")
    assert stats.paragraphs == 2
    assert stats.lines == 3


def test_single_newlines_do_not_split_paragraphs():
    stats = count_text("first line\nsecond line\nthird line")
    assert stats.paragraphs == 1
    assert stats.lines == 3
    assert stats.words == 6


def test_characters_are_code_points():
    stats = count_text("héllo 👋")
    assert stats.characters == 7
    assert stats.characters_no_spaces == 6


def test_only_spaces_and_newlines_are_removed():
    stats = count_text("a\tb")
    assert stats.characters == 3
    assert stats.characters_no_spaces == 3


def test_as_dict_uses_external_names():
    assert count_text("a b").as_dict() == {
        "words": 2,
        "characters": 3,
        "charactersNoSpaces": 2,
        "lines": 1,
        "paragraphs": 1,
    }
