"""Unit tests for "(Copy N)" title derivation."""

import pytest

from folio.contexts.editing.duplication import (
    highest_copy_number,
    next_copy_title,
    strip_copy_suffix,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, expected",
    [
        ("Resume", "Resume"),
        ("Resume (Copy)", "Resume"),
        ("Resume (Copy 2)", "Resume"),
        ("Resume (Copy 12)", "Resume"),
        ("Resume (Copy) (Copy)", "Resume (Copy)"),
        ("Resume (copy)", "Resume (copy)"),
        ("Resume (Copy)x", "Resume (Copy)x"),
        ("(Copy)", "(Copy)"),
        ("Resume (Copy)\n", "Resume (Copy)\n"),
        ("Resume (Copy \u0663)", "Resume (Copy \u0663)"),
    ],
)
def test_strip_copy_suffix(title, expected):
    """Only one trailing, exactly-formatted suffix is removed."""
    assert strip_copy_suffix(title) == expected


@pytest.mark.unit
def test_first_copy_has_no_number():
    assert next_copy_title("Resume", ["Resume"]) == "Resume (Copy)"


@pytest.mark.unit
def test_second_copy_is_numbered_two():
    assert next_copy_title("Resume", ["Resume", "Resume (Copy)"]) == "Resume (Copy 2)"


@pytest.mark.unit
def test_copy_of_copy_uses_base_title():
    titles = ["Resume", "Resume (Copy)", "Resume (Copy 2)"]
    assert next_copy_title("Resume (Copy 2)", titles) == "Resume (Copy 3)"


@pytest.mark.unit
def test_gaps_are_not_reused():
    """The highest number wins, so a deleted "(Copy 2)" is never handed out again."""
    titles = ["Resume", "Resume (Copy)", "Resume (Copy 5)"]
    assert next_copy_title("Resume", titles) == "Resume (Copy 6)"


@pytest.mark.unit
def test_similar_titles_do_not_count():
    titles = [
        "Resume",
        "Resume Draft (Copy 9)",
        "Resume (Copy 3) notes",
        "Resume (copy 4)",
    ]
    assert highest_copy_number("Resume", titles) == 0
    assert next_copy_title("Resume", titles) == "Resume (Copy)"


@pytest.mark.unit
def test_regex_characters_in_title_are_literal():
    titles = ["C++ (Dev)", "C++ (Dev) (Copy)", "Cxx (Dev) (Copy 7)"]
    assert next_copy_title("C++ (Dev)", titles) == "C++ (Dev) (Copy 2)"


@pytest.mark.unit
def test_sequence_of_copies_never_repeats():
    titles = ["Resume"]
    for _ in range(5):
        titles.append(next_copy_title("Resume", titles))

    assert titles[1:] == [
        "Resume (Copy)",
        "Resume (Copy 2)",
        "Resume (Copy 3)",
        "Resume (Copy 4)",
        "Resume (Copy 5)",
    ]


@pytest.mark.unit
def test_trailing_newline_is_not_a_copy():
    assert highest_copy_number("X", ["X (Copy 7)\n"]) == 0
    assert next_copy_title("X", ["X", "X (Copy 7)\n"]) == "X (Copy)"


@pytest.mark.unit
def test_only_ascii_digits_number_a_copy():
    assert highest_copy_number("X", ["X (Copy \u0663)"]) == 0
    assert highest_copy_number("X", ["X (Copy 3)"]) == 3
