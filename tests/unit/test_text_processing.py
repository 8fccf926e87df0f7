"""Unit tests for text escaping helpers."""

import pytest

from folio.utils.text_processing import escape_latex, escape_latex_url, safe_filename


@pytest.mark.unit
def test_escape_latex_special_characters():
    assert escape_latex("R&D at 100% for $5 #1") == r"R\&D at 100\% for \$5 \#1"
    assert escape_latex("snake_case {x}") == r"snake\_case \{x\}"


@pytest.mark.unit
def test_escape_latex_backslash_is_not_double_escaped():
    assert escape_latex("a\\b") == r"a\textbackslash{}b"


@pytest.mark.unit
def test_escape_latex_empty():
    assert escape_latex("") == ""
    assert escape_latex(None) == ""


@pytest.mark.unit
def test_escape_latex_url():
    assert escape_latex_url("https://x.dev/a%20b#top") == r"https://x.dev/a\%20b\#top"


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, expected",
    [
        ("Backend Resume", "Backend Resume"),
        ("Backend / Platform (Copy 2)", "Backend - Platform (Copy 2)"),
        ("  ", "resume"),
        ("", "resume"),
    ],
)
def test_safe_filename(title, expected):
    assert safe_filename(title) == expected
