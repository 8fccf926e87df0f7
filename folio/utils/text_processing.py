"""Text processing utilities for document output."""

import re

# Order matters: backslash must be replaced before characters whose
# replacements introduce new backslashes.
LATEX_SPECIAL_CHARS = [
    ("\\", r"\textbackslash{}"),
    ("&", r"\&"),
    ("%", r"\%"),
    ("$", r"\$"),
    ("#", r"\#"),
    ("_", r"\_"),
    ("{", r"\{"),
    ("}", r"\}"),
    ("~", r"\textasciitilde{}"),
    ("^", r"\textasciicircum{}"),
]


def escape_latex(text: str) -> str:
    """
    Escape LaTeX special characters in plain text.

    Example:
        >>> escape_latex("R&D at 100%")
        'R\\&D at 100\\%'
    """
    if not text:
        return ""

    placeholder = "\x00"
    text = text.replace("\\", placeholder)
    for char, replacement in LATEX_SPECIAL_CHARS[1:]:
        text = text.replace(char, replacement)
    return text.replace(placeholder, LATEX_SPECIAL_CHARS[0][1])


def safe_filename(title: str, default: str = "resume") -> str:
    """
    Build a download filename stem from a resume title.

    Path separators and control characters are replaced; an empty title
    falls back to `default`.

    Example:
        >>> safe_filename("Backend / Platform (Copy 2)")
        'Backend - Platform (Copy 2)'
    """
    stem = re.sub(r"[\\/]+", "-", (title or "").strip())
    stem = re.sub(r"[\x00-\x1f]", "", stem)
    stem = re.sub(r"\s+", " ", stem).strip()
    return stem or default


def escape_latex_url(url: str) -> str:
    """Escape the characters hyperref cannot take raw inside \\href{...}."""
    if not url:
        return ""
    return url.replace("%", r"\%").replace("#", r"\#")
