"""Unit tests for TemplateRegistry class."""

import pytest
from pathlib import Path
from jinja2 import TemplateNotFound

from folio.contexts.rendering.registries import TemplateRegistry


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
@pytest.mark.parametrize("name", ["preview.md", "preview.html", "resume.tex"])
def test_get_packaged_templates(name):
    registry = TemplateRegistry()
    assert registry.get_template(name) is not None
    assert registry.is_cached(name)


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()
    template1 = registry.get_template("preview.md")
    template2 = registry.get_template("preview.md")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    registry = TemplateRegistry()
    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent")


@pytest.mark.unit
def test_get_template_path():
    registry = TemplateRegistry()
    path = registry.get_template_path("resume.tex")

    assert isinstance(path, Path)
    assert path.name == "resume.tex.jinja"


@pytest.mark.unit
def test_clear_cache():
    registry = TemplateRegistry()
    registry.get_template("preview.md")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0


@pytest.mark.unit
def test_custom_delimiters_leave_latex_braces_alone(tmp_path):
    """LaTeX braces are literal; only <<< >>> interpolates."""
    (tmp_path / "snippet.tex.jinja").write_text(r"\textbf{<<< value | latex >>>}", encoding="utf-8")
    registry = TemplateRegistry(tmp_path)

    result = registry.get_template("snippet.tex").render(value="R&D")
    assert result == r"\textbf{R\&D}"


@pytest.mark.unit
def test_html_templates_are_autoescaped(tmp_path):
    (tmp_path / "snippet.html.jinja").write_text("<p><<< value >>></p>", encoding="utf-8")
    (tmp_path / "snippet.md.jinja").write_text("<<< value >>>", encoding="utf-8")
    registry = TemplateRegistry(tmp_path)

    assert registry.get_template("snippet.html").render(value="<b>") == "<p>&lt;b&gt;</p>"
    assert registry.get_template("snippet.md").render(value="<b>") == "<b>"
