"""
Resume Export

Renders a resume aggregate through its render tree into preview text (markdown,
HTML) or a LaTeX document, and compiles that document to a downloadable PDF.
Nothing here reads or writes the resume store.
"""

import os
import time
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import TemplateError

from folio.contexts.editing.data_structures import ResumeAggregate
from folio.contexts.rendering.compiler import LATEX_COMPILER, CompilationResult, compile_latex
from folio.contexts.rendering.exceptions import TemplateRenderError
from folio.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_export_start,
)
from folio.contexts.rendering.registries import TemplateRegistry
from folio.contexts.rendering.render_tree import (
    RenderTree,
    build_render_tree,
    load_presentation_config,
)
from folio.utils.event_logging import log_event
from folio.utils.text_processing import safe_filename

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

# Output format -> template name
TEMPLATES_BY_FORMAT = {
    "markdown": "preview.md",
    "html": "preview.html",
    "tex": "resume.tex",
}

FILE_EXTENSIONS = {
    "markdown": ".md",
    "html": ".html",
    "tex": ".tex",
    "pdf": ".pdf",
}


def document_filename(title: str, fmt: str = "pdf", config: Dict[str, Any] = None) -> str:
    """
    Download filename for an exported resume: "{title}.pdf", or "resume.pdf"
    when the title is empty.
    """
    config = config or load_presentation_config()
    stem = safe_filename(title, default=config["export"]["default_filename"])
    return f"{stem}{FILE_EXTENSIONS[fmt]}"


class ResumeRenderer:
    """
    Renders resume aggregates with the document templates.

    Args:
        template_registry: Template source (defaults to the packaged templates)
        config: Presentation config (defaults to presentation.yaml)
    """

    def __init__(self, template_registry: TemplateRegistry = None, config: Dict[str, Any] = None):
        self.template_registry = template_registry or TemplateRegistry()
        self.config = config or load_presentation_config()

    def build_tree(self, aggregate: ResumeAggregate) -> RenderTree:
        return build_render_tree(aggregate, self.config)

    def render(self, aggregate: ResumeAggregate, fmt: str = "markdown") -> str:
        """
        Render a resume as markdown, HTML or LaTeX source.

        Raises:
            ValueError: If fmt is not a text format
            TemplateRenderError: If the template fails to render
        """
        if fmt not in TEMPLATES_BY_FORMAT:
            raise ValueError(
                f"Unknown format '{fmt}'. Valid formats: {list(TEMPLATES_BY_FORMAT)}"
            )

        name = TEMPLATES_BY_FORMAT[fmt]
        tree = self.build_tree(aggregate)
        try:
            return self.template_registry.get_template(name).render(tree=tree)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render {fmt} for resume {aggregate.id}",
                template_name=name,
                template_path=self.template_registry.get_template_path(name),
                original_error=e,
            ) from e

    def write(self, aggregate: ResumeAggregate, output_dir: Path, fmt: str = "markdown") -> Path:
        """Render to {output_dir}/{title}{ext} and return the written path."""
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / document_filename(aggregate.title, fmt, self.config)
        output_path.write_text(self.render(aggregate, fmt), encoding="utf-8")
        _log_debug(f"Wrote {fmt} for {aggregate.id} to {output_path}")
        return output_path

    def export_pdf(
        self,
        aggregate: ResumeAggregate,
        output_dir: Path = RESULTS_PATH,
        compiler: str = LATEX_COMPILER,
        verbose: bool = False,
        events_file: Path = None,
    ) -> CompilationResult:
        """
        Render the LaTeX document and compile it to {output_dir}/{title}.pdf.

        Compilation failures are reported in the returned CompilationResult,
        not raised.
        """
        tex_file = self.write(aggregate, output_dir, fmt="tex")
        num_passes = self.config["export"]["num_passes"]

        log_export_start(aggregate.id, aggregate.title, tex_file, num_passes)
        start = time.time()
        result = compile_latex(tex_file, num_passes=num_passes, compiler=compiler)
        elapsed = time.time() - start
        log_compilation_result(aggregate.title, result, elapsed, verbose=verbose)

        log_event(
            event_type="export_completed" if result.success else "export_failed",
            resume_id=aggregate.id,
            source="rendering",
            events_file=events_file,
            pdf_path=str(result.pdf_path) if result.pdf_path else None,
            compilation_time_s=round(elapsed, 2),
            errors=len(result.errors),
        )
        return result
