"""
Rendering Context

Responsibilities:
- Shapes a resume aggregate into a render tree (placeholders, field order, omitted sections)
- Renders previews (markdown, HTML) and LaTeX documents from the render tree
- Compiles LaTeX to a downloadable PDF

Owns: Presentation rules, document templates, PDF compilation
Never: Reads or writes the resume store
"""

from folio.contexts.rendering.compiler import CompilationResult, compile_latex
from folio.contexts.rendering.exporter import ResumeRenderer, document_filename
from folio.contexts.rendering.render_tree import (
    RenderEntry,
    RenderLink,
    RenderSection,
    RenderTree,
    build_render_tree,
    format_date_range,
    load_presentation_config,
)

__all__ = [
    "CompilationResult",
    "compile_latex",
    "ResumeRenderer",
    "document_filename",
    "RenderEntry",
    "RenderLink",
    "RenderSection",
    "RenderTree",
    "build_render_tree",
    "format_date_range",
    "load_presentation_config",
]
