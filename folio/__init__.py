"""
FOLIO - Form-Oriented Live resume Editor with Ownership

A resume editor backend: persistent multi-section resumes, per-owner access
control, ordered section collections, duplication, preview and PDF export.

Architecture:
- Editing Context: Resume aggregate storage, ownership checks, mutations, duplication
- Rendering Context: Preview and document generation from a resume aggregate
"""

__version__ = "0.1.0"
