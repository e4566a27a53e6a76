"""
Templating Context

Responsibilities:
- Defines the supported document types and caller preferences
- Manages the Jinja2 template for each document type (types/{type}/template.md.jinja)
- Renders resumes, cover letters and outreach emails from ranked bullets
- Derives skill lists and highlight one-liners from bullets

Owns: Document templates and rendering
Never: Decides which bullets are relevant
"""

from proofoffit.contexts.templating.document_renderer import DocumentRenderer, render_document
from proofoffit.contexts.templating.document_types import (
    DocumentLength,
    DocumentType,
    TailorPreferences,
    Tone,
)
from proofoffit.contexts.templating.exceptions import UnsupportedDocumentTypeError
from proofoffit.contexts.templating.registries import TemplateRegistry

__all__ = [
    "DocumentRenderer",
    "render_document",
    "DocumentLength",
    "DocumentType",
    "TailorPreferences",
    "Tone",
    "UnsupportedDocumentTypeError",
    "TemplateRegistry",
]
