"""Document export strategies."""

from app.strategies.exporters.document_exporter import (
    BrowserPrintBackend,
    DocumentExporter,
    sanitize_filename,
)
from app.strategies.exporters.html import derive_title, render_document_html
from app.strategies.exporters.preview_store import PreviewEntry, PreviewStore
from app.strategies.exporters.surface import RenderingSurface

__all__ = [
    "BrowserPrintBackend",
    "DocumentExporter",
    "PreviewEntry",
    "PreviewStore",
    "RenderingSurface",
    "derive_title",
    "render_document_html",
    "sanitize_filename",
]
