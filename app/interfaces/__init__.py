"""Abstract base classes for document generation strategies."""

from app.interfaces.enhancer import BaseDocumentEnhancer
from app.interfaces.exporter import BaseDocumentExporter, BasePrintBackend
from app.interfaces.template import BaseTemplateResolver

__all__ = [
    "BaseDocumentEnhancer",
    "BaseDocumentExporter",
    "BasePrintBackend",
    "BaseTemplateResolver",
]
