"""HTTP clients for the document API."""

from app.clients.api_client import LegalDocsClient

__all__ = [
    "LegalDocsClient",
]
