"""Document export interfaces.

Defines abstract base classes for exporting finished documents and for
the platform print capability the exporters delegate to.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class BasePrintBackend(ABC):
    """Abstract base class for the platform's native print capability."""

    @abstractmethod
    async def print(self, uri: str) -> None:
        """Open the print dialog for a rendered page.

        Args:
            uri: ``file://`` URI of the rendered HTML page.

        Raises:
            RenderingSurfaceError: If the platform cannot show the dialog.
        """


class BaseDocumentExporter(ABC):
    """Abstract base class for document export strategies.

    Every entry point rejects empty or whitespace-only content before
    touching the filesystem or the print backend.
    """

    @abstractmethod
    async def to_print_dialog(self, content: str, title: str = "Document") -> bool:
        """Render the document as a printable page and open the print dialog.

        Returns:
            True once the print dialog has been requested.

        Raises:
            EmptyContentError: If content is blank.
            ExportError: If rendering or printing fails.
        """

    @abstractmethod
    async def to_plain_text(self, content: str, filename: str = "document.txt") -> Path:
        """Write the document to a plain-text download.

        Returns:
            Path of the written file, named after the sanitized filename.

        Raises:
            EmptyContentError: If content is blank.
            ExportError: If the file cannot be written.
        """

    @abstractmethod
    async def to_preview_url(self, content: str, title: str = "Document") -> str:
        """Render the document and register it for preview.

        Returns:
            A short-lived URL. The caller revokes it when done.

        Raises:
            EmptyContentError: If content is blank.
            ExportError: If rendering fails.
        """

    @abstractmethod
    def discard_download(self, path: Path) -> None:
        """Remove a download written by ``to_plain_text``.

        Args:
            path: Path returned by ``to_plain_text``.
        """
