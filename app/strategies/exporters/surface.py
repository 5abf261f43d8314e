"""Off-screen rendering surface for printable documents.

A surface is a private temporary directory holding one HTML page. Each
export call owns its own surface and tears it down when finished.
"""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path

from app.core.errors import RenderingSurfaceError

logger = logging.getLogger(__name__)


class RenderingSurface:
    """Hidden HTML page used to format content before printing.

    Attributes:
        loaded: Set once the page has been fully written.
    """

    def __init__(self, parent_dir: Path | None = None, filename: str = "document.html") -> None:
        """Initialize a detached surface.

        Args:
            parent_dir: Where to create the surface. Defaults to the system temp dir.
            filename: Name of the HTML page inside the surface.
        """
        self._parent_dir = parent_dir
        self._filename = filename
        self._dir: Path | None = None
        self.loaded = asyncio.Event()

    @property
    def attached(self) -> bool:
        return self._dir is not None and self._dir.exists()

    @property
    def path(self) -> Path:
        if self._dir is None:
            raise RenderingSurfaceError("Rendering surface is not attached")
        return self._dir / self._filename

    @property
    def uri(self) -> str:
        return self.path.resolve().as_uri()

    def attach(self) -> Path:
        """Create the backing directory.

        Raises:
            RenderingSurfaceError: If the directory cannot be created.
        """
        try:
            self._dir = Path(tempfile.mkdtemp(prefix="print-surface-", dir=self._parent_dir))
        except OSError as e:
            raise RenderingSurfaceError(f"Could not create rendering surface: {e}") from e
        logger.debug(f"Attached rendering surface at {self._dir}")
        return self._dir

    async def write(self, html: str) -> None:
        """Write the page and signal ``loaded``.

        Raises:
            RenderingSurfaceError: If the surface is detached or the write fails.
        """
        path = self.path
        try:
            await asyncio.to_thread(path.write_text, html, "utf-8")
        except OSError as e:
            raise RenderingSurfaceError(f"Could not write to rendering surface: {e}") from e
        self.loaded.set()
        logger.debug(f"Rendering surface loaded ({len(html)} chars)")

    def detach(self) -> None:
        """Remove the backing directory. Safe to call more than once."""
        if self._dir is None:
            return
        shutil.rmtree(self._dir, ignore_errors=True)
        logger.debug(f"Detached rendering surface at {self._dir}")
        self._dir = None
