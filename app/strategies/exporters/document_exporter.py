"""Document exporter strategy.

Prints, downloads and previews finished documents. All three entry points
share content validation and HTML rendering.
"""

import asyncio
import logging
import os
import re
import shutil
import tempfile
import webbrowser
from pathlib import Path

from app.core.errors import EmptyContentError, ExportError, RenderingSurfaceError
from app.interfaces.exporter import BaseDocumentExporter, BasePrintBackend
from app.strategies.exporters.html import DEFAULT_FOOTER, derive_title, render_document_html
from app.strategies.exporters.preview_store import PreviewStore
from app.strategies.exporters.surface import RenderingSurface

logger = logging.getLogger(__name__)

_ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_DOWNLOAD_DIR_PREFIX = "export-"


def sanitize_filename(filename: str, default: str = "document.txt") -> str:
    """Replace characters that are illegal in file paths with ``_``.

    ``"my:doc?.txt"`` becomes ``"my_doc_.txt"``.
    """
    sanitized = _ILLEGAL_FILENAME_CHARS.sub("_", filename or "").strip()
    if sanitized in ("", ".", ".."):
        return default
    return sanitized


def ensure_content(content: str, action: str) -> None:
    """Reject blank content before any side effect.

    Raises:
        TypeError: If content is not a string.
        EmptyContentError: If content is empty or whitespace-only.
    """
    if not isinstance(content, str):
        raise TypeError(f"Cannot {action}: document content must be a string, got {type(content).__name__}")
    if not content.strip():
        raise EmptyContentError(f"Cannot {action}: document content is empty")


class BrowserPrintBackend(BasePrintBackend):
    """Opens the rendered page in the system browser.

    The page calls ``window.print()`` on load, which raises the native
    print dialog.
    """

    async def print(self, uri: str) -> None:
        opened = await asyncio.to_thread(webbrowser.open, uri, 2)
        if not opened:
            raise RenderingSurfaceError("No web browser is available to open the print dialog")
        logger.info(f"Opened print page in browser: {uri}")


class DocumentExporter(BaseDocumentExporter):
    """Consolidated print, plain-text and preview exporter.

    Attributes:
        download_dir: Directory plain-text exports are written to.
        previews: Store that backs preview URLs.
    """

    def __init__(
        self,
        download_dir: Path,
        previews: PreviewStore,
        print_backend: BasePrintBackend | None = None,
        load_timeout: float = 1.5,
        cleanup_delay: float = 1.0,
        surface_dir: Path | None = None,
        footer: str | None = DEFAULT_FOOTER,
    ) -> None:
        """Initialize the exporter.

        Args:
            download_dir: Directory plain-text exports are written to.
            previews: Store that backs preview URLs.
            print_backend: Print capability. Defaults to the system browser.
            load_timeout: Safety timeout while waiting for the surface to load.
            cleanup_delay: Seconds before a printed surface is torn down.
            surface_dir: Parent directory for rendering surfaces.
            footer: Footer printed on each page.
        """
        self.download_dir = Path(download_dir)
        self.previews = previews
        self._print_backend = print_backend or BrowserPrintBackend()
        self._load_timeout = load_timeout
        self._cleanup_delay = cleanup_delay
        self._surface_dir = surface_dir
        self._footer = footer
        self._teardowns: set[asyncio.Task[None]] = set()

    async def to_print_dialog(self, content: str, title: str = "Document") -> bool:
        """Render the document on a hidden surface and open the print dialog.

        Waits for the surface to signal ``loaded`` or for the safety timeout,
        whichever comes first. The surface is removed after ``cleanup_delay``
        so the dialog can capture the page before it disappears.

        Args:
            content: Final document text.
            title: Title printed in the page header.

        Returns:
            True once the print dialog has been requested.

        Raises:
            EmptyContentError: If content is blank. No surface is created.
            ExportError: If the surface or the print backend fails.
        """
        ensure_content(content, "print document")

        page_title = derive_title(content, title)
        logger.info(f"Preparing to print document: {page_title!r} ({len(content)} chars)")

        surface = RenderingSurface(self._surface_dir)
        try:
            surface.attach()
            html = render_document_html(content, page_title, auto_print=True, footer=self._footer)

            load = asyncio.create_task(surface.write(html))
            try:
                await asyncio.wait_for(asyncio.shield(load), timeout=self._load_timeout)
            except TimeoutError:
                logger.warning("Print surface safety timeout reached - proceeding anyway")
                load.add_done_callback(_log_failed_load)

            await self._print_backend.print(surface.uri)

        except Exception as e:
            logger.error(f"Print failed for {page_title!r}: {e}", exc_info=True)
            if surface.attached:
                surface.detach()
            raise ExportError(f"Print failed: {e}") from e

        self._schedule_teardown(surface)
        return True

    async def to_plain_text(self, content: str, filename: str = "document.txt") -> Path:
        """Write the document as a UTF-8 ``.txt`` download.

        Each call writes into its own directory under ``download_dir``, so
        concurrent exports with the same filename never share a file. The
        text goes to a temporary file that is atomically renamed to the
        sanitized filename. Release the download with ``discard_download``.

        Args:
            content: Final document text.
            filename: Requested filename. Illegal characters become ``_``.

        Returns:
            Path of the written file, named after the sanitized filename.

        Raises:
            TypeError: If content is not a string.
            EmptyContentError: If content is blank. Nothing is written.
            ExportError: If the file cannot be written.
        """
        ensure_content(content, "export text")

        safe_name = sanitize_filename(filename)
        logger.info(f"Exporting text file {safe_name!r} with {len(content)} characters")

        try:
            target = await asyncio.to_thread(self._write_download, safe_name, content)
        except OSError as e:
            logger.error(f"Text export of {safe_name!r} failed: {e}", exc_info=True)
            raise ExportError(f"Failed to export as text: {e}") from e

        logger.info(f"Text export of {safe_name!r} completed successfully")
        return target

    async def to_preview_url(self, content: str, title: str = "Document") -> str:
        """Render the print page without auto-print and register it for preview.

        Args:
            content: Final document text.
            title: Title shown in the page header.

        Returns:
            Preview URL. Revoke it with ``previews.revoke(url)``.

        Raises:
            EmptyContentError: If content is blank.
            ExportError: If rendering fails.
        """
        ensure_content(content, "preview document")

        page_title = derive_title(content, title)
        try:
            html = render_document_html(content, page_title, footer=self._footer)
        except Exception as e:
            logger.error(f"Preview rendering failed for {page_title!r}: {e}", exc_info=True)
            raise ExportError(f"Preview generation failed: {e}") from e

        entry = self.previews.create(html, media_type="text/html")
        return self.previews.url_for(entry.token)

    async def wait_for_teardowns(self) -> None:
        """Wait for every scheduled surface teardown to finish."""
        if self._teardowns:
            await asyncio.gather(*self._teardowns, return_exceptions=True)

    def _schedule_teardown(self, surface: RenderingSurface) -> None:
        task = asyncio.create_task(self._teardown_later(surface))
        self._teardowns.add(task)
        task.add_done_callback(self._teardowns.discard)

    async def _teardown_later(self, surface: RenderingSurface) -> None:
        try:
            await asyncio.sleep(self._cleanup_delay)
        finally:
            surface.detach()

    def discard_download(self, path: Path) -> None:
        """Remove a file returned by ``to_plain_text`` along with its directory."""
        path = Path(path)
        call_dir = path.parent
        if call_dir.parent.resolve() == self.download_dir.resolve() and call_dir.name.startswith(
            _DOWNLOAD_DIR_PREFIX
        ):
            shutil.rmtree(call_dir, ignore_errors=True)
        else:
            path.unlink(missing_ok=True)
        logger.debug(f"Discarded text export {path}")

    def _write_download(self, safe_name: str, content: str) -> Path:
        self.download_dir.mkdir(parents=True, exist_ok=True)
        call_dir = Path(tempfile.mkdtemp(prefix=_DOWNLOAD_DIR_PREFIX, dir=self.download_dir))
        target = call_dir / safe_name
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".download-", suffix=".part", dir=call_dir)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            shutil.rmtree(call_dir, ignore_errors=True)
            raise
        return target


def _log_failed_load(task: asyncio.Task[None]) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.warning(f"Late print surface write failed: {task.exception()}")
