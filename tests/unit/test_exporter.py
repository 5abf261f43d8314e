"""Unit tests for the document export pipeline."""

import asyncio
from datetime import date
from pathlib import Path

import pytest

from app.core.errors import EmptyContentError, ExportError, RenderingSurfaceError
from app.interfaces.exporter import BasePrintBackend
from app.strategies.exporters import (
    DocumentExporter,
    PreviewStore,
    RenderingSurface,
    derive_title,
    render_document_html,
    sanitize_filename,
)
from app.strategies.exporters.html import format_long_date


class RecordingPrintBackend(BasePrintBackend):
    """Print backend that records the page it was asked to print."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.printed: list[str] = []
        self.pages: list[str] = []

    async def print(self, uri: str) -> None:
        if self.fail:
            raise RenderingSurfaceError("printer unavailable")
        self.printed.append(uri)
        page = Path(uri.removeprefix("file://"))
        self.pages.append(page.read_text(encoding="utf-8") if page.exists() else "")


class SlowSurface(RenderingSurface):
    """Surface whose load never completes within the safety timeout."""

    async def write(self, html: str) -> None:
        await asyncio.sleep(0.5)
        await super().write(html)


# =============================================================================
# HTML Rendering Tests
# =============================================================================


class TestHtmlRendering:
    """Test suite for the printable page."""

    def test_format_long_date(self):
        assert format_long_date(date(2026, 10, 18)) == "October 18, 2026"

    def test_derive_title_prefers_markdown_heading(self):
        assert derive_title("# Residential Lease\n\nBody", "lease.txt") == "Residential Lease"

    def test_derive_title_strips_extension(self):
        assert derive_title("Body", "Demand Letter.pdf") == "Demand Letter"
        assert derive_title("Body", "notes.v2") == "notes.v2"

    def test_derive_title_default(self):
        assert derive_title("Body", "") == "Document"
        assert derive_title("Body", None) == "Document"

    def test_render_escapes_content(self):
        html = render_document_html(
            "Terms <b>bold</b> & more",
            "A <Title>",
            generated_on=date(2026, 10, 18),
        )
        assert "Terms &lt;b&gt;bold&lt;/b&gt; &amp; more" in html
        assert "A &lt;Title&gt;" in html
        assert "October 18, 2026" in html
        assert "Generated by Legal Document Engine" in html
        assert "window.print()" not in html

    def test_render_auto_print_and_no_footer(self):
        html = render_document_html("Body", "Title", auto_print=True, footer=None)
        assert "window.print()" in html
        assert "document-footer\">" not in html


# =============================================================================
# Rendering Surface Tests
# =============================================================================


class TestRenderingSurface:
    """Test suite for RenderingSurface."""

    def test_attach_write_detach(self, tmp_path):
        async def run_test():
            surface = RenderingSurface(tmp_path)
            surface.attach()
            await surface.write("<p>hi</p>")

            assert surface.loaded.is_set()
            assert surface.path.read_text(encoding="utf-8") == "<p>hi</p>"
            assert surface.uri.startswith("file://")

            surface.detach()
            surface.detach()
            assert not surface.attached
            assert list(tmp_path.iterdir()) == []

        asyncio.run(run_test())

    def test_path_requires_attach(self, tmp_path):
        with pytest.raises(RenderingSurfaceError):
            RenderingSurface(tmp_path).path


# =============================================================================
# Exporter Tests
# =============================================================================


class TestDocumentExporter:
    """Test suite for DocumentExporter."""

    @pytest.fixture
    def surface_dir(self, tmp_path):
        path = tmp_path / "surfaces"
        path.mkdir()
        return path

    @pytest.fixture
    def download_dir(self, tmp_path):
        return tmp_path / "downloads"

    @pytest.fixture
    def previews(self):
        return PreviewStore("http://testserver", ttl_seconds=60)

    @pytest.fixture
    def backend(self):
        return RecordingPrintBackend()

    @pytest.fixture
    def exporter(self, download_dir, previews, backend, surface_dir):
        return DocumentExporter(
            download_dir=download_dir,
            previews=previews,
            print_backend=backend,
            load_timeout=5.0,
            cleanup_delay=0,
            surface_dir=surface_dir,
        )

    # =========================================================================
    # Filename Tests
    # =========================================================================

    def test_sanitize_filename(self):
        assert sanitize_filename("my:doc?.txt") == "my_doc_.txt"
        assert sanitize_filename('a<b>c"d/e\\f|g*h.txt') == "a_b_c_d_e_f_g_h.txt"
        assert sanitize_filename("") == "document.txt"
        assert sanitize_filename("..") == "document.txt"

    # =========================================================================
    # Print Tests
    # =========================================================================

    def test_print_renders_page_and_tears_down(self, exporter, backend, surface_dir):
        async def run_test():
            result = await exporter.to_print_dialog("# Lease\n\nRent is 1200", "lease.txt")
            assert result is True
            assert len(backend.printed) == 1
            assert "<title>Lease</title>" in backend.pages[0]
            assert "window.print()" in backend.pages[0]

            await exporter.wait_for_teardowns()
            assert list(surface_dir.iterdir()) == []

        asyncio.run(run_test())

    def test_print_empty_content_creates_nothing(self, exporter, backend, surface_dir):
        async def run_test():
            with pytest.raises(EmptyContentError, match="empty"):
                await exporter.to_print_dialog("", "Title")
            with pytest.raises(EmptyContentError):
                await exporter.to_print_dialog("   \n", "Title")

        asyncio.run(run_test())
        assert backend.printed == []
        assert list(surface_dir.iterdir()) == []

    def test_print_failure_wraps_error_and_detaches(self, download_dir, previews, surface_dir):
        exporter = DocumentExporter(
            download_dir=download_dir,
            previews=previews,
            print_backend=RecordingPrintBackend(fail=True),
            surface_dir=surface_dir,
        )

        async def run_test():
            with pytest.raises(ExportError, match="Print failed: printer unavailable"):
                await exporter.to_print_dialog("Body", "Title")

        asyncio.run(run_test())
        assert list(surface_dir.iterdir()) == []

    def test_print_proceeds_after_safety_timeout(
        self, download_dir, previews, backend, surface_dir, monkeypatch
    ):
        monkeypatch.setattr(
            "app.strategies.exporters.document_exporter.RenderingSurface",
            SlowSurface,
        )
        exporter = DocumentExporter(
            download_dir=download_dir,
            previews=previews,
            print_backend=backend,
            load_timeout=0.05,
            cleanup_delay=0,
            surface_dir=surface_dir,
        )

        async def run_test():
            assert await exporter.to_print_dialog("Body", "Title") is True
            await exporter.wait_for_teardowns()

        asyncio.run(run_test())
        assert len(backend.printed) == 1
        assert list(surface_dir.iterdir()) == []

    # =========================================================================
    # Plain Text Tests
    # =========================================================================

    def test_plain_text_sanitizes_name(self, exporter, download_dir):
        path = asyncio.run(exporter.to_plain_text("Hello", "my:doc?.txt"))

        assert path.name == "my_doc_.txt"
        assert path.parent.parent == download_dir
        assert path.read_text(encoding="utf-8") == "Hello"
        assert [p.name for p in path.parent.iterdir()] == ["my_doc_.txt"]

    def test_plain_text_same_name_exports_are_isolated(self, exporter, download_dir):
        """Test that concurrent exports with one filename keep their own files."""

        async def run_test():
            return await asyncio.gather(
                exporter.to_plain_text("ALICE lease", "document.txt"),
                exporter.to_plain_text("BOB lease", "document.txt"),
            )

        alice, bob = asyncio.run(run_test())

        assert alice != bob
        assert alice.name == bob.name == "document.txt"
        assert alice.read_text(encoding="utf-8") == "ALICE lease"
        assert bob.read_text(encoding="utf-8") == "BOB lease"

        exporter.discard_download(alice)
        assert not alice.parent.exists()
        assert bob.read_text(encoding="utf-8") == "BOB lease"

        exporter.discard_download(bob)
        assert list(download_dir.iterdir()) == []

    def test_discard_download_outside_call_dir(self, exporter, tmp_path):
        stray = tmp_path / "stray.txt"
        stray.write_text("x")
        exporter.discard_download(stray)
        assert not stray.exists()
        assert tmp_path.exists()

    def test_plain_text_preserves_unicode_and_newlines(self, exporter):
        content = "Bail résidentiel\r\nLoyer: 1 200 $\n"
        path = asyncio.run(exporter.to_plain_text(content))
        assert path.name == "document.txt"
        assert path.read_bytes() == content.encode("utf-8")

    def test_plain_text_empty_content(self, exporter, download_dir):
        with pytest.raises(EmptyContentError):
            asyncio.run(exporter.to_plain_text("", "empty.txt"))
        assert not download_dir.exists() or list(download_dir.iterdir()) == []

    @pytest.mark.parametrize("content", [None, 42, b"bytes"])
    def test_non_string_content_is_a_type_error(self, exporter, download_dir, surface_dir, content):
        async def run_test():
            with pytest.raises(TypeError, match="must be a string"):
                await exporter.to_plain_text(content)
            with pytest.raises(TypeError, match="must be a string"):
                await exporter.to_print_dialog(content)
            with pytest.raises(TypeError, match="must be a string"):
                await exporter.to_preview_url(content)

        asyncio.run(run_test())
        assert not download_dir.exists()
        assert list(surface_dir.iterdir()) == []

    def test_plain_text_write_failure(self, previews, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        exporter = DocumentExporter(download_dir=blocker, previews=previews)

        with pytest.raises(ExportError, match="Failed to export as text"):
            asyncio.run(exporter.to_plain_text("Hello", "doc.txt"))

    # =========================================================================
    # Preview Tests
    # =========================================================================

    def test_preview_url_registers_page(self, exporter, previews):
        url = asyncio.run(exporter.to_preview_url("Body text", "Notice.pdf"))

        assert url.startswith("http://testserver/api/previews/")
        entry = previews.get(url.rsplit("/", 1)[-1])
        assert entry is not None
        assert entry.media_type == "text/html"
        assert "<title>Notice</title>" in entry.content
        assert "window.print()" not in entry.content

        assert previews.revoke(url) is True
        assert len(previews) == 0

    def test_preview_empty_content(self, exporter, previews):
        with pytest.raises(EmptyContentError):
            asyncio.run(exporter.to_preview_url("", "Title"))
        assert len(previews) == 0


# =============================================================================
# Preview Store Tests
# =============================================================================


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestPreviewStore:
    """Test suite for PreviewStore."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def store(self, clock):
        return PreviewStore("http://example.com/", ttl_seconds=30, clock=clock)

    def test_url_for(self, store):
        assert store.url_for("abc") == "http://example.com/api/previews/abc"

    def test_entries_expire(self, store, clock):
        entry = store.create("<p>x</p>")
        assert entry.expires_at == 1030.0
        assert store.get(entry.token) == entry

        clock.now = 1030.0
        assert store.get(entry.token) is None
        assert len(store) == 0

    def test_purge_expired(self, store, clock):
        store.create("a")
        clock.now = 1015.0
        store.create("b")
        clock.now = 1031.0

        assert store.purge_expired() == 1
        assert len(store) == 1

    def test_revoke_unknown(self, store):
        assert store.revoke("missing") is False

    def test_clear(self, store):
        store.create("a")
        store.create("b")
        store.clear()
        assert len(store) == 0
