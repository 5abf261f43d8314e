"""Unit tests for package wiring, the component factory and logging setup."""

import asyncio
import logging
import subprocess
import sys
from pathlib import Path

import pytest

from app.core.config import Settings
from app.core.factory import ComponentFactory
from app.core.logging_config import setup_logging

PROJECT_ROOT = Path(__file__).resolve().parents[2]


# =============================================================================
# Import Tests
# =============================================================================


class TestPackageImports:
    """Each public package must import on its own in a fresh interpreter."""

    @pytest.mark.parametrize(
        "module",
        [
            "app.strategies.template_engine",
            "app.strategies.exporters",
            "app.strategies",
            "app.clients",
            "app.core",
            "app.core.factory",
        ],
    )
    def test_imports_in_fresh_interpreter(self, module):
        result = subprocess.run(
            [sys.executable, "-c", f"import {module}"],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0, result.stderr


# =============================================================================
# Component Factory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    @pytest.fixture
    def settings(self, tmp_path):
        return Settings(
            download_dir=tmp_path / "downloads",
            log_dir=tmp_path / "logs",
            openai_api_key="",
        )

    def test_components_are_cached(self, settings):
        factory = ComponentFactory(settings)
        assert factory.get_resolver() is factory.get_resolver()
        assert factory.get_exporter() is factory.get_exporter()
        assert factory.get_exporter().previews is factory.get_preview_store()

    def test_enhancer_requires_api_key(self, settings):
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            ComponentFactory(settings.model_copy(update={"use_llm_enhancement": True})).get_enhancer()

    def test_shutdown_does_not_create_exporter(self, settings):
        factory = ComponentFactory(settings)
        asyncio.run(factory.shutdown())
        assert factory._exporter_cache is None

    def test_shutdown_clears_previews(self, settings):
        factory = ComponentFactory(settings)
        store = factory.get_preview_store()
        store.create("<p>x</p>")
        factory.get_exporter()

        asyncio.run(factory.shutdown())

        assert len(store) == 0
        assert factory._exporter_cache is None


# =============================================================================
# Logging Tests
# =============================================================================


class TestSetupLogging:
    """Test suite for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_handlers(self):
        root = logging.getLogger()
        saved = list(root.handlers)
        yield
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved:
            root.addHandler(handler)

    def test_previous_file_handlers_are_closed(self, tmp_path):
        first = setup_logging(Settings(log_dir=tmp_path / "a", download_dir=tmp_path / "d"))
        old_files = [h for h in first.handlers if isinstance(h, logging.FileHandler)]
        assert len(old_files) == 2

        setup_logging(Settings(log_dir=tmp_path / "b", download_dir=tmp_path / "d"))

        assert all(handler.stream is None for handler in old_files)
        assert not any(handler in logging.getLogger().handlers for handler in old_files)
        assert (tmp_path / "b" / "info.log").exists()
