"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from app.core.config import Settings, get_settings
from app.interfaces.enhancer import BaseDocumentEnhancer
from app.interfaces.exporter import BaseDocumentExporter, BasePrintBackend
from app.interfaces.template import BaseTemplateResolver
from app.strategies.enhancers import OpenAIDocumentEnhancer
from app.strategies.exporters import DocumentExporter, PreviewStore
from app.strategies.template_engine import OverrideTable, PlaceholderResolver

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        settings = get_settings()
        factory = ComponentFactory(settings)

        resolver = factory.get_resolver()
        exporter = factory.get_exporter()
        enhancer = factory.get_enhancer()
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        overrides: OverrideTable | None = None,
        print_backend: BasePrintBackend | None = None,
    ) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
            overrides: Override table for the resolver. Defaults to the built-in one.
            print_backend: Print capability for the exporter. Defaults to the browser.
        """
        self._settings = settings or get_settings()
        self._overrides = overrides
        self._print_backend = print_backend
        self._resolver_cache: BaseTemplateResolver | None = None
        self._preview_store_cache: PreviewStore | None = None
        self._exporter_cache: BaseDocumentExporter | None = None
        self._enhancer_cache: BaseDocumentEnhancer | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_resolver(self) -> BaseTemplateResolver:
        """Get the placeholder resolver."""
        if self._resolver_cache is None:
            logger.info("Instantiating placeholder resolver")
            self._resolver_cache = PlaceholderResolver(self._overrides)
        return self._resolver_cache

    def get_preview_store(self) -> PreviewStore:
        """Get the preview store shared by the exporter and the preview routes."""
        if self._preview_store_cache is None:
            logger.info("Instantiating preview store")
            self._preview_store_cache = PreviewStore(
                base_url=self._settings.preview_base_url,
                ttl_seconds=self._settings.preview_ttl_seconds,
            )
        return self._preview_store_cache

    def get_exporter(self) -> BaseDocumentExporter:
        """Get the document exporter."""
        if self._exporter_cache is None:
            logger.info("Instantiating document exporter")
            self._exporter_cache = DocumentExporter(
                download_dir=self._settings.download_dir,
                previews=self.get_preview_store(),
                print_backend=self._print_backend,
                load_timeout=self._settings.print_load_timeout,
                cleanup_delay=self._settings.print_cleanup_delay,
            )
        return self._exporter_cache

    def get_enhancer(self) -> BaseDocumentEnhancer:
        """Get the AI document enhancer.

        Raises:
            ValueError: If enhancement is disabled or no API key is configured.
        """
        if self._enhancer_cache is None:
            if not self._settings.use_llm_enhancement:
                raise ValueError("AI enhancement is disabled (USE_LLM_ENHANCEMENT=false)")
            if not self._settings.openai_api_key:
                raise ValueError("OPENAI_API_KEY is required for document enhancement")

            logger.info(f"Instantiating document enhancer: openai ({self._settings.llm_chat_model})")
            self._enhancer_cache = OpenAIDocumentEnhancer(
                api_key=self._settings.openai_api_key,
                model=self._settings.llm_chat_model,
                base_url=self._settings.openai_base_url,
            )
        return self._enhancer_cache

    async def shutdown(self) -> None:
        """Wait for pending print teardowns, then clear all cached components.

        An exporter that was never requested is not created.
        """
        if isinstance(self._exporter_cache, DocumentExporter):
            await self._exporter_cache.wait_for_teardowns()
        self.clear_cache()

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        if self._preview_store_cache is not None:
            self._preview_store_cache.clear()
        self._resolver_cache = None
        self._preview_store_cache = None
        self._exporter_cache = None
        self._enhancer_cache = None
        logger.debug("Component factory cache cleared")
