"""Abstract base class for AI document enhancement strategies.

The Strategy Pattern allows different AI providers to rewrite a
substituted document interchangeably.
"""

from abc import ABC, abstractmethod


class BaseDocumentEnhancer(ABC):
    """Abstract base class for document enhancement strategies.

    Example:
        ```python
        class OpenAIDocumentEnhancer(BaseDocumentEnhancer):
            async def enhance(self, document, *, document_type, jurisdiction="Canada"):
                # Call the chat completions API
                pass
        ```
    """

    @abstractmethod
    async def enhance(
        self,
        document: str,
        *,
        document_type: str,
        jurisdiction: str = "Canada",
    ) -> str:
        """Rewrite a filled-in document to be more complete.

        Args:
            document: The substituted document text.
            document_type: Kind of legal document, e.g. "residential lease".
            jurisdiction: Jurisdiction the document is drafted for.

        Returns:
            The enhanced document as plain text.

        Raises:
            ValueError: If document is empty.
            EnhancementError: If the provider returns nothing usable.
        """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Return the provider name recorded with saved documents."""
