"""OpenAI-based document enhancer.

Uses the chat completions API to turn a filled-in template into a more
complete draft while keeping every supplied detail.
"""

import logging

from openai import AsyncOpenAI, OpenAIError

from app.core.errors import EnhancementError
from app.interfaces.enhancer import BaseDocumentEnhancer

logger = logging.getLogger(__name__)

ENHANCEMENT_SYSTEM_PROMPT = """You are a legal document drafting assistant for {jurisdiction}.
Enhance the provided {document_type} by:
1. Keeping every name, amount, date and address exactly as written
2. Using proper legal language and formatting
3. Adding standard clauses typical for this document type in {jurisdiction}
4. Leaving any remaining bracketed or braced placeholders unchanged

Respond with the enhanced document in plain text only. Keep paragraph breaks
and section headings. Do not add explanations or notes."""


class OpenAIDocumentEnhancer(BaseDocumentEnhancer):
    """Enhancer implementation using OpenAI chat completions.

    Attributes:
        model: The chat model to use.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        temperature: float = 0.2,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the OpenAI enhancer.

        Args:
            api_key: Your OpenAI API key.
            model: The chat model to use.
            base_url: Optional custom base URL for the API.
            temperature: Sampling temperature.
            timeout: Request timeout in seconds.
            client: Pre-built client, mainly for tests.
        """
        self._client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
        )
        self._model = model
        self._temperature = temperature

    async def enhance(
        self,
        document: str,
        *,
        document_type: str,
        jurisdiction: str = "Canada",
    ) -> str:
        """Enhance a document with the configured chat model.

        Raises:
            ValueError: If document is empty.
            OpenAIError: If the API call fails.
            EnhancementError: If the response is empty or unexpected.
        """
        if not document.strip():
            raise ValueError("Cannot enhance empty document")

        system_prompt = ENHANCEMENT_SYSTEM_PROMPT.format(
            document_type=document_type,
            jurisdiction=jurisdiction,
        )
        logger.info(
            f"Enhancing {document_type!r} for {jurisdiction} with {self._model} "
            f"({len(document)} chars)"
        )

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": document},
                ],
                temperature=self._temperature,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error during enhancement: {e}")
            raise EnhancementError(f"Enhancement failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise EnhancementError("AI provider returned an empty document")

        logger.info(f"Enhanced document received: {len(content)} chars")
        return content.strip()

    @property
    def provider(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        """Return the model name."""
        return self._model
