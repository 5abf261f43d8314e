"""Async client for the legal document API.

Wraps ``httpx.AsyncClient`` with bounded retries for transient failures.
Network errors and 5xx responses are retried with exponential backoff and
jitter. Auth failures (401/403) and other 4xx responses fail immediately.
"""

import json
import logging
import random
from collections.abc import Mapping
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
)
from tenacity.wait import wait_base

from app.core.config import Settings, get_settings
from app.core.errors import ApiError
from app.interfaces.template import BaseTemplateResolver
from app.strategies.template_engine.models import DocumentTemplate
from app.strategies.template_engine.resolver import PlaceholderResolver

logger = logging.getLogger(__name__)

BACKOFF_BASE = 1.5
JITTER_RATIO = 0.1


class wait_jittered_exponential(wait_base):
    """Wait ``delay * 1.5**(attempt - 1)`` scaled by a random factor in ``[0.9, 1.1]``."""

    def __init__(self, delay: float, exp_base: float = BACKOFF_BASE, jitter: float = JITTER_RATIO) -> None:
        self.delay = delay
        self.exp_base = exp_base
        self.jitter = jitter

    def __call__(self, retry_state: RetryCallState) -> float:
        backoff = self.delay * self.exp_base ** (retry_state.attempt_number - 1)
        return max(0.0, backoff * random.uniform(1 - self.jitter, 1 + self.jitter))


def _is_transient(error: BaseException) -> bool:
    return isinstance(error, ApiError) and error.is_transient


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    """Extract a readable message and the decoded body from an error response."""
    try:
        data = response.json()
    except ValueError:
        text = response.text
        return (text or response.reason_phrase or "Unknown error"), text or None

    if isinstance(data, Mapping):
        for key in ("message", "error", "detail"):
            if isinstance(data.get(key), str) and data[key]:
                return data[key], data
    return json.dumps(data), data


def _decode(response: httpx.Response) -> Any:
    if "application/json" in response.headers.get("content-type", ""):
        return response.json()
    text = response.text
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return text


class LegalDocsClient:
    """HTTP client for templates, documents and enhanced generation.

    Example:
        ```python
        async with LegalDocsClient.from_settings() as client:
            template = await client.get_template(1)
            saved = await client.generate_document(7, 1, "Lease", {"rentAmount": "1200"})
        ```
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        retries: int = 1,
        retry_delay: float = 1.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        resolver: BaseTemplateResolver | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the document API.
            timeout: Per-request timeout in seconds.
            retries: Default retries after the first attempt.
            retry_delay: Default base delay for backoff, in seconds.
            headers: Extra headers sent with every request (e.g. Authorization).
            transport: Custom httpx transport, mainly for tests.
            resolver: Placeholder resolver used by ``generate_document``.
        """
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=dict(headers or {}),
            transport=transport,
        )
        self._retries = retries
        self._retry_delay = retry_delay
        self._resolver = resolver or PlaceholderResolver()

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "LegalDocsClient":
        settings = settings or get_settings()
        return cls(
            settings.api_base_url,
            timeout=settings.api_timeout,
            retries=settings.api_retries,
            retry_delay=settings.api_retry_delay,
            **kwargs,
        )

    async def __aenter__(self) -> "LegalDocsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # =========================================================================
    # Core request
    # =========================================================================

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        *,
        retries: int | None = None,
        retry_delay: float | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send a request, retrying transient failures.

        Args:
            method: HTTP method.
            url: Path relative to the base URL, or an absolute URL.
            body: JSON-serializable request body.
            retries: Retries after the first attempt. Defaults to the client setting.
            retry_delay: Base backoff delay in seconds. Defaults to the client setting.
            params: Query parameters.

        Returns:
            Decoded JSON, the text body, or ``{}`` for an empty body.

        Raises:
            ApiError: The last error once retries are exhausted, or the first
                non-transient error. ``request_id`` names the request.
        """
        method = method.upper()
        retries = self._retries if retries is None else retries
        delay = self._retry_delay if retry_delay is None else retry_delay

        logger.debug(
            f"API request: {method} {url}"
            + (f" body fields={sorted(body)}" if isinstance(body, Mapping) else "")
        )

        def log_retry(state: RetryCallState) -> None:
            error = state.outcome.exception() if state.outcome else None
            logger.warning(
                f"Retry attempt {state.attempt_number}/{retries} for {method} {url} "
                f"after error: {error}"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(retries + 1),
            wait=wait_jittered_exponential(delay),
            retry=retry_if_exception(_is_transient),
            before_sleep=log_retry,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    result = await self._send(method, url, body, params)
        except ApiError as e:
            logger.error(f"API request failed: {e}")
            raise

        logger.debug(f"API success: {method} {url}")
        return result

    async def _send(
        self,
        method: str,
        url: str,
        body: Any,
        params: Mapping[str, Any] | None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                url,
                json=body,
                params=params,
            )
        except httpx.TransportError as e:
            raise ApiError(0, f"Network error: {e}", method=method, url=url) from e

        if response.is_error:
            message, data = _error_message(response)
            raise ApiError(response.status_code, message, data, method=method, url=url)

        return _decode(response)

    # =========================================================================
    # Templates and documents
    # =========================================================================

    async def get_template(self, template_id: int) -> DocumentTemplate:
        """Fetch one template (``GET /api/document-templates/{id}``)."""
        data = await self.request("GET", f"/api/document-templates/{template_id}")
        return DocumentTemplate.model_validate(data)

    async def list_templates(
        self,
        language: str = "en",
        template_type: str | None = None,
    ) -> list[DocumentTemplate]:
        """List templates, optionally filtered by type."""
        params: dict[str, Any] = {"language": language}
        if template_type:
            params["type"] = template_type
        data = await self.request("GET", "/api/document-templates", params=params)
        return [DocumentTemplate.model_validate(item) for item in data]

    async def save_document(
        self,
        user_id: int | None,
        template_id: int | None,
        document_title: str,
        document_content: str,
        document_data: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Persist a generated document (``POST /api/documents``)."""
        return await self.request(
            "POST",
            "/api/documents",
            {
                "userId": user_id,
                "templateId": template_id,
                "documentTitle": document_title,
                "documentContent": document_content,
                "documentData": dict(document_data or {}),
            },
        )

    async def generate_document(
        self,
        user_id: int | None,
        template_id: int,
        document_title: str,
        document_data: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Fetch a template, fill it in locally and save the result."""
        template = await self.get_template(template_id)
        content = self._resolver.resolve(
            template.template_content,
            document_data,
            template.id,
            fields=template.fields,
        )
        return await self.save_document(
            user_id,
            template.id,
            document_title,
            content,
            document_data,
        )

    async def generate_enhanced(
        self,
        template: str,
        form_data: Mapping[str, Any],
        document_type: str,
        jurisdiction: str | None = None,
        save_document: bool = False,
        title: str | None = None,
    ) -> str:
        """Ask the server for an AI-enhanced document (``POST /api/documents/enhanced``)."""
        payload: dict[str, Any] = {
            "template": template,
            "formData": dict(form_data),
            "documentType": document_type,
            "saveDocument": save_document,
        }
        if jurisdiction:
            payload["jurisdiction"] = jurisdiction
        if title:
            payload["title"] = title

        data = await self.request("POST", "/api/documents/enhanced", payload)
        return data["content"]

    async def health_check(self) -> bool:
        """Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            await self.request("GET", "/health", retries=0)
            return True
        except ApiError:
            return False
