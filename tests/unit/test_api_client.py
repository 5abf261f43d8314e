"""Unit tests for the document API client."""

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from app.clients import LegalDocsClient
from app.clients.api_client import wait_jittered_exponential
from app.core.config import Settings
from app.core.errors import ApiError

TEMPLATE = {
    "id": 1,
    "title": "Residential Lease",
    "templateType": "real-estate",
    "templateContent": "Rent is [RENT AMOUNT] due on the [DUE DAY]",
    "fields": [
        {"name": "rentAmount", "label": "Rent Amount", "type": "number", "required": True},
        {"name": "dueDay", "label": "Due Day", "type": "text", "required": True},
    ],
}


class RecordingHandler:
    """MockTransport handler returning queued responses and recording requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def make_client(handler, **kwargs) -> LegalDocsClient:
    kwargs.setdefault("retry_delay", 0)
    return LegalDocsClient(
        "http://api.test/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# Retry Tests
# =============================================================================


class TestRequestRetries:
    """Test suite for retry behavior of LegalDocsClient.request."""

    def test_success_decodes_json(self):
        handler = RecordingHandler(httpx.Response(200, json={"ok": True}))

        async def run_test():
            async with make_client(handler) as client:
                return await client.request("get", "/health")

        assert run(run_test()) == {"ok": True}
        assert handler.requests[0].method == "GET"
        assert str(handler.requests[0].url) == "http://api.test/health"

    def test_retries_server_error_then_succeeds(self):
        handler = RecordingHandler(
            httpx.Response(500, json={"message": "boom"}),
            httpx.Response(200, json={"id": 5}),
        )

        async def run_test():
            async with make_client(handler, retries=1) as client:
                return await client.request("POST", "/api/documents", {"documentTitle": "x"})

        assert run(run_test()) == {"id": 5}
        assert len(handler.requests) == 2
        assert json.loads(handler.requests[1].content) == {"documentTitle": "x"}

    def test_network_error_exhausts_retries(self):
        handler = RecordingHandler(httpx.ConnectError("connection refused"))

        async def run_test():
            async with make_client(handler, retries=2) as client:
                await client.request("GET", "/api/document-templates/1")

        with pytest.raises(ApiError) as exc_info:
            run(run_test())

        error = exc_info.value
        assert error.status == 0
        assert error.is_network_error
        assert error.message.startswith("Network error")
        assert error.request_id == "GET /api/document-templates/1"
        assert len(handler.requests) == 3

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    def test_client_errors_are_not_retried(self, status):
        handler = RecordingHandler(httpx.Response(status, json={"detail": "nope"}))

        async def run_test():
            async with make_client(handler, retries=3) as client:
                await client.request("GET", "/api/documents/1")

        with pytest.raises(ApiError) as exc_info:
            run(run_test())

        assert exc_info.value.status == status
        assert exc_info.value.message == "nope"
        assert exc_info.value.is_auth_error == (status in (401, 403))
        assert len(handler.requests) == 1

    def test_per_call_retries_override(self):
        handler = RecordingHandler(httpx.Response(503, text="unavailable"))

        async def run_test():
            async with make_client(handler, retries=5) as client:
                await client.request("GET", "/health", retries=0)

        with pytest.raises(ApiError) as exc_info:
            run(run_test())

        assert exc_info.value.is_server_error
        assert exc_info.value.message == "unavailable"
        assert len(handler.requests) == 1

    def test_error_string_names_request(self):
        handler = RecordingHandler(httpx.Response(404, json={"message": "Template not found"}))

        async def run_test():
            async with make_client(handler) as client:
                await client.request("GET", "/api/document-templates/99")

        with pytest.raises(ApiError, match=r"GET /api/document-templates/99 failed \(404\): Template not found"):
            run(run_test())

    def test_empty_and_text_bodies(self):
        handler = RecordingHandler(
            httpx.Response(204),
            httpx.Response(200, text="plain", headers={"content-type": "text/plain"}),
        )

        async def run_test():
            async with make_client(handler) as client:
                return (
                    await client.request("DELETE", "/api/previews/abc"),
                    await client.request("GET", "/robots.txt"),
                )

        assert run(run_test()) == ({}, "plain")


# =============================================================================
# Backoff Tests
# =============================================================================


class TestBackoff:
    """The jitter scales the exponential delay by a factor in [0.9, 1.1]."""

    @pytest.mark.parametrize("factor, expected", [(0.9, 4.05), (1.1, 4.95)])
    def test_jitter_bounds_are_multiplicative(self, monkeypatch, factor, expected):
        seen = []

        def fake_uniform(low, high):
            seen.append((low, high))
            return factor

        monkeypatch.setattr("app.clients.api_client.random.uniform", fake_uniform)

        wait = wait_jittered_exponential(2.0)
        assert wait(SimpleNamespace(attempt_number=3)) == pytest.approx(expected)
        assert seen == [(pytest.approx(0.9), pytest.approx(1.1))]

    def test_delay_stays_within_ten_percent(self):
        wait = wait_jittered_exponential(0.2)
        for attempt in range(1, 6):
            base = 0.2 * 1.5 ** (attempt - 1)
            value = wait(SimpleNamespace(attempt_number=attempt))
            assert base * 0.9 - 1e-9 <= value <= base * 1.1 + 1e-9


# =============================================================================
# Convenience Method Tests
# =============================================================================


class TestConvenienceMethods:
    """Test suite for the template and document helpers."""

    def test_from_settings(self):
        settings = Settings(
            api_base_url="http://configured.test/",
            api_retries=4,
            api_retry_delay=0.5,
            download_dir="/tmp",
        )
        client = LegalDocsClient.from_settings(settings)
        assert client._retries == 4
        assert client._retry_delay == 0.5
        run(client.aclose())

    def test_list_templates_passes_filters(self):
        handler = RecordingHandler(httpx.Response(200, json=[TEMPLATE]))

        async def run_test():
            async with make_client(handler) as client:
                return await client.list_templates("fr", "real-estate")

        templates = run(run_test())
        assert templates[0].title == "Residential Lease"
        assert handler.requests[0].url.params["language"] == "fr"
        assert handler.requests[0].url.params["type"] == "real-estate"

    def test_generate_document_resolves_and_saves(self):
        handler = RecordingHandler(
            httpx.Response(200, json=TEMPLATE),
            httpx.Response(201, json={"id": 10}),
        )

        async def run_test():
            async with make_client(handler) as client:
                return await client.generate_document(
                    7, 1, "My Lease", {"rentAmount": "1200", "dueDay": "1st"}
                )

        assert run(run_test()) == {"id": 10}

        saved = json.loads(handler.requests[1].content)
        assert handler.requests[1].url.path == "/api/documents"
        assert saved == {
            "userId": 7,
            "templateId": 1,
            "documentTitle": "My Lease",
            "documentContent": "Rent is 1200 due on the 1st",
            "documentData": {"rentAmount": "1200", "dueDay": "1st"},
        }

    def test_generate_enhanced_returns_content(self):
        handler = RecordingHandler(httpx.Response(200, json={"content": "Enhanced"}))

        async def run_test():
            async with make_client(handler) as client:
                return await client.generate_enhanced(
                    "Dear {{name}}", {"name": "Jane"}, "demand letter", title="Letter", save_document=True
                )

        assert run(run_test()) == "Enhanced"
        payload = json.loads(handler.requests[0].content)
        assert payload["formData"] == {"name": "Jane"}
        assert payload["documentType"] == "demand letter"
        assert payload["saveDocument"] is True
        assert payload["title"] == "Letter"
        assert "jurisdiction" not in payload

    def test_health_check(self):
        async def check(handler):
            async with make_client(handler, retries=3) as client:
                return await client.health_check()

        assert run(check(RecordingHandler(httpx.Response(200, json={"status": "healthy"})))) is True

        failing = RecordingHandler(httpx.Response(500))
        assert run(check(failing)) is False
        assert len(failing.requests) == 1
