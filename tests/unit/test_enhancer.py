"""Unit tests for the OpenAI document enhancer."""

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from app.core.errors import EnhancementError
from app.strategies.enhancers import OpenAIDocumentEnhancer


class FakeCompletions:
    """Stand-in for ``client.chat.completions`` returning a canned reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        choices = [] if self.reply is None else [
            SimpleNamespace(message=SimpleNamespace(content=self.reply))
        ]
        return SimpleNamespace(choices=choices)


def make_enhancer(completions: FakeCompletions) -> OpenAIDocumentEnhancer:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIDocumentEnhancer(api_key="test-key", model="test-model", client=client)


class TestOpenAIDocumentEnhancer:
    """Test suite for OpenAIDocumentEnhancer."""

    def test_enhance_sends_prompt_and_strips_reply(self):
        completions = FakeCompletions(reply="  DEMAND FOR PAYMENT\n\nPay $500.  \n")
        enhancer = make_enhancer(completions)

        result = asyncio.run(
            enhancer.enhance("Pay $500.", document_type="demand letter", jurisdiction="Ontario")
        )

        assert result == "DEMAND FOR PAYMENT\n\nPay $500."
        call = completions.calls[0]
        assert call["model"] == "test-model"
        assert call["messages"][0]["role"] == "system"
        assert "demand letter" in call["messages"][0]["content"]
        assert "Ontario" in call["messages"][0]["content"]
        assert call["messages"][1] == {"role": "user", "content": "Pay $500."}

    def test_default_jurisdiction(self):
        completions = FakeCompletions(reply="ok")
        asyncio.run(make_enhancer(completions).enhance("text", document_type="lease"))
        assert "Canada" in completions.calls[0]["messages"][0]["content"]

    def test_empty_document_rejected(self):
        completions = FakeCompletions(reply="ok")
        with pytest.raises(ValueError):
            asyncio.run(make_enhancer(completions).enhance("  ", document_type="lease"))
        assert completions.calls == []

    @pytest.mark.parametrize("reply", [None, "", "   "])
    def test_empty_reply_raises(self, reply):
        enhancer = make_enhancer(FakeCompletions(reply=reply))
        with pytest.raises(EnhancementError):
            asyncio.run(enhancer.enhance("text", document_type="lease"))

    def test_openai_errors_propagate(self):
        error = APIConnectionError(request=httpx.Request("POST", "https://api.openai.test"))
        enhancer = make_enhancer(FakeCompletions(error=error))
        with pytest.raises(APIConnectionError):
            asyncio.run(enhancer.enhance("text", document_type="lease"))

    def test_unexpected_errors_wrapped(self):
        enhancer = make_enhancer(FakeCompletions(error=RuntimeError("bad payload")))
        with pytest.raises(EnhancementError, match="bad payload"):
            asyncio.run(enhancer.enhance("text", document_type="lease"))

    def test_provider_and_model(self):
        enhancer = make_enhancer(FakeCompletions(reply="ok"))
        assert enhancer.provider == "openai"
        assert enhancer.model == "test-model"
