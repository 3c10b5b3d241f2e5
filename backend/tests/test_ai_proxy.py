"""
Tests for the server-side recipe text proxy and the native Gemini call.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import httpx
import openai
import pytest

from chefai.core.config import settings
from chefai.services import ai_proxy, gemini
from chefai.services.errors import AINotReady, MalformedResponse, UpstreamError


class TestMockRecipe:

    def test_template_uses_first_ingredient_and_defaults(self):
        text = ai_proxy.mock_recipe_text(["chicken", "rice"])

        assert text.startswith("# Fusion Chicken Recipe")
        assert "- chicken\n- rice\n" in text
        assert "This regular fusion recipe" in text

    def test_template_without_ingredients(self):
        text = ai_proxy.mock_recipe_text([], cuisine="thai", diet="vegan")

        assert text.startswith("# Thai Mixed vegetables Recipe")
        assert "This vegan thai recipe" in text


class TestGenerateRecipeText:

    @pytest.mark.asyncio
    async def test_no_key_returns_mock_without_calling(self):
        mock = AsyncMock()
        with patch.object(ai_proxy.gemini, "generate_content", mock):
            text = await ai_proxy.generate_recipe_text(["egg"], "french", None)

        assert text.startswith("# French Egg Recipe")
        mock.assert_not_called()

    @pytest.mark.asyncio
    async def test_key_returns_model_text(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
        mock = AsyncMock(return_value="# Omelette")
        with patch.object(ai_proxy.gemini, "generate_content", mock):
            text = await ai_proxy.generate_recipe_text(["egg", "cheese"], None, "keto")

        assert text == "# Omelette"
        prompt = mock.call_args.args[0]
        assert "egg, cheese" in prompt
        assert "Cuisine: any, Diet: keto" in prompt

    @pytest.mark.asyncio
    async def test_upstream_error_resolves_to_mock(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
        with patch.object(ai_proxy.gemini, "generate_content", AsyncMock(side_effect=UpstreamError("gemini", "503"))):
            text = await ai_proxy.generate_recipe_text(["egg"])

        assert text.startswith("# Fusion Egg Recipe")


class TestGeminiNative:

    def test_response_text(self):
        data = {"candidates": [{"content": {"parts": [{"text": "  hello \n"}]}}]}
        assert gemini.response_text(data) == "hello"

    @pytest.mark.parametrize("data", [{}, {"candidates": []}, {"candidates": [{"content": {"parts": [{"text": ""}]}}]}])
    def test_response_text_malformed(self, data):
        with pytest.raises(MalformedResponse):
            gemini.response_text(data)

    @pytest.mark.asyncio
    async def test_generate_content_requires_key(self):
        with pytest.raises(AINotReady):
            await gemini.generate_content("hi")

    @pytest.mark.asyncio
    async def test_generate_content_sends_generation_config(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = request.read()
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "ok"}]}}]})

        real_client = httpx.AsyncClient
        with patch.object(gemini.httpx, "AsyncClient", lambda **kw: real_client(transport=httpx.MockTransport(handler), **kw)):
            text = await gemini.generate_content("make soup")

        assert text == "ok"
        assert ":generateContent" in seen["url"]
        assert "key=test-key" in seen["url"]
        assert b'"maxOutputTokens":2048' in seen["body"].replace(b" ", b"")

    @pytest.mark.asyncio
    async def test_generate_content_http_error(self, monkeypatch):
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
        real_client = httpx.AsyncClient
        transport = httpx.MockTransport(lambda request: httpx.Response(500, json={}))
        with patch.object(gemini.httpx, "AsyncClient", lambda **kw: real_client(transport=transport, **kw)):
            with pytest.raises(UpstreamError):
                await gemini.generate_content("make soup")

    @pytest.mark.asyncio
    async def test_complete_requires_key(self):
        with pytest.raises(AINotReady):
            await gemini.complete("hi", model="m", temperature=0.1, max_tokens=10)


def failing_openai_client(exc):
    create = AsyncMock(side_effect=exc)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


class TestGeminiCompletions:

    @pytest.mark.asyncio
    async def test_sdk_connection_error_becomes_upstream_error(self):
        exc = openai.APIConnectionError(request=httpx.Request("POST", "https://example.com/chat/completions"))
        with patch.object(gemini, "_client", lambda: failing_openai_client(exc)):
            with pytest.raises(UpstreamError) as err:
                await gemini.complete("hi", model="m", temperature=0.1, max_tokens=10)

        assert err.value.service == "gemini"

    @pytest.mark.asyncio
    async def test_sdk_timeout_becomes_upstream_error(self):
        exc = openai.APITimeoutError(request=httpx.Request("POST", "https://example.com/chat/completions"))
        with patch.object(gemini, "_client", lambda: failing_openai_client(exc)):
            with pytest.raises(UpstreamError):
                await gemini.complete("hi", model="m", temperature=0.1, max_tokens=10)

    @pytest.mark.asyncio
    async def test_empty_reply_is_malformed(self):
        chat = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=""))])
        client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=AsyncMock(return_value=chat))))
        with patch.object(gemini, "_client", lambda: client):
            with pytest.raises(MalformedResponse):
                await gemini.complete("hi", model="m", temperature=0.1, max_tokens=10)
