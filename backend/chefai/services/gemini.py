# chefai/services/gemini.py
# Gemini access
# - complete(): Chat Completions through Gemini's OpenAI-compatible endpoint (text + optional image)
# - generate_content(): native generateContent REST call with generationConfig (used by the proxy)

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

try:
    import openai
    from openai import AsyncOpenAI  # v1 SDK
except Exception:
    openai = None  # type: ignore
    AsyncOpenAI = None  # type: ignore

from chefai.core.config import settings
from chefai.services.errors import AINotReady, MalformedResponse, UpstreamError

log = logging.getLogger(__name__)


def _client() -> "AsyncOpenAI":
    if AsyncOpenAI is None:
        raise AINotReady("openai SDK not installed")
    if not settings.GEMINI_API_KEY:
        raise AINotReady("GEMINI_API_KEY not set")
    return AsyncOpenAI(api_key=settings.GEMINI_API_KEY, base_url=settings.GEMINI_OPENAI_BASE_URL)


async def complete(
    prompt: str,
    *,
    model: str,
    temperature: float,
    max_tokens: int,
    image_b64: Optional[str] = None,
    mime_type: str = "image/jpeg",
) -> str:
    """
    Single-turn completion. With image_b64 the request is multimodal:
    the prompt text plus one data-URL image part.
    Returns the raw reply text (JSON extraction is the caller's job).
    """
    client = _client()

    content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
    if image_b64:
        content.append({
            "type": "image_url",
            "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
        })

    try:
        chat = await client.chat.completions.create(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": content}],
        )
    except openai.APIError as e:
        log.error("Gemini completion error: %s", e)
        raise UpstreamError("gemini", str(e)) from e
    text = chat.choices[0].message.content if chat and chat.choices else ""
    if not text:
        raise MalformedResponse("empty completion")
    return text


async def generate_content(
    prompt: str,
    *,
    model: Optional[str] = None,
    temperature: float = 0.7,
    top_k: int = 40,
    top_p: float = 0.95,
    max_output_tokens: int = 2048,
) -> str:
    if not settings.GEMINI_API_KEY:
        raise AINotReady("GEMINI_API_KEY not set")

    url = f"{settings.GEMINI_BASE_URL}/models/{model or settings.GEMINI_PROXY_MODEL}:generateContent"
    body = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": temperature,
            "topK": top_k,
            "topP": top_p,
            "maxOutputTokens": max_output_tokens,
        },
    }
    try:
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as cli:
            r = await cli.post(url, params={"key": settings.GEMINI_API_KEY}, json=body)
            r.raise_for_status()
            data = r.json()
    except httpx.HTTPError as e:
        raise UpstreamError("gemini", str(e)) from e

    return response_text(data)


def response_text(data: Dict[str, Any]) -> str:
    # candidates[0].content.parts[0].text, anything else is malformed
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponse("no candidate text in Gemini response")
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponse("empty candidate text")
    return text.strip()
