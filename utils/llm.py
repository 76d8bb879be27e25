"""
OpenAI LLM helpers — shared by the research features.

A failed request is not retried: the OpenAIError propagates to the caller.
"""

from __future__ import annotations

import json
import logging

from openai import OpenAI

import config

log = logging.getLogger(__name__)

_client: OpenAI | None = None


def is_configured() -> bool:
    return bool(config.OPENAI_API_KEY)


def get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(api_key=config.OPENAI_API_KEY)
    return _client


def chat(
    system: str,
    user: str,
    model: str | None = None,
    json_mode: bool = False,
    temperature: float = 0.3,
    max_tokens: int = 2048,
) -> str:
    """Send a chat completion request and return the assistant message."""
    client = get_client()
    kwargs: dict = {
        "model": model or config.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    resp = client.chat.completions.create(**kwargs)
    return resp.choices[0].message.content or ""


def chat_json(system: str, user: str, **kwargs) -> dict:
    """Send a chat completion and parse the JSON response.

    An unparseable or non-object reply comes back as {"error": ..., "raw": ...}
    so callers can repair it with defaults.
    """
    raw = chat(system, user, json_mode=True, **kwargs)
    try:
        data = json.loads(raw or "{}")
    except json.JSONDecodeError:
        log.error("Failed to parse LLM JSON response: %s", raw[:500])
        return {"error": "JSON parse failed", "raw": raw[:2000]}
    if not isinstance(data, dict):
        log.error("LLM JSON response is not an object: %s", raw[:500])
        return {"error": "JSON reply is not an object", "raw": raw[:2000]}
    return data
