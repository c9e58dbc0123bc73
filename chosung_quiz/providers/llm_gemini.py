from __future__ import annotations

import logging
import os
import time

import httpx

from chosung_quiz.providers.base import LLMProvider

log = logging.getLogger("chosung_quiz.llm")

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta"


def to_gemini_schema(schema: dict) -> dict:
    """Translate a JSON schema into Gemini's OpenAPI-flavoured ``responseSchema``.

    Gemini wants upper-case type names and integer bounds passed as strings.
    """
    out: dict = {}
    for key, value in schema.items():
        if key == "type":
            out["type"] = value.upper()
        elif key == "properties":
            out["properties"] = {k: to_gemini_schema(v) for k, v in value.items()}
        elif key == "items":
            out["items"] = to_gemini_schema(value)
        elif key in ("minItems", "maxItems"):
            out[key] = str(value)
        elif key in ("required", "description"):
            out[key] = value
    return out


class GeminiProvider(LLMProvider):
    def __init__(
        self,
        model: str = "gemini-3-flash-preview",
        api_key: str | None = None,
        base_url: str = GEMINI_URL,
        timeout: float = 120.0,
    ):
        self.model = model
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", "")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def build_body(self, prompt: str, temperature: float, schema: dict | None) -> dict:
        config: dict = {"temperature": temperature}
        if schema is not None:
            config["responseMimeType"] = "application/json"
            config["responseSchema"] = to_gemini_schema(schema)
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": config,
        }

    async def generate(self, prompt: str, temperature: float = 0.7, schema: dict | None = None) -> str:
        log.info("── PROMPT (%s) ──\n%s", self.model, prompt)
        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=self.build_body(prompt, temperature, schema),
            )
            resp.raise_for_status()
            data = resp.json()
        elapsed = time.monotonic() - t0
        parts = data["candidates"][0]["content"]["parts"]
        response = "".join(p.get("text", "") for p in parts)
        tokens = data.get("usageMetadata", {}).get("candidatesTokenCount", "?")
        log.info("── RESPONSE (%.1fs, %s tokens) ──\n%s", elapsed, tokens, response)
        return response

    def name(self) -> str:
        return f"gemini/{self.model}"
