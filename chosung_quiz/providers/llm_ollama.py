from __future__ import annotations

import logging
import time

import httpx

from chosung_quiz.providers.base import LLMProvider

log = logging.getLogger("chosung_quiz.llm")


class OllamaProvider(LLMProvider):
    def __init__(self, base_url: str = "http://localhost:11434", model: str = "qwen3:8b", timeout: float = 120.0):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    async def generate(self, prompt: str, temperature: float = 0.7, schema: dict | None = None) -> str:
        log.info("── PROMPT (%s) ──\n%s", self.model, prompt)
        t0 = time.monotonic()
        body: dict = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "think": False,
            "options": {"temperature": temperature},
        }
        if schema is not None:
            # Ollama accepts a full JSON schema for structured outputs
            body["format"] = schema
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.base_url}/api/generate", json=body)
            resp.raise_for_status()
            data = resp.json()
        elapsed = time.monotonic() - t0
        response = data["response"]
        tokens = data.get("eval_count", "?")
        log.info("── RESPONSE (%.1fs, %s tokens) ──\n%s", elapsed, tokens, response)
        return response

    def name(self) -> str:
        return f"ollama/{self.model}"
