from __future__ import annotations

import os

from chosung_quiz.prompts import format_schema_instruction
from chosung_quiz.providers.base import LLMProvider


class AnthropicProvider(LLMProvider):
    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        import anthropic
        self.client = anthropic.AsyncAnthropic(
            api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
        )
        self.model = model

    async def generate(self, prompt: str, temperature: float = 0.7, schema: dict | None = None) -> str:
        # No native schema parameter; state it in the prompt instead
        if schema is not None:
            prompt = prompt + "\n\n" + format_schema_instruction(schema)
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=8192,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        return message.content[0].text

    def name(self) -> str:
        return f"anthropic/{self.model}"
