from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, prompt: str, temperature: float = 0.7, schema: dict | None = None) -> str:
        """Return the raw response text.

        When *schema* is given the provider must constrain its output to that
        JSON schema as far as the backend allows.
        """
        ...

    @abstractmethod
    def name(self) -> str:
        ...
