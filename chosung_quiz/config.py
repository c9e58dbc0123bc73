from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "llm_provider": "gemini",
    "llm_model": "gemini-3-flash-preview",
    "ollama_url": "http://localhost:11434",
    "default_count": 10,
    "count_options": [10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
    "temperature": 0.7,
    "request_timeout": 120.0,
    "export_dir": "exports",
    "deck_title": "성경초성퀴즈",
}


@dataclass
class Settings:
    llm_provider: str = DEFAULTS["llm_provider"]
    llm_model: str = DEFAULTS["llm_model"]
    ollama_url: str = DEFAULTS["ollama_url"]
    default_count: int = DEFAULTS["default_count"]
    count_options: list[int] = field(default_factory=lambda: list(DEFAULTS["count_options"]))
    temperature: float = DEFAULTS["temperature"]
    request_timeout: float = DEFAULTS["request_timeout"]
    export_dir: str = DEFAULTS["export_dir"]
    deck_title: str = DEFAULTS["deck_title"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def export_full_path(self) -> Path:
        return self.project_root / self.export_dir

    def to_dict(self) -> dict:
        return {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "ollama_url": self.ollama_url,
            "default_count": self.default_count,
            "count_options": self.count_options,
            "temperature": self.temperature,
            "request_timeout": self.request_timeout,
            "export_dir": self.export_dir,
            "deck_title": self.deck_title,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(
        json.dumps(settings.to_dict(), indent=4, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )


def get_llm(s: Settings):
    """Instantiate the configured LLM provider."""
    if s.llm_provider == "gemini":
        from chosung_quiz.providers.llm_gemini import GeminiProvider
        return GeminiProvider(model=s.llm_model, timeout=s.request_timeout)
    elif s.llm_provider == "ollama":
        from chosung_quiz.providers.llm_ollama import OllamaProvider
        return OllamaProvider(base_url=s.ollama_url, model=s.llm_model, timeout=s.request_timeout)
    elif s.llm_provider == "anthropic":
        from chosung_quiz.providers.llm_anthropic import AnthropicProvider
        return AnthropicProvider(model=s.llm_model)
    elif s.llm_provider == "openai":
        from chosung_quiz.providers.llm_openai import OpenAIProvider
        return OpenAIProvider(model=s.llm_model)
    raise ValueError(f"Unknown LLM provider: {s.llm_provider}")
