"""Ask the LLM for chosung quiz items and enforce the response shape."""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from chosung_quiz.models import GenerationRequest, QuizItem
from chosung_quiz.prompts import compose_prompt

if TYPE_CHECKING:
    from chosung_quiz.providers.base import LLMProvider

_log = logging.getLogger("chosung_quiz.qgen")

GENERATION_FAILED = "성경 퀴즈 데이터를 생성하는 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요."


class GenerationError(Exception):
    """The quiz could not be generated. ``str(exc)`` is safe to show to users."""

    def __init__(self, message: str = GENERATION_FAILED, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


def response_schema(count: int) -> dict:
    """JSON schema for a response holding exactly *count* word/clue pairs."""
    return {
        "type": "object",
        "properties": {
            "items": {
                "type": "array",
                "minItems": count,
                "maxItems": count,
                "items": {
                    "type": "object",
                    "properties": {
                        "word": {"type": "string"},
                        "clue": {"type": "string"},
                    },
                    "required": ["word", "clue"],
                },
            },
        },
        "required": ["items"],
    }


def _extract_json(text: str) -> dict | None:
    """Extract a JSON object from an LLM response.

    Structured-output backends return bare JSON, but providers without schema
    support tend to wrap it in a code fence or a sentence of prose. Strips
    ``<think>`` blocks, tries the whole text, then a fenced block, then the
    last balanced ``{…}`` block.
    """
    text = re.sub(r"<think>.*?</think>", "", text or "", flags=re.DOTALL).strip()

    try:
        data = json.loads(text)
        return data if isinstance(data, dict) else None
    except json.JSONDecodeError:
        pass

    m = re.search(r"```(?:json)?\s*\n?({.*?})\s*\n?```", text, re.DOTALL)
    if m:
        try:
            return json.loads(m.group(1))
        except json.JSONDecodeError:
            pass

    for candidate in reversed(_find_json_objects(text)):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    return None


def _find_json_objects(text: str) -> list[str]:
    """Find balanced top-level ``{…}`` substrings in *text*."""
    results: list[str] = []
    i = 0
    while i < len(text):
        if text[i] != "{":
            i += 1
            continue
        depth = 0
        in_str = False
        escape = False
        for j in range(i, len(text)):
            ch = text[j]
            if escape:
                escape = False
                continue
            if ch == "\\":
                escape = True
                continue
            if ch == '"':
                in_str = not in_str
                continue
            if in_str:
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    results.append(text[i : j + 1])
                    i = j + 1
                    break
        else:
            # Unbalanced, skip this opening brace
            i += 1
    return results


def _validate_response(data: dict, count: int) -> str | None:
    """Check *data* against :func:`response_schema`.

    Returns ``None`` when valid, or a human-readable reason. Fields beyond
    ``word`` and ``clue`` are tolerated.
    """
    if "items" not in data:
        return "missing field: items"
    items = data["items"]
    if not isinstance(items, list):
        return f"items must be a list (got {type(items).__name__})"
    if len(items) != count:
        return f"expected {count} items, got {len(items)}"

    problems = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            problems.append(f"item[{i}]: expected object, got {type(item).__name__}")
            continue
        missing = sorted(k for k in ("word", "clue") if not isinstance(item.get(k), str))
        if missing:
            problems.append(f"item[{i}] ({item.get('word', '?')}): missing {', '.join(missing)}")
    if problems:
        return "field errors: " + "; ".join(problems)
    return None


async def generate_quiz(
    llm: LLMProvider,
    subject: str,
    count: int,
    category: str,
    temperature: float = 0.7,
) -> list[QuizItem]:
    """Generate *count* quiz items about *subject*.

    Makes exactly one LLM call. Any failure (transport, unparsable output,
    wrong shape) raises :class:`GenerationError`; partial results are never
    returned.
    """
    prompt = compose_prompt(subject, category, count)
    _log.info("Generate %d items for %r (%s) via %s", count, subject, category, llm.name())
    try:
        response = await llm.generate(prompt, temperature=temperature, schema=response_schema(count))
    except Exception as e:
        _log.warning("LLM call failed: %s", e)
        raise GenerationError(reason=str(e)) from e

    data = _extract_json(response)
    if data is None:
        _log.warning("No valid JSON in response")
        _log.debug("Raw response: %.300s", response)
        raise GenerationError(reason="response did not contain valid JSON")

    reason = _validate_response(data, count)
    if reason:
        _log.warning("Response rejected: %s", reason)
        raise GenerationError(reason=reason)

    items = [QuizItem(word=d["word"], clue=d["clue"]) for d in data["items"]]
    _log.info("Generated %d items for %r", len(items), subject)
    return items


async def generate_for_request(
    llm_factory: Callable[[], LLMProvider],
    request: GenerationRequest,
    temperature: float = 0.7,
) -> list[QuizItem]:
    """Build the configured provider and run *request* through it.

    A provider that cannot be constructed (unknown name, SDK not installed)
    fails the same way as the call itself, with :class:`GenerationError`.
    """
    try:
        llm = llm_factory()
    except (ValueError, ImportError) as e:
        _log.warning("LLM provider unavailable: %s", e)
        raise GenerationError(reason=str(e)) from e
    return await generate_quiz(llm, request.subject, request.count, request.category, temperature=temperature)
