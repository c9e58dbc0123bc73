"""Tests for quiz generation (JSON extraction, shape validation, LLM call)."""
from __future__ import annotations

import json

import httpx
import pytest

from chosung_quiz.hints import initials
from chosung_quiz.models import GenerationRequest
from chosung_quiz.quiz_generator import (
    GENERATION_FAILED,
    GenerationError,
    _extract_json,
    _validate_response,
    generate_for_request,
    generate_quiz,
    response_schema,
)


class FakeLLM:
    """Simple fake LLM that avoids AsyncMock's `name` attribute issue."""

    def __init__(self, responses=None, error: Exception | None = None):
        self._responses = responses or []
        self._error = error
        self.calls: list[dict] = []

    async def generate(self, prompt: str, temperature: float = 0.7, schema: dict | None = None) -> str:
        self.calls.append({"prompt": prompt, "temperature": temperature, "schema": schema})
        if self._error is not None:
            raise self._error
        idx = min(len(self.calls) - 1, len(self._responses) - 1)
        return self._responses[idx]

    def name(self) -> str:
        return "fake-llm"

    @property
    def call_count(self):
        return len(self.calls)


class TestResponseSchema:
    def test_shape(self):
        schema = response_schema(7)
        assert schema["required"] == ["items"]
        items = schema["properties"]["items"]
        assert items["type"] == "array"
        assert items["minItems"] == 7
        assert items["maxItems"] == 7
        element = items["items"]
        assert set(element["properties"]) == {"word", "clue"}
        assert element["required"] == ["word", "clue"]


class TestExtractJson:
    def test_bare_json(self):
        result = _extract_json('{"items": []}')
        assert result == {"items": []}

    def test_code_fence_json(self):
        text = '퀴즈입니다:\n```json\n{"items": [{"word": "사랑", "clue": "x"}]}\n```'
        result = _extract_json(text)
        assert result is not None
        assert result["items"][0]["word"] == "사랑"

    def test_surrounding_text(self):
        text = 'Sure:\n\n{"items": [], "note": "ok"}\n\nHope that helps!'
        result = _extract_json(text)
        assert result is not None
        assert result["note"] == "ok"

    def test_think_block_stripped(self):
        text = '<think>{"items": "draft"}</think>{"items": []}'
        assert _extract_json(text) == {"items": []}

    def test_not_json(self):
        assert _extract_json("This is not JSON at all.") is None

    def test_malformed(self):
        assert _extract_json('{"items": [') is None

    def test_top_level_array_rejected(self):
        assert _extract_json('[{"word": "사랑"}]') is None


class TestValidateResponse:
    def _valid(self, count=2):
        return {"items": [{"word": "사랑", "clue": "a"}, {"word": "믿음", "clue": "b"}][:count]}

    def test_valid(self):
        assert _validate_response(self._valid(), 2) is None

    def test_missing_items(self):
        assert "items" in _validate_response({"quiz": []}, 2)

    def test_items_not_list(self):
        assert _validate_response({"items": "사랑"}, 1) is not None

    def test_wrong_length(self):
        reason = _validate_response(self._valid(), 3)
        assert reason == "expected 3 items, got 2"

    def test_missing_clue(self):
        data = self._valid()
        del data["items"][1]["clue"]
        reason = _validate_response(data, 2)
        assert reason is not None
        assert "item[1]" in reason
        assert "clue" in reason

    def test_non_string_word(self):
        data = self._valid()
        data["items"][0]["word"] = 42
        assert _validate_response(data, 2) is not None

    def test_element_not_object(self):
        assert _validate_response({"items": ["사랑", "믿음"]}, 2) is not None

    def test_extra_fields_tolerated(self):
        data = self._valid()
        data["items"][0]["initials"] = "ㅅㄹ"
        data["source"] = "model"
        assert _validate_response(data, 2) is None


class TestGenerateQuiz:
    @pytest.mark.asyncio
    async def test_success(self, quiz_json):
        llm = FakeLLM(responses=[quiz_json(10)])

        items = await generate_quiz(llm, "사랑", 10, "theme")

        assert len(items) == 10
        for item in items:
            assert item.hint == initials(item.word)
        assert items[0].word == "사랑"
        assert items[0].hint == "ㅅㄹ"
        assert llm.call_count == 1

    @pytest.mark.asyncio
    async def test_sends_prompt_and_schema(self, quiz_json):
        llm = FakeLLM(responses=[quiz_json(3)])

        await generate_quiz(llm, "모세", 3, "character", temperature=0.2)

        call = llm.calls[0]
        assert "모세" in call["prompt"]
        assert "정확히 3개" in call["prompt"]
        assert call["schema"] == response_schema(3)
        assert call["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_order_preserved(self):
        body = json.dumps({"items": [
            {"word": "다윗", "clue": "1"},
            {"word": "골리앗", "clue": "2"},
            {"word": "사울", "clue": "3"},
        ]}, ensure_ascii=False)
        items = await generate_quiz(FakeLLM(responses=[body]), "사무엘상", 3, "book")
        assert [i.word for i in items] == ["다윗", "골리앗", "사울"]
        assert [i.hint for i in items] == ["ㄷㅇ", "ㄱㄹㅇ", "ㅅㅇ"]

    @pytest.mark.asyncio
    async def test_extra_fields_ignored(self, quiz_json):
        items = await generate_quiz(FakeLLM(responses=[quiz_json(2, initials="wrong")]), "사랑", 2, "theme")
        assert items[0].hint == "ㅅㄹ"

    @pytest.mark.asyncio
    async def test_wrong_count_fails(self, quiz_json):
        llm = FakeLLM(responses=[quiz_json(9)])
        with pytest.raises(GenerationError) as exc_info:
            await generate_quiz(llm, "사랑", 10, "theme")
        assert exc_info.value.message == GENERATION_FAILED
        assert "expected 10 items" in exc_info.value.reason
        # No retries
        assert llm.call_count == 1

    @pytest.mark.asyncio
    async def test_missing_clue_fails(self):
        body = json.dumps({"items": [{"word": "사랑"}]}, ensure_ascii=False)
        with pytest.raises(GenerationError):
            await generate_quiz(FakeLLM(responses=[body]), "사랑", 1, "theme")

    @pytest.mark.asyncio
    async def test_invalid_json_fails(self):
        llm = FakeLLM(responses=["garbage"])
        with pytest.raises(GenerationError) as exc_info:
            await generate_quiz(llm, "사랑", 10, "theme")
        assert str(exc_info.value) == GENERATION_FAILED
        assert llm.call_count == 1

    @pytest.mark.asyncio
    async def test_transport_error_fails(self):
        llm = FakeLLM(error=httpx.ConnectError("connection refused"))
        with pytest.raises(GenerationError) as exc_info:
            await generate_quiz(llm, "사랑", 10, "theme")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestGenerateForRequest:
    @pytest.mark.asyncio
    async def test_runs_request(self, quiz_json):
        llm = FakeLLM(responses=[quiz_json(2)])
        req = GenerationRequest(subject="창세기", category="book", count=2)

        items = await generate_for_request(lambda: llm, req)

        assert len(items) == 2
        assert llm.calls[0]["prompt"] == req.prompt()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ValueError("Unknown LLM provider: bogus"),
        ImportError("No module named 'anthropic'"),
    ])
    async def test_provider_construction_fails(self, error):
        def factory():
            raise error

        req = GenerationRequest(subject="사랑", category="theme", count=3)
        with pytest.raises(GenerationError) as exc_info:
            await generate_for_request(factory, req)
        assert exc_info.value.message == GENERATION_FAILED
        assert exc_info.value.__cause__ is error
