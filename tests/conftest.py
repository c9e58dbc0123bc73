"""Shared test fixtures."""
from __future__ import annotations

import json

import pytest

from chosung_quiz.models import QuizItem


@pytest.fixture
def sample_items():
    """Three quiz items as the generator would return them."""
    return [
        QuizItem("사랑", "고린도전서 13장에서 가장 제일이라 한 것"),
        QuizItem("믿음", "바라는 것들의 실상이요 보지 못하는 것들의 증거"),
        QuizItem("아브라함", "믿음의 조상, 이삭의 아버지"),
    ]


@pytest.fixture
def quiz_json():
    """Build a conforming LLM response body with *count* items."""
    words = ["사랑", "믿음", "소망", "은혜", "구원", "기도", "용서", "감사", "순종", "성령"]

    def _make(count: int, **extra) -> str:
        items = [
            {"word": words[i % len(words)], "clue": f"설명 {i + 1}", **extra}
            for i in range(count)
        ]
        return json.dumps({"items": items}, ensure_ascii=False)

    return _make
