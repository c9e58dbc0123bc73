"""Prompt templates for chosung quiz generation."""
from __future__ import annotations

import json

from chosung_quiz.models import BOOK, CHARACTER, normalize_category

BOOK_PROMPT = """\
성경 "{subject}" 권의 내용만으로 구성된 초성 퀴즈 {count}문제를 만들어주세요. \
반드시 해당 권에 등장하는 인물, 지명, 핵심 단어만 사용하세요."""

CHARACTER_PROMPT = """\
성경 인물 "{subject}"의 생애와 관련된 초성 퀴즈 {count}문제를 만들어주세요. \
인물에 대한 성경적 사건과 배경을 포함하세요."""

THEME_PROMPT = """\
"{subject}" 주제와 관련된 성경 전체의 내용을 바탕으로 초성 퀴즈 {count}문제를 만들어주세요."""

REQUIREMENTS = """\
필수 요구사항:
1. 단어(word)는 2~5글자 사이의 성경 용어여야 합니다.
2. 설명(clue)은 해당 단어를 성경적으로 설명하며, 독자가 정답을 유추할 수 있도록 구체적이어야 합니다.
3. 정확히 {count}개의 문제를 생성하세요.
4. 응답은 반드시 지정된 JSON 형식을 지켜야 합니다.
"""

PROMPTS = {
    BOOK: BOOK_PROMPT,
    CHARACTER: CHARACTER_PROMPT,
}


def compose_prompt(subject: str, category: str, count: int) -> str:
    """Build the generation request for *subject*.

    Unknown categories get the theme wording. Nothing is validated here.
    """
    template = PROMPTS.get(normalize_category(category), THEME_PROMPT)
    intro = template.format(subject=subject, count=count)
    return intro + "\n\n" + REQUIREMENTS.format(count=count)


def format_schema_instruction(schema: dict) -> str:
    """Spell out a response schema for providers without native schema support."""
    return (
        "Respond with JSON only, no other text, matching this JSON schema:\n"
        + json.dumps(schema, ensure_ascii=False, indent=2)
    )
