"""Preset subjects offered for each quiz category."""
from __future__ import annotations

from chosung_quiz.models import BOOK, CHARACTER, THEME, normalize_category

BIBLE_BOOKS = [
    # 구약
    "창세기", "출애굽기", "레위기", "민수기", "신명기",
    "여호수아", "사사기", "룻기", "사무엘상", "사무엘하",
    "열왕기상", "열왕기하", "역대상", "역대하", "에스라",
    "느헤미야", "에스더", "욥기", "시편", "잠언",
    "전도서", "아가", "이사야", "예레미야", "예레미야애가",
    "에스겔", "다니엘", "호세아", "요엘", "아모스",
    "오바댜", "요나", "미가", "나훔", "하박국",
    "스바냐", "학개", "스가랴", "말라기",
    # 신약
    "마태복음", "마가복음", "누가복음", "요한복음", "사도행전",
    "로마서", "고린도전서", "고린도후서", "갈라디아서", "에베소서",
    "빌립보서", "골로새서", "데살로니가전서", "데살로니가후서", "디모데전서",
    "디모데후서", "디도서", "빌레몬서", "히브리서", "야고보서",
    "베드로전서", "베드로후서", "요한일서", "요한이서", "요한삼서",
    "유다서", "요한계시록",
]

BIBLE_THEMES = [
    "사랑", "믿음", "소망", "은혜", "구원",
    "기도", "용서", "감사", "순종", "성령",
    "십자가", "부활", "천국", "회개", "예배",
    "지혜", "평강", "언약", "기적", "비유",
]

BIBLE_CHARACTERS = [
    "아브라함", "모세", "다윗", "요셉", "엘리야",
    "다니엘", "노아", "야곱", "이삭", "사무엘",
    "솔로몬", "여호수아", "룻", "에스더", "욥",
    "베드로", "바울", "요한", "마리아", "세례 요한",
]

SUBJECTS = {
    BOOK: BIBLE_BOOKS,
    THEME: BIBLE_THEMES,
    CHARACTER: BIBLE_CHARACTERS,
}


def subject_options(category: str) -> list[str]:
    return list(SUBJECTS.get(normalize_category(category), []))


def default_subject(category: str) -> str | None:
    options = subject_options(category)
    return options[0] if options else None
