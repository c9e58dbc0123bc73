from __future__ import annotations

from dataclasses import dataclass, field

from chosung_quiz.hints import initials

BOOK = "book"
THEME = "theme"
CHARACTER = "character"
CATEGORIES = (BOOK, THEME, CHARACTER)

# The web form historically posted "bible" for the book tab
CATEGORY_ALIASES = {"bible": BOOK}


def normalize_category(category: str) -> str:
    category = (category or "").strip().lower()
    return CATEGORY_ALIASES.get(category, category)


@dataclass(frozen=True)
class QuizItem:
    word: str
    clue: str
    hint: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "hint", initials(self.word))

    def to_dict(self) -> dict:
        return {"word": self.word, "clue": self.clue, "hint": self.hint}


@dataclass
class GenerationRequest:
    subject: str
    category: str
    count: int

    def prompt(self) -> str:
        from chosung_quiz.prompts import compose_prompt
        return compose_prompt(self.subject, self.category, self.count)


@dataclass(frozen=True)
class SlideText:
    text: str
    style: str  # key into deck.TEXT_STYLES


@dataclass(frozen=True)
class SlideDescription:
    role: str  # title | question | answer
    ordinal: int | None
    texts: tuple[SlideText, ...]
    background: str

    def text_of(self, style: str) -> str | None:
        for t in self.texts:
            if t.style == style:
                return t.text
        return None
