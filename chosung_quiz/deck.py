"""Turn a finished quiz into a PowerPoint deck.

:func:`build_slides` fixes the order and content of every slide; the
python-pptx writer only renders what it is handed.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN
from pptx.util import Inches, Pt

from chosung_quiz.models import QuizItem, SlideDescription, SlideText

_log = logging.getLogger("chosung_quiz.deck")

DECK_TITLE = "성경초성퀴즈"
EXPORT_FAILED = "PPT 생성 중 오류가 발생했습니다."

# Wide 16:9 layout, inches
SLIDE_WIDTH = 13.333
SLIDE_HEIGHT = 7.5
FONT_FACE = "Malgun Gothic"

BACKGROUNDS = {
    "title": "F5F5F4",
    "question": "FFFFFF",
    "answer": "F0FDF4",
}

# x, y, w, h as fractions of the slide; size in pt; spacing in pt
TEXT_STYLES = {
    "deck_title": dict(box=(0, 0.35, 1, 0.15), size=60, bold=True, color="78350F", align="center", font=FONT_FACE),
    "deck_subtitle": dict(box=(0, 0.55, 1, 0.1), size=30, color="444444", align="center", font=FONT_FACE),
    "question_number": dict(box=(0.0375, 0.0667, 0.15, 0.12), size=40, bold=True, color="78350F"),
    "hint": dict(box=(0, 0.3, 1, 0.22), size=90, bold=True, color="111111", align="center", spacing=20),
    "clue": dict(box=(0.1, 0.6, 0.8, 0.25), size=24, color="666666", align="center", font=FONT_FACE),
    "answer_number": dict(box=(0.0375, 0.0667, 0.225, 0.1), size=30, bold=True, color="166534"),
    "answer_word": dict(box=(0, 0.4, 1, 0.22), size=100, bold=True, color="166534", align="center", font=FONT_FACE),
}


class ExportError(Exception):
    def __init__(self, message: str = EXPORT_FAILED, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


def build_slides(subject: str, items: Sequence[QuizItem], title: str = DECK_TITLE) -> list[SlideDescription]:
    """Map a quiz to its slide sequence: a title slide, then a question and an
    answer slide per item. Always ``1 + 2 * len(items)`` slides."""
    slides = [
        SlideDescription(
            role="title",
            ordinal=None,
            texts=(
                SlideText(title, "deck_title"),
                SlideText(f"주제: {subject} ({len(items)}문항)", "deck_subtitle"),
            ),
            background=BACKGROUNDS["title"],
        )
    ]
    for n, item in enumerate(items, 1):
        slides.append(SlideDescription(
            role="question",
            ordinal=n,
            texts=(
                SlideText(f"Q{n}.", "question_number"),
                SlideText(item.hint, "hint"),
                SlideText(item.clue, "clue"),
            ),
            background=BACKGROUNDS["question"],
        ))
        slides.append(SlideDescription(
            role="answer",
            ordinal=n,
            texts=(
                SlideText(f"Q{n} 정답", "answer_number"),
                SlideText(item.word, "answer_word"),
            ),
            background=BACKGROUNDS["answer"],
        ))
    return slides


def deck_filename(subject: str, title: str = DECK_TITLE) -> str:
    safe = re.sub(r'[\\/:*?"<>|]+', "_", subject).strip() or "quiz"
    return f"{title}_{safe}.pptx"


def _add_text(slide, prs, text: str, style: dict) -> None:
    x, y, w, h = style["box"]
    box = slide.shapes.add_textbox(
        int(prs.slide_width * x),
        int(prs.slide_height * y),
        int(prs.slide_width * w),
        int(prs.slide_height * h),
    )
    tf = box.text_frame
    tf.word_wrap = True
    p = tf.paragraphs[0]
    p.alignment = PP_ALIGN.CENTER if style.get("align") == "center" else PP_ALIGN.LEFT
    run = p.add_run()
    run.text = text
    font = run.font
    font.size = Pt(style["size"])
    font.bold = style.get("bold", False)
    font.color.rgb = RGBColor.from_string(style["color"])
    if style.get("font"):
        font.name = style["font"]
    if style.get("spacing"):
        # python-pptx has no API for character spacing; spc is in 1/100 pt
        run._r.get_or_add_rPr().set("spc", str(int(style["spacing"] * 100)))


def write_deck(slides: Sequence[SlideDescription], target) -> None:
    """Render *slides* in order and save to *target* (a path or binary file)."""
    prs = Presentation()
    prs.slide_width = Inches(SLIDE_WIDTH)
    prs.slide_height = Inches(SLIDE_HEIGHT)
    blank = prs.slide_layouts[6]

    for desc in slides:
        slide = prs.slides.add_slide(blank)
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(desc.background)
        for t in desc.texts:
            _add_text(slide, prs, t.text, TEXT_STYLES[t.style])

    prs.save(str(target) if isinstance(target, Path) else target)


def export_deck(subject: str, items: Sequence[QuizItem], out_dir: Path, title: str = DECK_TITLE) -> Path:
    """Write the quiz deck into *out_dir* and return its path.

    Raises :class:`ExportError` on any writer failure, leaving no file behind.
    """
    slides = build_slides(subject, items, title=title)
    path = Path(out_dir) / deck_filename(subject, title=title)
    partial = path.with_name(path.name + ".part")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_deck(slides, partial)
        partial.replace(path)
    except Exception as e:
        _log.warning("Deck export failed for %r: %s", subject, e)
        partial.unlink(missing_ok=True)
        raise ExportError(reason=str(e)) from e
    _log.info("Exported %d slides to %s", len(slides), path)
    return path
