"""FastAPI application with all routes."""
from __future__ import annotations

import logging

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel

from chosung_quiz.catalog import default_subject, subject_options
from chosung_quiz.config import Settings, get_llm, load_settings, save_settings
from chosung_quiz.deck import ExportError, export_deck
from chosung_quiz.models import BOOK, CATEGORIES, GenerationRequest, normalize_category
from chosung_quiz.quiz_generator import GenerationError, generate_for_request
from chosung_quiz.session import IndexOutOfRange, QuizSession

app = FastAPI(title="Chosung Quiz")

_log = logging.getLogger("chosung_quiz.app")

# Global state (initialized in startup)
_settings: Settings | None = None
_session = QuizSession()
# At most one generation in flight; the session itself does not track this
_generating = False


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_session() -> QuizSession:
    return _session


def _get_llm():
    return get_llm(get_settings())


@app.on_event("startup")
async def startup():
    global _settings
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()


# ── API: Subjects ─────────────────────────────────────────────────────────

@app.get("/api/subjects")
async def api_subjects(category: str = BOOK):
    if normalize_category(category) not in CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return {
        "category": normalize_category(category),
        "subjects": subject_options(category),
        "default": default_subject(category),
        "count_options": get_settings().count_options,
    }


# ── API: Quiz ─────────────────────────────────────────────────────────────

class GenerateBody(BaseModel):
    subject: str | None = None
    category: str = BOOK
    count: int | None = None


@app.post("/api/quiz/generate")
async def api_generate(body: GenerateBody):
    global _generating
    if _generating:
        raise HTTPException(status_code=409, detail="Quiz generation already in progress")

    s = get_settings()
    session = get_session()
    category = normalize_category(body.category)
    req = GenerationRequest(
        subject=(body.subject or "").strip() or default_subject(category) or "",
        category=category,
        count=body.count if body.count is not None else s.default_count,
    )

    request_id = session.begin_request()
    _generating = True
    try:
        items = await generate_for_request(_get_llm, req, temperature=s.temperature)
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=e.message)
    finally:
        _generating = False

    if not session.install(request_id, items, subject=req.subject, category=req.category):
        _log.info("Discarding stale quiz for %r (request %d)", req.subject, request_id)
        raise HTTPException(status_code=409, detail="A newer quiz was requested")

    return {
        **session.to_dict(),
        "message": f'"{req.subject}" 관련 {len(items)}개의 퀴즈가 준비되었습니다!',
    }


@app.get("/api/quiz")
async def api_quiz():
    return get_session().to_dict()


@app.post("/api/quiz/reveal/{index}")
async def api_toggle(index: int):
    try:
        revealed = get_session().toggle(index)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"index": index, "revealed": revealed}


@app.post("/api/quiz/reveal-all")
async def api_reveal_all():
    session = get_session()
    session.reveal_all()
    return {**session.to_dict(), "message": "모든 정답이 공개되었습니다."}


# Plain def: python-pptx blocks, so this runs in the threadpool
@app.get("/api/quiz/export")
def api_export():
    s = get_settings()
    session = get_session()
    if not session.items:
        raise HTTPException(status_code=400, detail="No quiz to export")
    try:
        path = export_deck(session.subject, session.items, s.export_full_path, title=s.deck_title)
    except ExportError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return FileResponse(
        path,
        filename=path.name,
        media_type="application/vnd.openxmlformats-officedocument.presentationml.presentation",
    )


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
