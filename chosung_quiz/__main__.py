"""CLI entry point for chosung-quiz.

Usage:
  python -m chosung_quiz serve [--port PORT] [--host HOST]
  python -m chosung_quiz generate SUBJECT [--category C] [--count N]
  python -m chosung_quiz export SUBJECT [--category C] [--count N] [--out DIR]
  python -m chosung_quiz subjects [--category C]
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "generate":
        _generate(args[1:])
    elif command == "export":
        _export(args[1:])
    elif command == "subjects":
        _subjects(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, generate, export, subjects")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _positional(args: list[str]) -> str | None:
    """First argument that is neither a flag nor a flag's value."""
    skip = False
    for a in args:
        if skip:
            skip = False
            continue
        if a.startswith("--"):
            skip = True
            continue
        return a
    return None


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "8766"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    print(f"Starting Chosung Quiz on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "chosung_quiz.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _generate_items(args: list[str]):
    from chosung_quiz.catalog import default_subject
    from chosung_quiz.config import get_llm, load_settings
    from chosung_quiz.models import BOOK, GenerationRequest, normalize_category
    from chosung_quiz.quiz_generator import GenerationError, generate_for_request

    settings = load_settings()
    category = normalize_category(_parse_flag(args, "--category", BOOK))
    req = GenerationRequest(
        subject=_positional(args) or default_subject(category) or "",
        category=category,
        count=int(_parse_flag(args, "--count", str(settings.default_count))),
    )

    print(f"Generating {req.count} items about '{req.subject}' using {settings.llm_provider}...")
    try:
        items = asyncio.run(generate_for_request(
            lambda: get_llm(settings), req, temperature=settings.temperature,
        ))
    except GenerationError as e:
        print(e.message)
        sys.exit(1)
    return settings, req.subject, items


def _generate(args: list[str]):
    _, _, items = _generate_items(args)
    for n, item in enumerate(items, 1):
        print(f"{n:3d}. {item.hint}  {item.clue}")
    print()
    print("정답: " + ", ".join(item.word for item in items))


def _export(args: list[str]):
    from chosung_quiz.deck import ExportError, export_deck

    settings, subject, items = _generate_items(args)
    out_dir = Path(_parse_flag(args, "--out", str(settings.export_full_path)))
    try:
        path = export_deck(subject, items, out_dir, title=settings.deck_title)
    except ExportError as e:
        print(e.message)
        sys.exit(1)
    print(f"Saved {path}")


def _subjects(args: list[str]):
    from chosung_quiz.catalog import subject_options
    from chosung_quiz.models import BOOK

    category = _parse_flag(args, "--category", BOOK)
    options = subject_options(category)
    if not options:
        print(f"Unknown category: {category}")
        sys.exit(1)
    for name in options:
        print(name)


if __name__ == "__main__":
    main()
