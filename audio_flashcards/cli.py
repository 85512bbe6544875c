from __future__ import annotations

import argparse
import asyncio
import json
import tempfile
from pathlib import Path
from typing import Callable, Optional

import httpx

from audio_flashcards.client import FlashcardsClient
from audio_flashcards.core.config import settings
from audio_flashcards.modules.quiz import (
    LocalQuizBackend,
    QuizBackend,
    QuizContext,
    QuizSession,
    QuizStatus,
    StoreUnavailable,
)


InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _dump(data) -> None:
    print(json.dumps(data, indent=2))


async def run_quiz(
    backend: QuizBackend,
    context: QuizContext,
    *,
    input_fn: InputFn = input,
    output: OutputFn = print,
    audio_dir: Optional[Path] = None,
) -> QuizSession:
    """Drive a quiz session from the terminal until the user stops.

    Each clip is written to ``audio_dir`` so it can be opened in any player.
    Returns the last session (finished or empty).
    """
    with tempfile.TemporaryDirectory(prefix="audio-flashcards-") as tmp:
        clips = Path(audio_dir or tmp)
        session = QuizSession(context, backend)
        await session.start()

        while True:
            snap = session.snapshot()
            header = f"{snap.project_name} Quiz" if snap.project_name else "Quiz"

            if snap.status == QuizStatus.EMPTY:
                output(f"{header}: no flashcards available.")
                return session

            if snap.status == QuizStatus.PRESENTING:
                name = Path(snap.file_name or "clip").name
                clip = clips / f"question-{snap.question_number}-{name}"
                clip.write_bytes(snap.audio or b"")
                output(f"\nQuestion {snap.question_number} of {snap.total_questions}")
                output(f"Listen: {clip}")
                for i, choice in enumerate(snap.choices, start=1):
                    output(f"  {i}. {choice}")
                output(f"Score: {snap.score}")
                raw = input_fn("Answer number (e to end quiz): ").strip().lower()
                if raw in ("e", "end"):
                    session.end()
                    continue
                if raw.isdigit() and 1 <= int(raw) <= len(snap.choices):
                    session.select(snap.choices[int(raw) - 1])
                    session.submit()
                continue

            if snap.status == QuizStatus.EVALUATED:
                if snap.outcome is not None:
                    output(f"{snap.outcome.value}!")
                if snap.correct_answer is not None:
                    output(f"Correct answer was: {snap.correct_answer}")
                if snap.can_advance:
                    raw = input_fn("[Enter] next question, e to end quiz: ")
                    if raw.strip().lower() in ("e", "end"):
                        session.end()
                    else:
                        await session.next()
                else:
                    input_fn("[Enter] to see your results: ")
                    session.end()
                continue

            # finished
            output("\nFinal Results")
            output(f"{snap.score} of {snap.attempted} answered correctly.")
            again = input_fn("Retake quiz? [y/N]: ").strip().lower()
            if again not in ("y", "yes"):
                return session
            session = await session.retry()


async def _quiz_command(args: argparse.Namespace) -> int:
    num_choices = args.choices if args.choices is not None else settings.quiz.num_choices
    if args.local:
        from audio_flashcards.core.db.base import async_session_maker, init_db
        from audio_flashcards.core.db_services import ProjectService

        await init_db()
        async with async_session_maker() as session:
            project = await ProjectService(session).get_project(args.project_id)
        if project is None:
            raise SystemExit(f"Project {args.project_id} not found")
        context = QuizContext(
            project_id=project.id, project_name=project.name, num_choices=num_choices
        )
        await run_quiz(LocalQuizBackend.from_session_maker(async_session_maker), context)
        return 0

    async with FlashcardsClient(args.base_url) as client:
        project = await client.get_project(args.project_id)
        context = QuizContext(
            project_id=project.id, project_name=project.name, num_choices=num_choices
        )
        await run_quiz(client, context)
    return 0


async def _projects_command(args: argparse.Namespace) -> int:
    async with FlashcardsClient(args.base_url) as client:
        if args.action == "list":
            _dump([p.model_dump() for p in await client.list_projects()])
        elif args.action == "add":
            _dump((await client.create_project(args.name, args.description)).model_dump())
        elif args.action == "edit":
            project = await client.update_project(
                args.project_id, args.name, args.description
            )
            _dump(project.model_dump())
        elif args.action == "delete":
            await client.delete_project(args.project_id)
    return 0


async def _flashcards_command(args: argparse.Namespace) -> int:
    async with FlashcardsClient(args.base_url) as client:
        if args.action == "list":
            _dump([c.model_dump() for c in await client.list_flashcards(args.project_id)])
        elif args.action == "add":
            card = await client.add_flashcard(args.project_id, args.audio_file, args.answer)
            _dump(card.model_dump())
        elif args.action == "edit":
            card = await client.update_flashcard(
                args.flashcard_id, args.answer, audio_path=args.file
            )
            _dump(card.model_dump())
        elif args.action == "delete":
            await client.delete_flashcard(args.flashcard_id)
        elif args.action == "export":
            args.output.write_bytes(await client.download_audio(args.flashcard_id))
            print(str(args.output))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="audio-flashcards", description="Audio flashcards study tool"
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Data-access service URL (default: API_BASE_URL or http://127.0.0.1:9000)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("serve", help="Run the local data-access service")
    s.add_argument("--host", default=None)
    s.add_argument("--port", type=int, default=None)

    p = sub.add_parser("projects", help="Manage projects")
    psub = p.add_subparsers(dest="action", required=True)
    psub.add_parser("list", help="List projects")
    pa = psub.add_parser("add", help="Create a project")
    pa.add_argument("name")
    pa.add_argument("--description", "-d", default="")
    pe = psub.add_parser("edit", help="Rename or re-describe a project")
    pe.add_argument("project_id", type=int)
    pe.add_argument("name")
    pe.add_argument("--description", "-d", default="")
    pd = psub.add_parser("delete", help="Delete a project and its flashcards")
    pd.add_argument("project_id", type=int)

    f = sub.add_parser("flashcards", help="Manage flashcards")
    fsub = f.add_subparsers(dest="action", required=True)
    fl = fsub.add_parser("list", help="List flashcards of a project")
    fl.add_argument("project_id", type=int)
    fa = fsub.add_parser("add", help="Add an audio flashcard (.mp3, .wav, .ogg)")
    fa.add_argument("project_id", type=int)
    fa.add_argument("audio_file", type=Path)
    fa.add_argument("answer")
    fe = fsub.add_parser("edit", help="Change the answer and optionally the clip")
    fe.add_argument("flashcard_id", type=int)
    fe.add_argument("answer")
    fe.add_argument("--file", type=Path, default=None, help="Replacement audio file")
    fd = fsub.add_parser("delete", help="Delete a flashcard")
    fd.add_argument("flashcard_id", type=int)
    fx = fsub.add_parser("export", help="Write a flashcard's audio to a file")
    fx.add_argument("flashcard_id", type=int)
    fx.add_argument("output", type=Path)

    q = sub.add_parser("quiz", help="Take a multiple-choice quiz on a project")
    q.add_argument("project_id", type=int)
    q.add_argument(
        "--choices", type=_positive_int, default=None, help="Number of answer choices"
    )
    q.add_argument(
        "--local",
        action="store_true",
        help="Read the database directly instead of going through the service",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd == "serve":
        from audio_flashcards.main import run

        run(host=args.host, port=args.port)
        return 0

    handlers = {
        "projects": _projects_command,
        "flashcards": _flashcards_command,
        "quiz": _quiz_command,
    }
    try:
        return asyncio.run(handlers[args.cmd](args))
    except StoreUnavailable as e:
        print(f"Store unavailable, restart the quiz: {e}")
        return 1
    except httpx.HTTPStatusError as e:
        print(f"Request failed ({e.response.status_code}): {e.response.text}")
        return 1
    except httpx.HTTPError as e:
        print(f"Could not reach the service: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
