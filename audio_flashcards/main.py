from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from audio_flashcards.core.config import settings
from audio_flashcards.core.db.base import init_db
from audio_flashcards.core.logging import get_logger
from audio_flashcards.apis.projects import router as projects_router
from audio_flashcards.apis.flashcards import router as flashcards_router
from audio_flashcards.apis.quiz import router as quiz_router
from audio_flashcards.modules.quiz.errors import StoreUnavailable

import uvicorn


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


async def _store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Store unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Store unavailable"})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_exception_handler(StoreUnavailable, _store_unavailable)
    app.add_exception_handler(SQLAlchemyError, _store_unavailable)

    app.include_router(projects_router)
    app.include_router(flashcards_router)
    app.include_router(quiz_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


def run(host: str | None = None, port: int | None = None) -> None:
    uvicorn.run(
        "audio_flashcards.main:app",
        host=host or settings.app.host,
        port=port or settings.app.port,
        reload=not settings.app.is_production,
    )


if __name__ == "__main__":
    try:
        run()
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
