import logging
from typing import Any, Optional

from audio_flashcards.core.config import settings


CONTEXT_FIELDS = ("project", "session")
DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | project=%(project)s "
    "session=%(session)s | %(message)s"
)


class ContextFilter(logging.Filter):
    """Fills the project/session fields so records without context still format."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True


class ContextAdapter(logging.LoggerAdapter):
    """Logger bound to a project/session; per-call ``extra`` wins over the binding."""

    def process(self, msg: Any, kwargs: dict) -> tuple[Any, dict]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Install one stream handler (plus LOG_FILE, if set) on the root logger."""
    resolved_level = getattr(
        logging, (level or settings.logging.level).upper(), logging.INFO
    )
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    # Replace handlers so uvicorn reloads don't duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.logging.file is not None:
        settings.logging.file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.logging.file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(ContextFilter())
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger; sets up the root logger on first use."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)


def bind(logger: logging.Logger, **context: Any) -> ContextAdapter:
    """Attach project/session context to every record from ``logger``."""
    return ContextAdapter(logger, context)
