from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from audio_flashcards.core.config import settings
from audio_flashcards.core.logging import get_logger

from typing import AsyncIterator


Base = declarative_base()


connection_string = str(settings.database.connection_string)

engine = create_async_engine(
    connection_string,
    echo=settings.database.echo,
)

async_session_maker = async_sessionmaker(
    engine,
    expire_on_commit=False,
)


logger = get_logger(__name__)


@event.listens_for(engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def init_db() -> None:
    """Create the database file and tables if they do not exist yet."""
    # Import models so Base metadata is aware of them
    from audio_flashcards.core.db import schemas  # noqa: F401

    db_path = settings.database.path
    if not db_path.exists():
        logger.info(f"Database file not found, creating {db_path}")
        db_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        logger.info(f"Database file found at {db_path}, connecting")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Session rolled back due to error: {e}")
            raise
