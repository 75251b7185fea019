"""
Connexion a la base de donnees / Database connection.
SQLite local via SQLAlchemy 2.0 async, initialise a la premiere utilisation.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from tripcapture.config import settings
from tripcapture.exceptions import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Handle unique vers le stockage local / Single owned handle to the local store.

    Le schema est cree paresseusement par la premiere operation. Une seule
    tache d'initialisation est en vol : les appelants concurrents attendent
    la meme. Un echec est oublie pour que l'appel suivant reessaie.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.schema_creations = 0
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._init_task: asyncio.Task | None = None

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    async def _initialize(self) -> None:
        import tripcapture.models  # noqa: F401  enregistre les tables / registers tables

        self.schema_creations += 1
        url = make_url(self.url)
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            # Dossier de donnees / Data directory
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_async_engine(self.url, echo=self.echo)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except BaseException:
            await engine.dispose()
            raise
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        logger.info("Record store initialised at %s", url.render_as_string(hide_password=True))

    async def initialize(self) -> None:
        """Attendre l'initialisation (idempotent) / Wait for the one-time initialization."""
        if self.is_initialized:
            return
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._initialize())
        task = self._init_task
        try:
            await asyncio.shield(task)
        except Exception as exc:
            if self._init_task is task:
                self._init_task = None
            logger.error("Record store initialisation failed: %s", exc)
            raise StorageError(
                f"Unable to open local database ({type(exc).__name__})", detail=str(exc)
            ) from exc

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session transactionnelle / Transactional session, errors mapped to StorageError."""
        await self.initialize()
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except (SQLAlchemyError, OSError) as exc:
                await session.rollback()
                raise StorageError(
                    f"Database operation failed ({type(exc).__name__})", detail=str(exc)
                ) from exc
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Fermer le moteur / Close the engine (the next call re-initialises)."""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._init_task = None


_database: Database | None = None


def get_database() -> Database:
    """Handle process unique / Process-wide database handle (FastAPI dependency)."""
    global _database
    if _database is None:
        _database = Database(settings.database_url, echo=settings.DATABASE_ECHO)
    return _database
