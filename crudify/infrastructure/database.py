"""Database Sessions: engine, per-request session, and SQLAlchemy error translation.

Invariants:
    - A session that exits with an exception is rolled back before it is closed
    - SQLAlchemy failures leave as DatabaseError (503) carrying an ErrorContext:
      the model and handler operation tagged on the session, else the SQL verb
      of the failing statement
    - Non-database exceptions pass through untouched

Design Decisions:
    - Handlers tag the session (tag_session) rather than the manager guessing
      the model from SQL text; the statement's table is kept as debug info
    - expire_on_commit=False: handlers encode records after commit without reloading
    - Module-level manager created by the app lifespan; get_db is the route dependency
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError, StatementError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from crudify.core.errors import DatabaseError, ErrorContext

logger = logging.getLogger(__name__)

MODEL_KEY = "crudify.model"
OPERATION_KEY = "crudify.operation"

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURES: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "constraint violated"),
    (OperationalError, "database unavailable"),
    (DBAPIError, "driver rejected the statement"),
    (SQLAlchemyError, "session error"),
)

_TABLE = re.compile(r"\b(?:INTO|UPDATE|FROM)\s+\"?(\w+)", re.IGNORECASE)


def tag_session(db: AsyncSession, model_name: str, operation: str) -> None:
    """Record which model and handler operation the session is serving."""
    db.info[MODEL_KEY] = model_name
    db.info[OPERATION_KEY] = operation


def describe_failure(db: AsyncSession, exc: SQLAlchemyError) -> DatabaseError:
    reason = next(message for kind, message in _FAILURES if isinstance(exc, kind))
    statement = exc.statement if isinstance(exc, StatementError) else None
    verb = statement.split(None, 1)[0].lower() if statement and statement.strip() else None
    table = _TABLE.search(statement) if statement else None

    context = ErrorContext(
        model_name=db.info.get(MODEL_KEY),
        operation=db.info.get(OPERATION_KEY) or verb or "session",
        debug_info={
            "exception": type(exc).__name__,
            "statement": verb,
            "table": table.group(1) if table else None,
        },
    )
    return DatabaseError(reason, context.operation, context)


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that translate database failures."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            await db.rollback()
            error = describe_failure(db, exc)
            logger.error(
                f"{error.message} ({type(exc).__name__}: {exc})",
                extra={
                    "model": error.context.model_name,
                    "operation": error.context.operation,
                    "error_code": error.code,
                },
            )
            raise error from exc
        finally:
            await db.close()

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except DatabaseError:
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one managed session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as db:
        yield db
