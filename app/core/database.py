"""Database configuration."""

import logging
from collections.abc import AsyncGenerator
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Executable, Result, Uuid, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.core.config import settings
from app.core.exceptions import DirectoryError

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class BaseModel(Base):
    """Base model with common fields: id, created_at, updated_at."""

    __abstract__ = True

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session."""
    async with async_session_maker() as session:
        yield session


async def execute(db: AsyncSession, statement: Executable) -> Result:
    """Run a read statement, turning storage failures into DirectoryError."""
    try:
        return await db.execute(statement)
    except SQLAlchemyError as exc:
        logger.exception("Directory read failed")
        raise DirectoryError("Could not read from the directory") from exc


async def commit(db: AsyncSession) -> None:
    """Commit the session, turning storage failures into DirectoryError.

    The session is rolled back on failure so nothing is left half-written.
    """
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        logger.exception("Directory write failed")
        await db.rollback()
        raise DirectoryError("Could not save changes to the directory") from exc


async def refresh(db: AsyncSession, instance: object) -> None:
    """Reload an instance after a commit, turning storage failures into DirectoryError."""
    try:
        await db.refresh(instance)
    except SQLAlchemyError as exc:
        logger.exception("Directory read failed")
        raise DirectoryError("Could not read from the directory") from exc
