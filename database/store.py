"""
Document-store facade over SQLAlchemy.

Each ``DocumentCollection`` wraps one ORM model and exposes the six
operations the services rely on.  Records go in and come out as plain
dicts keyed by model attribute name, so services never hold ORM objects
or sessions.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from database.models import Base, Recipe, User
from database.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The underlying database failed."""


class DuplicateKeyError(StoreError):
    """An insert violated a unique constraint."""


def _to_dict(row: Base) -> Dict[str, Any]:
    return {attr.key: getattr(row, attr.key) for attr in row.__mapper__.column_attrs}


class DocumentCollection:
    def __init__(
        self,
        model: Type[Base],
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self.model = model
        self._session_factory = session_factory

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _filters(self, filters: Dict[str, Any]) -> list:
        clauses = []
        for key, value in filters.items():
            column = getattr(self.model, key, None)
            if column is None:
                raise StoreError(f"Unknown field {key!r} on {self.name}")
            clauses.append(column == value)
        return clauses

    async def find_one(self, **filters: Any) -> Optional[Dict[str, Any]]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(self.model).where(*self._filters(filters)).limit(1)
                )
                row = result.scalar_one_or_none()
                return _to_dict(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreError(f"find_one on {self.name} failed") from exc

    async def find_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            async with self._session_factory() as session:
                row = await session.get(self.model, record_id)
                return _to_dict(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreError(f"find_by_id on {self.name} failed") from exc

    async def find(self, **filters: Any) -> List[Dict[str, Any]]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(self.model).where(*self._filters(filters))
                )
                return [_to_dict(row) for row in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreError(f"find on {self.name} failed") from exc

    async def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        row = self.model(**document)
        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
                return _to_dict(row)
        except IntegrityError as exc:
            raise DuplicateKeyError(f"Duplicate key on {self.name}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"create on {self.name} failed") from exc

    async def find_by_id_and_update(
        self,
        record_id: str,
        changes: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Apply ``changes`` and return the updated record, or ``None``."""
        try:
            async with self._session_factory() as session:
                row = await session.get(self.model, record_id)
                if row is None:
                    return None
                for key, value in changes.items():
                    setattr(row, key, value)
                await session.commit()
                await session.refresh(row)
                return _to_dict(row)
        except SQLAlchemyError as exc:
            raise StoreError(f"update on {self.name} failed") from exc

    async def find_by_id_and_delete(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Delete the record and return it as it was, or ``None``."""
        try:
            async with self._session_factory() as session:
                row = await session.get(self.model, record_id)
                if row is None:
                    return None
                snapshot = _to_dict(row)
                await session.delete(row)
                await session.commit()
                return snapshot
        except SQLAlchemyError as exc:
            raise StoreError(f"delete on {self.name} failed") from exc


class DocumentStore:
    """The process-wide store handle: one engine, one collection per model."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        session_factory = build_session_factory(engine)
        self.users = DocumentCollection(User, session_factory)
        self.recipes = DocumentCollection(Recipe, session_factory)

    @classmethod
    def from_url(cls, database_url: str, *, echo: bool = False) -> "DocumentStore":
        return cls(build_engine(database_url, echo=echo))

    async def init_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        await self.engine.dispose()
