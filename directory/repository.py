"""
Repository capability over the relational store
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy import select as sa_select, update as sa_update, delete as sa_delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from core.exceptions import QueryFailure, DuplicateRecord
import logging

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a uniqueness constraint violation"""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code == UNIQUE_VIOLATION
    # SQLite carries no SQLSTATE
    return "UNIQUE constraint failed" in str(orig)


class Repository(ABC):
    """
    The five store operations the directory services rely on.
    
    Criteria are SQLAlchemy column expressions; each call is a single
    round-trip that commits on its own (no multi-row transactions).
    """
    
    @abstractmethod
    async def select(
        self,
        model,
        *criteria,
        order_by: Iterable = (),
        offset: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Any]:
        """Return model instances matching all criteria"""
        pass
    
    @abstractmethod
    async def count(self, model, *criteria) -> int:
        """Count rows matching all criteria"""
        pass
    
    @abstractmethod
    async def insert(self, model, values: Dict[str, Any]) -> Any:
        """Insert one row and return it"""
        pass
    
    @abstractmethod
    async def update(self, model, values: Dict[str, Any], *criteria) -> List[Any]:
        """Update matching rows and return them as updated"""
        pass
    
    @abstractmethod
    async def delete(self, model, *criteria) -> int:
        """Delete matching rows and return how many were removed"""
        pass


class SQLAlchemyRepository(Repository):
    """
    Repository backed by an async SQLAlchemy session.
    
    Error mapping:
    - unique violations -> DuplicateRecord
    - any other SQLAlchemy error -> QueryFailure
    """
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
    
    async def select(self, model, *criteria, order_by=(), offset=None, limit=None):
        stmt = sa_select(model)
        if criteria:
            stmt = stmt.where(*criteria)
        order_by = tuple(order_by)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        
        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failure("select", model, e)
    
    async def count(self, model, *criteria):
        stmt = sa_select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        
        try:
            result = await self.db.execute(stmt)
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._failure("count", model, e)
    
    async def insert(self, model, values):
        instance = model(**values)
        self.db.add(instance)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._failure("insert", model, e)
        return instance
    
    async def update(self, model, values, *criteria):
        stmt = (
            sa_update(model)
            .where(*criteria)
            .values(**values)
            .returning(model)
        )
        try:
            result = await self.db.execute(stmt)
            rows = list(result.scalars().all())
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._failure("update", model, e)
        return rows
    
    async def delete(self, model, *criteria):
        stmt = sa_delete(model).where(*criteria).execution_options(synchronize_session=False)
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._failure("delete", model, e)
        return result.rowcount or 0
    
    @staticmethod
    def _failure(operation: str, model, exc: SQLAlchemyError) -> QueryFailure:
        context = {"operation": operation, "table_name": model.__tablename__}
        if isinstance(exc, IntegrityError) and is_unique_violation(exc):
            return DuplicateRecord(
                f"{operation} on {model.__tablename__} violates a uniqueness constraint",
                context=context,
                original_exception=exc
            )
        logger.error(f"Store {operation} on {model.__tablename__} failed: {exc}")
        return QueryFailure(
            f"{operation} on {model.__tablename__} failed",
            context=context,
            original_exception=exc
        )
