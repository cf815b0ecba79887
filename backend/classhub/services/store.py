"""
ClassHub Backend — Generic Data-Access Store
==============================================

What:  The read/write controller every service goes through.
How:   Thin async wrappers over an AsyncSession: get by id, run a select,
       save (add + flush), delete. SQLAlchemy failures become DatabaseError.
Who:   ClassroomService, QuizService, AttendanceService, PeopleService and the
       authorization checks.

`save` flushes but never commits; the commit belongs to the request's session
dependency, so several saves in one request land in a single transaction.
"""

import logging
import uuid
from typing import Any, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from classhub.database import Base
from classhub.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Store:
    """Stateless; shared as the `store` singleton."""

    async def get(
        self,
        db: AsyncSession,
        model: Type[ModelT],
        record_id: uuid.UUID,
        options: Sequence[ORMOption] = (),
    ) -> Optional[ModelT]:
        """Row with the given primary key, or None."""
        statement = select(model).where(model.id == record_id)
        if options:
            # The row may already sit in the session (e.g. loaded by an
            # authorization check) without the requested relationships.
            statement = statement.options(*options).execution_options(populate_existing=True)
        try:
            result = await db.execute(statement)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Failed reading %s [%s]: %s", model.__name__, record_id, e)
            raise DatabaseError(context={"model": model.__name__, "id": str(record_id)})

    async def get_or_raise(
        self,
        db: AsyncSession,
        model: Type[ModelT],
        record_id: uuid.UUID,
        resource: str,
        options: Sequence[ORMOption] = (),
    ) -> ModelT:
        """Like `get`, but a missing row raises NotFoundError."""
        row = await self.get(db, model, record_id, options)
        if row is None:
            logger.error("%s [%s] not found", resource.capitalize(), record_id)
            raise NotFoundError(resource=resource, resource_id=str(record_id))
        logger.info("Successfully found %s [%s]", resource, record_id)
        return row

    async def find(self, db: AsyncSession, statement: Select[Any]) -> List[Any]:
        """All ORM entities produced by a select statement."""
        try:
            result = await db.execute(statement)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", e)
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def save(self, db: AsyncSession, row: ModelT) -> ModelT:
        """Add (if new) and flush so generated values are available."""
        db.add(row)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed saving %s: %s", type(row).__name__, e)
            raise DatabaseError(context={"model": type(row).__name__, "error_type": type(e).__name__})
        return row

    async def delete(self, db: AsyncSession, row: Base) -> None:
        try:
            await db.delete(row)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed deleting %s: %s", type(row).__name__, e)
            raise DatabaseError(context={"model": type(row).__name__, "error_type": type(e).__name__})


store = Store()
