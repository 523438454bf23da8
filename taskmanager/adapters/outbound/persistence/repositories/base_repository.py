# taskmanager/adapters/outbound/persistence/repositories/base_repository.py

"""
Async Base Repository

Shared plumbing for the SQLAlchemy stores: each store is bound to one
AsyncSession, and every database failure is rolled back and re-raised as
DatabaseOperationException with uniform logging.
"""

import logging
from typing import Any, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from taskmanager.adapters.outbound.persistence.models.base_model import Base
from taskmanager.domain.exceptions import DatabaseOperationException

# Configure logger
logger = logging.getLogger(__name__)


class AsyncSQLAlchemyRepository:
    """
    Base class for stores bound to a single async session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    async def _get_model(self, model: Type[Base], id: Any) -> Optional[Base]:
        """Retrieve an ORM object by primary key with its joined relations."""
        query = select(model).where(model.id == id).execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.unique().scalar_one_or_none()

    async def _fail(self, message: str, error: SQLAlchemyError) -> DatabaseOperationException:
        """Roll back the session and build the exception to raise."""
        self.logger.error(f"{message}: {str(error)}")
        try:
            await self.db.rollback()
        except SQLAlchemyError as rollback_error:
            self.logger.error(f"Rollback failed: {str(rollback_error)}")
        return DatabaseOperationException(message=message, original_error=error)
