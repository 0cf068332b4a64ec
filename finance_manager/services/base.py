"""
Shared unit-of-work handling for the services
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.core.exceptions import ConflictError, FinanceError, InternalError

logger = logging.getLogger(__name__)

class BaseService:
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    @asynccontextmanager
    async def unit_of_work(self, conflict_message: Optional[str] = None) -> AsyncIterator[None]:
        """
        Run one public operation as a single storage transaction.
        
        Commits when the body finishes, rolls back on any failure. Storage
        errors surface as InternalError, except an integrity violation when
        the operation names the uniqueness rule it could break.
        Anything else unexpected is logged and surfaces as InternalError.
        """
        try:
            yield
            await self.db.commit()
        except FinanceError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            if conflict_message is not None:
                logger.warning("Uniqueness violation: %s", conflict_message)
                raise ConflictError(conflict_message) from e
            logger.error("Integrity error during unit of work", exc_info=True)
            raise InternalError() from e
        except Exception as e:
            await self.db.rollback()
            logger.error("Unexpected failure during unit of work", exc_info=True)
            raise InternalError() from e
