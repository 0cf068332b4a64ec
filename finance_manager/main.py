"""
Finance Manager entry points

The boundary layer (HTTP, CLI, ...) resolves the caller's identity, opens a
service scope and calls the manager operation with the resolved user id.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from finance_manager.config import settings
from finance_manager.core.database import engine as default_engine, async_session, Base
from finance_manager.core.datetime_utils import TodayProvider, today as default_today
from finance_manager.core.logging import configure_logging
from finance_manager.services import (
    CategoryManager,
    ReportGenerator,
    SavingsGoalManager,
    TransactionManager,
    UserService
)
import finance_manager.models

logger = logging.getLogger(__name__)

@dataclass
class FinanceServices:
    """All managers bound to one session"""
    users: UserService
    categories: CategoryManager
    transactions: TransactionManager
    savings_goals: SavingsGoalManager
    reports: ReportGenerator
    
    @classmethod
    def for_session(cls, db: AsyncSession, today: TodayProvider = default_today) -> "FinanceServices":
        categories = CategoryManager(db)
        transactions = TransactionManager(db, today=today)
        return cls(
            users=UserService(db, categories=categories),
            categories=categories,
            transactions=transactions,
            savings_goals=SavingsGoalManager(db, transactions=transactions, today=today),
            reports=ReportGenerator(db, transactions=transactions)
        )

async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Configure logging and create database tables"""
    configure_logging()
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    
    async with (engine or default_engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    logger.info("Database initialized")

@asynccontextmanager
async def service_scope(
    session_factory: async_sessionmaker = async_session,
    today: TodayProvider = default_today
) -> AsyncIterator[FinanceServices]:
    """
    Open a session for one inbound call and hand out the managers bound to it
    """
    async with session_factory() as session:
        yield FinanceServices.for_session(session, today=today)
