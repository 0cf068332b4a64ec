"""
Report Generator
Monthly and yearly income/expense aggregation
"""

import logging
from collections import defaultdict
from datetime import date, MINYEAR, MAXYEAR
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.core.datetime_utils import month_bounds, year_bounds
from finance_manager.core.exceptions import BadRequestError
from finance_manager.models.category import CategoryType
from finance_manager.models.transaction import Transaction
from finance_manager.schemas.report import MonthlyReport, YearlyReport
from finance_manager.services.base import BaseService
from finance_manager.services.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

class ReportGenerator(BaseService):
    """
    Read-only reports over a calendar month or year
    """
    
    def __init__(self, db: AsyncSession, transactions: Optional[TransactionManager] = None):
        super().__init__(db)
        self.transactions = transactions or TransactionManager(db)
    
    async def monthly_report(self, user_id: int, year: int, month: int) -> MonthlyReport:
        _check_year(year)
        if not 1 <= month <= 12:
            raise BadRequestError("Month must be between 1 and 12")
        
        start_date, end_date = month_bounds(year, month)
        totals = await self._aggregate(user_id, start_date, end_date)
        
        logger.debug("Monthly report %04d-%02d built for user %s", year, month, user_id)
        return MonthlyReport(month=month, year=year, **totals)
    
    async def yearly_report(self, user_id: int, year: int) -> YearlyReport:
        _check_year(year)
        start_date, end_date = year_bounds(year)
        totals = await self._aggregate(user_id, start_date, end_date)
        
        logger.debug("Yearly report %04d built for user %s", year, user_id)
        return YearlyReport(year=year, **totals)
    
    async def _aggregate(self, user_id: int, start_date: date, end_date: date) -> Dict:
        async with self.unit_of_work():
            transactions = await self.transactions.transactions_in_range(user_id, start_date, end_date)
            income_by_category = totals_by_category(transactions, CategoryType.INCOME)
            expenses_by_category = totals_by_category(transactions, CategoryType.EXPENSE)
        
        total_income = sum(income_by_category.values(), Decimal("0")).quantize(CENTS, rounding=ROUND_HALF_UP)
        total_expenses = sum(expenses_by_category.values(), Decimal("0")).quantize(CENTS, rounding=ROUND_HALF_UP)
        
        return {
            "income_by_category": income_by_category,
            "expenses_by_category": expenses_by_category,
            "total_income": total_income,
            "total_expenses": total_expenses,
            "net_savings": net_savings(total_income, total_expenses)
        }

def _check_year(year: int) -> None:
    if not MINYEAR <= year <= MAXYEAR:
        raise BadRequestError(f"Year must be between {MINYEAR} and {MAXYEAR}")

def totals_by_category(transactions: Iterable[Transaction], type: CategoryType) -> Dict[str, Decimal]:
    """
    Exact per-category sums of the transactions of one type
    """
    totals = defaultdict(lambda: Decimal("0"))
    for transaction in transactions:
        if transaction.type == type:
            totals[transaction.category_name] += Decimal(transaction.amount)
    return dict(totals)

def net_savings(total_income: Decimal, total_expenses: Decimal) -> Decimal:
    """
    Income minus expenses at 2 decimals; a zero difference is plain 0, never -0.00
    """
    raw = total_income - total_expenses
    if raw == 0:
        return Decimal("0")
    return raw.quantize(CENTS, rounding=ROUND_HALF_UP)
