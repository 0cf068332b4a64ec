"""
Transaction Manager
Transaction CRUD, category binding and ownership checks
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.core.datetime_utils import TodayProvider, today as default_today
from finance_manager.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from finance_manager.models.category import Category, CategoryType
from finance_manager.models.transaction import Transaction
from finance_manager.repositories import CategoryRepository, TransactionRepository
from finance_manager.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionResponse,
    TransactionUpdate
)
from finance_manager.services.base import BaseService

logger = logging.getLogger(__name__)

class TransactionManager(BaseService):
    """
    Manages a user's transactions.
    
    A transaction's ``type`` and ``category_name`` are copies of its
    category; they are re-derived from the category on every write that
    binds one, never edited on their own.
    """
    
    def __init__(self, db: AsyncSession, today: TodayProvider = default_today):
        super().__init__(db)
        self.today = today
        self.categories = CategoryRepository(db)
        self.transactions = TransactionRepository(db)
    
    async def create_transaction(self, user_id: int, request: TransactionCreate) -> TransactionResponse:
        """
        Record a transaction against one of the user's categories
        """
        async with self.unit_of_work():
            self._check_amount(request.amount)
            if request.date > self.today():
                raise BadRequestError("Date cannot be in the future")
            
            category = await self._resolve_category(user_id, request.category)
            
            transaction = Transaction(
                user_id=user_id,
                amount=request.amount,
                date=request.date,
                description=request.description
            )
            transaction.bind_category(category)
            transaction = await self.transactions.save(transaction)
            response = self._to_response(transaction)
        
        logger.info("User %s created transaction %s", user_id, response.id)
        return response
    
    async def list_transactions(
        self,
        user_id: int,
        filters: Optional[TransactionFilter] = None
    ) -> List[TransactionResponse]:
        """
        Transactions newest first, narrowed by whichever filters are given
        """
        filters = filters or TransactionFilter()
        
        async with self.unit_of_work():
            if filters.is_empty():
                transactions = await self.transactions.find_by_user_id_order_by_date_desc(user_id)
            else:
                category_id = None
                if filters.category:
                    category = await self._resolve_category(user_id, filters.category)
                    category_id = category.id
                
                transactions = await self.transactions.find_by_filters(
                    user_id,
                    start_date=filters.start_date,
                    end_date=filters.end_date,
                    category_id=category_id
                )
            
            return [self._to_response(transaction) for transaction in transactions]
    
    async def get_transaction_by_id(self, user_id: int, transaction_id: int) -> TransactionResponse:
        async with self.unit_of_work():
            transaction = await self._get_owned(user_id, transaction_id, "view")
            return self._to_response(transaction)
    
    async def update_transaction(
        self,
        user_id: int,
        transaction_id: int,
        update_data: TransactionUpdate
    ) -> TransactionResponse:
        """
        Apply a partial update. The date is never changed.
        """
        changes = update_data.changes()
        
        async with self.unit_of_work():
            transaction = await self._get_owned(user_id, transaction_id, "update")
            
            if "amount" in changes:
                self._check_amount(changes["amount"])
                transaction.amount = changes["amount"]
            
            if "description" in changes:
                transaction.description = changes["description"]
            
            if "category" in changes:
                category = await self._resolve_category(user_id, changes["category"])
                transaction.bind_category(category)
            
            transaction = await self.transactions.save(transaction)
            response = self._to_response(transaction)
        
        logger.info("User %s updated transaction %s (%s)", user_id, transaction_id, ", ".join(sorted(changes)) or "no changes")
        return response
    
    async def delete_transaction(self, user_id: int, transaction_id: int) -> None:
        async with self.unit_of_work():
            transaction = await self._get_owned(user_id, transaction_id, "delete")
            await self.transactions.delete(transaction)
        
        logger.info("User %s deleted transaction %s", user_id, transaction_id)
    
    # Aggregation primitives shared with goals and reports; they run inside
    # the caller's unit of work
    
    async def total_by_type(self, user_id: int, type: CategoryType, start_date: date, end_date: date) -> Decimal:
        return await self.transactions.calculate_total_amount_by_type_and_date_range(
            user_id, type, start_date, end_date
        )
    
    async def net_cash_flow(self, user_id: int, start_date: date, end_date: date) -> Decimal:
        """
        Income minus expenses over an inclusive date range
        """
        income = await self.total_by_type(user_id, CategoryType.INCOME, start_date, end_date)
        expenses = await self.total_by_type(user_id, CategoryType.EXPENSE, start_date, end_date)
        return income - expenses
    
    async def transactions_in_range(self, user_id: int, start_date: date, end_date: date) -> List[Transaction]:
        return await self.transactions.find_by_user_id_and_date_range(user_id, start_date, end_date)
    
    async def _resolve_category(self, user_id: int, name: str) -> Category:
        category = await self.categories.find_by_name_and_user_id(name, user_id)
        if category is None:
            raise NotFoundError(f"Category not found: {name}")
        return category
    
    async def _get_owned(self, user_id: int, transaction_id: int, action: str) -> Transaction:
        transaction = await self.transactions.find_by_id(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction not found with id: {transaction_id}")
        
        if transaction.user_id != user_id:
            logger.warning("User %s denied %s on transaction %s", user_id, action, transaction_id)
            raise ForbiddenError(f"You are not authorized to {action} this transaction.")
        
        return transaction
    
    @staticmethod
    def _check_amount(amount: Decimal) -> None:
        if amount is None or amount <= 0:
            raise BadRequestError("Amount must be greater than 0")
    
    @staticmethod
    def _to_response(transaction: Transaction) -> TransactionResponse:
        return TransactionResponse(
            id=transaction.id,
            amount=transaction.amount,
            date=transaction.date,
            category=transaction.category_name,
            description=transaction.description,
            type=transaction.type
        )
