from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import select, exists, func, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.models.category import CategoryType
from finance_manager.models.transaction import Transaction

class TransactionRepository:
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def find_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return await self.db.get(Transaction, transaction_id)
    
    async def find_by_user_id_order_by_date_desc(self, user_id: int) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(desc(Transaction.date), desc(Transaction.id))
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def find_by_filters(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None
    ) -> List[Transaction]:
        """
        Transactions of one user, newest first; each filter given narrows the result
        """
        query = select(Transaction).where(Transaction.user_id == user_id)
        
        # Apply filters
        if start_date is not None:
            query = query.where(Transaction.date >= start_date)
        
        if end_date is not None:
            query = query.where(Transaction.date <= end_date)
        
        if category_id is not None:
            query = query.where(Transaction.category_id == category_id)
        
        query = query.order_by(desc(Transaction.date), desc(Transaction.id))
        
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def find_by_user_id_and_date_range(
        self,
        user_id: int,
        start_date: date,
        end_date: date
    ) -> List[Transaction]:
        stmt = select(Transaction).where(
            and_(
                Transaction.user_id == user_id,
                Transaction.date >= start_date,
                Transaction.date <= end_date
            )
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def exists_by_category_id(self, category_id: int) -> bool:
        result = await self.db.execute(
            select(exists().where(Transaction.category_id == category_id))
        )
        return bool(result.scalar())
    
    async def calculate_total_amount_by_type_and_date_range(
        self,
        user_id: int,
        type: CategoryType,
        start_date: date,
        end_date: date
    ) -> Decimal:
        """
        Sum of amounts of one type over an inclusive date range; zero when nothing matches
        """
        stmt = select(func.sum(Transaction.amount)).where(
            and_(
                Transaction.user_id == user_id,
                Transaction.type == type,
                Transaction.date >= start_date,
                Transaction.date <= end_date
            )
        )
        result = await self.db.execute(stmt)
        total = result.scalar()
        return Decimal(total) if total is not None else Decimal("0")
    
    async def save(self, transaction: Transaction) -> Transaction:
        self.db.add(transaction)
        await self.db.flush()
        return transaction
    
    async def delete(self, transaction: Transaction) -> None:
        await self.db.delete(transaction)
        await self.db.flush()
