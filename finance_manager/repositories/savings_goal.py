from typing import List, Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.models.savings_goal import SavingsGoal

class SavingsGoalRepository:
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def find_by_id(self, goal_id: int) -> Optional[SavingsGoal]:
        return await self.db.get(SavingsGoal, goal_id)
    
    async def find_by_user_id(self, user_id: int) -> List[SavingsGoal]:
        stmt = select(SavingsGoal).where(SavingsGoal.user_id == user_id).order_by(SavingsGoal.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def save(self, goal: SavingsGoal) -> SavingsGoal:
        self.db.add(goal)
        await self.db.flush()
        return goal
    
    async def delete_by_id(self, goal_id: int) -> None:
        await self.db.execute(delete(SavingsGoal).where(SavingsGoal.id == goal_id))
