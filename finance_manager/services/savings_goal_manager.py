"""
Savings Goal Manager
Goal CRUD with progress derived from the user's transactions
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.core.datetime_utils import TodayProvider, today as default_today
from finance_manager.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from finance_manager.models.savings_goal import SavingsGoal
from finance_manager.repositories import SavingsGoalRepository
from finance_manager.schemas.savings_goal import (
    SavingsGoalCreate,
    SavingsGoalResponse,
    SavingsGoalUpdate
)
from finance_manager.services.base import BaseService
from finance_manager.services.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
CENTS = Decimal("0.01")

class SavingsGoalManager(BaseService):
    """
    Savings goals store only their target; progress is recomputed on every read
    as net cash flow (income - expenses) from the goal's start date to today.
    """
    
    def __init__(
        self,
        db: AsyncSession,
        transactions: Optional[TransactionManager] = None,
        today: TodayProvider = default_today
    ):
        super().__init__(db)
        self.today = today
        self.goals = SavingsGoalRepository(db)
        self.transactions = transactions or TransactionManager(db, today=today)
    
    async def create_goal(self, user_id: int, request: SavingsGoalCreate) -> SavingsGoalResponse:
        async with self.unit_of_work():
            start_date = request.start_date or self.today()
            
            # Validate that start date is not after target date
            if start_date > request.target_date:
                raise BadRequestError("Start date cannot be after target date")
            
            self._check_target_amount(request.target_amount)
            
            goal = await self.goals.save(
                SavingsGoal(
                    user_id=user_id,
                    goal_name=request.goal_name,
                    target_amount=request.target_amount,
                    target_date=request.target_date,
                    start_date=start_date
                )
            )
            response = await self._to_response(goal)
        
        logger.info("User %s created savings goal %s", user_id, response.id)
        return response
    
    async def list_goals(self, user_id: int) -> List[SavingsGoalResponse]:
        async with self.unit_of_work():
            goals = await self.goals.find_by_user_id(user_id)
            return [await self._to_response(goal) for goal in goals]
    
    async def get_goal_by_id(self, user_id: int, goal_id: int) -> SavingsGoalResponse:
        async with self.unit_of_work():
            goal = await self._get_owned(user_id, goal_id, "access")
            return await self._to_response(goal)
    
    async def update_goal(self, user_id: int, goal_id: int, update_data: SavingsGoalUpdate) -> SavingsGoalResponse:
        """
        Apply a partial update to target amount and/or target date
        """
        changes = update_data.changes()
        
        async with self.unit_of_work():
            goal = await self._get_owned(user_id, goal_id, "update")
            
            if "target_amount" in changes:
                self._check_target_amount(changes["target_amount"])
                goal.target_amount = changes["target_amount"]
            
            if "target_date" in changes:
                if goal.start_date > changes["target_date"]:
                    raise BadRequestError("Target date cannot be before start date")
                goal.target_date = changes["target_date"]
            
            goal = await self.goals.save(goal)
            response = await self._to_response(goal)
        
        logger.info("User %s updated savings goal %s", user_id, goal_id)
        return response
    
    async def delete_goal(self, user_id: int, goal_id: int) -> None:
        async with self.unit_of_work():
            await self._get_owned(user_id, goal_id, "delete")
            await self.goals.delete_by_id(goal_id)
        
        logger.info("User %s deleted savings goal %s", user_id, goal_id)
    
    async def calculate_progress(self, goal: SavingsGoal) -> Decimal:
        """
        Net cash flow of the goal's owner from the start date through today
        """
        return await self.transactions.net_cash_flow(goal.user_id, goal.start_date, self.today())
    
    async def _get_owned(self, user_id: int, goal_id: int, action: str) -> SavingsGoal:
        goal = await self.goals.find_by_id(goal_id)
        if goal is None:
            raise NotFoundError(f"Savings goal not found with id: {goal_id}")
        
        if goal.user_id != user_id:
            logger.warning("User %s denied %s on savings goal %s", user_id, action, goal_id)
            raise ForbiddenError(f"You are not authorized to {action} this savings goal.")
        
        return goal
    
    async def _to_response(self, goal: SavingsGoal) -> SavingsGoalResponse:
        target = Decimal(goal.target_amount)
        progress = await self.calculate_progress(goal)
        
        return SavingsGoalResponse(
            id=goal.id,
            goal_name=goal.goal_name,
            target_amount=target,
            target_date=goal.target_date,
            start_date=goal.start_date,
            current_progress=progress,
            progress_percentage=progress_percentage(progress, target),
            remaining_amount=target - progress
        )
    
    @staticmethod
    def _check_target_amount(amount: Decimal) -> None:
        if amount is None or amount <= 0:
            raise BadRequestError("Target amount must be greater than 0")

def progress_percentage(progress: Decimal, target: Decimal) -> float:
    """
    Share of the target reached, in percent, 2 decimals rounded half-up.
    
    Trailing zeros are dropped before the float conversion; a non-positive
    target gives 0.
    """
    if target <= 0:
        return 0.0
    
    percentage = (progress * HUNDRED / target).quantize(CENTS, rounding=ROUND_HALF_UP)
    return float(percentage.normalize())
