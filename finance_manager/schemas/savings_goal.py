from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Optional

class SavingsGoalCreate(BaseModel):
    goal_name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., gt=0, max_digits=12)
    target_date: date
    start_date: Optional[date] = None  # defaults to today

class SavingsGoalUpdate(BaseModel):
    """Partial update; unset or None fields are left alone."""
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12)
    target_date: Optional[date] = None
    
    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)

class SavingsGoalResponse(BaseModel):
    id: int
    goal_name: str
    target_amount: Decimal
    target_date: date
    start_date: date
    current_progress: Decimal
    progress_percentage: float
    remaining_amount: Decimal
