from pydantic import BaseModel, Field
import datetime
from decimal import Decimal
from typing import Optional

from finance_manager.models.category import CategoryType

class TransactionCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    date: datetime.date
    category: str
    description: Optional[str] = None

class TransactionUpdate(BaseModel):
    """
    Partial update. Only fields the caller actually set are applied;
    a field left out, or set to None, leaves the stored value unchanged.
    Date is not part of the patch: it is fixed at creation.
    """
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    category: Optional[str] = None
    description: Optional[str] = None
    
    def changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True, exclude_none=True)
        # Blank category names are treated as absent
        if "category" in changes and not changes["category"].strip():
            del changes["category"]
        return changes

class TransactionFilter(BaseModel):
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    category: Optional[str] = None
    
    def is_empty(self) -> bool:
        return self.start_date is None and self.end_date is None and not self.category

class TransactionResponse(BaseModel):
    id: int
    amount: Decimal
    date: datetime.date
    category: str
    description: Optional[str] = None
    type: CategoryType
