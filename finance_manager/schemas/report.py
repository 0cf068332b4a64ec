from pydantic import BaseModel
from decimal import Decimal
from typing import Dict

class YearlyReport(BaseModel):
    year: int
    income_by_category: Dict[str, Decimal]
    expenses_by_category: Dict[str, Decimal]
    total_income: Decimal
    total_expenses: Decimal
    net_savings: Decimal

class MonthlyReport(YearlyReport):
    month: int
