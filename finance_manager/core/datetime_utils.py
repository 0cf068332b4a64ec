"""
Calendar helpers for report ranges and goal progress windows
"""

from datetime import date
from calendar import monthrange
from typing import Callable, Tuple

# Injected wherever "today" matters so callers can pin the clock
TodayProvider = Callable[[], date]

def today() -> date:
    return date.today()

def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """
    First and last calendar day of a month
    
    Args:
        year: Calendar year
        month: Month number, 1-12
    
    Returns:
        Inclusive (start, end) dates
    """
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])

def year_bounds(year: int) -> Tuple[date, date]:
    """Inclusive (Jan 1, Dec 31) of a year"""
    return date(year, 1, 1), date(year, 12, 31)
