from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey
from sqlalchemy.orm import relationship
from finance_manager.core.database import Base

class SavingsGoal(Base):
    __tablename__ = "savings_goals"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    goal_name = Column(String(100), nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    target_date = Column(Date, nullable=False)
    start_date = Column(Date, nullable=False)
    
    # Progress is derived from transactions at read time, never stored
    
    # Relationships
    user = relationship("User", back_populates="savings_goals")
