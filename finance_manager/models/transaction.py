from sqlalchemy import Column, Integer, String, Numeric, Date, Text, Enum, ForeignKey
from sqlalchemy.orm import relationship
from finance_manager.core.database import Base
from finance_manager.models.category import CategoryType

class Transaction(Base):
    __tablename__ = "transactions"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=True)
    
    # Copied from the category on every write that binds one
    type = Column(Enum(CategoryType, name="category_type"), nullable=False)
    category_name = Column(String(50), nullable=False)
    
    # Relationships
    user = relationship("User", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")
    
    def bind_category(self, category) -> None:
        self.category_id = category.id
        self.category_name = category.name
        self.type = category.type
