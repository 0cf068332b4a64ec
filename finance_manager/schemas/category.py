from pydantic import BaseModel, Field

from finance_manager.models.category import CategoryType

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    type: CategoryType

class CategoryResponse(BaseModel):
    name: str
    type: CategoryType
    is_custom: bool
    
    class Config:
        from_attributes = True
