"""
User Pydantic schemas
"""

from pydantic import BaseModel, Field
from typing import Optional

class UserCreate(BaseModel):
    username: str = Field(..., description="Email address used to sign in")
    password: str = Field(..., min_length=6, max_length=72, description="Password must be between 6-72 characters")
    full_name: str
    phone_number: Optional[str] = None

class UserProfile(BaseModel):
    id: int
    username: str
    full_name: str
    phone_number: Optional[str] = None
    
    class Config:
        from_attributes = True
