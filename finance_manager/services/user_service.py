"""
User Service
Registration, current-user resolution and profile lookup
"""

import logging
from typing import Callable
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.core.exceptions import BadRequestError, ConflictError, NotFoundError
from finance_manager.core.security import get_password_hash
from finance_manager.models.user import User
from finance_manager.repositories import UserRepository
from finance_manager.schemas.user import UserCreate, UserProfile
from finance_manager.services.base import BaseService
from finance_manager.services.category_manager import CategoryManager

logger = logging.getLogger(__name__)

class UserService(BaseService):
    
    def __init__(
        self,
        db: AsyncSession,
        categories: CategoryManager = None,
        password_hasher: Callable[[str], str] = get_password_hash
    ):
        super().__init__(db)
        self.users = UserRepository(db)
        self.categories = categories or CategoryManager(db)
        self.password_hasher = password_hasher
    
    async def register_user(self, request: UserCreate) -> UserProfile:
        """
        Create a user and provision the default categories in one unit of work
        """
        username = (request.username or "").strip()
        full_name = (request.full_name or "").strip()
        if not username:
            raise BadRequestError("Username/email is required")
        if not full_name:
            raise BadRequestError("Name is required")
        
        message = f"Username already exists: {username}"
        async with self.unit_of_work(conflict_message=message):
            if await self.users.exists_by_username(username):
                logger.warning("Registration rejected: username already taken")
                raise ConflictError(message)
            
            user = await self.users.save(
                User(
                    username=username,
                    hashed_password=self.password_hasher(request.password),
                    full_name=full_name,
                    phone_number=request.phone_number or ""
                )
            )
            await self.categories.provision_default_categories(user.id)
            profile = UserProfile.model_validate(user)
        
        logger.info("Registered user %s", profile.id)
        return profile
    
    async def resolve_user_id(self, username: str) -> int:
        """
        Map an authenticated username to its user id
        """
        async with self.unit_of_work():
            user = await self.users.find_by_username(username)
            if user is None:
                raise NotFoundError(f"User not found: {username}")
            return user.id
    
    async def get_profile(self, user_id: int) -> UserProfile:
        async with self.unit_of_work():
            user = await self.users.find_by_id(user_id)
            if user is None:
                raise NotFoundError(f"User not found with id: {user_id}")
            return UserProfile.model_validate(user)
