"""
Category Manager
Listing, custom category creation, default provisioning and deletion policy
"""

import logging
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError
)
from finance_manager.models.category import Category, CategoryType
from finance_manager.repositories import CategoryRepository, TransactionRepository
from finance_manager.schemas.category import CategoryCreate, CategoryResponse
from finance_manager.services.base import BaseService

logger = logging.getLogger(__name__)

# Created once per user at registration; never deletable
DEFAULT_CATEGORIES: Tuple[Tuple[str, CategoryType], ...] = (
    ("Salary", CategoryType.INCOME),
    ("Food", CategoryType.EXPENSE),
    ("Rent", CategoryType.EXPENSE),
    ("Transportation", CategoryType.EXPENSE),
    ("Entertainment", CategoryType.EXPENSE),
    ("Healthcare", CategoryType.EXPENSE),
    ("Utilities", CategoryType.EXPENSE),
)

class CategoryManager(BaseService):
    """
    Owns the category lifecycle for a user
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.categories = CategoryRepository(db)
        self.transactions = TransactionRepository(db)
    
    async def list_categories(self, user_id: int) -> List[CategoryResponse]:
        """
        All categories of the user, defaults and custom
        """
        async with self.unit_of_work():
            categories = await self.categories.find_by_user_id(user_id)
            return [self._to_response(category) for category in categories]
    
    async def create_custom_category(self, user_id: int, request: CategoryCreate) -> CategoryResponse:
        """
        Create a custom category; names are unique per user
        """
        message = f"Category with name '{request.name}' already exists."
        async with self.unit_of_work(conflict_message=message):
            if await self.categories.exists_by_name_and_user_id(request.name, user_id):
                logger.warning("User %s tried to create duplicate category", user_id)
                raise ConflictError(message)
            
            category = await self.categories.save(
                Category(
                    user_id=user_id,
                    name=request.name,
                    type=request.type,
                    is_custom=True
                )
            )
            category_id = category.id
            response = self._to_response(category)
        
        logger.info("User %s created category %s", user_id, category_id)
        return response
    
    async def delete_category_by_name(self, user_id: int, name: str) -> None:
        """
        Delete a custom category that no transaction uses
        
        Raises:
            NotFoundError: no category with that name for the user
            ForbiddenError: the category is a default one
            BadRequestError: transactions still reference it
        """
        async with self.unit_of_work():
            category = await self.categories.find_by_name_and_user_id(name, user_id)
            if category is None:
                raise NotFoundError(f"Category '{name}' not found.")
            
            if not category.is_custom:
                logger.warning("User %s tried to delete default category %s", user_id, category.id)
                raise ForbiddenError("Cannot delete default categories.")
            
            if await self.transactions.exists_by_category_id(category.id):
                logger.warning("User %s tried to delete category %s still in use", user_id, category.id)
                raise BadRequestError("Cannot delete category that is in use by a transaction.")
            
            category_id = category.id
            await self.categories.delete(category)
        
        logger.info("User %s deleted category %s", user_id, category_id)
    
    async def provision_default_categories(self, user_id: int) -> List[Category]:
        """
        Create the fixed default categories for a newly registered user.
        
        Runs inside the registration unit of work; the caller commits.
        """
        categories = [
            Category(user_id=user_id, name=name, type=type_, is_custom=False)
            for name, type_ in DEFAULT_CATEGORIES
        ]
        saved = await self.categories.save_all(categories)
        logger.info("Provisioned %d default categories for user %s", len(saved), user_id)
        return saved
    
    @staticmethod
    def _to_response(category: Category) -> CategoryResponse:
        return CategoryResponse(
            name=category.name,
            type=category.type,
            is_custom=category.is_custom
        )
