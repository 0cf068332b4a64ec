from typing import List, Optional, Sequence
from sqlalchemy import select, exists, and_
from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.models.category import Category

class CategoryRepository:
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def find_by_user_id(self, user_id: int) -> List[Category]:
        stmt = select(Category).where(Category.user_id == user_id).order_by(Category.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def find_by_name_and_user_id(self, name: str, user_id: int) -> Optional[Category]:
        stmt = select(Category).where(
            and_(
                Category.name == name,
                Category.user_id == user_id
            )
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
    
    async def exists_by_name_and_user_id(self, name: str, user_id: int) -> bool:
        stmt = select(exists().where(
            and_(
                Category.name == name,
                Category.user_id == user_id
            )
        ))
        result = await self.db.execute(stmt)
        return bool(result.scalar())
    
    async def exists_by_id_and_is_custom(self, category_id: int, is_custom: bool) -> bool:
        stmt = select(exists().where(
            and_(
                Category.id == category_id,
                Category.is_custom == is_custom
            )
        ))
        result = await self.db.execute(stmt)
        return bool(result.scalar())
    
    async def save(self, category: Category) -> Category:
        self.db.add(category)
        await self.db.flush()
        return category
    
    async def save_all(self, categories: Sequence[Category]) -> List[Category]:
        self.db.add_all(categories)
        await self.db.flush()
        return list(categories)
    
    async def delete(self, category: Category) -> None:
        await self.db.delete(category)
        await self.db.flush()
