import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from werkzeug.security import check_password_hash

from finance_manager.core.exceptions import BadRequestError, ConflictError, InternalError, NotFoundError
from finance_manager.main import FinanceServices
from finance_manager.models.category import CategoryType
from finance_manager.schemas.category import CategoryCreate
from finance_manager.schemas.savings_goal import SavingsGoalCreate
from finance_manager.schemas.transaction import TransactionCreate, TransactionFilter, TransactionUpdate
from finance_manager.models.user import User
from finance_manager.repositories import UserRepository
from finance_manager.schemas.user import UserCreate
from finance_manager.services.user_service import UserService
from conftest import TODAY

async def test_register_user(services, db):
    profile = await services.users.register_user(
        UserCreate(username="carol@example.com", password="secret123", full_name="Carol", phone_number="555-0100")
    )
    
    stored = await UserRepository(db).find_by_username("carol@example.com")
    
    assert profile.username == "carol@example.com"
    assert profile.full_name == "Carol"
    assert profile.phone_number == "555-0100"
    assert stored.hashed_password != "secret123"
    assert check_password_hash(stored.hashed_password, "secret123") == True

async def test_register_duplicate_username_conflicts(services, user_id):
    with pytest.raises(ConflictError):
        await services.users.register_user(
            UserCreate(username="alice@example.com", password="another1", full_name="Alice Again")
        )
    
    assert len(await services.categories.list_categories(user_id)) == 7

async def test_register_requires_username_and_name(services):
    with pytest.raises(BadRequestError):
        await services.users.register_user(UserCreate(username="  ", password="secret123", full_name="X"))
    with pytest.raises(BadRequestError):
        await services.users.register_user(UserCreate(username="x@example.com", password="secret123", full_name=""))

async def test_phone_defaults_to_empty(services, user_id):
    profile = await services.users.get_profile(user_id)
    
    assert profile.phone_number == ""
    assert profile.full_name == "Alice"

async def test_resolve_user_id(services, user_id):
    assert await services.users.resolve_user_id("alice@example.com") == user_id
    
    with pytest.raises(NotFoundError):
        await services.users.resolve_user_id("nobody@example.com")

async def test_get_profile_missing_user(services):
    with pytest.raises(NotFoundError):
        await services.users.get_profile(12345)

async def test_storage_uniqueness_maps_to_conflict(db, user_id):
    # Skips the existence check so only the unique constraint can catch it
    class RacingRepository(UserRepository):
        async def exists_by_username(self, username):
            return False
    
    service = UserService(db)
    service.users = RacingRepository(db)
    
    with pytest.raises(ConflictError) as exc:
        await service.register_user(
            UserCreate(username="alice@example.com", password="secret123", full_name="Alice")
        )
    
    assert "alice@example.com" in exc.value.message

async def test_unexpected_failure_is_internal(db):
    def broken_hasher(password):
        raise RuntimeError("hash backend down")
    
    service = UserService(db, password_hasher=broken_hasher)
    
    with pytest.raises(InternalError) as exc:
        await service.register_user(
            UserCreate(username="dave@example.com", password="secret123", full_name="Dave")
        )
    
    assert exc.value.message == "An unexpected error occurred"
    assert await UserRepository(db).find_by_username("dave@example.com") is None

async def test_service_scope_shares_one_session(session_factory):
    from finance_manager.main import service_scope
    
    async with service_scope(session_factory) as scoped:
        profile = await scoped.users.register_user(
            UserCreate(username="erin@example.com", password="secret123", full_name="Erin")
        )
        assert scoped.categories.db is scoped.transactions.db
    
    async with service_scope(session_factory) as scoped:
        assert await scoped.users.resolve_user_id("erin@example.com") == profile.id

async def test_results_are_built_before_commit_expires_them(engine):
    # Default factory settings: every commit expires loaded instances
    expiring_factory = async_sessionmaker(engine, class_=AsyncSession)
    
    async with expiring_factory() as session:
        scoped = FinanceServices.for_session(session, today=lambda: TODAY)
        
        profile = await scoped.users.register_user(
            UserCreate(username="frank@example.com", password="secret123", full_name="Frank")
        )
        assert profile.full_name == "Frank"
        assert await scoped.users.resolve_user_id("frank@example.com") == profile.id
        assert (await scoped.users.get_profile(profile.id)).username == "frank@example.com"
        
        category = await scoped.categories.create_custom_category(
            profile.id, CategoryCreate(name="Freelance", type=CategoryType.INCOME)
        )
        assert category.name == "Freelance"
        assert len(await scoped.categories.list_categories(profile.id)) == 8
        
        created = await scoped.transactions.create_transaction(
            profile.id, TransactionCreate(amount=Decimal("40.00"), date=date(2024, 6, 1), category="Freelance")
        )
        assert created.type == CategoryType.INCOME
        assert (await scoped.transactions.get_transaction_by_id(profile.id, created.id)).amount == Decimal("40.00")
        assert len(await scoped.transactions.list_transactions(profile.id)) == 1
        assert len(await scoped.transactions.list_transactions(profile.id, TransactionFilter(category="Freelance"))) == 1
        
        updated = await scoped.transactions.update_transaction(
            profile.id, created.id, TransactionUpdate(description="Invoice 7")
        )
        assert updated.description == "Invoice 7"
        
        goal = await scoped.savings_goals.create_goal(
            profile.id,
            SavingsGoalCreate(goal_name="Bike", target_amount=Decimal("400"), target_date=date(2024, 12, 31), start_date=date(2024, 1, 1))
        )
        assert goal.current_progress == Decimal("40.00")
        
        report = await scoped.reports.monthly_report(profile.id, 2024, 6)
        assert report.income_by_category == {"Freelance": Decimal("40.00")}
        
        await scoped.transactions.delete_transaction(profile.id, created.id)
        await scoped.categories.delete_category_by_name(profile.id, "Freelance")
        assert len(await scoped.categories.list_categories(profile.id)) == 7
