"""Concrete repository implementation for user accounts."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from car_inventory.application.interfaces import UserRepository
from car_inventory.domain.entities import User, UserRole
from car_inventory.domain.exceptions import DuplicateEntityError
from car_inventory.infrastructure.database.models import UserModel
from car_inventory.infrastructure.database.repositories.store_errors import store_errors


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            password_hash=model.password_hash,
            role=UserRole(model.role),
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, user_id: str) -> User | None:
        with store_errors("user get"):
            model = await self._session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        with store_errors("user lookup"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self._session.add(model)
        try:
            with store_errors("user create"):
                await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError("User", "email", user.email) from exc
        return self._to_entity(model)
