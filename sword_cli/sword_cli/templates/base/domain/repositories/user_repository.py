from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities.user import User
from infrastructure.database.models import UserModel


class UserRepositoryProtocol(Protocol):
    async def create(self, name: str, email: str) -> User: ...

    async def find_by_id(self, user_id: int) -> Optional[User]: ...


def _to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        created_at=model.created_at,
        name=model.name,
        email=model.email,
    )


class UserRepository:
    """SQLAlchemy implementation of :class:`UserRepositoryProtocol`."""

    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def create(self, name: str, email: str) -> User:
        async with self._sessions() as session:
            model = UserModel(name=name, email=email)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return _to_entity(model)

    async def find_by_id(self, user_id: int) -> Optional[User]:
        async with self._sessions() as session:
            model = await session.get(UserModel, user_id)
            return _to_entity(model) if model is not None else None
