from typing import Optional

from domain.entities.user import User
from domain.repositories.user_repository import UserRepositoryProtocol


class UserService:
    def __init__(self, repository: UserRepositoryProtocol) -> None:
        self._repository = repository

    async def create_user(self, name: str, email: str) -> User:
        return await self._repository.create(name, email)

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._repository.find_by_id(user_id)
