from typing import Optional, List

from parking_reservation.application.repositories import AbstractUserRepository
from parking_reservation.domain.entities import User


class UserService:
    def __init__(self, user_repo: AbstractUserRepository):
        self.user_repo = user_repo

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)

    async def get_all_users(self) -> List[User]:
        return await self.user_repo.get_all()
