"""User directory service."""

from src.taskboard.models import User
from src.taskboard.repositories.protocols import UserStore


class UserService:
    """Read access to the user directory (used to pick members and assignees)."""

    def __init__(self, users: UserStore):
        self.users = users

    async def list_users(self) -> list[User]:
        return await self.users.list_all()
