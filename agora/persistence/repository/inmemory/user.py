"""In-memory user repository for testing."""

from typing import Optional

from agora.domain.model.user import User
from agora.domain.repository.user import UserRepository
from agora.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self.database = database or InMemoryDatabase()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.database.users.get(user_id)

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        self.database.users[user.id] = user
        return user
