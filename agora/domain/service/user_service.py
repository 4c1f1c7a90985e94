"""User domain service."""

import logfire

from agora.domain.model.user import User
from agora.domain.repository import UserRepository
from agora.domain.value import UserIdentity

from .base import Service


class UserService(Service):
    """Domain service for the stored user projection."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def record_identity(self, identity: UserIdentity) -> User:
        """Store the caller so their posts and comments can show an author.

        Called on every write; updates the username if it changed.

        Args:
            identity: Authenticated caller

        Returns:
            Stored user
        """
        existing = await self.user_repository.find_by_id(identity.id)
        if existing and existing.username == identity.username:
            return existing

        user = await self.user_repository.save(
            User(id=identity.id, username=identity.username)
        )
        logfire.info("User recorded", user_id=user.id, username=user.username)
        return user
