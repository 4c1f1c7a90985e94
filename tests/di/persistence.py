"""Mock persistence providers for testing."""

from dishka import Scope, provide

from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from agora.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryPostRepository,
    InMemoryTransactionManager,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from agora.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The in-memory database is APP-scoped, so every request made through one
    container sees the same data; build a new container per test for
    isolation. Repositories are REQUEST-scoped like their SQL counterparts.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory database."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(
        self, database: InMemoryDatabase
    ) -> TransactionManager:
        """Provide snapshot/restore transaction manager."""
        return InMemoryTransactionManager(database)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, database: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, database: InMemoryDatabase) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, database: InMemoryDatabase) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, database: InMemoryDatabase) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(database)
