"""PostgreSQL repository implementations."""

from agora.persistence.repository.comment import PostgresCommentRepository
from agora.persistence.repository.post import PostgresPostRepository
from agora.persistence.repository.transaction import PostgresTransactionManager
from agora.persistence.repository.user import PostgresUserRepository
from agora.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresTransactionManager",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
