"""Shared in-memory store for the in-memory repositories.

Repositories built on the same ``InMemoryDatabase`` see each other's rows,
so author and vote joins behave like the SQL ones.
"""

import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from agora.domain.model import Comment, Post, User, Vote
from agora.domain.value import CommentId, PostId, UserId, VotableType

VoteKey = Tuple[UserId, VotableType, int]


@dataclass
class Snapshot:
    """Copy of every table at one point in time."""

    users: Dict[UserId, User]
    posts: Dict[PostId, Post]
    comments: Dict[CommentId, Comment]
    votes: Dict[VoteKey, Vote]


@dataclass
class InMemoryDatabase:
    """Tables keyed by primary key, plus id sequences.

    Rows are immutable models and are replaced, never mutated, so a shallow
    copy of each table is a full snapshot. Sequences are not rolled back,
    matching database sequences.
    """

    users: Dict[UserId, User] = field(default_factory=dict)
    posts: Dict[PostId, Post] = field(default_factory=dict)
    comments: Dict[CommentId, Comment] = field(default_factory=dict)
    votes: Dict[VoteKey, Vote] = field(default_factory=dict)

    post_ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))
    comment_ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))
    vote_ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))

    def snapshot(self) -> Snapshot:
        return Snapshot(
            users=dict(self.users),
            posts=dict(self.posts),
            comments=dict(self.comments),
            votes=dict(self.votes),
        )

    def restore(self, snapshot: Snapshot) -> None:
        self.users = dict(snapshot.users)
        self.posts = dict(snapshot.posts)
        self.comments = dict(snapshot.comments)
        self.votes = dict(snapshot.votes)

    def username_of(self, user_id: UserId) -> str | None:
        user = self.users.get(user_id)
        return user.username if user else None

    def has_vote(
        self, user_id: UserId | None, votable_type: VotableType, votable_id: int
    ) -> bool:
        if user_id is None:
            return False
        return (user_id, votable_type, votable_id) in self.votes
