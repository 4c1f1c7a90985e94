"""Strongly typed identifiers for Agora domain entities.

Posts, comments and votes use database-assigned integer ids, so ids also
record insertion order. User ids are opaque strings issued by the identity
service.
"""

from typing import NewType

PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)
VoteId = NewType("VoteId", int)
UserId = NewType("UserId", str)
