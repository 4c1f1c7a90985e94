"""Identity gate.

Turns the identity token issued by the authentication service into a
``UserIdentity``. Anything short of a valid token means an anonymous caller.
"""

import logfire

from agora.config import AuthSettings
from agora.domain.value import UserId, UserIdentity
from agora.util.error import TokenError
from agora.util.jwt import create_token, verify_token

from .base import Service


class IdentityService(Service):
    """Domain service resolving the current caller."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize identity service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def issue_token(self, identity: UserIdentity) -> str:
        """Create a token for an identity.

        Used by tooling and tests; production tokens come from the
        authentication service.
        """
        return create_token(identity.id, identity.username, self.auth_settings)

    def resolve(self, token: str | None) -> UserIdentity | None:
        """Resolve the caller from a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            The identity if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = verify_token(token, self.auth_settings)
            return UserIdentity(id=UserId(payload.user_id), username=payload.username)
        except (TokenError, ValueError) as e:
            logfire.debug(
                "Token verification failed, treating as anonymous", error=str(e)
            )
            return None
