"""Get current user use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, ResponseModel
from agora.domain.service import IdentityService
from agora.domain.value import UserIdentity


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str | None = None  # JWT token from the identity cookie


class GetCurrentUserResponse(ResponseModel):
    """Get current user response."""

    user_id: str
    username: str

    def to_identity(self) -> UserIdentity:
        return UserIdentity(id=self.user_id, username=self.username)


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for resolving the caller from their identity token."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize get current user use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    @property
    def cookie_name(self) -> str:
        """Name of the cookie carrying the identity token."""
        return self.identity_service.auth_settings.cookie_name

    async def execute(
        self, request: GetCurrentUserRequest
    ) -> GetCurrentUserResponse | None:
        """Execute get current user flow.

        Missing, expired and malformed tokens all resolve to an anonymous
        caller; nothing here raises.

        Args:
            request: Request with optional JWT token

        Returns:
            The caller, or None when anonymous
        """
        identity = self.identity_service.resolve(request.token)
        if identity is None:
            return None
        return GetCurrentUserResponse(user_id=identity.id, username=identity.username)
