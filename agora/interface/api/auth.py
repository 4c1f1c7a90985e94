"""Caller resolution for routes.

Writes require an identity; reads fall back to an anonymous viewer.
"""

from fastapi import HTTPException, Request, status

from agora.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from agora.domain.value import UserIdentity


async def current_user(
    request: Request, get_current_user_use_case: GetCurrentUserUseCase
) -> GetCurrentUserResponse | None:
    """Resolve the caller from the identity cookie, or None if anonymous."""
    token = request.cookies.get(get_current_user_use_case.cookie_name)
    return await get_current_user_use_case.execute(GetCurrentUserRequest(token=token))


async def current_user_id(
    request: Request, get_current_user_use_case: GetCurrentUserUseCase
) -> str | None:
    """ID of the caller, or None if anonymous."""
    user = await current_user(request, get_current_user_use_case)
    return user.user_id if user else None


async def require_user(
    request: Request, get_current_user_use_case: GetCurrentUserUseCase, action: str
) -> UserIdentity:
    """Resolve the caller of a write.

    Raises:
        HTTPException: 401 if there is no valid identity
    """
    user = await current_user(request, get_current_user_use_case)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user.to_identity()
