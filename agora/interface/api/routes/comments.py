"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status

from agora.application.usecase.auth import GetCurrentUserUseCase
from agora.application.usecase.base import ResponseModel
from agora.application.usecase.comment import (
    CommentItem,
    CommentUpvoteItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    GetRepliesRequest,
    GetRepliesUseCase,
)
from agora.application.usecase.vote import ToggleVoteRequest, ToggleVoteUseCase
from agora.config import PaginationSettings
from agora.domain.error import ConflictError, NotFoundError, ValidationError
from agora.domain.value import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    SortBy,
    SortOrder,
    VotableType,
)
from agora.interface.api.auth import current_user_id, require_user
from agora.interface.api.response import (
    PaginatedResponse,
    Pagination,
    SuccessResponse,
)
from agora.interface.api.routes.posts import CreateCommentAPIRequest

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CommentUpvoteData(ResponseModel):
    """Comment points after a toggle.

    ``comment_upvotes`` holds the caller's vote when they now upvote the
    comment and is empty otherwise.
    """

    count: int
    comment_upvotes: list[CommentUpvoteItem]


@router.post("/{comment_id}", response_model=SuccessResponse[CommentItem])
async def reply_to_comment(
    request: Request,
    comment_id: int,
    body: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> SuccessResponse[CommentItem]:
    """Reply to a comment.

    The reply belongs to the parent's post. Requires authentication.
    """
    user = await require_user(request, get_current_user_use_case, "comment")

    try:
        result = await create_comment_use_case.execute(
            CreateCommentRequest(
                content=body.content, author=user, parent_id=comment_id
            )
        )
    except NotFoundError as e:
        logfire.warn("Reply failed - parent comment not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return SuccessResponse(message="Comment created", data=result.comment)


@router.post(
    "/{comment_id}/upvote", response_model=SuccessResponse[CommentUpvoteData]
)
async def upvote_comment(
    request: Request,
    comment_id: int,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> SuccessResponse[CommentUpvoteData]:
    """Upvote a comment, or take the upvote back.

    Requires authentication.
    """
    user = await require_user(request, get_current_user_use_case, "upvote")

    try:
        result = await toggle_vote_use_case.execute(
            ToggleVoteRequest(
                votable_type=VotableType.COMMENT, votable_id=comment_id, user=user
            )
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ConflictError as e:
        logfire.warn(
            "Concurrent duplicate comment vote", comment_id=comment_id, error=str(e)
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    upvotes = [CommentUpvoteItem(user_id=result.user_id)] if result.is_upvoted else []
    return SuccessResponse(
        message="Upvoted",
        data=CommentUpvoteData(count=result.count, comment_upvotes=upvotes),
    )


@router.get(
    "/{comment_id}/comments", response_model=PaginatedResponse[list[CommentItem]]
)
async def list_replies(
    request: Request,
    comment_id: int,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    pagination_settings: FromDishka[PaginationSettings],
    limit: int | None = Query(default=None, gt=0, le=MAX_PAGE_SIZE),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    sort_by: SortBy = Query(default=SortBy.POINTS, alias="sortBy"),
    order: SortOrder = SortOrder.DESC,
    include_children: bool = Query(default=False, alias="includeChildren"),
) -> PaginatedResponse[list[CommentItem]]:
    """List the direct replies of a comment."""
    user_id = await current_user_id(request, get_current_user_use_case)

    result = await get_replies_use_case.execute(
        GetRepliesRequest(
            comment_id=comment_id,
            limit=limit or pagination_settings.default_limit,
            page=page,
            sort_by=sort_by,
            order=order,
            include_children=include_children,
            user_id=user_id,
        )
    )
    return PaginatedResponse(
        message="Comments fetched",
        data=result.comments,
        pagination=Pagination(page=result.page, total_pages=result.total_pages),
    )
