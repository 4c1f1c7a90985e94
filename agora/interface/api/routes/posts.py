"""Post routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel

from agora.application.usecase.auth import GetCurrentUserUseCase
from agora.application.usecase.base import ResponseModel
from agora.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    PostItem,
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

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str
    url: str | None = None
    content: str | None = None


class CreateCommentAPIRequest(BaseModel):
    """API request for commenting on a post or replying to a comment."""

    content: str


class PostUpvoteData(ResponseModel):
    """Post points after a toggle."""

    count: int
    is_upvoted: bool


@router.post(
    "",
    response_model=SuccessResponse[CreatePostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    request: Request,
    body: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> SuccessResponse[CreatePostResponse]:
    """Create a new post.

    Requires authentication. A post needs a URL, text content, or both.
    """
    user = await require_user(request, get_current_user_use_case, "create posts")

    try:
        result = await create_post_use_case.execute(
            CreatePostRequest(
                title=body.title, url=body.url, content=body.content, author=user
            )
        )
    except ValidationError as e:
        logfire.warn("Post creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return SuccessResponse(message="Post created", data=result)


@router.get("", response_model=PaginatedResponse[list[PostItem]])
async def list_posts(
    request: Request,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    pagination_settings: FromDishka[PaginationSettings],
    limit: int | None = Query(default=None, gt=0, le=MAX_PAGE_SIZE),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    sort_by: SortBy = Query(default=SortBy.POINTS, alias="sortBy"),
    order: SortOrder = SortOrder.DESC,
    author: str | None = None,
    site: str | None = None,
) -> PaginatedResponse[list[PostItem]]:
    """List posts with filtering, ordering and pagination.

    Args:
        limit: Page size (defaults to the configured page size)
        page: 1-based page number
        sort_by: ``points`` or ``recent``
        order: ``asc`` or ``desc``
        author: Only posts by this user ID
        site: Only posts linking exactly this URL
    """
    user_id = await current_user_id(request, get_current_user_use_case)

    result = await list_posts_use_case.execute(
        ListPostsRequest(
            limit=limit or pagination_settings.default_limit,
            page=page,
            sort_by=sort_by,
            order=order,
            author=author,
            site=site,
            user_id=user_id,
        )
    )
    return PaginatedResponse(
        message="Posts fetched",
        data=result.posts,
        pagination=Pagination(page=result.page, total_pages=result.total_pages),
    )


@router.get("/{post_id}", response_model=SuccessResponse[PostItem])
async def get_post(
    request: Request,
    post_id: int,
    get_post_use_case: FromDishka[GetPostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> SuccessResponse[PostItem]:
    """Get a post by ID."""
    user_id = await current_user_id(request, get_current_user_use_case)

    try:
        result = await get_post_use_case.execute(
            GetPostRequest(post_id=post_id, user_id=user_id)
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return SuccessResponse(message="Post fetched", data=result.post)


@router.post("/{post_id}/upvote", response_model=SuccessResponse[PostUpvoteData])
async def upvote_post(
    request: Request,
    post_id: int,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> SuccessResponse[PostUpvoteData]:
    """Upvote a post, or take the upvote back.

    Requires authentication.
    """
    user = await require_user(request, get_current_user_use_case, "upvote")

    try:
        result = await toggle_vote_use_case.execute(
            ToggleVoteRequest(
                votable_type=VotableType.POST, votable_id=post_id, user=user
            )
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ConflictError as e:
        logfire.warn("Concurrent duplicate post vote", post_id=post_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    return SuccessResponse(
        message="Upvoted",
        data=PostUpvoteData(count=result.count, is_upvoted=result.is_upvoted),
    )


@router.post("/{post_id}/comment", response_model=SuccessResponse[CommentItem])
async def comment_on_post(
    request: Request,
    post_id: int,
    body: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> SuccessResponse[CommentItem]:
    """Add a top-level comment to a post.

    Requires authentication.
    """
    user = await require_user(request, get_current_user_use_case, "comment")

    try:
        result = await create_comment_use_case.execute(
            CreateCommentRequest(content=body.content, author=user, post_id=post_id)
        )
    except NotFoundError as e:
        logfire.warn("Comment creation failed - post not found", error=str(e))
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


@router.get("/{post_id}/comments", response_model=PaginatedResponse[list[CommentItem]])
async def list_post_comments(
    request: Request,
    post_id: int,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    pagination_settings: FromDishka[PaginationSettings],
    limit: int | None = Query(default=None, gt=0, le=MAX_PAGE_SIZE),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    sort_by: SortBy = Query(default=SortBy.POINTS, alias="sortBy"),
    order: SortOrder = SortOrder.DESC,
    include_children: bool = Query(default=False, alias="includeChildren"),
) -> PaginatedResponse[list[CommentItem]]:
    """List the top-level comments of a post.

    With ``includeChildren``, each comment carries its first few replies.
    """
    user_id = await current_user_id(request, get_current_user_use_case)

    result = await get_comments_use_case.execute(
        GetCommentsRequest(
            post_id=post_id,
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
