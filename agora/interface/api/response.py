"""Response envelopes shared by all routes.

Successful responses look like ``{success: true, message, data}``;
listings add ``pagination: {page, totalPages}``. Failures look like
``{success: false, error, isFormError?}``.
"""

from typing import Generic, Literal, TypeVar

from agora.application.usecase.base import ResponseModel

T = TypeVar("T")


class SuccessResponse(ResponseModel, Generic[T]):
    """Successful response with a payload."""

    success: Literal[True] = True
    message: str
    data: T


class Pagination(ResponseModel):
    """Position of a page within a listing."""

    page: int
    total_pages: int


class PaginatedResponse(SuccessResponse[T], Generic[T]):
    """Successful listing response."""

    pagination: Pagination


class ErrorResponse(ResponseModel):
    """Failed response.

    ``is_form_error`` is only sent for errors caused by invalid input.
    """

    success: Literal[False] = False
    error: str
    is_form_error: bool | None = None

    def to_content(self) -> dict:
        """JSON body with camelCase keys and without unset flags."""
        return self.model_dump(by_alias=True, exclude_none=True)
