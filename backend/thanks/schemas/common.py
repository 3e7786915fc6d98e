"""Common API response schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Consistent JSON envelope for read API responses."""

    data: T


class ErrorResponse(BaseModel):
    """Error body for failed thanks requests."""

    error_code: str
    message: str
