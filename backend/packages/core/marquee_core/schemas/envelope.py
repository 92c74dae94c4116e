"""
Response envelope schemas.

Every API response body is wrapped as either
``{"success": true, "data": ...}`` or
``{"success": false, "error": {"message", "code", "details"?}}``.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """Successful response envelope."""

    success: Literal[True] = True
    data: DataT


class ErrorBody(BaseModel):
    """Error payload inside a failed envelope."""

    message: str
    code: str
    details: Any | None = None


class ErrorResponse(BaseModel):
    """Failed response envelope."""

    success: Literal[False] = False
    error: ErrorBody


class MessageResponse(BaseModel):
    """Plain message payload."""

    message: str


class HealthResponse(BaseModel):
    """Health check payload."""

    message: str
    version: str
