"""Response envelopes shared by the summary endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """``{"success": true, "data": ...}``"""

    success: bool = True
    data: DataT


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: bool = False
    error: str
