from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None


class ErrorResponse(ApiResponse):
    """Body returned for catalog errors; `data` holds the error code and context."""

    success: bool = False
