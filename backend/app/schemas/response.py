from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    error: Optional[str] = None


def error_response(message: str, error: Optional[str] = None) -> dict[str, Any]:
    return ApiResponse[None](success=False, message=message, error=error).model_dump()
