"""Response envelope shared by every successful response"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = Field(default=True)
    message: Optional[str] = Field(default=None)
    data: T


def ok(data, message: Optional[str] = None) -> dict:
    return {"success": True, "message": message, "data": data}
