from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: str
    data: DataT | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class ErrorDetail(BaseModel):
    field: str | None = None
    message: str
    type: str | None = None


class ErrorInfo(BaseModel):
    code: str
    message: str
    details: list[ErrorDetail] | None = None
    stack_trace: str | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: ErrorInfo
    timestamp: datetime = Field(default_factory=utc_now)
    path: str
    method: str
    request_id: str | None = None


def envelope(data: Any = None, *, message: str = "OK") -> ApiResponse[Any]:
    return ApiResponse[Any](message=message, data=data)


class StrictRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
