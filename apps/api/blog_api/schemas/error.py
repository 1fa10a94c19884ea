"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class NoLeakNotFoundError(BaseModel):
    code: Literal["RESOURCE_NOT_FOUND"]
    message: str


class BadRequestErrorDetails(BaseModel):
    fields: list[str]


class BadRequestError(BaseModel):
    code: Literal["VALIDATION_ERROR", "ID_MISMATCH"]
    message: str
    details: BadRequestErrorDetails | None = None
