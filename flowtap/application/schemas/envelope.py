"""Pydantic models for the uniform shape produced by the response normalizer."""

from typing import Any

from pydantic import BaseModel, Field


class PaginationSchema(BaseModel):
    """Page window as decoded from a list response."""

    page: int = 1
    limit: int = 10
    total: int = 0

    model_config = {"extra": "ignore", "from_attributes": True}


class NormalizedResponse(BaseModel):
    """Uniform view of a successful response body."""

    data: Any = None
    message: str = "Success"
    pagination: PaginationSchema = Field(default_factory=PaginationSchema)
