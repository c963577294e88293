"""Request bodies for the kind-specific write operations."""

from pydantic import BaseModel, Field


class StockUpdate(BaseModel):
    quantity: int = Field(..., ge=0)


class StatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)


class RoleUpdate(BaseModel):
    role: str = Field(..., min_length=1)


class MessageCreate(BaseModel):
    message: str = Field(..., min_length=1, description="Message text")
