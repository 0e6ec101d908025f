"""
SessionGate HTTP data models.

These models define the structure of data passed across the HTTP boundary.
"""

from typing import Union

from pydantic import BaseModel, Field


class ItemRef(BaseModel):
    """Reference to an inventory item in the ``items`` query parameter."""

    id: Union[int, str] = Field(..., description="Inventory item identifier")


class ErrorResponse(BaseModel):
    """Body returned when authentication fails."""

    error: str = Field("Unauthorized", description="Error category")
    reason: str = Field(..., description="Human-safe rejection reason")
