"""
Common request models used across endpoints.
"""

from typing import List
from pydantic import BaseModel, Field


class ReorderRequest(BaseModel):
    """New manual order, first ID gets display_order 0."""
    
    ids: List[str] = Field(..., description="All entity IDs in their new order")


class MoveRequest(BaseModel):
    """Move one entity to a new position."""
    
    id: str = Field(..., description="Entity ID")
    to_index: int = Field(..., ge=0, description="Target position")
