"""Pydantic schemas for the farm API. Strict validation, no DB or infrastructure."""

from typing import List, Optional

from pydantic import BaseModel, Field

from farm.domain.models.color import Color


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class AnimalCreateRequest(BaseModel):
    """Request schema for adding one animal to the farm."""

    name: str = Field(..., min_length=1, description="Animal name; must not be empty")
    favorite_color: Color


class AnimalBatchCreateRequest(BaseModel):
    animals: List[AnimalCreateRequest] = Field(..., min_length=1)


class AnimalBatchRemoveRequest(BaseModel):
    animal_ids: List[int] = Field(..., min_length=1, description="Ids of animals to remove")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class AnimalResponse(BaseModel):
    """Animal as stored, with its current barn."""

    animal_id: int
    name: str
    favorite_color: Color
    barn_id: Optional[int] = None

    model_config = {"from_attributes": True}


class BarnResponse(BaseModel):
    """Barn with its current occupancy."""

    barn_id: int
    name: str
    color: Color
    capacity: int
    occupancy: int = 0


class RebalanceResponse(BaseModel):
    """Outcome of a forced redistribution of one color."""

    color: Color
    barn_count: int
    animals_moved: int
    barns_created: int
    barns_retired: int
