"""Domain schemas. Request/response and validation."""

from farm.domain.schemas.farm import (
    AnimalBatchCreateRequest,
    AnimalBatchRemoveRequest,
    AnimalCreateRequest,
    AnimalResponse,
    BarnResponse,
    RebalanceResponse,
)

__all__ = [
    "AnimalBatchCreateRequest",
    "AnimalBatchRemoveRequest",
    "AnimalCreateRequest",
    "AnimalResponse",
    "BarnResponse",
    "RebalanceResponse",
]
