# Application layer: services that orchestrate domain rules and repositories.

from farm.application.barn_pool import BarnPoolAdjuster
from farm.application.exceptions import (
    AnimalNotFoundError,
    ApplicationError,
    CollaboratorFailureError,
    RebalanceInProgressError,
)
from farm.application.farm_repository import AnimalRepository, BarnRepository
from farm.application.farm_service import BarnOccupancy, FarmService
from farm.application.partition_guard import PartitionGuard
from farm.application.redistribution import RedistributionEngine, RedistributionResult

__all__ = [
    "AnimalNotFoundError",
    "AnimalRepository",
    "ApplicationError",
    "BarnOccupancy",
    "BarnPoolAdjuster",
    "BarnRepository",
    "CollaboratorFailureError",
    "FarmService",
    "PartitionGuard",
    "RebalanceInProgressError",
    "RedistributionEngine",
    "RedistributionResult",
]
