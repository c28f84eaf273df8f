"""Domain layer: models, schemas, validators, rebalancing rules, exceptions. Pure business logic only."""

from farm.domain.exceptions import DomainError, InvalidArgumentError, InvalidStateError
from farm.domain.models import Animal, Barn, Color
from farm.domain.rebalancing import (
    RebalanceDecision,
    RebalanceTriggerPolicy,
    needs_rebalance,
    required_barns,
)

__all__ = [
    "Animal",
    "Barn",
    "Color",
    "DomainError",
    "InvalidArgumentError",
    "InvalidStateError",
    "RebalanceDecision",
    "RebalanceTriggerPolicy",
    "needs_rebalance",
    "required_barns",
]
