"""Rebalance trigger policy: deterministic decision whether a removal needs a full redistribution."""

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn


@dataclass
class RebalanceDecision:
    needed: bool
    reason: str


class RebalanceTriggerPolicy:
    """
    Inspects current occupancy of one color's barns. Only consulted after a
    single-animal removal; additions and batch operations always redistribute.
    """

    def evaluate(self, barns: Sequence[Barn], animals: Sequence[Animal]) -> RebalanceDecision:
        """Fully deterministic. Any breach triggers; otherwise skip to avoid churn."""
        if not barns:
            if animals:
                return RebalanceDecision(True, "no barns for existing animals")
            return RebalanceDecision(False, "no barns and no animals")

        occupancy = Counter({barn.barn_id: 0 for barn in barns})
        for animal in animals:
            if animal.barn_id not in occupancy:
                return RebalanceDecision(True, f"animal {animal.animal_id} is not housed in a live barn")
            occupancy[animal.barn_id] += 1

        counts = list(occupancy.values())
        low, high, total = min(counts), max(counts), sum(counts)
        # Barns of one color share a capacity.
        capacity = barns[0].capacity
        slack = capacity * len(barns) - total

        if high - low > 1:
            return RebalanceDecision(True, f"occupancy skew max={high} min={low}")
        if high > capacity:
            return RebalanceDecision(True, f"occupancy {high} exceeds capacity {capacity}")
        if slack >= capacity:
            return RebalanceDecision(True, f"slack {slack} >= capacity {capacity}, a barn can be retired")
        return RebalanceDecision(False, "balanced")


def needs_rebalance(barns: Sequence[Barn], animals: Sequence[Animal]) -> bool:
    """True when the barns for one color must be redistributed after a removal."""
    return RebalanceTriggerPolicy().evaluate(barns, animals).needed
