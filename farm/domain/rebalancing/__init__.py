"""Pure rebalancing rules: capacity planning and the removal trigger policy."""

from farm.domain.rebalancing.capacity_planner import required_barns
from farm.domain.rebalancing.trigger_policy import (
    RebalanceDecision,
    RebalanceTriggerPolicy,
    needs_rebalance,
)

__all__ = [
    "RebalanceDecision",
    "RebalanceTriggerPolicy",
    "needs_rebalance",
    "required_barns",
]
