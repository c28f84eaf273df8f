"""Redistribution engine: plan, adjust the barn pool, assign animals round-robin."""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from farm.application.barn_pool import BarnPoolAdjuster
from farm.application.collaborator import call_collaborator
from farm.application.farm_repository import AnimalRepository
from farm.core.context import color_ctx
from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn, ordered
from farm.domain.models.color import Color
from farm.domain.rebalancing.capacity_planner import required_barns
from farm.domain.validators.barn_validator import validate_animals_color, validate_barn_pool
from farm.observability.metrics import MetricsCollector


@dataclass
class RedistributionResult:
    """Final state of one color after a rebalance."""

    color: Color
    animals: List[Animal]
    barns: List[Barn]
    moved: List[Animal] = field(default_factory=list)
    barns_created: int = 0
    barns_retired: int = 0


class RedistributionEngine:
    """
    Rebalances one color at a time. Phases are strictly sequential:
    plan -> adjust pool -> assign. The caller guarantees at most one
    rebalance per color is in flight.
    """

    def __init__(
        self,
        adjuster: BarnPoolAdjuster,
        animal_repository: AnimalRepository,
        logger: logging.Logger,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._adjuster = adjuster
        self._animals = animal_repository
        self._logger = logger
        self._metrics = metrics

    async def redistribute(
        self,
        color: Color,
        animals: Sequence[Animal],
        barns: Sequence[Barn],
    ) -> RedistributionResult:
        """
        Assign every animal of color to one of ceil(n / capacity) barns so that
        occupancies differ by at most one. Prior assignments are ignored.
        Only animals whose barn changed are saved.
        """
        token = color_ctx.set(color.value)
        started = time.perf_counter()
        try:
            animals = list(animals)
            barns = list(barns)
            validate_barn_pool(color, barns)
            validate_animals_color(color, animals)
            before = {barn.barn_id for barn in barns}

            self._logger.info(
                "rebalance_started",
                extra={"color": color.value, "animal_count": len(animals), "barn_count": len(barns)},
            )

            # Step 1: No animals, so retire every barn of this color
            if not animals:
                pool = await self._adjuster.adjust(barns, 0, color)
                return self._finish(color, animals, pool, [], before, started)

            # Step 2: Bootstrap one barn to learn this color's capacity
            if not barns:
                barns = await self._adjuster.adjust(barns, 1, color)
                validate_barn_pool(color, barns)
            capacity = barns[0].capacity

            # Step 3: Plan
            target = required_barns(capacity, len(animals))

            # Step 4: Adjust pool to exactly `target` barns
            pool = ordered(await self._adjuster.adjust(barns, target, color))

            # Step 5: Round-robin assignment over the ordered pool
            moved = [
                animal
                for i, animal in enumerate(animals)
                if animal.move_to(pool[i % target].barn_id)
            ]

            # Step 6: Persist changed assignments only
            if moved:
                await call_collaborator(
                    self._logger,
                    "save_animal_assignments",
                    self._animals.save_assignments(moved),
                    color=color.value,
                    moved=len(moved),
                )
            return self._finish(color, animals, pool, moved, before, started)
        finally:
            color_ctx.reset(token)

    def _finish(
        self,
        color: Color,
        animals: List[Animal],
        pool: List[Barn],
        moved: List[Animal],
        before: set,
        started: float,
    ) -> RedistributionResult:
        after = {barn.barn_id for barn in pool}
        result = RedistributionResult(
            color=color,
            animals=animals,
            barns=pool,
            moved=moved,
            barns_created=len(after - before),
            barns_retired=len(before - after),
        )
        latency_ms = (time.perf_counter() - started) * 1000
        if self._metrics is not None:
            self._metrics.increment("rebalance_count", color=color.value)
            self._metrics.increment("barns_created", result.barns_created, color=color.value)
            self._metrics.increment("barns_retired", result.barns_retired, color=color.value)
            self._metrics.increment("animals_moved", len(moved), color=color.value)
            self._metrics.observe_latency("rebalance_latency", latency_ms)
        self._logger.info(
            "rebalance_completed",
            extra={
                "color": color.value,
                "barn_count": len(pool),
                "animals_moved": len(moved),
                "barns_created": result.barns_created,
                "barns_retired": result.barns_retired,
                "latency_ms": round(latency_ms, 3),
            },
        )
        return result
