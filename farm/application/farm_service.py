"""Farm application service: the transaction boundary that rebalances a color after each change."""

import logging
from collections import Counter
from dataclasses import dataclass
from itertools import groupby
from typing import Dict, Iterable, List, Optional, Sequence

from farm.application.collaborator import call_collaborator
from farm.application.exceptions import AnimalNotFoundError
from farm.application.farm_repository import AnimalRepository, BarnRepository
from farm.application.partition_guard import PartitionGuard
from farm.application.redistribution import RedistributionEngine, RedistributionResult
from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn, ordered
from farm.domain.models.color import Color
from farm.domain.rebalancing.trigger_policy import RebalanceTriggerPolicy
from farm.observability.metrics import MetricsCollector

LOCK_PREFIX = "rebalance:"


def _lock_key(color: Color) -> str:
    return f"{LOCK_PREFIX}{color.value}"


def _group_by_color(animals: Iterable[Animal]) -> Dict[Color, List[Animal]]:
    """Group preserving input order; keys sorted so locks are always taken in the same order."""
    groups: Dict[Color, List[Animal]] = {}
    for animal in animals:
        groups.setdefault(animal.favorite_color, []).append(animal)
    return {color: groups[color] for color in sorted(groups, key=lambda c: c.value)}


@dataclass(frozen=True)
class BarnOccupancy:
    barn: Barn
    occupancy: int


class FarmService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI, no direct infrastructure.
    Every mutation of a color runs under the partition guard for that color.
    Additions and batch operations always redistribute; a single removal
    redistributes only when the trigger policy says so.
    """

    def __init__(
        self,
        animal_repository: AnimalRepository,
        barn_repository: BarnRepository,
        engine: RedistributionEngine,
        guard: PartitionGuard,
        logger: logging.Logger,
        policy: Optional[RebalanceTriggerPolicy] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._animals = animal_repository
        self._barns = barn_repository
        self._engine = engine
        self._guard = guard
        self._logger = logger
        self._policy = policy or RebalanceTriggerPolicy()
        self._metrics = metrics

    async def find_all(self) -> List[Animal]:
        return await call_collaborator(self._logger, "list_animals", self._animals.list_all())

    async def get_animal(self, animal_id: int) -> Animal:
        animal = await call_collaborator(
            self._logger, "get_animal", self._animals.get(animal_id), animal_id=animal_id
        )
        if animal is None:
            raise AnimalNotFoundError(f"Animal {animal_id} not found")
        return animal

    async def list_barns(self, color: Optional[Color] = None) -> List[BarnOccupancy]:
        """Barns in deterministic order with the number of animals each houses."""
        if color is None:
            barns = await call_collaborator(self._logger, "list_barns", self._barns.list_all())
            animals = await self.find_all()
        else:
            barns = await call_collaborator(
                self._logger, "list_barns", self._barns.list_by_color(color), color=color.value
            )
            animals = await call_collaborator(
                self._logger, "list_animals", self._animals.list_by_color(color), color=color.value
            )
        counts = Counter(animal.barn_id for animal in animals)
        return [BarnOccupancy(barn=barn, occupancy=counts[barn.barn_id]) for barn in ordered(barns)]

    async def add_to_farm(self, animal: Animal) -> Animal:
        """Persist one animal and rebalance its color. Returns the animal with its barn."""
        added = await self.add_many_to_farm([animal])
        return added[0]

    async def add_many_to_farm(self, animals: Sequence[Animal]) -> List[Animal]:
        """
        Persist animals and rebalance each affected color once.
        Returns the stored animals in input order, each with its barn assigned.
        """
        created_ids: List[Optional[int]] = [None] * len(animals)
        placed: Dict[int, Animal] = {}
        by_color = sorted(range(len(animals)), key=lambda i: animals[i].favorite_color.value)
        for color, indices in groupby(by_color, key=lambda i: animals[i].favorite_color):
            async with self._guard.hold(_lock_key(color)):
                for i in indices:
                    created = await call_collaborator(
                        self._logger, "create_animal", self._animals.create(animals[i]), color=color.value
                    )
                    created_ids[i] = created.animal_id
                    self._logger.info(
                        "animal_added",
                        extra={"color": color.value, "animal_id": created.animal_id},
                    )
                result = await self._rebalance(color)
                placed.update({a.animal_id: a for a in result.animals})
        return [placed[animal_id] for animal_id in created_ids]

    async def remove_from_farm(self, animal_id: int) -> None:
        """Delete one animal. Rebalance its color only if occupancy is now out of shape."""
        animal = await self.get_animal(animal_id)
        color = animal.favorite_color
        async with self._guard.hold(_lock_key(color)):
            await call_collaborator(
                self._logger, "delete_animal", self._animals.delete(animal), color=color.value
            )
            self._logger.info("animal_removed", extra={"color": color.value, "animal_id": animal_id})

            animals, barns = await self._load(color)
            decision = self._policy.evaluate(barns, animals)
            if decision.needed:
                await self._engine.redistribute(color, animals, barns)
                return
            self._logger.info(
                "rebalance_skipped",
                extra={"color": color.value, "reason": decision.reason},
            )
            if self._metrics is not None:
                self._metrics.increment("rebalance_skipped", color=color.value)

    async def remove_many_from_farm(self, animal_ids: Sequence[int]) -> None:
        """Delete several animals and rebalance every affected color. Unknown ids fail before any delete."""
        animals = [await self.get_animal(animal_id) for animal_id in dict.fromkeys(animal_ids)]
        for color, group in _group_by_color(animals).items():
            async with self._guard.hold(_lock_key(color)):
                await call_collaborator(
                    self._logger, "delete_animals", self._animals.delete_many(group), color=color.value
                )
                self._logger.info(
                    "animals_removed",
                    extra={"color": color.value, "count": len(group)},
                )
                await self._rebalance(color)

    async def delete_all(self) -> None:
        """Remove every animal; the follow-up rebalance retires every barn."""
        animals = await self.find_all()
        barns = await call_collaborator(self._logger, "list_barns", self._barns.list_all())
        groups = _group_by_color(animals)
        colors = set(groups) | {barn.color for barn in barns}
        for color in sorted(colors, key=lambda c: c.value):
            async with self._guard.hold(_lock_key(color)):
                group = groups.get(color, [])
                if group:
                    await call_collaborator(
                        self._logger, "delete_animals", self._animals.delete_many(group), color=color.value
                    )
                await self._rebalance(color)

    async def rebalance(self, color: Color) -> RedistributionResult:
        """Force a full redistribution of one color from a fresh read."""
        async with self._guard.hold(_lock_key(color)):
            return await self._rebalance(color)

    async def _load(self, color: Color):
        animals = await call_collaborator(
            self._logger, "list_animals", self._animals.list_by_color(color), color=color.value
        )
        barns = await call_collaborator(
            self._logger, "list_barns", self._barns.list_by_color(color), color=color.value
        )
        return animals, barns

    async def _rebalance(self, color: Color) -> RedistributionResult:
        animals, barns = await self._load(color)
        return await self._engine.redistribute(color, animals, barns)
