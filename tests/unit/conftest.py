"""Shared fixtures: in-memory animal and barn stores, logger, metrics, wired engine and service."""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence
from unittest.mock import MagicMock

import pytest

from farm.application.barn_pool import BarnPoolAdjuster
from farm.application.farm_service import FarmService
from farm.application.redistribution import RedistributionEngine
from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn
from farm.domain.models.color import Color
from farm.observability.metrics import MetricsCollector
from farm.scalability.partition_lock import InMemoryLockBackend, PartitionLock

DEFAULT_CAPACITY = 3


class FakeBarnRepository:
    """In-memory barn store. Names follow creation order like the DB store."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self.capacity = capacity
        self._barns: Dict[int, Barn] = {}
        self._next_id = 1
        self.created: List[int] = []
        self.deleted: List[int] = []

    def seed(self, color: Color, count: int, capacity: Optional[int] = None) -> List[Barn]:
        barns = []
        for _ in range(count):
            barn = self._new(color, self.capacity if capacity is None else capacity)
            barns.append(barn)
        return barns

    def _new(self, color: Color, capacity: int) -> Barn:
        barn = Barn(
            barn_id=self._next_id,
            name=f"Barn {color.name} {self._next_id:06d}",
            color=color,
            capacity=capacity,
        )
        self._barns[barn.barn_id] = barn
        self._next_id += 1
        return barn

    async def list_all(self) -> List[Barn]:
        return [self._barns[k] for k in sorted(self._barns)]

    async def list_by_color(self, color: Color) -> List[Barn]:
        return [b for b in await self.list_all() if b.color == color]

    async def create(self, color: Color) -> Barn:
        barn = self._new(color, self.capacity)
        self.created.append(barn.barn_id)
        return barn

    async def delete(self, barn: Barn) -> None:
        del self._barns[barn.barn_id]
        self.deleted.append(barn.barn_id)


class FakeAnimalRepository:
    """In-memory animal store. Hands out copies so only saved changes stick."""

    def __init__(self) -> None:
        self._animals: Dict[int, Animal] = {}
        self._next_id = 1
        self.saved: List[List[int]] = []

    def seed(self, color: Color, count: int, barn_id: Optional[int] = None) -> List[Animal]:
        return [self._store(Animal(name=f"{color.value}-{i}", favorite_color=color, barn_id=barn_id)) for i in range(count)]

    def _store(self, animal: Animal) -> Animal:
        stored = replace(animal, animal_id=self._next_id)
        self._animals[stored.animal_id] = stored
        self._next_id += 1
        return replace(stored)

    async def list_all(self) -> List[Animal]:
        return [replace(self._animals[k]) for k in sorted(self._animals)]

    async def list_by_color(self, color: Color) -> List[Animal]:
        return [a for a in await self.list_all() if a.favorite_color == color]

    async def get(self, animal_id: int) -> Optional[Animal]:
        animal = self._animals.get(animal_id)
        return replace(animal) if animal is not None else None

    async def create(self, animal: Animal) -> Animal:
        return self._store(animal)

    async def save_assignments(self, animals: Sequence[Animal]) -> None:
        for animal in animals:
            self._animals[animal.animal_id].barn_id = animal.barn_id
        self.saved.append([a.animal_id for a in animals])

    async def delete(self, animal: Animal) -> None:
        del self._animals[animal.animal_id]

    async def delete_many(self, animals: Sequence[Animal]) -> None:
        for animal in animals:
            del self._animals[animal.animal_id]


def _occupancy(barns: Sequence[Barn], animals: Sequence[Animal]) -> List[int]:
    """Sorted animal counts per barn."""
    return sorted(sum(1 for a in animals if a.barn_id == b.barn_id) for b in barns)


@pytest.fixture
def occupancy():
    return _occupancy


@pytest.fixture
def barn_repository():
    return FakeBarnRepository()


@pytest.fixture
def animal_repository():
    return FakeAnimalRepository()


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def adjuster(barn_repository, logger):
    return BarnPoolAdjuster(barn_repository, logger)


@pytest.fixture
def engine(adjuster, animal_repository, logger, metrics):
    return RedistributionEngine(
        adjuster=adjuster,
        animal_repository=animal_repository,
        logger=logger,
        metrics=metrics,
    )


@pytest.fixture
def partition_lock():
    return PartitionLock(backend=InMemoryLockBackend(), wait_timeout=0.2, poll_interval=0.01)


@pytest.fixture
def farm_service(animal_repository, barn_repository, engine, partition_lock, logger, metrics):
    return FarmService(
        animal_repository=animal_repository,
        barn_repository=barn_repository,
        engine=engine,
        guard=partition_lock,
        logger=logger,
        metrics=metrics,
    )


@pytest.fixture
def make_barn_repository():
    """Factory for extra barn stores, e.g. with a different capacity."""
    return FakeBarnRepository


@pytest.fixture
def make_animal_repository():
    return FakeAnimalRepository
