"""FarmService: add/remove (single and batch), removal trigger policy, delete all, locking."""

from unittest.mock import AsyncMock

import pytest

from farm.application.exceptions import (
    AnimalNotFoundError,
    CollaboratorFailureError,
    RebalanceInProgressError,
)
from farm.application.farm_service import FarmService
from farm.domain.models.animal import Animal
from farm.domain.models.color import Color


def _animal(name: str, color: Color = Color.RED) -> Animal:
    return Animal(name=name, favorite_color=color)


async def _red_occupancy(animal_repository, barn_repository, occupancy):
    return occupancy(
        await barn_repository.list_by_color(Color.RED),
        await animal_repository.list_by_color(Color.RED),
    )


# ---------- 1. Adding ----------


@pytest.mark.asyncio
async def test_first_animal_gets_a_new_barn(farm_service, barn_repository):
    animal = await farm_service.add_to_farm(_animal("daisy"))

    assert animal.animal_id is not None
    assert animal.barn_id == barn_repository.created[0]
    assert len(await barn_repository.list_by_color(Color.RED)) == 1


@pytest.mark.asyncio
async def test_batch_add_across_colors(farm_service, animal_repository, barn_repository, occupancy):
    batch = [_animal(f"r{i}") for i in range(7)] + [_animal("b0", Color.BLUE), _animal("b1", Color.BLUE)]
    batch.insert(3, batch.pop())

    added = await farm_service.add_many_to_farm(batch)

    assert [a.name for a in added] == [a.name for a in batch]
    assert all(a.barn_id is not None for a in added)
    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [2, 2, 3]
    blue = await barn_repository.list_by_color(Color.BLUE)
    assert occupancy(blue, await animal_repository.list_by_color(Color.BLUE)) == [2]


@pytest.mark.asyncio
async def test_adding_one_at_a_time_keeps_balance(farm_service, animal_repository, barn_repository, occupancy):
    for i in range(10):
        await farm_service.add_to_farm(_animal(f"r{i}"))
        counts = await _red_occupancy(animal_repository, barn_repository, occupancy)
        assert max(counts) - min(counts) <= 1
        assert max(counts) <= 3
    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [2, 2, 3, 3]


# ---------- 2. Single removal and the trigger policy ----------


@pytest.mark.asyncio
async def test_balanced_removal_skips_rebalance(farm_service, animal_repository, barn_repository, metrics, logger, occupancy):
    added = await farm_service.add_many_to_farm([_animal(f"r{i}") for i in range(6)])
    barns_before = await barn_repository.list_by_color(Color.RED)
    saves_before = len(animal_repository.saved)

    await farm_service.remove_from_farm(added[0].animal_id)

    assert await barn_repository.list_by_color(Color.RED) == barns_before
    assert len(animal_repository.saved) == saves_before
    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [2, 3]
    assert metrics.export_metrics()["counters"]["rebalance_skipped"] == 1
    assert any(c.args[0] == "rebalance_skipped" for c in logger.info.call_args_list)


@pytest.mark.asyncio
async def test_removal_leaving_slack_retires_a_barn(farm_service, animal_repository, barn_repository, occupancy):
    added = await farm_service.add_many_to_farm([_animal(f"r{i}") for i in range(4)])
    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [2, 2]

    await farm_service.remove_from_farm(added[0].animal_id)

    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [3]
    assert len(barn_repository.deleted) == 1


@pytest.mark.asyncio
async def test_removing_last_animal_retires_last_barn(farm_service, barn_repository):
    animal = await farm_service.add_to_farm(_animal("solo"))

    await farm_service.remove_from_farm(animal.animal_id)

    assert await barn_repository.list_by_color(Color.RED) == []


@pytest.mark.asyncio
async def test_remove_unknown_animal_raises(farm_service):
    with pytest.raises(AnimalNotFoundError):
        await farm_service.remove_from_farm(999)


# ---------- 3. Batch removal and delete all ----------


@pytest.mark.asyncio
async def test_batch_removal_rebalances(farm_service, animal_repository, barn_repository, occupancy):
    added = await farm_service.add_many_to_farm([_animal(f"r{i}") for i in range(7)])

    await farm_service.remove_many_from_farm([a.animal_id for a in added[:4]])

    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [3]


@pytest.mark.asyncio
async def test_batch_removal_with_unknown_id_deletes_nothing(farm_service, animal_repository):
    added = await farm_service.add_many_to_farm([_animal(f"r{i}") for i in range(3)])

    with pytest.raises(AnimalNotFoundError):
        await farm_service.remove_many_from_farm([added[0].animal_id, 12345])

    assert len(await animal_repository.list_all()) == 3


@pytest.mark.asyncio
async def test_delete_all_clears_animals_and_barns(farm_service, animal_repository, barn_repository):
    await farm_service.add_many_to_farm(
        [_animal(f"r{i}") for i in range(5)] + [_animal("g", Color.GREEN)]
    )
    # A leftover barn with no animals is cleared as well.
    barn_repository.seed(Color.PURPLE, 1)

    await farm_service.delete_all()

    assert await animal_repository.list_all() == []
    assert await barn_repository.list_all() == []


# ---------- 4. Forced rebalance and listing ----------


@pytest.mark.asyncio
async def test_forced_rebalance_repairs_skew(farm_service, animal_repository, barn_repository, occupancy):
    b1, b2 = barn_repository.seed(Color.RED, 2)
    animal_repository.seed(Color.RED, 3, barn_id=b1.barn_id)
    animal_repository.seed(Color.RED, 1, barn_id=b1.barn_id)

    result = await farm_service.rebalance(Color.RED)

    assert len(result.barns) == 2
    assert await _red_occupancy(animal_repository, barn_repository, occupancy) == [2, 2]


@pytest.mark.asyncio
async def test_list_barns_reports_occupancy(farm_service):
    await farm_service.add_many_to_farm([_animal(f"r{i}") for i in range(5)] + [_animal("y", Color.YELLOW)])

    red = await farm_service.list_barns(Color.RED)
    everything = await farm_service.list_barns()

    assert sorted(o.occupancy for o in red) == [2, 3]
    assert len(everything) == 3
    assert sum(o.occupancy for o in everything) == 6


# ---------- 5. Concurrency guard and failures ----------


@pytest.mark.asyncio
async def test_color_locked_elsewhere_raises(farm_service, partition_lock, animal_repository):
    token = await partition_lock.acquire("rebalance:red")
    assert token is not None

    with pytest.raises(RebalanceInProgressError):
        await farm_service.add_to_farm(_animal("late"))

    assert await animal_repository.list_all() == []
    await partition_lock.release("rebalance:red", token)


@pytest.mark.asyncio
async def test_other_colors_are_not_blocked(farm_service, partition_lock):
    token = await partition_lock.acquire("rebalance:red")

    animal = await farm_service.add_to_farm(_animal("bluey", Color.BLUE))

    assert animal.barn_id is not None
    await partition_lock.release("rebalance:red", token)


@pytest.mark.asyncio
async def test_store_failure_surfaces_as_collaborator_failure(barn_repository, engine, partition_lock, logger):
    animals = AsyncMock()
    animals.create = AsyncMock(side_effect=Exception("connection reset"))
    service = FarmService(
        animal_repository=animals,
        barn_repository=barn_repository,
        engine=engine,
        guard=partition_lock,
        logger=logger,
    )

    with pytest.raises(CollaboratorFailureError):
        await service.add_to_farm(_animal("x"))

    assert barn_repository.created == []
