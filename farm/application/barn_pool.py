"""Barn pool adjuster: reconcile the barns of one color against a target count."""

import logging
from typing import List, Sequence

from farm.application.collaborator import call_collaborator
from farm.application.farm_repository import BarnRepository
from farm.domain.exceptions import InvalidArgumentError
from farm.domain.models.barn import Barn, ordered
from farm.domain.models.color import Color


class BarnPoolAdjuster:
    """
    Creates or retires barns so exactly target_count remain. Retirement always
    removes the highest-ordered barns by (name, barn_id), so the same input
    retires the same barns. Never touches animal records.
    """

    def __init__(self, barn_repository: BarnRepository, logger: logging.Logger) -> None:
        self._barns = barn_repository
        self._logger = logger

    async def adjust(
        self,
        current_barns: Sequence[Barn],
        target_count: int,
        color: Color,
    ) -> List[Barn]:
        """
        Return the live pool of exactly target_count barns: retained barns in
        deterministic order followed by newly created ones. All creates and
        deletes have completed when this returns.
        """
        if target_count < 0:
            raise InvalidArgumentError(f"target_count must not be negative, got {target_count}")

        pool = ordered(current_barns)

        surplus = pool[target_count:]
        pool = pool[:target_count]
        for barn in surplus:
            await call_collaborator(
                self._logger,
                "delete_barn",
                self._barns.delete(barn),
                color=color.value,
                barn_id=barn.barn_id,
            )
            self._logger.info(
                "barn_retired",
                extra={"color": color.value, "barn_id": barn.barn_id, "barn_name": barn.name},
            )

        while len(pool) < target_count:
            barn = await call_collaborator(
                self._logger,
                "create_barn",
                self._barns.create(color),
                color=color.value,
            )
            pool.append(barn)
            self._logger.info(
                "barn_created",
                extra={"color": color.value, "barn_id": barn.barn_id, "barn_name": barn.name},
            )

        return pool
