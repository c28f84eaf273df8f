"""Validators for barn and animal pools. Pure functions, no infrastructure or DB access."""

from typing import Iterable, Sequence

from farm.domain.exceptions import InvalidArgumentError, InvalidStateError
from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn
from farm.domain.models.color import Color


def validate_capacity(capacity: int) -> None:
    """Capacity handed to the planner must be positive. Raises InvalidArgumentError if not."""
    if capacity <= 0:
        raise InvalidArgumentError(f"capacity must be positive, got {capacity}")


def validate_barn_pool(color: Color, barns: Sequence[Barn]) -> None:
    """
    Enforce integrity of the stored barns for one color: unique ids, positive
    capacity, matching color. Raises InvalidStateError on violation.
    """
    seen = set()
    for barn in barns:
        if barn.barn_id in seen:
            raise InvalidStateError(f"duplicate barn id {barn.barn_id} for color {color.value}")
        seen.add(barn.barn_id)
        if barn.capacity <= 0:
            raise InvalidStateError(
                f"barn {barn.barn_id} has non-positive capacity {barn.capacity}"
            )
        if barn.color != color:
            raise InvalidStateError(
                f"barn {barn.barn_id} is {barn.color.value}, expected {color.value}"
            )


def validate_animals_color(color: Color, animals: Iterable[Animal]) -> None:
    """Every animal being rebalanced must prefer color. Raises InvalidArgumentError otherwise."""
    for animal in animals:
        if animal.favorite_color != color:
            raise InvalidArgumentError(
                f"animal {animal.animal_id} prefers {animal.favorite_color.value}, not {color.value}"
            )
