"""Capacity planning: minimum number of fixed-capacity barns for a population."""

from farm.domain.exceptions import InvalidArgumentError
from farm.domain.validators.barn_validator import validate_capacity


def required_barns(capacity: int, population: int) -> int:
    """
    Return ceil(population / capacity), the fewest barns that house population
    animals without exceeding capacity. Zero animals need zero barns.
    Raises InvalidArgumentError if capacity <= 0 or population < 0.
    """
    validate_capacity(capacity)
    if population < 0:
        raise InvalidArgumentError(f"population must not be negative, got {population}")
    return -(-population // capacity)
