"""Domain validators. Pure validation functions."""

from farm.domain.validators.barn_validator import (
    validate_animals_color,
    validate_barn_pool,
    validate_capacity,
)

__all__ = [
    "validate_animals_color",
    "validate_barn_pool",
    "validate_capacity",
]
