"""Domain models. Pure business entities."""

from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn, ordered
from farm.domain.models.color import Color

__all__ = [
    "Animal",
    "Barn",
    "Color",
    "ordered",
]
