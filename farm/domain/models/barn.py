"""Domain model for barns: fixed-capacity containers for animals of one color."""

from dataclasses import dataclass
from typing import Tuple

from farm.domain.models.color import Color


@dataclass(frozen=True)
class Barn:
    """A persisted barn. Capacity is fixed at creation; name is only used for ordering."""

    barn_id: int
    name: str
    color: Color
    capacity: int

    @property
    def sort_key(self) -> Tuple[str, int]:
        """Deterministic total order used for assignment and retirement."""
        return (self.name, self.barn_id)


def ordered(barns) -> list:
    """Return barns sorted by (name, barn_id) ascending."""
    return sorted(barns, key=lambda b: b.sort_key)
