"""Domain model for animals. Pure business semantics. No ORM or infrastructure."""

from dataclasses import dataclass
from typing import Optional

from farm.domain.models.color import Color


@dataclass
class Animal:
    """
    An animal living on the farm. Owned by the animal store; rebalancing only
    ever changes barn_id. animal_id is None until the store persists it.
    """

    name: str
    favorite_color: Color
    animal_id: Optional[int] = None
    barn_id: Optional[int] = None

    def move_to(self, barn_id: int) -> bool:
        """Point the animal at barn_id. Returns True if the assignment changed."""
        if self.barn_id == barn_id:
            return False
        self.barn_id = barn_id
        return True
