"""Repository protocols. Application layer depends on these; infrastructure implements them."""

from typing import List, Optional, Protocol, Sequence

from farm.domain.models.animal import Animal
from farm.domain.models.barn import Barn
from farm.domain.models.color import Color


class AnimalRepository(Protocol):
    """Protocol for the animal store. Returned sequences are ordered by animal_id."""

    async def list_all(self) -> List[Animal]:
        ...

    async def list_by_color(self, color: Color) -> List[Animal]:
        """Return every animal whose favorite color is color."""
        ...

    async def get(self, animal_id: int) -> Optional[Animal]:
        ...

    async def create(self, animal: Animal) -> Animal:
        """Persist a new animal. Returns it with animal_id assigned."""
        ...

    async def save_assignments(self, animals: Sequence[Animal]) -> None:
        """Persist the barn_id of each animal."""
        ...

    async def delete(self, animal: Animal) -> None:
        ...

    async def delete_many(self, animals: Sequence[Animal]) -> None:
        ...


class BarnRepository(Protocol):
    """Protocol for the barn store. The store decides capacity and name of new barns."""

    async def list_all(self) -> List[Barn]:
        ...

    async def list_by_color(self, color: Color) -> List[Barn]:
        ...

    async def create(self, color: Color) -> Barn:
        """Persist a new empty barn of color. Returns it with barn_id, name and capacity assigned."""
        ...

    async def delete(self, barn: Barn) -> None:
        ...
