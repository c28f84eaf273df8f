"""DB-backed animal repository. Implements AnimalRepository protocol."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from farm.domain.models.animal import Animal
from farm.domain.models.color import Color
from farm.infrastructure.database.models import AnimalRecord


def _to_domain(orm: AnimalRecord) -> Animal:
    return Animal(
        animal_id=orm.id,
        name=orm.name,
        favorite_color=Color(orm.favorite_color),
        barn_id=orm.barn_id,
    )


class DbAnimalRepository:
    """Persists animals. Lists are ordered by id so callers see a stable input order."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> List[Animal]:
        result = await self._session.execute(select(AnimalRecord).order_by(AnimalRecord.id))
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def list_by_color(self, color: Color) -> List[Animal]:
        stmt = (
            select(AnimalRecord)
            .where(AnimalRecord.favorite_color == color.value)
            .order_by(AnimalRecord.id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def get(self, animal_id: int) -> Optional[Animal]:
        orm = await self._session.get(AnimalRecord, animal_id)
        if orm is None:
            return None
        return _to_domain(orm)

    async def create(self, animal: Animal) -> Animal:
        orm = AnimalRecord(
            name=animal.name,
            favorite_color=animal.favorite_color.value,
            barn_id=animal.barn_id,
        )
        self._session.add(orm)
        await self._session.flush()
        await self._session.commit()
        return _to_domain(orm)

    async def save_assignments(self, animals: Sequence[Animal]) -> None:
        for animal in animals:
            await self._session.execute(
                update(AnimalRecord)
                .where(AnimalRecord.id == animal.animal_id)
                .values(barn_id=animal.barn_id)
            )
        await self._session.commit()

    async def delete(self, animal: Animal) -> None:
        await self._session.execute(delete(AnimalRecord).where(AnimalRecord.id == animal.animal_id))
        await self._session.commit()

    async def delete_many(self, animals: Sequence[Animal]) -> None:
        ids = [animal.animal_id for animal in animals]
        if not ids:
            return
        await self._session.execute(delete(AnimalRecord).where(AnimalRecord.id.in_(ids)))
        await self._session.commit()
