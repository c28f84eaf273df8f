"""DB-backed barn repository. Implements BarnRepository protocol."""

from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from farm.domain.models.barn import Barn
from farm.domain.models.color import Color
from farm.infrastructure.database.models import BarnRecord


def _to_domain(orm: BarnRecord) -> Barn:
    return Barn(
        barn_id=orm.id,
        name=orm.name,
        color=Color(orm.color),
        capacity=orm.capacity,
    )


class DbBarnRepository:
    """
    Persists barns. New barns get the configured capacity and a name built from
    the zero-padded id, so name order matches creation order.
    """

    def __init__(self, session: AsyncSession, default_capacity: int) -> None:
        self._session = session
        self._capacity = default_capacity

    async def list_all(self) -> List[Barn]:
        result = await self._session.execute(select(BarnRecord).order_by(BarnRecord.id))
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def list_by_color(self, color: Color) -> List[Barn]:
        stmt = (
            select(BarnRecord)
            .where(BarnRecord.color == color.value)
            .order_by(BarnRecord.id)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def create(self, color: Color) -> Barn:
        orm = BarnRecord(color=color.value, capacity=self._capacity)
        self._session.add(orm)
        # Flush first so the id exists for the name.
        await self._session.flush()
        orm.name = f"Barn {color.name} {orm.id:06d}"
        await self._session.commit()
        return _to_domain(orm)

    async def delete(self, barn: Barn) -> None:
        await self._session.execute(delete(BarnRecord).where(BarnRecord.id == barn.barn_id))
        await self._session.commit()
