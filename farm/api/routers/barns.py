"""Barns API router: GET /barns (occupancy), POST /barns/{color}/rebalance."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends

from farm.api.dependencies import get_farm_service
from farm.application.farm_service import FarmService
from farm.domain.models.color import Color
from farm.domain.schemas.farm import BarnResponse, RebalanceResponse

router = APIRouter()


@router.get("/", response_model=List[BarnResponse])
async def list_barns(
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
    color: Optional[Color] = None,
):
    occupancies = await farm_service.list_barns(color)
    return [
        BarnResponse(
            barn_id=o.barn.barn_id,
            name=o.barn.name,
            color=o.barn.color,
            capacity=o.barn.capacity,
            occupancy=o.occupancy,
        )
        for o in occupancies
    ]


@router.post("/{color}/rebalance", response_model=RebalanceResponse)
async def rebalance_color(
    color: Color,
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    """Force a full redistribution of one color, e.g. after repairing data by hand."""
    result = await farm_service.rebalance(color)
    return RebalanceResponse(
        color=color,
        barn_count=len(result.barns),
        animals_moved=len(result.moved),
        barns_created=result.barns_created,
        barns_retired=result.barns_retired,
    )
