"""Animals API router: list, add (single/batch), remove (single/batch), delete all."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Response

from farm.api.dependencies import get_farm_service
from farm.application.farm_service import FarmService
from farm.domain.models.animal import Animal
from farm.domain.schemas.farm import (
    AnimalBatchCreateRequest,
    AnimalBatchRemoveRequest,
    AnimalCreateRequest,
    AnimalResponse,
)

router = APIRouter()


def _request_to_animal(req: AnimalCreateRequest) -> Animal:
    return Animal(name=req.name, favorite_color=req.favorite_color)


@router.get("/", response_model=List[AnimalResponse])
async def list_animals(
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    return await farm_service.find_all()


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(
    animal_id: int,
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    return await farm_service.get_animal(animal_id)


@router.post("/", response_model=AnimalResponse, status_code=201)
async def add_animal(
    body: AnimalCreateRequest,
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    """Add one animal; its color is rebalanced before the response is returned."""
    return await farm_service.add_to_farm(_request_to_animal(body))


@router.post("/batch", response_model=List[AnimalResponse], status_code=201)
async def add_animals(
    body: AnimalBatchCreateRequest,
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    return await farm_service.add_many_to_farm([_request_to_animal(a) for a in body.animals])


@router.delete("/{animal_id}", status_code=204)
async def remove_animal(
    animal_id: int,
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    await farm_service.remove_from_farm(animal_id)
    return Response(status_code=204)


@router.post("/remove", status_code=204)
async def remove_animals(
    body: AnimalBatchRemoveRequest,
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    await farm_service.remove_many_from_farm(body.animal_ids)
    return Response(status_code=204)


@router.delete("/", status_code=204)
async def delete_all_animals(
    farm_service: Annotated[FarmService, Depends(get_farm_service)],
):
    """Remove every animal and retire every barn."""
    await farm_service.delete_all()
    return Response(status_code=204)
