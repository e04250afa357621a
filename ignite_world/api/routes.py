from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from ignite_world.api.dependencies import get_city_repository
from ignite_world.domain.models import PopulousCity
from ignite_world.repository.world import CityRepository

DEFAULT_LIMIT = 10

router = APIRouter(prefix="/api")


@router.get("/mostPopulated", response_model=List[PopulousCity])
def get_most_populated_cities(
    limit: int = Query(DEFAULT_LIMIT),
    cities: CityRepository = Depends(get_city_repository),
):
    """Top ``limit`` cities by population, with their country name."""
    return cities.find_top_most_populated_cities(limit)
