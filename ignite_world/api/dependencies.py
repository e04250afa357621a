from __future__ import annotations

from fastapi import Depends, Request

from ignite_world.infrastructure.session import IgniteSession
from ignite_world.repository.world import CityRepository


def get_session(request: Request) -> IgniteSession:
    """The session opened by the app lifespan."""
    return request.app.state.session


def get_city_repository(session: IgniteSession = Depends(get_session)) -> CityRepository:
    return CityRepository(session)
