"""
Domain models for the Ignite World service.

Defines the World dataset schema (``COUNTRY`` and ``CITY`` tables) and the
``PopulousCity`` projection returned by the aggregation query. These models
are used for validation, serialization, and type hints across the repository
layer and the HTTP surface. Column names live in ``domain.mapping``.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Country(BaseModel):
    """
    Representation of a single row in the ``COUNTRY`` table.
    """

    code: str = Field(..., min_length=3, max_length=3, description="ISO 3166-1 alpha-3 code.")
    name: str
    continent: str
    region: str
    surface_area: Decimal
    indep_year: Optional[int] = Field(None, description="Year of independence, if any.")
    population: int
    life_expectancy: Optional[Decimal] = None
    gnp: Optional[Decimal] = None
    gnp_old: Optional[Decimal] = None
    local_name: str
    government_form: str
    head_of_state: Optional[str] = None
    capital: Optional[int] = Field(None, description="City id; not checked against CITY.")
    code2: str = Field(..., max_length=2)

    model_config = ConfigDict(frozen=True)


class CityKey(BaseModel):
    """
    Primary key of the ``CITY`` table. Rows are colocated by ``country_code``.
    """

    id: int
    country_code: str = Field(..., min_length=3, max_length=3)

    model_config = ConfigDict(frozen=True)


class City(BaseModel):
    """
    Representation of a single row in the ``CITY`` table.
    """

    id: int
    country_code: str
    name: str
    district: str
    population: int

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> CityKey:
        return CityKey(id=self.id, country_code=self.country_code)


class PopulousCity(BaseModel):
    """
    One row of the most-populated-cities report. Not stored anywhere.
    """

    city_name: str
    population: int
    country_name: str

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


__all__ = ["Country", "City", "CityKey", "PopulousCity"]
