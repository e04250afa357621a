"""
Repositories over the World dataset.
"""

from __future__ import annotations

from ignite_world.domain.mapping import CITY, COUNTRY
from ignite_world.domain.models import City, Country, PopulousCity
from ignite_world.repository.base import Repository, derived, query
from ignite_world.repository.criteria import asc, desc, param, where

MOST_POPULATED_CITIES_SQL = (
    "SELECT city.name AS city_name, MAX(city.population) AS population, "
    "country.name AS country_name "
    "FROM country JOIN city ON city.countrycode = country.code "
    "GROUP BY city.name, country.name, city.population "
    "ORDER BY city.population DESC LIMIT :limit"
)


class CountryRepository(Repository[Country]):
    mapping = COUNTRY

    find_by_population_greater_than_order_by_population_desc = derived(
        where("population").gt(param("population")).order_by(desc("population"))
    )

    find_by_continent = derived(
        where("continent").eq(param("continent")).order_by(asc("name"))
    )


class CityRepository(Repository[City]):
    mapping = CITY

    find_by_country_code = derived(
        where("country_code").eq(param("country_code")).order_by(desc("population"))
    )

    # Cities joined with their country name, largest first.
    find_top_most_populated_cities = query(MOST_POPULATED_CITIES_SQL, projection=PopulousCity)


__all__ = ["CountryRepository", "CityRepository", "MOST_POPULATED_CITIES_SQL"]
