"""
Domain package for the Ignite World service.

Exports the World dataset models and their explicit table mappings.
Keep this package focused on data definitions and validation concerns.
"""

from ignite_world.domain.mapping import CITY, COUNTRY, MAPPINGS, TableMapping, mapping_for
from ignite_world.domain.models import City, CityKey, Country, PopulousCity

__all__ = [
    "City",
    "CityKey",
    "Country",
    "PopulousCity",
    "TableMapping",
    "CITY",
    "COUNTRY",
    "MAPPINGS",
    "mapping_for",
]
