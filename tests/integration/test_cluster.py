"""
Integration tests against a running Ignite 3 cluster.

The cluster must already hold the World tables, e.g. loaded with
``python -m scripts.load_world`` (bundled sample) or
``python -m scripts.load_world --file world.sql`` (full dataset).

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from ignite_world.api.app import create_app
from ignite_world.config import Settings
from ignite_world.diagnostics import demonstrate_access_apis, list_tables
from ignite_world.domain.models import CityKey
from ignite_world.infrastructure.session import open_session
from ignite_world.repository import CityRepository, CountryRepository

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and a reachable Ignite cluster",
)

TOP_LIMIT = 5
MIN_POPULATION = 100_000_000


@pytest.fixture(scope="module")
def cluster_session():
    session = open_session(Settings(startup_diagnostics=False))
    try:
        yield session
    finally:
        session.close()


class TestCatalog:
    def test_world_tables_exist(self, cluster_session):
        tables = {name.split(".")[-1].upper() for name in list_tables(cluster_session)}

        assert {"CITY", "COUNTRY"} <= tables


class TestAccessStrategies:
    def test_tirana_through_every_strategy(self, cluster_session):
        results = demonstrate_access_apis(cluster_session, city_id=34, country_code="ALB")

        assert all(r["found"] for r in results)
        assert results[0]["row"]["NAME"] == "Tirana"

    def test_absent_key(self, cluster_session):
        view = cluster_session.table("CITY").record_view()

        assert view.get({"ID": -1, "COUNTRYCODE": "ALB"}) is None

    def test_result_set_closed_early(self, cluster_session):
        rs = cluster_session.sql().execute("SELECT id FROM CITY")
        next(rs)
        rs.close()

        assert list(rs) == []
        assert cluster_session.sql().query("SELECT COUNT(*) FROM CITY")[0][0] > 0


class TestRepositories:
    def test_find_by_id(self, cluster_session):
        city = CityRepository(cluster_session).find_by_id(CityKey(id=34, country_code="ALB"))

        assert city is not None
        assert city.name == "Tirana"

    def test_big_countries_sorted(self, cluster_session):
        found = CountryRepository(
            cluster_session
        ).find_by_population_greater_than_order_by_population_desc(MIN_POPULATION)

        populations = [c.population for c in found]
        assert found
        assert all(p > MIN_POPULATION for p in populations)
        assert populations == sorted(populations, reverse=True)

    def test_top_cities(self, cluster_session):
        top = CityRepository(cluster_session).find_top_most_populated_cities(TOP_LIMIT)

        assert len(top) <= TOP_LIMIT
        populations = [c.population for c in top]
        assert populations == sorted(populations, reverse=True)


def test_http_endpoint(cluster_session):
    with TestClient(create_app(session=cluster_session)) as client:
        response = client.get("/api/mostPopulated")

    assert response.status_code == 200
    assert len(response.json()) <= 10
