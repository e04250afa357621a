"""
Pytest configuration for Ignite World.

Unit tests run against an in-memory SQLite database seeded with the bundled
World sample; SQLite speaks the same DB-API ``qmark`` dialect as the Ignite
driver for everything the project sends. Integration tests talk to a real
cluster and are gated behind ``RUN_INTEGRATION_TESTS=1``.

Provides fixtures for:
- Test settings
- A seeded DB-API connection and the session wrapping it
- A FastAPI test client serving from that session
"""

from __future__ import annotations

import os
import sqlite3
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from ignite_world.api.app import create_app
from ignite_world.config import Settings
from ignite_world.infrastructure.session import IgniteSession
from scripts import world_sample


def _sqlite_value(value):
    return str(value) if isinstance(value, Decimal) else value


def seed_world(connection: sqlite3.Connection) -> None:
    """Create the World tables and insert the sample rows."""
    cur = connection.cursor()
    try:
        for ddl in world_sample.schema_statements(colocate=False):
            cur.execute(ddl)
        cur.executemany(
            world_sample.insert_statement("COUNTRY", world_sample.COUNTRY_COLUMNS),
            [[_sqlite_value(v) for v in row] for row in world_sample.COUNTRY_ROWS],
        )
        cur.executemany(
            world_sample.insert_statement("CITY", world_sample.CITY_COLUMNS),
            world_sample.CITY_ROWS,
        )
    finally:
        cur.close()
    connection.commit()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        _env_file=None,
        ignite_addresses=os.getenv("IGNITE_ADDRESSES", "127.0.0.1:10800"),
        ignite_page_size=2,
        startup_diagnostics=False,
        log_level="DEBUG",
    )


@pytest.fixture()
def world_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Fresh seeded database per test; the HTTP tests use it from worker threads.
    """
    connection = sqlite3.connect(":memory:", check_same_thread=False)
    seed_world(connection)
    yield connection
    connection.close()


@pytest.fixture()
def world_session(world_connection: sqlite3.Connection, test_settings: Settings) -> IgniteSession:
    return IgniteSession.from_connection(world_connection, settings=test_settings)


@pytest.fixture()
def api_client(world_session: IgniteSession) -> Generator[TestClient, None, None]:
    """Test client around an app serving from ``world_session``."""
    with TestClient(create_app(session=world_session)) as client:
        yield client
