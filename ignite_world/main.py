from __future__ import annotations

import json
import sys
from typing import Optional

import typer

from ignite_world.config import get_settings
from ignite_world.utils.logging import configure_logging

app = typer.Typer(help="Ignite World database CLI.")


def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"addresses={','.join(settings.address_list)} schema={settings.ignite_schema} "
        f"timeout={settings.ignite_timeout}s page_size={settings.ignite_page_size} "
        f"ssl={settings.ignite_use_ssl} http={settings.http_host}:{settings.http_port}"
    )


@app.command()
def tables() -> None:
    """
    List the tables existing in the cluster.
    """
    from ignite_world.diagnostics import log_cluster_overview
    from ignite_world.infrastructure.session import open_session
    from ignite_world.reporter import print_tables

    _setup()
    with open_session() as session:
        print_tables(log_cluster_overview(session))


@app.command()
def demo(
    city_id: int = typer.Option(34, "--city-id", help="City ID half of the key."),
    country_code: str = typer.Option("ALB", "--country-code", help="Country code half of the key."),
) -> None:
    """
    Read one city through the record view, the key/value view and SQL.
    """
    from ignite_world.diagnostics import demonstrate_access_apis
    from ignite_world.infrastructure.session import open_session
    from ignite_world.reporter import print_access_results

    _setup()
    with open_session() as session:
        results = demonstrate_access_apis(session, city_id=city_id, country_code=country_code)
    print_access_results(results)


@app.command()
def top(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of cities to show."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """
    Show the most populated cities with their country.
    """
    from ignite_world.infrastructure.session import open_session
    from ignite_world.reporter import print_populous_cities
    from ignite_world.repository.world import CityRepository

    _setup()
    with open_session() as session:
        cities = CityRepository(session).find_top_most_populated_cities(limit)

    if as_json:
        typer.echo(json.dumps([c.model_dump(by_alias=True) for c in cities], indent=2))
    else:
        print_populous_cities(cities)


@app.command()
def countries(
    min_population: int = typer.Option(
        100_000_000, "--min-population", "-p", help="Only countries above this population."
    ),
) -> None:
    """
    List countries above a population threshold, largest first.
    """
    from ignite_world.infrastructure.session import open_session
    from ignite_world.reporter import print_countries
    from ignite_world.repository.world import CountryRepository

    _setup()
    with open_session() as session:
        repo = CountryRepository(session)
        found = repo.find_by_population_greater_than_order_by_population_desc(min_population)
    print_countries(found)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default from settings)."),
) -> None:
    """
    Run the HTTP API.
    """
    import uvicorn

    from ignite_world.api.app import create_app

    _setup()
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=host or settings.http_host,
        port=port or settings.http_port,
        log_config=None,
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
