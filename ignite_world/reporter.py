from __future__ import annotations

from typing import Iterable, List, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ignite_world.diagnostics import AccessResult
from ignite_world.domain.models import Country, PopulousCity


def print_populous_cities(cities: Sequence[PopulousCity], console: Console | None = None) -> None:
    """
    Render the most-populated-cities report as a rich table.
    """
    console = console or Console()

    if not cities:
        console.print("[yellow]No cities returned.[/yellow]")
        return

    table = Table(title="Most Populated Cities", box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("City", style="cyan", no_wrap=True)
    table.add_column("Country", style="magenta")
    table.add_column("Population", justify="right", style="bold green")

    for rank, city in enumerate(cities, start=1):
        table.add_row(str(rank), city.city_name, city.country_name, f"{city.population:,}")

    console.print(table)


def print_countries(countries: Sequence[Country], console: Console | None = None) -> None:
    console = console or Console()

    if not countries:
        console.print("[yellow]No countries returned.[/yellow]")
        return

    table = Table(title="Countries", box=box.ROUNDED)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Continent", style="magenta")
    table.add_column("Population", justify="right", style="bold green")
    table.add_column("Life Exp.", justify="right", style="yellow")

    for country in countries:
        life = "N/A" if country.life_expectancy is None else f"{country.life_expectancy}"
        table.add_row(country.code, country.name, country.continent, f"{country.population:,}", life)

    console.print(table)


def print_access_results(results: Iterable[AccessResult], console: Console | None = None) -> None:
    """
    Render one row per access strategy: what came back and how long it took.
    """
    console = console or Console()
    rows: List[AccessResult] = list(results)

    if not rows:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(
        title="Data Access Strategies",
        box=box.ROUNDED,
        caption="Same key read through each strategy",
    )
    table.add_column("Strategy", style="cyan", no_wrap=True)
    table.add_column("Found", justify="center")
    table.add_column("Columns", style="magenta")
    table.add_column("Duration (ms)", justify="right", style="green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")

    for res in rows:
        found = "[green]yes[/green]" if res.get("found") else "[red]no[/red]"
        columns = ", ".join(res.get("row") or {}) or "-"
        duration_ms = f"{res.get('duration_seconds', 0.0) * 1000:.2f}"
        mem_bytes = res.get("peak_rss_bytes") or 0
        mem_str = f"{mem_bytes / (1024 * 1024):.2f}" if mem_bytes else "N/A"
        table.add_row(res.get("strategy", "unknown"), found, columns, duration_ms, mem_str)

    console.print(table)


def print_tables(names: Sequence[str], console: Console | None = None) -> None:
    console = console or Console()
    table = Table(title="Cluster Tables", box=box.SIMPLE)
    table.add_column("Table", style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)
