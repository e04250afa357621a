"""
Load the World database into an Ignite cluster.

Either runs a SQL script (for example the full ``world.sql`` shipped with the
Ignite examples) statement by statement, or creates the tables and inserts the
bundled sample rows from ``scripts/world_sample.py``.

Usage (from the repository root):
    python -m scripts.load_world
    python -m scripts.load_world --file world.sql
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Iterator, List, Optional

import typer

from ignite_world.config import get_settings
from ignite_world.infrastructure.session import IgniteSession, open_session
from ignite_world.utils.logging import configure_logging, get_logger
from scripts import world_sample

app = typer.Typer(help="Load the World database into Ignite (SQL script or bundled sample).")
log = get_logger("load_world")


def split_statements(script: str) -> List[str]:
    """
    Split a SQL script on ``;`` outside string literals, quoted identifiers
    and comments. Comment-only and empty statements are dropped.
    """
    statements: List[str] = []
    current: List[str] = []
    has_code = False
    i, n = 0, len(script)
    quote: Optional[str] = None

    while i < n:
        ch = script[i]
        if quote:
            current.append(ch)
            if ch == quote:
                if i + 1 < n and script[i + 1] == quote:
                    current.append(script[i + 1])
                    i += 1
                else:
                    quote = None
        elif ch in ("'", '"'):
            quote = ch
            has_code = True
            current.append(ch)
        elif script.startswith("--", i):
            end = script.find("\n", i)
            i = n if end == -1 else end
            continue
        elif script.startswith("/*", i):
            end = script.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue
        elif ch == ";":
            if has_code:
                statements.append("".join(current).strip())
            current, has_code = [], False
        else:
            if not ch.isspace():
                has_code = True
            current.append(ch)
        i += 1

    if has_code:
        statements.append("".join(current).strip())
    return statements


def _run_statements(session: IgniteSession, statements: Iterator[str]) -> int:
    count = 0
    with session.cursor() as cur:
        for statement in statements:
            cur.execute(statement)
            count += 1
    return count


def load_script(session: IgniteSession, path: Path) -> int:
    """Execute every statement of a SQL file. Returns the statement count."""
    statements = split_statements(path.read_text(encoding="utf-8"))
    return _run_statements(session, iter(statements))


def load_sample(session: IgniteSession, colocate: bool = True) -> int:
    """Create the tables and insert the sample rows. Returns the row count."""
    _run_statements(session, iter(world_sample.schema_statements(colocate=colocate)))
    with session.cursor() as cur:
        cur.executemany(
            world_sample.insert_statement("COUNTRY", world_sample.COUNTRY_COLUMNS),
            [list(row) for row in world_sample.COUNTRY_ROWS],
        )
        cur.executemany(
            world_sample.insert_statement("CITY", world_sample.CITY_COLUMNS),
            [list(row) for row in world_sample.CITY_ROWS],
        )
    return len(world_sample.COUNTRY_ROWS) + len(world_sample.CITY_ROWS)


@app.command()
def main(
    sql_file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="SQL script to run instead of the bundled sample.", exists=True
    ),
) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    start = time.perf_counter()
    with open_session(settings) as session:
        if sql_file is not None:
            count = load_script(session, sql_file)
            what = "statements"
        else:
            count = load_sample(session)
            what = "rows"
    elapsed = time.perf_counter() - start
    log.info("Loaded %s %s in %.2fs", count, what, elapsed)
    typer.echo(f"Loaded {count} {what} into {','.join(settings.address_list)}.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
