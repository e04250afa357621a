"""
Startup diagnostics and a side-by-side run of the three access strategies.

Usage (example from CLI):
    from ignite_world.diagnostics import demonstrate_access_apis

    with open_session() as session:
        results = demonstrate_access_apis(session, city_id=34, country_code="ALB")

Each lookup runs inside ``profile_block`` so the record view, key/value view
and SQL paths can be compared on the same key. Errors are not caught: a
failing lookup aborts the run.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypedDict

from ignite_world.access.sql import Statement
from ignite_world.infrastructure.session import IgniteSession
from ignite_world.utils.logging import get_logger
from ignite_world.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

TABLES_SQL = (
    "SELECT SCHEMA_NAME, TABLE_NAME FROM SYSTEM.TABLES ORDER BY SCHEMA_NAME, TABLE_NAME"
)
CITY_BY_ID_SQL = "SELECT name, population FROM CITY WHERE id = ?"


class AccessResult(TypedDict, total=False):
    """
    Outcome of one profiled lookup.

    ``row`` is ``None`` when the key was absent.
    """

    strategy: str
    description: str
    found: bool
    row: Optional[Dict[str, Any]]
    duration_seconds: float
    peak_rss_bytes: Optional[int]
    cpu_percent: Optional[float]


def list_tables(session: IgniteSession) -> List[str]:
    """Qualified names of every table the cluster catalog knows."""
    with session.sql().execute(TABLES_SQL) as rs:
        return [f"{row[0]}.{row[1]}" for row in rs]


def log_cluster_overview(session: IgniteSession) -> List[str]:
    """Log the configured node addresses and the tables existing in the cluster."""
    log.info("Configured cluster addresses: %s", ", ".join(session.settings.address_list))
    tables = list_tables(session)
    log.info("Table names existing in cluster: %s", tables, extra={"tables": tables})
    return tables


def _merge(name: str, description: str, row: Optional[Dict[str, Any]], stats: ProfileStats) -> AccessResult:
    return AccessResult(
        strategy=name,
        description=description,
        found=row is not None,
        row=row,
        duration_seconds=round(stats.duration_seconds, 6),
        peak_rss_bytes=stats.peak_rss_bytes,
        cpu_percent=round(stats.cpu_percent, 1) if stats.cpu_percent is not None else None,
    )


def _profiled(name: str, description: str, lookup: Callable[[], Optional[Dict[str, Any]]]) -> AccessResult:
    log.info(f"[ACCESS START] {name}", extra={"strategy": name})
    with profile_block(name) as stats:
        row = lookup()
    result = _merge(name, description, row, stats)
    log.info(
        f"[ACCESS DONE] {name}",
        extra={"strategy": name, "found": result["found"], "duration": result["duration_seconds"]},
    )
    return result


def demonstrate_access_apis(
    session: IgniteSession,
    city_id: int = 34,
    country_code: str = "ALB",
) -> List[AccessResult]:
    """
    Read one city through the record view, the key/value view and SQL.

    Parameters
    ----------
    session : IgniteSession
        Open session.
    city_id, country_code : int, str
        Composite key of the city to read.

    Returns
    -------
    list[AccessResult]
        One entry per strategy, in the order they ran.
    """
    log.info("--- Demonstrating data access APIs ---")
    city_table = session.table("CITY")
    key = {"ID": city_id, "COUNTRYCODE": country_code}

    record_view = city_table.record_view()
    kv_view = city_table.key_value_view()
    sql = session.sql()

    def _sql_lookup() -> Optional[Dict[str, Any]]:
        with sql.execute(Statement(CITY_BY_ID_SQL, page_size=1), city_id) as rs:
            row = next(rs, None)
        return None if row is None else row.as_dict()

    results = [
        _profiled(record_view.name, record_view.description, lambda: record_view.get(key)),
        _profiled(kv_view.name, kv_view.description, lambda: kv_view.get(key)),
        _profiled(sql.name, sql.description, _sql_lookup),
    ]

    record, value, sql_row = (r["row"] for r in results)
    if record is not None:
        log.info(
            "RecordView result: City ID %s = %s (population: %s)",
            city_id, record["NAME"], record["POPULATION"],
        )
    if value is not None:
        log.info(
            "KeyValueView result: City ID %s value = %s in %s",
            city_id, value["NAME"], value["DISTRICT"],
        )
    if sql_row is not None:
        upper = {k.upper(): v for k, v in sql_row.items()}
        log.info("SQL API result: City = %s, Population = %s", upper["NAME"], upper["POPULATION"])
    if not any(r["found"] for r in results):
        log.warning("City %s/%s not found", city_id, country_code)

    log.info("--- End of API demonstration ---")
    return results


__all__ = [
    "AccessResult",
    "TABLES_SQL",
    "demonstrate_access_apis",
    "list_tables",
    "log_cluster_overview",
]
