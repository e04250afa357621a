from __future__ import annotations

from ignite_world import diagnostics
from ignite_world.diagnostics import _merge, demonstrate_access_apis, log_cluster_overview
from ignite_world.utils.profiler import ProfileStats, profile_block

EXPECTED_DURATION = 0.123457
EXPECTED_CPU = 12.3
EXPECTED_PEAK_RSS = 123


def test_demonstrate_access_apis_runs_every_strategy(world_session):
    results = demonstrate_access_apis(world_session, city_id=34, country_code="ALB")

    assert [r["strategy"] for r in results] == ["record_view", "key_value_view", "sql"]
    assert all(r["found"] for r in results)
    record, value, sql_row = (r["row"] for r in results)
    assert record["NAME"] == value["NAME"] == "Tirana"
    assert "ID" in record and "ID" not in value
    assert {k.upper(): v for k, v in sql_row.items()} == {"NAME": "Tirana", "POPULATION": 270000}
    assert all(r["duration_seconds"] >= 0 for r in results)


def test_demonstrate_access_apis_reports_absent_key(world_session):
    results = demonstrate_access_apis(world_session, city_id=999999, country_code="ALB")

    assert not any(r["found"] for r in results)
    assert all(r["row"] is None for r in results)


def test_merge_uses_profiler_measurements():
    stats = ProfileStats(
        label="sql",
        start_ts=1.0,
        end_ts=1.1234567,
        duration_seconds=0.1234567,
        peak_rss_bytes=EXPECTED_PEAK_RSS,
        cpu_percent=12.34,
    )

    merged = _merge("sql", "SQL", {"NAME": "Tirana"}, stats)

    assert merged["found"] is True
    assert merged["duration_seconds"] == EXPECTED_DURATION
    assert merged["cpu_percent"] == EXPECTED_CPU
    assert merged["peak_rss_bytes"] == EXPECTED_PEAK_RSS


def test_log_cluster_overview(monkeypatch, world_session):
    monkeypatch.setattr(diagnostics, "list_tables", lambda session: ["PUBLIC.CITY", "PUBLIC.COUNTRY"])

    assert log_cluster_overview(world_session) == ["PUBLIC.CITY", "PUBLIC.COUNTRY"]


def test_profile_block_measures_duration():
    with profile_block("busy", sample_interval_ms=1) as stats:
        sum(range(10_000))

    assert stats.label == "busy"
    assert stats.end_ts >= stats.start_ts
    assert stats.duration_seconds == stats.end_ts - stats.start_ts
    assert stats.peak_rss_bytes and stats.peak_rss_bytes > 0
    assert stats.cpu_percent is not None
