"""
Tests for the seed pipeline: phase ordering, determinism, idempotent
re-runs and failure handling.
"""

from dataclasses import replace

import pytest

from casegen.errors import MissingPrerequisiteError, PersistenceBatchError
from casegen.generators import ReportGenerator
from casegen.persistence import TABLE_ORDER
from casegen.pipeline import PHASES, PhaseSpec, SeedPipeline, build_phase_graph, phase_order

from conftest import SLUG, make_small_config, make_store

CORE_TABLES = (
    "categories",
    "employees",
    "intake_records",
    "cases",
    "intake_case_associations",
    "investigations",
)


class BrokenReportGenerator(ReportGenerator):
    """Report attacher that always fails."""

    def generate(self) -> None:
        super().generate()
        raise RuntimeError("report catalog unavailable")


def fingerprint(store, table: str) -> list[tuple]:
    """Sorted (id, every other column) tuples of a table."""
    rows = store.fetch(table)
    return sorted((row["id"], repr(sorted(row.items()))) for row in rows)


def run_once(config=None, **store_kwargs):
    config = config or make_small_config()
    store = make_store(config, **store_kwargs)
    pipeline = SeedPipeline(config, store)
    summary = pipeline.run(SLUG)
    return pipeline, store, summary


class TestPhaseOrder:
    """Topological order over declared dependencies."""

    def test_matches_declaration(self):
        assert [spec.name for spec in phase_order()] == [spec.name for spec in PHASES]

    def test_dependencies_precede_dependents(self):
        position = {spec.name: i for i, spec in enumerate(phase_order())}
        for spec in PHASES:
            for dep in spec.depends_on:
                assert position[dep] < position[spec.name]

    def test_graph_is_acyclic(self):
        graph = build_phase_graph()
        assert graph.number_of_nodes() == len(PHASES)
        assert ("cases", "investigations") in graph.edges

    def test_tie_break_by_declaration(self):
        phases = [
            PhaseSpec("b", ReportGenerator, "reports"),
            PhaseSpec("a", ReportGenerator, "reports"),
            PhaseSpec("c", ReportGenerator, "reports", ("a",)),
        ]
        assert [spec.name for spec in phase_order(phases)] == ["b", "a", "c"]

    def test_cycle_rejected(self):
        phases = [
            PhaseSpec("a", ReportGenerator, "reports", ("b",)),
            PhaseSpec("b", ReportGenerator, "reports", ("a",)),
        ]
        with pytest.raises(ValueError, match="cycle"):
            phase_order(phases)

    def test_unknown_dependency_rejected(self):
        phases = [PhaseSpec("a", ReportGenerator, "reports", ("missing",))]
        with pytest.raises(ValueError, match="unknown phase 'missing'"):
            phase_order(phases)

    def test_flushed_tables_cover_catalog(self):
        flushed = {table for spec in PHASES for table in spec.tables}
        assert flushed == set(TABLE_ORDER) - {"organizations"}


class TestSummary:
    """Run summary of the shared session run."""

    def test_nothing_skipped(self, seeded_run):
        _, _, summary = seeded_run
        assert summary["skipped_phases"] == []
        assert sum(summary["skipped"].values()) == 0

    def test_inserted_matches_generated(self, seeded_run):
        pipeline, store, summary = seeded_run
        for table, rows in pipeline.ctx.data.items():
            assert summary["inserted"].get(table, 0) == len(rows) == store.count(table), table

    def test_timings_per_phase(self, seeded_run):
        _, _, summary = seeded_run
        assert set(summary["timings"]) == {spec.name for spec in PHASES}

    def test_pattern_summary(self, seeded_run):
        _, _, summary = seeded_run
        assert summary["patterns"]["flagships"]["consumed"] == 10
        assert summary["organization_id"] == seeded_run[0].ctx.organization_id


class TestDeterminism:
    """Same seed, same rows; different seed, different rows."""

    def test_same_seed_same_rows(self, seeded_run):
        _, first, _ = seeded_run
        _, second, _ = run_once()
        for table in CORE_TABLES:
            assert fingerprint(first, table) == fingerprint(second, table), table

    def test_different_seed_differs(self, seeded_run):
        _, first, _ = seeded_run
        _, other, _ = run_once(make_small_config(master_seed=7))
        assert fingerprint(first, "intake_records") != fingerprint(other, "intake_records")

    @pytest.mark.slow
    def test_rerun_inserts_nothing(self):
        pipeline, store, _ = run_once()
        before = {table: store.count(table) for table in TABLE_ORDER}
        summary = SeedPipeline(pipeline.config, store).run(SLUG)
        assert sum(summary["inserted"].values()) == 0
        assert {table: store.count(table) for table in TABLE_ORDER} == before


class TestFailures:
    """Core failures abort; terminal failures are skipped."""

    def test_unknown_organization(self, small_config, memory_store):
        pipeline = SeedPipeline(small_config, memory_store)
        with pytest.raises(MissingPrerequisiteError, match="no organization with slug 'ghost'"):
            pipeline.run("ghost")

    def test_terminal_flush_failure_skipped(self):
        pipeline, store, summary = run_once(fail_on={"reports": 2})
        assert summary["skipped_phases"] == ["reports"]
        assert store.count("reports") == 0
        assert pipeline.ctx.data["reports"] == []
        assert store.count("saved_views") == 10

    def test_terminal_generate_failure_skipped(self, small_config, memory_store):
        phases = [
            replace(spec, generator=BrokenReportGenerator) if spec.name == "reports" else spec
            for spec in PHASES
        ]
        pipeline = SeedPipeline(small_config, memory_store, phases=phases)
        summary = pipeline.run(SLUG)
        assert summary["skipped_phases"] == ["reports"]
        assert memory_store.count("reports") == 0
        assert pipeline.adapter.pending("reports") == 0

    def test_core_failure_aborts(self):
        config = make_small_config()
        store = make_store(config, fail_on={"cases": 2})
        with pytest.raises(PersistenceBatchError) as exc_info:
            SeedPipeline(config, store).run(SLUG)
        assert exc_info.value.table == "cases"
        assert store.count("intake_records") == config.volumes["intake_records"]
        assert store.count("investigations") == 0
