"""
Seed pipeline: ordered phases from taxonomy to downstream attachers.

The phase list is declared once in PHASES. build_phase_graph() turns it into
a networkx DAG and phase_order() derives a deterministic topological order,
so the execution order is a testable artifact instead of a consequence of
call sequence.

Per phase:
    reseed(domain) -> check_prerequisites() -> generate() -> flush new rows

Core phase failures propagate and abort the run. Terminal phases (the
downstream attachers) are logged and skipped on failure, whether generate()
or the flush raised; their rows are dropped from the run data and the
adapter, while batches written before the failure stay committed.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, TypedDict

import networkx as nx

from .config import SeedConfig
from .constants.organization import ORGANIZATION_NAME
from .errors import MissingPrerequisiteError
from .generators import (
    ActivityGenerator,
    AiConversationGenerator,
    BasePhaseGenerator,
    CampaignGenerator,
    CaseGenerator,
    EmployeeGenerator,
    GenerationContext,
    IntakeGenerator,
    InvestigationGenerator,
    LocationGenerator,
    NotificationGenerator,
    OrganizationGenerator,
    PatternPoolGenerator,
    ReportGenerator,
    RetaliationGenerator,
    SavedViewGenerator,
    TaxonomyGenerator,
    WorkflowGenerator,
)
from .persistence import BatchPersistenceAdapter, RecordStore
from .sampling import deterministic_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseSpec:
    """
    One pipeline phase.

    Attributes:
        name: Phase name (also the generator's PHASE)
        generator: BasePhaseGenerator subclass
        seed_domain: Key into the seed offsets
        depends_on: Phases that must complete first
        tables: Tables whose new rows are flushed after the phase, in order
        terminal: Failure is logged and skipped instead of aborting the run
    """

    name: str
    generator: type[BasePhaseGenerator]
    seed_domain: str
    depends_on: tuple[str, ...] = ()
    tables: tuple[str, ...] = ()
    terminal: bool = False


PHASES: list[PhaseSpec] = [
    PhaseSpec("taxonomy", TaxonomyGenerator, "taxonomy", (), ("categories",)),
    PhaseSpec("locations", LocationGenerator, "locations", (), ("locations",)),
    PhaseSpec(
        "organization",
        OrganizationGenerator,
        "organization",
        ("locations",),
        ("divisions", "business_units", "departments", "teams"),
    ),
    PhaseSpec("employees", EmployeeGenerator, "employees", ("locations", "organization"), ("employees",)),
    PhaseSpec("patterns", PatternPoolGenerator, "patterns", ("taxonomy", "employees")),
    PhaseSpec("intake", IntakeGenerator, "intake", ("taxonomy", "locations", "employees"), ("intake_records",)),
    PhaseSpec(
        "cases",
        CaseGenerator,
        "cases",
        ("intake", "patterns"),
        ("cases", "intake_case_associations"),
    ),
    PhaseSpec(
        "retaliation",
        RetaliationGenerator,
        "retaliation",
        ("cases",),
        ("intake_records", "cases", "intake_case_associations", "case_links"),
    ),
    PhaseSpec("investigations", InvestigationGenerator, "investigations", ("cases", "retaliation"), ("investigations",)),
    PhaseSpec(
        "campaigns",
        CampaignGenerator,
        "campaigns",
        ("intake", "employees"),
        ("campaigns", "campaign_responses"),
        terminal=True,
    ),
    PhaseSpec(
        "workflows", WorkflowGenerator, "workflows", ("retaliation",), ("workflow_instances",), terminal=True
    ),
    PhaseSpec(
        "notifications", NotificationGenerator, "notifications", ("retaliation",), ("notifications",), terminal=True
    ),
    PhaseSpec("saved_views", SavedViewGenerator, "saved_views", ("employees",), ("saved_views",), terminal=True),
    PhaseSpec(
        "ai_conversations",
        AiConversationGenerator,
        "ai_conversations",
        ("retaliation",),
        ("ai_conversations",),
        terminal=True,
    ),
    PhaseSpec("reports", ReportGenerator, "reports", ("employees",), ("reports",), terminal=True),
    PhaseSpec(
        "activity", ActivityGenerator, "activity", ("investigations",), ("audit_logs",), terminal=True
    ),
]


def build_phase_graph(phases: list[PhaseSpec] | None = None) -> nx.DiGraph:
    """
    Dependency graph with an edge from each dependency to its dependent.

    Raises:
        ValueError: A phase depends on an undeclared phase
    """
    phases = PHASES if phases is None else phases
    graph = nx.DiGraph()
    for position, spec in enumerate(phases):
        graph.add_node(spec.name, spec=spec, position=position)
    for spec in phases:
        for dep in spec.depends_on:
            if dep not in graph:
                raise ValueError(f"Phase '{spec.name}' depends on unknown phase '{dep}'")
            graph.add_edge(dep, spec.name)
    return graph


def phase_order(phases: list[PhaseSpec] | None = None) -> list[PhaseSpec]:
    """
    Topological order, ties broken by declaration order.

    Raises:
        ValueError: Unknown dependency or a dependency cycle
    """
    graph = build_phase_graph(phases)
    try:
        names = list(
            nx.lexicographical_topological_sort(graph, key=lambda n: graph.nodes[n]["position"])
        )
    except nx.NetworkXUnfeasible as exc:
        cycle = nx.find_cycle(graph)
        raise ValueError(f"Phase dependency cycle: {cycle}") from exc
    return [graph.nodes[name]["spec"] for name in names]


def organization_row(config: SeedConfig, slug: str, name: str = ORGANIZATION_NAME) -> dict[str, Any]:
    """Organization row with a deterministic identifier."""
    return {
        "id": deterministic_id(config.master_seed, "organization", slug),
        "slug": slug,
        "name": name,
        "created_at": config.current_date,
    }


class RunSummary(TypedDict):
    """Outcome of one pipeline run."""

    organization_id: str
    generated: dict[str, int]
    inserted: dict[str, int]
    skipped: dict[str, int]
    skipped_phases: list[str]
    timings: dict[str, float]
    patterns: dict[str, Any]


@dataclass
class SeedPipeline:
    """
    Runs every phase against one organization and one store.

    Attributes:
        config: Validated SeedConfig
        store: Target RecordStore
        phases: Phase list (defaults to PHASES)
        ctx: GenerationContext of the last run
        adapter: BatchPersistenceAdapter of the last run
    """

    config: SeedConfig
    store: RecordStore
    phases: list[PhaseSpec] = field(default_factory=lambda: list(PHASES))
    ctx: GenerationContext | None = None
    adapter: BatchPersistenceAdapter | None = None
    skipped_phases: list[str] = field(default_factory=list)

    def run(self, organization_slug: str | None = None) -> RunSummary:
        """
        Generate and persist the full tenant.

        Raises:
            MissingPrerequisiteError: Unknown organization or missing upstream data
            PersistenceBatchError: A batch failed after its retry
        """
        slug = organization_slug or self.config.organization_slug
        organization = self.store.find_organization(slug)
        if organization is None:
            raise MissingPrerequisiteError(
                "organization", f"no organization with slug '{slug}' (use --create-org)"
            )

        order = phase_order(self.phases)
        self.ctx = GenerationContext.create(self.config, organization, self.store)
        self.adapter = BatchPersistenceAdapter(self.store, batch_size=self.config.batch_size)
        self.adapter.tracker.mark_committed("organizations", 1)
        self.skipped_phases = []

        print("=" * 60)
        print(f"Seeding organization '{slug}'")
        print("=" * 60)
        print(f"Master seed: {self.config.master_seed}")
        print(f"Current date: {self.config.current_date.date().isoformat()}")
        print(f"Phases: {', '.join(spec.name for spec in order)}")
        print()

        run_start = time.time()
        for spec in order:
            self._run_phase(spec)
        elapsed = time.time() - run_start

        summary = self._summary()
        print()
        print("=" * 60)
        print("Generation Summary")
        print("=" * 60)
        total = sum(summary["inserted"].values())
        print(f"Rows inserted: {total:,} ({sum(summary['skipped'].values()):,} skipped as duplicates)")
        print(f"Total time: {elapsed:.2f}s")
        if self.skipped_phases:
            print(f"Skipped phases: {', '.join(self.skipped_phases)}")
        return summary

    def _run_phase(self, spec: PhaseSpec) -> None:
        ctx = self.ctx
        start = time.time()
        marks = {table: len(ctx.data[table]) for table in spec.tables}

        ctx.reseed(spec.seed_domain)
        if spec.terminal:
            try:
                rows = self._generate_and_flush(spec, marks)
            except Exception as exc:
                logger.warning("Skipping phase '%s': %s", spec.name, exc, exc_info=True)
                for table, mark in marks.items():
                    del ctx.data[table][mark:]
                    self.adapter.discard(table)
                self.skipped_phases.append(spec.name)
                return
        else:
            rows = self._generate_and_flush(spec, marks)

        elapsed = time.time() - start
        ctx._phase_times[spec.name] = elapsed
        ctx._phase_rows[spec.name] = rows
        rows_per_sec = rows / elapsed if elapsed > 0 else 0
        print(f"    {elapsed:.2f}s ({rows_per_sec:,.0f} rows/sec)")

    def _generate_and_flush(self, spec: PhaseSpec, marks: dict[str, int]) -> int:
        generator = spec.generator(self.ctx)
        generator.check_prerequisites()
        generator.generate()

        rows = 0
        for table in spec.tables:
            new_rows = self.ctx.data[table][marks[table]:]
            rows += len(new_rows)
            self.adapter.add(table, new_rows)
        self.adapter.flush_tables(spec.tables)
        return rows

    def _summary(self) -> RunSummary:
        stats = self.adapter.get_stats()["tables"]
        patterns = self.ctx.patterns.summary() if self.ctx.patterns is not None else {}
        return RunSummary(
            organization_id=self.ctx.organization_id,
            generated={t: s["generated"] for t, s in stats.items()},
            inserted={t: s["inserted"] for t, s in stats.items()},
            skipped={t: s["skipped"] for t, s in stats.items()},
            skipped_phases=list(self.skipped_phases),
            timings=dict(self.ctx._phase_times),
            patterns=patterns,
        )
