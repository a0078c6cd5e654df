"""
Base classes for phase generators.

This module provides:
- GenerationContext: Shared state dataclass passed to every phase generator
- BasePhaseGenerator: Abstract base class for phase-specific generators

Design Principles:
- Context owns all mutable state (ID tracking dicts, data storage, pattern
  pools, linker); nothing lives in module-level singletons
- Generators read upstream material from the context (or the store, for
  read-backs) and append new rows to ctx.data
- Every phase starts with ctx.reseed(domain), so its output depends only on
  the master seed and the domain offset
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
from faker import Faker

from ..config import SeedConfig
from ..persistence import TABLE_ORDER, RecordStore
from ..sampling import SeedContext, WeightedSampler, deterministic_id
from ..temporal import TemporalEngine

if TYPE_CHECKING:
    from ..linker import ReferentialLinker
    from ..patterns import PatternInjector


@dataclass
class GenerationContext:
    """
    Shared state for all phase generators.

    Attributes:
        config: Validated SeedConfig
        seeds: SeedContext built from the config's master seed and offsets
        organization: Target organization row (id, slug, name)
        store: Store used for read-backs of committed upstream rows
        rng: NumPy generator of the current phase
        fake: Faker instance, re-seeded with the current phase's seed
        sampler: WeightedSampler over rng
        temporal: TemporalEngine over sampler
        patterns: Pattern pools (built by the patterns phase)
        linker: Intake queue (built by the case phase)
        data: Shared data storage - table name -> list of row dicts
        generated_phases: Names of phases already run

    ID Tracking Dicts (for referential integrity):
        Taxonomy: category_ids, categories_by_id
        Locations: location_ids, locations_by_id
        Organization: division_ids, business_unit_ids, department_ids, team_ids
        Employees: employee_ids, persona_ids, team_lead_ids, team_members,
                   investigator_ids
        Cases: case_ids
    """

    # ==========================================================================
    # Configuration and target
    # ==========================================================================
    config: SeedConfig
    seeds: SeedContext
    organization: dict[str, Any]
    store: RecordStore | None = None

    # ==========================================================================
    # Core Random State (replaced on every reseed)
    # ==========================================================================
    rng: np.random.Generator | None = None
    fake: Faker = field(default_factory=Faker)
    sampler: WeightedSampler | None = None
    temporal: TemporalEngine | None = None
    domain: str | None = None

    # ==========================================================================
    # Pattern pools and linker
    # ==========================================================================
    patterns: PatternInjector | None = None
    linker: ReferentialLinker | None = None

    # ==========================================================================
    # Generation Tracking
    # ==========================================================================
    generated_phases: set[str] = field(default_factory=set)

    # ==========================================================================
    # Shared Data Storage
    # ==========================================================================
    data: dict[str, list[dict]] = field(default_factory=dict)

    # ==========================================================================
    # ID Tracking Dicts - Taxonomy and Locations
    # ==========================================================================
    category_ids: dict[str, str] = field(default_factory=dict)
    categories_by_id: dict[str, dict] = field(default_factory=dict)
    location_ids: dict[str, str] = field(default_factory=dict)
    locations_by_id: dict[str, dict] = field(default_factory=dict)

    # ==========================================================================
    # ID Tracking Dicts - Organization
    # ==========================================================================
    division_ids: dict[str, str] = field(default_factory=dict)
    business_unit_ids: dict[str, str] = field(default_factory=dict)
    department_ids: dict[str, str] = field(default_factory=dict)
    team_ids: dict[str, str] = field(default_factory=dict)

    # ==========================================================================
    # ID Tracking Dicts - Employees
    # ==========================================================================
    employee_ids: dict[str, str] = field(default_factory=dict)
    employees_by_id: dict[str, dict] = field(default_factory=dict)
    persona_ids: dict[str, str] = field(default_factory=dict)
    team_lead_ids: dict[str, str] = field(default_factory=dict)
    team_members: dict[str, list[str]] = field(default_factory=dict)
    investigator_ids: list[str] = field(default_factory=list)

    # ==========================================================================
    # ID Tracking Dicts - Cases
    # ==========================================================================
    case_ids: dict[str, str] = field(default_factory=dict)

    # ==========================================================================
    # Performance Tracking
    # ==========================================================================
    _phase_times: dict[str, float] = field(default_factory=dict, repr=False)
    _phase_rows: dict[str, int] = field(default_factory=dict, repr=False)

    @classmethod
    def create(
        cls,
        config: SeedConfig,
        organization: dict[str, Any],
        store: RecordStore | None = None,
    ) -> GenerationContext:
        ctx = cls(
            config=config,
            seeds=SeedContext(config.master_seed, dict(config.seed_offsets)),
            organization=organization,
            store=store,
        )
        ctx.init_data_tables()
        return ctx

    @property
    def organization_id(self) -> str:
        return self.organization["id"]

    @property
    def current_date(self):
        return self.config.current_date

    def reseed(self, domain: str) -> None:
        """
        Start a fresh random stream for a phase.

        Rebuilds rng, sampler and temporal engine, and re-seeds Faker, all
        from master_seed + offsets[domain].
        """
        seed = self.seeds.seed_for(domain)
        self.domain = domain
        self.rng = np.random.default_rng(seed)
        self.sampler = WeightedSampler(self.rng)
        self.temporal = TemporalEngine(
            self.sampler, self.config.current_date, self.config.history_years
        )
        self.fake.seed_instance(seed)

    def make_id(self, entity_type: str, key: Any) -> str:
        """Deterministic identifier for an entity of this organization."""
        return deterministic_id(
            self.config.master_seed, entity_type, f"{self.organization['slug']}:{key}"
        )

    def read_back(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: tuple[str, ...] = (),
    ) -> list[dict]:
        """
        Committed rows of this organization from the store.

        Falls back to this run's in-memory rows when no store is attached.
        """
        scoped = {"organization_id": self.organization_id, **(filters or {})}
        if self.store is not None:
            return self.store.fetch(table, scoped, order_by)
        rows = [
            r for r in self.data[table]
            if all(r.get(col) == value for col, value in scoped.items())
        ]
        if order_by:
            rows = sorted(rows, key=lambda r: tuple(r[col] for col in order_by))
        return rows

    def init_data_tables(self) -> None:
        """Initialize empty lists for every persisted table except organizations."""
        for table in TABLE_ORDER:
            if table != "organizations":
                self.data[table] = []


class BasePhaseGenerator(ABC):
    """
    Abstract base class for phase generators.

    Each phase generator implements generate(), which reads from and writes
    to the shared GenerationContext. The pipeline reseeds the context with
    the phase's seed domain before calling generate().

    Subclasses should:
    1. Override check_prerequisites() when they need upstream entities
    2. Read required data from ctx (ID maps, ctx.data, ctx.read_back)
    3. Append new rows to ctx.data tables
    4. Update ID tracking dicts (e.g., ctx.case_ids[reference] = id)

    Example:
        class LocationGenerator(BasePhaseGenerator):
            PHASE = "locations"

            def generate(self) -> None:
                for loc in LOCATIONS:
                    loc_id = self.ctx.make_id("location", loc["code"])
                    self.data["locations"].append({"id": loc_id, ...})
                    self.ctx.location_ids[loc["code"]] = loc_id
    """

    PHASE = ""

    def __init__(self, ctx: GenerationContext) -> None:
        """
        Initialize generator with shared context.

        Args:
            ctx: Shared GenerationContext instance
        """
        self.ctx = ctx

    def check_prerequisites(self) -> None:
        """Raise MissingPrerequisiteError when upstream material is absent."""

    @abstractmethod
    def generate(self) -> None:
        """
        Generate data for this phase.

        Implementations should:
        - Read dependencies from self.ctx
        - Generate new rows and append to appropriate tables
        - Update ID tracking dicts for referential integrity
        - Mark phase as complete: self.ctx.generated_phases.add(self.PHASE)
        """

    @property
    def sampler(self) -> WeightedSampler:
        """Convenience accessor for the phase's WeightedSampler."""
        return self.ctx.sampler

    @property
    def temporal(self) -> TemporalEngine:
        return self.ctx.temporal

    @property
    def fake(self) -> Faker:
        """Convenience accessor for Faker instance."""
        return self.ctx.fake

    @property
    def config(self) -> SeedConfig:
        return self.ctx.config

    @property
    def data(self) -> dict[str, list[dict]]:
        """Convenience accessor for shared data storage."""
        return self.ctx.data
