"""
casegen - deterministic synthetic data for a case-management demo tenant.

Generates a complete, referentially consistent organization (taxonomy,
locations, org tree, employees, intake records, cases, investigations and
downstream artifacts) from a master seed and a fixed reference date, and
persists it through an idempotent batch adapter.

Usage:
    from casegen import InMemoryStore, SeedPipeline, load_config, organization_row

    config = load_config()
    store = InMemoryStore()
    store.ensure_organization(organization_row(config, "acme-co"))
    summary = SeedPipeline(config, store).run("acme-co")
"""

__version__ = "0.1.0"

from .config import SeedConfig, load_config
from .errors import (
    CasegenError,
    DistributionConfigError,
    MissingPrerequisiteError,
    PersistenceBatchError,
)
from .persistence import BatchPersistenceAdapter, InMemoryStore, PostgresStore
from .pipeline import PHASES, SeedPipeline, organization_row, phase_order
from .validation import DataValidator

__all__ = [
    "__version__",
    # Configuration
    "SeedConfig",
    "load_config",
    # Errors
    "CasegenError",
    "DistributionConfigError",
    "MissingPrerequisiteError",
    "PersistenceBatchError",
    # Persistence
    "BatchPersistenceAdapter",
    "InMemoryStore",
    "PostgresStore",
    # Pipeline
    "PHASES",
    "SeedPipeline",
    "organization_row",
    "phase_order",
    "DataValidator",
]
