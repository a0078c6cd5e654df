"""
Pytest fixtures for casegen tests.

Provides:
- A small-volume configuration (fast full runs)
- In-memory stores with the demo organization already created
- A session-scoped full pipeline run shared by read-only tests
- A session-scoped default-volume run for tests marked slow
- Helpers to run individual phases against a bare GenerationContext
- PostgreSQL connection settings (tests skip without CASEGEN_TEST_DSN)
"""

import os

import pytest

from casegen.config import SeedConfig, load_config
from casegen.generators import GenerationContext
from casegen.persistence import InMemoryStore
from casegen.pipeline import PHASES, SeedPipeline, organization_row

TEST_DSN = os.getenv("CASEGEN_TEST_DSN")

SLUG = "acme-co"

SMALL_VOLUMES = {
    "employees": 300,
    "intake_records": 200,
    "campaigns": 7,
    "retaliation_chains": 10,
    "notifications_min": 3,
    "notifications_max": 5,
}

REFERENCE_PHASES = ("taxonomy", "locations", "organization", "employees", "patterns")


def make_small_config(**overrides) -> SeedConfig:
    """Validated config with small volumes; keyword overrides win."""
    volumes = dict(SMALL_VOLUMES, **overrides.pop("volumes", {}))
    return load_config(volumes=volumes, **overrides)


def make_store(config: SeedConfig, slug: str = SLUG, **store_kwargs) -> InMemoryStore:
    """InMemoryStore holding the organization row for slug."""
    store = InMemoryStore(**store_kwargs)
    store.ensure_organization(organization_row(config, slug))
    return store


def run_phases(ctx: GenerationContext, *names: str) -> None:
    """Run the named phases in order, the way the pipeline does, without persistence."""
    specs = {spec.name: spec for spec in PHASES}
    for name in names:
        spec = specs[name]
        ctx.reseed(spec.seed_domain)
        generator = spec.generator(ctx)
        generator.check_prerequisites()
        generator.generate()


def make_context(config: SeedConfig, *phases: str) -> GenerationContext:
    """Store-less context with the given phases already run."""
    ctx = GenerationContext.create(config, organization_row(config, SLUG))
    run_phases(ctx, *phases)
    return ctx


# =============================================================================
# Configuration and stores
# =============================================================================

@pytest.fixture
def small_config() -> SeedConfig:
    """Small-volume configuration (300 employees, 200 intake records)."""
    return make_small_config()


@pytest.fixture
def memory_store(small_config) -> InMemoryStore:
    """Empty in-memory store containing only the demo organization."""
    return make_store(small_config)


@pytest.fixture
def reference_ctx(small_config) -> GenerationContext:
    """Context with taxonomy, locations, org tree, employees and pattern pools."""
    return make_context(small_config, *REFERENCE_PHASES)


# =============================================================================
# Full run (session scoped, read-only)
# =============================================================================

@pytest.fixture(scope="session")
def seeded_run():
    """
    One complete pipeline run against an in-memory store.

    Returns:
        (pipeline, store, summary); tests must not mutate any of them
    """
    config = make_small_config()
    store = make_store(config)
    pipeline = SeedPipeline(config, store)
    summary = pipeline.run(SLUG)
    return pipeline, store, summary


@pytest.fixture(scope="session")
def seeded_data(seeded_run) -> dict:
    """Generated rows of the shared run, keyed by table."""
    pipeline, _, _ = seeded_run
    return pipeline.ctx.data


@pytest.fixture(scope="session")
def seeded_ctx(seeded_run) -> GenerationContext:
    pipeline, _, _ = seeded_run
    return pipeline.ctx


# =============================================================================
# Default-volume run (slow, session scoped, read-only)
# =============================================================================

@pytest.fixture(scope="session")
def full_run():
    """
    One pipeline run with the shipped defaults (5,000 intake records).

    Only tests marked slow request it. Returns (pipeline, store, summary).
    """
    config = load_config()
    store = make_store(config)
    pipeline = SeedPipeline(config, store)
    summary = pipeline.run(SLUG)
    return pipeline, store, summary


# =============================================================================
# PostgreSQL
# =============================================================================

@pytest.fixture
def pg_dsn() -> str:
    """DSN of a scratch PostgreSQL database; skips when unset."""
    if not TEST_DSN:
        pytest.skip("CASEGEN_TEST_DSN not set")
    return TEST_DSN
