"""
Seed context and weighted sampler.

Every random decision in the pipeline goes through a WeightedSampler wrapping
a NumPy Generator. The SeedContext hands out a fresh Generator per domain,
seeded with master_seed + offset, so a phase's output never depends on how
many draws earlier phases made.

Usage:
    seeds = SeedContext(master_seed=20260202, offsets=SEED_OFFSETS)
    sampler = WeightedSampler(seeds.reseed("intake"))
    status = sampler.sample(DistributionConfig([("OPEN", 10), ("CLOSED", 90)]))
"""

from __future__ import annotations

import string
import uuid
from bisect import bisect_left
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Any, Hashable, Iterable, Mapping, Sequence

import numpy as np

from .errors import DistributionConfigError

# Namespace for content-derived identifiers
CASEGEN_NAMESPACE = uuid.UUID("6f0c4a8e-2d1b-5c3e-9a7f-0b8e1d2c3a4f")

ACCESS_CODE_ALPHABET = string.ascii_letters + string.digits + "_-"


class DistributionConfig:
    """
    Ordered list of (value, weight) pairs.

    Weights must be non-negative and sum to more than zero. Zero-weight
    entries are kept for reporting but can never be drawn.
    """

    __slots__ = ("name", "entries", "_values", "_cumulative", "_total")

    def __init__(
        self,
        entries: Iterable[tuple[Any, float]],
        name: str = "distribution",
    ) -> None:
        self.name = name
        self.entries: list[tuple[Any, float]] = [(v, float(w)) for v, w in entries]

        if not self.entries:
            raise DistributionConfigError(name, "has no entries")
        for value, weight in self.entries:
            if weight < 0:
                raise DistributionConfigError(name, f"negative weight {weight} for {value!r}")

        drawable = [(v, w) for v, w in self.entries if w > 0]
        if not drawable:
            raise DistributionConfigError(name, "weights sum to zero")

        self._values = [v for v, _ in drawable]
        self._cumulative = list(accumulate(w for _, w in drawable))
        self._total = self._cumulative[-1]

    @classmethod
    def from_mapping(cls, name: str, mapping: Mapping[Any, float]) -> DistributionConfig:
        """Build from a {value: weight} mapping, preserving insertion order."""
        return cls(mapping.items(), name=name)

    @property
    def total(self) -> float:
        return self._total

    def values(self) -> list[Any]:
        return [v for v, _ in self.entries]

    def probabilities(self) -> dict[Any, float]:
        """Expected frequency of each value."""
        return {v: w / self._total for v, w in self.entries}

    def resolve(self, point: float) -> Any:
        """
        Map a point in [0, total] onto a value.

        A point landing exactly on a cumulative boundary resolves to the
        earlier-listed value.
        """
        index = bisect_left(self._cumulative, point)
        return self._values[min(index, len(self._values) - 1)]

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"DistributionConfig({self.name!r}, {self.entries!r})"


def as_distribution(
    spec: DistributionConfig | Iterable[tuple[Any, float]] | Mapping[Any, float],
    name: str = "distribution",
) -> DistributionConfig:
    """Coerce a pair list or mapping into a validated DistributionConfig."""
    if isinstance(spec, DistributionConfig):
        return spec
    if isinstance(spec, Mapping):
        return DistributionConfig.from_mapping(name, spec)
    return DistributionConfig(spec, name=name)


@dataclass(frozen=True)
class SeedContext:
    """
    Master seed plus per-domain offsets.

    The same (master_seed, offset) pair always yields the same stream,
    regardless of which other domains were reseeded first.
    """

    master_seed: int
    offsets: Mapping[str, int] = field(default_factory=dict)

    def seed_for(self, domain: str) -> int:
        try:
            return self.master_seed + self.offsets[domain]
        except KeyError:
            raise KeyError(f"Unknown seed domain '{domain}'") from None

    def reseed(self, domain: str) -> np.random.Generator:
        """Fresh generator for a domain."""
        return np.random.default_rng(self.seed_for(domain))


def deterministic_id(master_seed: int, entity_type: str, key: Hashable) -> str:
    """
    Content-derived UUID for an entity.

    Same seed, entity type and natural key always give the same identifier,
    so a re-run produces identical rows.
    """
    return str(uuid.uuid5(CASEGEN_NAMESPACE, f"{master_seed}:{entity_type}:{key}"))


class WeightedSampler:
    """
    Single entry point for random decisions within a phase.

    Wraps a NumPy Generator; each helper consumes a fixed number of draws
    so the N-th record of a phase always reads the same slice of the stream.
    """

    __slots__ = ("rng",)

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng

    def random(self) -> float:
        return float(self.rng.random())

    def sample(self, distribution: DistributionConfig | Sequence[tuple[Any, float]]) -> Any:
        """Draw one value with probability weight / sum(weights)."""
        dist = as_distribution(distribution)
        return dist.resolve(self.random() * dist.total)

    def chance(self, probability: float) -> bool:
        return self.random() < probability

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return int(self.rng.integers(low, high + 1))

    def uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice() from an empty sequence")
        return items[int(self.rng.integers(len(items)))]

    def sample_k(self, items: Sequence[Any], k: int) -> list[Any]:
        """Up to k distinct items, without replacement, in draw order."""
        k = min(k, len(items))
        if k <= 0:
            return []
        picks = self.rng.choice(len(items), size=k, replace=False)
        return [items[int(i)] for i in picks]

    def shuffled(self, items: Sequence[Any]) -> list[Any]:
        order = self.rng.permutation(len(items))
        return [items[int(i)] for i in order]

    def token(self, length: int = 12) -> str:
        """Random access code drawn from a URL-safe alphabet."""
        idx = self.rng.integers(len(ACCESS_CODE_ALPHABET), size=length)
        return "".join(ACCESS_CODE_ALPHABET[int(i)] for i in idx)
