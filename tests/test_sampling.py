"""
Tests for the seed context and weighted sampler.

Covers distribution validation, boundary resolution, frequency targets,
helper semantics and deterministic identifiers.
"""

import uuid

import numpy as np
import pytest

from casegen.errors import DistributionConfigError
from casegen.sampling import (
    ACCESS_CODE_ALPHABET,
    DistributionConfig,
    SeedContext,
    WeightedSampler,
    as_distribution,
    deterministic_id,
)


def make_sampler(seed: int = 42) -> WeightedSampler:
    return WeightedSampler(np.random.default_rng(seed))


class TestDistributionConfig:
    """Validation and resolution of weighted tables."""

    def test_empty_rejected(self):
        with pytest.raises(DistributionConfigError, match="no entries"):
            DistributionConfig([], name="empty")

    def test_negative_weight_rejected(self):
        with pytest.raises(DistributionConfigError, match="negative weight"):
            DistributionConfig([("A", 1), ("B", -1)], name="neg")

    def test_zero_sum_rejected(self):
        with pytest.raises(DistributionConfigError, match="sum to zero"):
            DistributionConfig([("A", 0), ("B", 0)], name="zero")

    def test_error_names_distribution(self):
        with pytest.raises(DistributionConfigError) as exc_info:
            DistributionConfig([], name="case_status")
        assert exc_info.value.name == "case_status"

    def test_boundary_resolves_to_earlier_value(self):
        """A point exactly on a cumulative boundary picks the earlier-listed value."""
        dist = DistributionConfig([("A", 1), ("B", 1)])
        assert dist.resolve(0.0) == "A"
        assert dist.resolve(1.0) == "A"
        assert dist.resolve(1.0001) == "B"
        assert dist.resolve(2.0) == "B"

    def test_zero_weight_kept_but_never_drawn(self):
        dist = DistributionConfig([("A", 0), ("B", 3)])
        sampler = make_sampler()
        assert dist.values() == ["A", "B"]
        assert dist.probabilities() == {"A": 0.0, "B": 1.0}
        assert {sampler.sample(dist) for _ in range(200)} == {"B"}

    def test_as_distribution_accepts_mapping_and_pairs(self):
        from_map = as_distribution({"X": 1, "Y": 3}, name="m")
        from_pairs = as_distribution([("X", 1), ("Y", 3)], name="p")
        assert from_map.probabilities() == from_pairs.probabilities()
        assert as_distribution(from_map) is from_map


class TestWeightedSampler:
    """Sampler helpers and frequency behavior."""

    def test_frequency_matches_weights(self):
        sampler = make_sampler(7)
        draws = [sampler.sample([("A", 90), ("B", 10)]) for _ in range(10000)]
        share = draws.count("A") / len(draws)
        assert abs(share - 0.90) < 0.02

    def test_same_seed_same_sequence(self):
        a, b = make_sampler(123), make_sampler(123)
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_randint_inclusive(self):
        sampler = make_sampler()
        values = {sampler.randint(1, 3) for _ in range(500)}
        assert values == {1, 2, 3}

    def test_chance_extremes(self):
        sampler = make_sampler()
        assert not any(sampler.chance(0.0) for _ in range(100))
        assert all(sampler.chance(1.0) for _ in range(100))

    def test_choice_empty_raises(self):
        with pytest.raises(ValueError):
            make_sampler().choice([])

    def test_sample_k_distinct_and_capped(self):
        sampler = make_sampler()
        picks = sampler.sample_k(list(range(10)), 4)
        assert len(picks) == 4
        assert len(set(picks)) == 4
        assert sorted(sampler.sample_k([1, 2], 5)) == [1, 2]
        assert sampler.sample_k([], 3) == []

    def test_shuffled_is_permutation(self):
        items = list("abcdef")
        assert sorted(make_sampler().shuffled(items)) == items

    def test_token_alphabet(self):
        token = make_sampler().token(12)
        assert len(token) == 12
        assert set(token) <= set(ACCESS_CODE_ALPHABET)


class TestSeedContext:
    """Per-domain reseeding."""

    def test_unknown_domain(self):
        seeds = SeedContext(1, {"cases": 3000})
        with pytest.raises(KeyError, match="Unknown seed domain"):
            seeds.seed_for("nope")

    def test_seed_is_master_plus_offset(self):
        assert SeedContext(100, {"cases": 3000}).seed_for("cases") == 3100

    def test_domain_stream_independent_of_order(self):
        seeds = SeedContext(20260202, {"intake": 4000, "cases": 3000})
        first = seeds.reseed("intake").random()
        seeds.reseed("cases").random()
        assert seeds.reseed("intake").random() == first


class TestDeterministicId:
    """Content-derived identifiers."""

    def test_stable_and_valid_uuid(self):
        a = deterministic_id(1, "case", "acme-co:CASE-2025-00001")
        b = deterministic_id(1, "case", "acme-co:CASE-2025-00001")
        assert a == b
        assert uuid.UUID(a).version == 5

    def test_differs_by_seed_type_and_key(self):
        base = deterministic_id(1, "case", "k")
        assert deterministic_id(2, "case", "k") != base
        assert deterministic_id(1, "intake_record", "k") != base
        assert deterministic_id(1, "case", "k2") != base
