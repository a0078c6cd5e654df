"""
Configuration surface for a seed run.

SeedConfig holds every recognised option. Defaults come from the constants
package; a YAML file may override any subset of them:

    master_seed: 20260202
    current_date: 2026-02-02
    volumes:
      intake_records: 5000
    distributions:
      case_status: {NEW: 3, OPEN: 7, CLOSED: 90}

Validation runs before any generation and raises DistributionConfigError for
unusable weight tables and ValueError for everything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .constants import distributions as defaults
from .errors import DistributionConfigError
from .sampling import DistributionConfig, as_distribution


def _default_distributions() -> dict[str, list[tuple[Any, float]]]:
    return {
        "intake_type": list(defaults.INTAKE_TYPE_DISTRIBUTION),
        "reporting_region": list(defaults.REPORTING_REGION_DISTRIBUTION),
        "channel": list(defaults.CHANNEL_DISTRIBUTION),
        "anonymity": list(defaults.ANONYMITY_DISTRIBUTION),
        "case_status": list(defaults.CASE_STATUS_DISTRIBUTION),
        "case_priority": list(defaults.CASE_PRIORITY_DISTRIBUTION),
        "case_type": list(defaults.CASE_TYPE_DISTRIBUTION),
        "case_complexity": list(defaults.CASE_COMPLEXITY_DISTRIBUTION),
        "investigation_type": list(defaults.INVESTIGATION_TYPE_DISTRIBUTION),
        "investigation_department": list(defaults.INVESTIGATION_DEPARTMENT_DISTRIBUTION),
        "investigation_open_status": list(defaults.OPEN_INVESTIGATION_STATUS_DISTRIBUTION),
        "investigation_outcome": list(defaults.INVESTIGATION_OUTCOME_DISTRIBUTION),
    }


def _parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.fromisoformat(value).replace(tzinfo=None)
    raise ValueError(f"Cannot interpret {value!r} as a date")


def _as_pairs(value: Any) -> list[tuple[Any, float]]:
    """Accept {value: weight} mappings or [[value, weight], ...] lists."""
    if isinstance(value, dict):
        return [(k, v) for k, v in value.items()]
    return [(pair[0], pair[1]) for pair in value]


@dataclass
class SeedConfig:
    """
    All options recognised by the seed pipeline.

    Attributes:
        master_seed: Seed shared by every phase (offset per domain)
        current_date: Fixed reference "now"; no timestamp may exceed it
        history_years: Length of the historical window
        organization_slug: Natural key of the target organization
        batch_size: Rows per persistence flush
        volumes: Per-entity volume targets
        rates: Probabilities and ratios (case ratio, consolidation, ...)
        prerequisites: Minimum upstream counts checked before generation
        seed_offsets: Domain -> offset added to master_seed
        distributions: Named weighted tables
        severity_by_intake_type: Intake type -> severity table
        case_timing: Complexity -> closed-case duration range in days
        investigation_durations: Case priority -> investigation duration range
    """

    master_seed: int = defaults.MASTER_SEED
    current_date: datetime = field(default_factory=lambda: _parse_date(defaults.CURRENT_DATE))
    history_years: int = defaults.HISTORY_YEARS
    organization_slug: str = defaults.ORGANIZATION_SLUG
    batch_size: int = defaults.BATCH_SIZE
    volumes: dict[str, int] = field(default_factory=lambda: dict(defaults.VOLUMES))
    rates: dict[str, float] = field(default_factory=lambda: dict(defaults.RATES))
    prerequisites: dict[str, int] = field(default_factory=lambda: dict(defaults.PREREQUISITES))
    seed_offsets: dict[str, int] = field(default_factory=lambda: dict(defaults.SEED_OFFSETS))
    distributions: dict[str, list[tuple[Any, float]]] = field(default_factory=_default_distributions)
    severity_by_intake_type: dict[str, list[tuple[Any, float]]] = field(
        default_factory=lambda: {k: list(v) for k, v in defaults.SEVERITY_BY_INTAKE_TYPE.items()}
    )
    case_timing: dict[str, tuple[int, int]] = field(default_factory=lambda: dict(defaults.CASE_TIMING))
    investigation_durations: dict[str, tuple[int, int]] = field(
        default_factory=lambda: dict(defaults.INVESTIGATION_DURATION_BY_PRIORITY)
    )

    _compiled: dict[str, DistributionConfig] = field(default_factory=dict, init=False, repr=False)

    @property
    def case_target(self) -> int:
        """Number of cases derived from the intake volume and case ratio."""
        return round(self.volumes["intake_records"] * self.rates["case_ratio"])

    def distribution(self, name: str) -> DistributionConfig:
        """
        Validated distribution by name.

        Besides the plain tables ("case_status", ...) two derived families exist:
        "severity.<intake type>" and "intake_type.<channel bucket>", the latter
        holding the intake types whose channel falls in that bucket.
        """
        if name not in self._compiled:
            if name.startswith("severity."):
                pairs = self.severity_by_intake_type[name.split(".", 1)[1]]
            elif name.startswith("intake_type."):
                bucket = name.split(".", 1)[1]
                pairs = [
                    (intake_type, weight)
                    for intake_type, weight in self.distributions["intake_type"]
                    if self.channel_bucket(intake_type) == bucket
                ]
            else:
                pairs = self.distributions[name]
            self._compiled[name] = as_distribution(pairs, name=name)
        return self._compiled[name]

    def channel_bucket(self, intake_type: str) -> str:
        """Bucket of the channel mix an intake type is drawn from."""
        channel = defaults.INTAKE_TYPE_TO_CHANNEL.get(intake_type, defaults.OTHER_CHANNEL)
        named = {c for c, _ in self.distributions["channel"] if c != defaults.OTHER_CHANNEL}
        return channel if channel in named else defaults.OTHER_CHANNEL

    def validate(self) -> None:
        """
        Check every option before generation starts.

        Raises:
            DistributionConfigError: A weighted table is empty, negative or sums to zero
            ValueError: Any other out-of-range option
        """
        self._compiled.clear()
        for name in self.distributions:
            self.distribution(name)
        for intake_type in self.severity_by_intake_type:
            self.distribution(f"severity.{intake_type}")
        for intake_type, _ in self.distributions["intake_type"]:
            if intake_type not in self.severity_by_intake_type:
                raise DistributionConfigError(
                    f"severity.{intake_type}", "missing severity table for intake type"
                )
            if intake_type not in defaults.INTAKE_TYPE_TO_CHANNEL:
                raise DistributionConfigError("intake_type", f"no source channel for {intake_type!r}")
        # Every drawable channel bucket needs at least one drawable intake type
        for channel, weight in self.distributions["channel"]:
            if weight > 0:
                self.distribution(f"intake_type.{channel}")

        for key, value in self.rates.items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Rate '{key}' must be within [0, 1], got {value}")
        if self.rates["case_ratio"] <= 0:
            raise ValueError("Rate 'case_ratio' must be greater than zero")

        for key, value in self.volumes.items():
            if value < 0:
                raise ValueError(f"Volume '{key}' must be non-negative, got {value}")
        if self.volumes["notifications_min"] > self.volumes["notifications_max"]:
            raise ValueError("notifications_min exceeds notifications_max")

        for label, ranges in (("case_timing", self.case_timing),
                              ("investigation_durations", self.investigation_durations)):
            for key, (low, high) in ranges.items():
                if low < 0 or low > high:
                    raise ValueError(f"{label}['{key}'] has an invalid range ({low}, {high})")
        for complexity in self.distribution("case_complexity").values():
            if complexity not in self.case_timing:
                raise ValueError(f"case_timing has no range for complexity '{complexity}'")
        for priority in self.distribution("case_priority").values():
            if priority not in self.investigation_durations:
                raise ValueError(f"investigation_durations has no range for priority '{priority}'")

        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.history_years <= 0:
            raise ValueError("history_years must be positive")

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Merge a parsed override mapping into this config."""
        known = {f.name for f in fields(self) if f.init}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        for key, value in overrides.items():
            if key == "current_date":
                self.current_date = _parse_date(value)
            elif key in ("distributions", "severity_by_intake_type"):
                getattr(self, key).update({name: _as_pairs(pairs) for name, pairs in value.items()})
            elif key in ("case_timing", "investigation_durations"):
                getattr(self, key).update({name: tuple(rng) for name, rng in value.items()})
            elif isinstance(getattr(self, key), dict):
                getattr(self, key).update(value)
            else:
                setattr(self, key, value)
        self._compiled.clear()


def load_config(path: str | Path | None = None, **overrides: Any) -> SeedConfig:
    """
    Build a validated SeedConfig.

    Args:
        path: Optional YAML file with overrides
        **overrides: Keyword overrides applied after the file

    Returns:
        Validated SeedConfig
    """
    config = SeedConfig()
    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        config.apply_overrides(data)
    if overrides:
        config.apply_overrides(overrides)
    config.validate()
    return config
