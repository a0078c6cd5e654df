"""
Pattern injector: three finite, depletable pools layered over the random
case generator.

- Flagship slots: hand-authored case payloads, consumed once each in
  declaration order, capped at the case volume target
- Repeat subjects: employees who must recur across several cases
- Hotspot managers: team leads whose teams draw an outsized share of cases,
  optionally restricted to one category branch

Every try_consume_* returns None once the pool (or the matching part of it)
is exhausted; callers fall back to uniform random selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .constants.flagship import FLAGSHIP_CASES

if TYPE_CHECKING:
    from .generators.base import GenerationContext
    from .sampling import WeightedSampler

logger = logging.getLogger(__name__)

REPEAT_SUBJECT_COUNT = 40
REPEAT_SUBJECT_QUOTA = (2, 5)
HOTSPOT_MANAGER_COUNT = 25
HOTSPOT_QUOTA = (15, 40)
HOTSPOT_AFFINITY_RATE = 0.60


@dataclass
class RepeatSubject:
    """Employee deliberately reused as the subject of several cases."""

    employee_id: str
    name: str
    quota: int
    consumed: int = 0

    @property
    def exhausted(self) -> bool:
        return self.consumed >= self.quota


@dataclass
class HotspotManager:
    """Team lead whose team is over-represented in case subjects."""

    manager_id: str
    team_code: str
    category_affinity: str | None
    quota: int
    consumed: int = 0

    @property
    def exhausted(self) -> bool:
        return self.consumed >= self.quota

    def matches(self, category_id: str, branch_id: str | None = None) -> bool:
        if self.category_affinity is None:
            return True
        return self.category_affinity in (category_id, branch_id)


@dataclass
class FlagshipSlot:
    payload: dict[str, Any]
    consumed: bool = False

    @property
    def exhausted(self) -> bool:
        return self.consumed


@dataclass
class PatternInjector:
    """
    Owner of the three pattern pools.

    Mutated only through the try_consume_* operations, so consumed never
    exceeds quota for any entry.

    Attributes:
        repeat_subjects: Pool of recurring subjects, in rotation order
        hotspots: Pool of hotspot managers, in rotation order
        flagships: Flagship slots in declaration order
        flagship_cap: Maximum number of flagships that may be consumed
        repeat_rate: Gate probability for a repeat-subject draw
        hotspot_rate: Gate probability for a hotspot draw
    """

    repeat_subjects: list[RepeatSubject] = field(default_factory=list)
    hotspots: list[HotspotManager] = field(default_factory=list)
    flagships: list[FlagshipSlot] = field(default_factory=list)
    flagship_cap: int = 0
    repeat_rate: float = 0.10
    hotspot_rate: float = 0.15

    _repeat_cursor: int = field(default=0, repr=False)
    _hotspot_cursor: int = field(default=0, repr=False)
    _misses: dict[str, int] = field(
        default_factory=lambda: {"repeat_subject": 0, "hotspot": 0},
        repr=False,
    )

    @classmethod
    def build(cls, ctx: GenerationContext) -> PatternInjector:
        """
        Select pool members from committed employees.

        Must run right after ctx.reseed("patterns") so the selection depends
        only on the master seed.
        """
        sampler = ctx.sampler
        rates = ctx.config.rates

        bulk = [e for e in ctx.data["employees"] if e["persona_key"] is None]
        subjects = [
            RepeatSubject(
                employee_id=e["id"],
                name=f"{e['first_name']} {e['last_name']}",
                quota=sampler.randint(*REPEAT_SUBJECT_QUOTA),
            )
            for e in sampler.sample_k(bulk, REPEAT_SUBJECT_COUNT)
        ]

        branch_ids = [
            ctx.category_ids[c["code"]]
            for c in ctx.data["categories"]
            if c["level"] == 0 and c["requires_investigation"]
        ]
        team_codes = sorted(ctx.team_lead_ids)
        hotspots = []
        for team_code in sampler.sample_k(team_codes, HOTSPOT_MANAGER_COUNT):
            affinity = None
            if branch_ids and sampler.chance(HOTSPOT_AFFINITY_RATE):
                affinity = sampler.choice(branch_ids)
            hotspots.append(
                HotspotManager(
                    manager_id=ctx.team_lead_ids[team_code],
                    team_code=team_code,
                    category_affinity=affinity,
                    quota=sampler.randint(*HOTSPOT_QUOTA),
                )
            )

        flagships = [FlagshipSlot(payload=dict(p)) for p in FLAGSHIP_CASES]
        return cls(
            repeat_subjects=subjects,
            hotspots=hotspots,
            flagships=flagships,
            flagship_cap=min(len(flagships), ctx.config.case_target),
            repeat_rate=rates["repeat_subject"],
            hotspot_rate=rates["hotspot"],
        )

    # =========================================================================
    # Consume operations
    # =========================================================================

    def try_consume_flagship(self) -> FlagshipSlot | None:
        """Next unconsumed flagship in declaration order, or None."""
        if self.flagships_consumed >= self.flagship_cap:
            return None
        for slot in self.flagships:
            if not slot.consumed:
                slot.consumed = True
                return slot
        return None

    def try_consume_repeat_subject(self, sampler: WeightedSampler) -> RepeatSubject | None:
        """
        Gate at repeat_rate, then hand out the next non-exhausted subject in
        rotation order.
        """
        if not sampler.chance(self.repeat_rate):
            return None
        subject = self._rotate(self.repeat_subjects, "_repeat_cursor", lambda s: True)
        if subject is None:
            self._misses["repeat_subject"] += 1
            return None
        subject.consumed += 1
        return subject

    def try_consume_hotspot(
        self,
        sampler: WeightedSampler,
        category_id: str,
        branch_id: str | None = None,
    ) -> HotspotManager | None:
        """
        Gate at hotspot_rate, then hand out the next non-exhausted manager
        whose affinity (if any) matches the category or its branch.
        """
        if not sampler.chance(self.hotspot_rate):
            return None
        manager = self._rotate(
            self.hotspots, "_hotspot_cursor", lambda h: h.matches(category_id, branch_id)
        )
        if manager is None:
            self._misses["hotspot"] += 1
            return None
        manager.consumed += 1
        return manager

    def _rotate(self, pool: list, cursor_attr: str, accept) -> Any:
        size = len(pool)
        start = getattr(self, cursor_attr)
        for step in range(size):
            index = (start + step) % size
            entry = pool[index]
            if not entry.exhausted and accept(entry):
                setattr(self, cursor_attr, (index + 1) % size)
                return entry
        return None

    # =========================================================================
    # Reporting
    # =========================================================================

    @property
    def flagships_consumed(self) -> int:
        return sum(1 for slot in self.flagships if slot.consumed)

    @property
    def flagship_remaining(self) -> int:
        return self.flagship_cap - self.flagships_consumed

    def summary(self) -> dict[str, Any]:
        """Consumption counts per pool, plus fallbacks caused by exhaustion."""
        return {
            "flagships": {"consumed": self.flagships_consumed, "cap": self.flagship_cap},
            "repeat_subjects": {
                "entries": len(self.repeat_subjects),
                "consumed": sum(s.consumed for s in self.repeat_subjects),
                "quota": sum(s.quota for s in self.repeat_subjects),
                "exhausted": sum(1 for s in self.repeat_subjects if s.exhausted),
            },
            "hotspots": {
                "entries": len(self.hotspots),
                "consumed": sum(h.consumed for h in self.hotspots),
                "quota": sum(h.quota for h in self.hotspots),
                "exhausted": sum(1 for h in self.hotspots if h.exhausted),
            },
            "fallbacks": dict(self._misses),
        }

    def log_summary(self) -> None:
        misses = self._misses
        if misses["repeat_subject"] or misses["hotspot"]:
            logger.info(
                "Pattern pools exhausted: %d repeat-subject and %d hotspot draws "
                "fell back to random selection",
                misses["repeat_subject"],
                misses["hotspot"],
            )
