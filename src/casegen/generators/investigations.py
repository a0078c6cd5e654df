"""
Investigation Generator: one or more investigations per triaged case.

Tables generated:
- investigations

Rules:
- NEW cases are investigated only half the time (not yet triaged)
- A regulatory overlay adds a second FULL / COMPLIANCE investigation
- Flagship cases use their authored investigation count and outcome
- Open cases get an open status; closed cases get CLOSED with an outcome
- Root cause and lessons learned exist only for SUBSTANTIATED outcomes
- Timestamps never pass the current date and never precede the case
"""

from datetime import datetime, timedelta

from .base import BasePhaseGenerator
from .cases import ORIGIN_FLAGSHIP
from ..constants.narratives import (
    CLOSURE_NOTES,
    FINDINGS_SUMMARIES,
    LESSONS_LEARNED,
    REASSIGNMENT_REASONS,
    ROOT_CAUSES,
    STATUS_RATIONALES,
)
from ..errors import MissingPrerequisiteError

INVESTIGATORS_PER_CASE = (1, 3)
ASSIGNED_AFTER_DAYS = (1, 3)
DUE_AFTER_ASSIGNED_DAYS = (30, 60)
SLA_WARNING_DAYS = 7
FINDINGS_FRACTION = 0.8
APPROVAL_AFTER_HOURS = (1, 24)
REASSIGNED_AFTER_DAYS = (3, 14)
RECENT_CLOSURE_DAYS = 30

# Days after assignment at which an open investigation entered its status
STATUS_CHANGE_DAYS = {
    "ASSIGNED": (0, 0),
    "INVESTIGATING": (1, 5),
    "PENDING_REVIEW": (10, 30),
    "ON_HOLD": (5, 20),
}


def sla_status(due_date: datetime | None, now: datetime) -> str:
    """OVERDUE past due, WARNING inside the last week, else ON_TRACK."""
    if due_date is None:
        return "ON_TRACK"
    days_until_due = (due_date - now).days
    if days_until_due < 0:
        return "OVERDUE"
    if days_until_due < SLA_WARNING_DAYS:
        return "WARNING"
    return "ON_TRACK"


class InvestigationGenerator(BasePhaseGenerator):
    """Generate investigations for committed cases."""

    PHASE = "investigations"

    def __init__(self, ctx) -> None:
        super().__init__(ctx)
        self.overlay_count = 0
        self.reassignment_count = 0

    def check_prerequisites(self) -> None:
        if not self.ctx.investigator_ids:
            raise MissingPrerequisiteError(self.PHASE, "no investigators in the employee set")

    def generate(self) -> None:
        cases = self.ctx.read_back("cases", None, ("created_at", "reference_number"))
        if not cases:
            raise MissingPrerequisiteError(self.PHASE, "at least 1 committed case required")
        print(f"  Phase {self.PHASE}: Investigations ({len(cases):,} cases)")

        for case in cases:
            self._generate_for_case(case)

        self.ctx.generated_phases.add(self.PHASE)
        rows = self.data["investigations"]
        closed = [r for r in rows if r["status"] == "CLOSED"]
        substantiated = sum(1 for r in closed if r["outcome"] == "SUBSTANTIATED")
        print(
            f"    Generated: {len(rows):,} investigations ({len(closed):,} closed, "
            f"{substantiated:,} substantiated, {self.overlay_count} regulatory overlays, "
            f"{self.reassignment_count} reassignments)"
        )

    def _generate_for_case(self, case: dict) -> None:
        s = self.sampler
        if case["status"] == "NEW" and s.chance(1 - self.config.rates["new_case_investigation"]):
            return

        flagship = case["origin"] == ORIGIN_FLAGSHIP and case["custom_fields"]
        if flagship:
            count = case["custom_fields"].get("investigation_count") or 1
            authored_outcome = case["custom_fields"].get("outcome")
        else:
            count = 1
            authored_outcome = None
            if s.chance(self.config.rates["regulatory_overlay"]):
                count = 2
                self.overlay_count += 1

        for number in range(1, count + 1):
            self.data["investigations"].append(
                self._investigation(case, number, is_overlay=number > 1, outcome=authored_outcome)
            )

    def _investigation(self, case: dict, number: int, is_overlay: bool, outcome: str | None) -> dict:
        s = self.sampler
        cfg = self.config
        now = self.ctx.current_date
        created_at = case["created_at"]

        if is_overlay:
            investigation_type, department = "FULL", "COMPLIANCE"
        else:
            investigation_type = s.sample(cfg.distribution("investigation_type"))
            department = s.sample(cfg.distribution("investigation_department"))

        case_open = case["status"] in ("NEW", "OPEN")
        status = s.sample(cfg.distribution("investigation_open_status")) if case_open else "CLOSED"

        pool = self.ctx.investigator_ids
        investigators = s.sample_k(pool, min(s.randint(*INVESTIGATORS_PER_CASE), len(pool)))

        assigned_at = due_date = status_changed_at = None
        if status != "NEW":
            assigned_at = min(created_at + timedelta(days=s.randint(*ASSIGNED_AFTER_DAYS)), now)
            due_date = assigned_at + timedelta(days=s.randint(*DUE_AFTER_ASSIGNED_DAYS))
        if status in STATUS_CHANGE_DAYS and assigned_at is not None:
            status_changed_at = min(
                assigned_at + timedelta(days=s.randint(*STATUS_CHANGE_DAYS[status])), now
            )

        findings_summary = root_cause = lessons_learned = closure_notes = None
        findings_date = closed_at = approved_at = approved_by = None
        if status == "CLOSED":
            if outcome is None:
                outcome = s.sample(cfg.distribution("investigation_outcome"))
            findings_summary = s.choice(FINDINGS_SUMMARIES[outcome])
            if outcome == "SUBSTANTIATED":
                root_cause = s.choice(ROOT_CAUSES)
                lessons_learned = s.choice(LESSONS_LEARNED)
            closure_notes = s.choice(CLOSURE_NOTES)

            duration = s.randint(*cfg.investigation_durations[case["priority"]])
            closed_at = max(min(created_at + timedelta(days=duration), now), created_at)
            findings_date = min(
                created_at + timedelta(days=int(duration * FINDINGS_FRACTION)), closed_at
            )
            approved_at = min(closed_at + timedelta(hours=s.randint(*APPROVAL_AFTER_HOURS)), now)
            approved_by = s.choice(pool)
            status_changed_at = closed_at
            if assigned_at is not None and assigned_at > closed_at:
                assigned_at = closed_at
        else:
            outcome = None

        rationale = s.choice(STATUS_RATIONALES[status])
        history = self._reassignment(investigators, assigned_at, closed_at, case_open)

        return {
            "id": self.ctx.make_id("investigation", f"{case['id']}:{number}"),
            "organization_id": self.ctx.organization_id,
            "case_id": case["id"],
            "investigation_number": number,
            "category_id": case["category_id"],
            "investigation_type": investigation_type,
            "department": department,
            "is_regulatory": is_overlay,
            "investigator_ids": investigators,
            "primary_investigator_id": investigators[0] if investigators else None,
            "assigned_at": assigned_at,
            "status": status,
            "status_rationale": rationale,
            "status_changed_at": status_changed_at,
            "due_date": due_date,
            "sla_status": "ON_TRACK" if status == "CLOSED" else sla_status(due_date, now),
            "outcome": outcome,
            "findings_summary": findings_summary,
            "root_cause": root_cause,
            "lessons_learned": lessons_learned,
            "findings_date": findings_date,
            "closed_at": closed_at,
            "closure_approved_by_id": approved_by,
            "closure_approved_at": approved_at,
            "closure_notes": closure_notes,
            "reassignment_history": history,
            "created_at": created_at,
            "updated_at": closed_at or status_changed_at or created_at,
        }

    def _reassignment(self, investigators, assigned_at, closed_at, case_open) -> list | None:
        s = self.sampler
        now = self.ctx.current_date
        recent = closed_at is not None and (now - closed_at).days < RECENT_CLOSURE_DAYS
        if not (case_open or recent) or not s.chance(self.config.rates["reassignment"]):
            return None
        if assigned_at is None or not investigators:
            return None

        others = [i for i in self.ctx.investigator_ids if i not in investigators]
        previous = s.choice(others) if others else investigators[0]
        reassigned_at = min(assigned_at + timedelta(days=s.randint(*REASSIGNED_AFTER_DAYS)), now)
        self.reassignment_count += 1
        return [
            {
                "from": previous,
                "to": investigators[0],
                "reassigned_at": reassigned_at.isoformat(),
                "reason": s.choice(REASSIGNMENT_REASONS),
            }
        ]
