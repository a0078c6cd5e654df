"""
Case Generator: flagship storylines first, then regular cases derived from
committed intake records.

Tables generated:
- cases
- intake_case_associations

Flagships are inserted verbatim and each claims one intake record of its own
category as primary. Regular cases take the next record in queue order,
occasionally folding one or two spare records in as RELATED reports. Every
case ends with exactly one PRIMARY association.
"""

from datetime import timedelta

from .base import BasePhaseGenerator
from .intake import ORIGIN_GENERATED
from .. import narrative
from ..constants.distributions import INTAKE_TO_CASE_CHANNEL
from ..constants.narratives import HIGH_RISK_BRANCHES
from ..errors import MissingPrerequisiteError
from ..linker import ReferentialLinker

ORIGIN_FLAGSHIP = "flagship"

CREATED_AFTER_INTAKE_HOURS = (1, 4)
FLAGSHIP_CLOSED_LEAD_DAYS = (5, 30)
FLAGSHIP_OPEN_AGE_DAYS = (1, 14)
CONSOLIDATION_EXTRA = (1, 2)

# Risk score range by severity; high-risk branches add a bump on top
RISK_SCORE_BY_SEVERITY = {
    "HIGH": (70, 95),
    "MEDIUM": (40, 70),
    "LOW": (15, 45),
}
HIGH_RISK_BUMP = (5, 15)


def case_row(ctx, reference: str, **fields) -> dict:
    """Case row with every column present; unspecified columns are None."""
    row = {
        "id": ctx.make_id("case", reference),
        "organization_id": ctx.organization_id,
        "reference_number": reference,
        "origin": ORIGIN_GENERATED,
        "case_type": "REPORT",
        "status": None,
        "status_rationale": None,
        "priority": None,
        "severity": None,
        "complexity": None,
        "source_channel": None,
        "category_id": None,
        "location_id": None,
        "reporter_type": None,
        "anonymous_access_code": None,
        "subject_employee_id": None,
        "subject_team_id": None,
        "details": None,
        "summary": None,
        "ai_summary": None,
        "ai_risk_score": None,
        "tags": [],
        "custom_fields": None,
        "created_at": None,
        "updated_at": None,
        "closed_at": None,
    }
    unknown = set(fields) - set(row)
    if unknown:
        raise KeyError(f"Unknown case columns: {sorted(unknown)}")
    row.update(fields)
    return row


class CaseGenerator(BasePhaseGenerator):
    """Generate flagship and regular cases with their intake associations."""

    PHASE = "cases"

    def __init__(self, ctx) -> None:
        super().__init__(ctx)
        self._bulk_employees: list[dict] = []

    def check_prerequisites(self) -> None:
        if self.ctx.patterns is None:
            raise MissingPrerequisiteError(self.PHASE, "pattern pools have not been built")

    def generate(self) -> None:
        target = self.config.case_target
        print(f"  Phase {self.PHASE}: Cases ({target:,} target)")

        records = self.ctx.read_back(
            "intake_records",
            {"origin": ORIGIN_GENERATED},
            ("created_at", "reference_number"),
        )
        if not records:
            raise MissingPrerequisiteError(self.PHASE, "no committed intake records")
        if target > len(records):
            raise MissingPrerequisiteError(
                self.PHASE,
                f"{target} cases requested but only {len(records)} intake records committed",
            )
        self.ctx.linker = ReferentialLinker(records, self.ctx.make_id, self.ctx.organization_id)
        self._bulk_employees = [e for e in self.data["employees"] if e["persona_key"] is None]

        self._generate_flagships()
        flagship_count = self.ctx.patterns.flagships_consumed
        regular_total = target - flagship_count
        for i in range(regular_total):
            self._generate_regular(i, flagship_count, regular_total - i - 1)

        self.ctx.generated_phases.add(self.PHASE)
        self.ctx.patterns.log_summary()
        cases = self.data["cases"]
        closed = sum(1 for c in cases if c["status"] == "CLOSED")
        print(
            f"    Generated: {len(cases):,} cases ({flagship_count} flagship, "
            f"{closed:,} closed), {len(self.data['intake_case_associations']):,} associations"
        )

    def _emit(self, case: dict, records: list[dict]) -> None:
        self.data["cases"].append(case)
        self.data["intake_case_associations"].extend(self.ctx.linker.link(case, records))
        self.ctx.case_ids[case["reference_number"]] = case["id"]

    # =========================================================================
    # Flagships
    # =========================================================================

    def _generate_flagships(self) -> None:
        s = self.sampler
        now = self.ctx.current_date
        while True:
            slot = self.ctx.patterns.try_consume_flagship()
            if slot is None:
                break
            payload = slot.payload

            category_id = self.ctx.category_ids.get(payload["category_code"])
            if category_id is None:
                category_id = self.data["categories"][0]["id"]
            category = self.ctx.categories_by_id[category_id]

            duration = payload["duration_days"] or 0
            if payload["status"] == "CLOSED":
                created_at = now - timedelta(days=duration + s.randint(*FLAGSHIP_CLOSED_LEAD_DAYS))
                updated_at = min(created_at + timedelta(days=duration), now)
                closed_at = updated_at
            else:
                created_at = now - timedelta(days=s.randint(*FLAGSHIP_OPEN_AGE_DAYS))
                updated_at = created_at
                closed_at = None
            primary = self.ctx.linker.claim_matching(category_id, before=created_at)

            reporter_type = "ANONYMOUS" if "Anonymous" in payload["name"] else primary["reporter_type"]
            case = case_row(
                self.ctx,
                f"{payload['reference_prefix']}-0001",
                origin=ORIGIN_FLAGSHIP,
                status=payload["status"],
                status_rationale="Investigation complete" if closed_at else None,
                priority="HIGH",
                severity=payload["severity"],
                complexity="complex" if payload["investigation_count"] > 1 else "medium",
                source_channel=INTAKE_TO_CASE_CHANNEL.get(primary["source_channel"], "DIRECT_ENTRY"),
                category_id=category_id,
                location_id=primary["location_id"],
                reporter_type=reporter_type,
                anonymous_access_code=(
                    primary["anonymous_access_code"] or s.token(12)
                    if reporter_type == "ANONYMOUS" else None
                ),
                details=payload["narrative"],
                summary=narrative.truncate(payload["narrative"]),
                ai_summary=payload["ai_summary"],
                ai_risk_score=payload["ai_risk_score"],
                tags=["flagship", category["code"].lower()],
                custom_fields={
                    "flagship": payload["name"],
                    "demo_points": list(payload["demo_points"]),
                    "has_escalation": payload["has_escalation"],
                    "external_party_type": payload["external_party_type"],
                    "investigation_count": payload["investigation_count"],
                    "outcome": payload["outcome"],
                },
                created_at=created_at,
                updated_at=updated_at,
                closed_at=closed_at,
            )
            self._emit(case, [primary])

    # =========================================================================
    # Regular cases
    # =========================================================================

    def _generate_regular(self, i: int, flagship_count: int, cases_remaining: int) -> None:
        s = self.sampler
        cfg = self.config
        now = self.ctx.current_date
        linker = self.ctx.linker

        primary = linker.next_primary()
        extras: list[dict] = []
        if s.chance(cfg.rates["consolidation"]):
            extras = linker.fold_extra(s.randint(*CONSOLIDATION_EXTRA), cases_remaining)

        status = s.sample(cfg.distribution("case_status"))
        priority = s.sample(cfg.distribution("case_priority"))
        case_type = s.sample(cfg.distribution("case_type"))
        complexity = s.sample(cfg.distribution("case_complexity"))

        category = self.ctx.categories_by_id[primary["category_id"]]
        branch_id = category["parent_id"] or category["id"]
        branch_code = category["code"].split("-")[0]
        severity = primary["severity"]

        # A consolidated case opens after the last of its reports was filed
        anchor = max(r["created_at"] for r in [primary, *extras])
        created_at = min(anchor + timedelta(hours=s.randint(*CREATED_AFTER_INTAKE_HOURS)), now)
        updated_at = created_at
        closed_at = None
        if status == "CLOSED":
            duration = s.randint(*cfg.case_timing[complexity])
            updated_at = min(created_at + timedelta(days=duration), now)
            closed_at = updated_at

        subject_employee_id = subject_team_id = None
        tags = []
        if case_type == "REPORT":
            subject_employee_id, subject_team_id = self._subject(category["id"], branch_id, tags)
        if priority == "CRITICAL":
            tags.append("critical")
        if complexity == "complex":
            tags.append("complex")

        ai_summary = narrative.ai_case_summary(s, severity, category["name"])
        ai_risk_score = self._risk_score(severity, branch_code)

        reference = f"CASE-{created_at.year}-{flagship_count + i + 1:05d}"
        details = primary["details"]
        case = case_row(
            self.ctx,
            reference,
            case_type=case_type,
            status=status,
            status_rationale="Investigation complete" if status == "CLOSED" else None,
            priority=priority,
            severity=severity,
            complexity=complexity,
            source_channel=INTAKE_TO_CASE_CHANNEL.get(primary["source_channel"], "DIRECT_ENTRY"),
            category_id=category["id"],
            location_id=primary["location_id"],
            reporter_type=primary["reporter_type"],
            anonymous_access_code=primary["anonymous_access_code"],
            subject_employee_id=subject_employee_id,
            subject_team_id=subject_team_id,
            details=details,
            summary=narrative.truncate(details),
            ai_summary=ai_summary,
            ai_risk_score=ai_risk_score,
            tags=tags,
            custom_fields={"consolidated_reports": len(extras) + 1} if extras else None,
            created_at=created_at,
            updated_at=updated_at,
            closed_at=closed_at,
        )
        self._emit(case, [primary, *extras])

    def _subject(self, category_id: str, branch_id: str, tags: list[str]) -> tuple:
        """Subject employee and team, preferring the pattern pools."""
        s = self.sampler
        patterns = self.ctx.patterns

        repeat = patterns.try_consume_repeat_subject(s)
        hotspot = patterns.try_consume_hotspot(s, category_id, branch_id)
        if repeat is not None:
            tags.append("repeat-subject")
        if hotspot is not None:
            tags.append("hotspot-team")

        if hotspot is not None:
            team_id = self.ctx.team_ids[hotspot.team_code]
            members = self.ctx.team_members.get(hotspot.team_code) or []
            employee_id = s.choice(members) if members else hotspot.manager_id
            if repeat is not None:
                employee_id = repeat.employee_id
            return employee_id, team_id
        if repeat is not None:
            employee = self.ctx.employees_by_id[repeat.employee_id]
            return employee["id"], employee["team_id"]
        if not self._bulk_employees:
            return None, None
        employee = s.choice(self._bulk_employees)
        return employee["id"], employee["team_id"]

    def _risk_score(self, severity: str, branch_code: str) -> int:
        s = self.sampler
        score = s.randint(*RISK_SCORE_BY_SEVERITY.get(severity, RISK_SCORE_BY_SEVERITY["MEDIUM"]))
        if branch_code in HIGH_RISK_BRANCHES:
            score += s.randint(*HIGH_RISK_BUMP)
        return min(score, 100)
