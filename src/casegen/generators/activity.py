"""
Activity Generator: audit-log timeline entries across case and investigation
lifecycles.

Tables generated:
- audit_logs

Every case gets a "created" entry at its creation time; the remaining entry
kinds are drawn per case at fixed rates. Each entry falls between its
entity's created_at and its closed_at (or the reference date while the
entity is still open). Entries written by people carry a demo persona as
actor; SYSTEM and AI entries carry none.
"""

from datetime import timedelta

from .base import BasePhaseGenerator
from .downstream import _DemoUserMixin
from ..constants.attachers import (
    ACTIVITY_RATES,
    AI_ENRICHMENT_HOURS,
    AI_ENRICHMENT_TEMPLATES,
    ASSIGNMENT_HOURS,
    ASSIGNMENT_TEMPLATES,
    CCO_ESCALATION_LEAD_DAYS,
    CCO_ESCALATION_TEMPLATES,
    INVESTIGATION_CLOSED_TEMPLATES,
    NOTE_LEAD_DAYS,
    NOTE_TEMPLATES,
    NOTES_PER_CASE,
    OPENED_HOURS,
    PRIORITY_CHANGE_LEAD_DAYS,
    PRIORITY_CHANGE_TEMPLATES,
    PRIORITY_REASONS,
    SLA_WARNING_DAYS_LEFT,
    SLA_WARNING_LEAD_DAYS,
    SLA_WARNING_TEMPLATES,
    STATUS_CHANGE_TEMPLATES,
)
from ..errors import MissingPrerequisiteError

ACTOR_USER = "USER"
ACTOR_SYSTEM = "SYSTEM"
ACTOR_AI = "AI"

ENTITY_CASE = "CASE"
ENTITY_INVESTIGATION = "INVESTIGATION"

ACTOR_NAMES = {ACTOR_SYSTEM: "System", ACTOR_AI: "AI Assistant"}


def moment_between(sampler, start, end):
    """Uniform second inside [start, end]; end when the window is empty."""
    span = int((end - start).total_seconds())
    if span <= 0:
        return end
    return start + timedelta(seconds=sampler.randint(0, span))


class ActivityGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Audit-log entries for every committed case and investigation."""

    PHASE = "activity"

    def __init__(self, ctx) -> None:
        super().__init__(ctx)
        self._users: list[str] = []
        self._sequence = 0

    def generate(self) -> None:
        cases = self.ctx.read_back("cases", None, ("created_at", "reference_number"))
        if not cases:
            raise MissingPrerequisiteError(self.PHASE, "no committed cases to log activity for")
        print(f"  Phase {self.PHASE}: Activity timeline ({len(cases):,} cases)")
        self._users = self.demo_user_ids()

        by_case: dict[str, list[dict]] = {}
        for inv in self.ctx.read_back("investigations", None, ("created_at", "investigation_number")):
            by_case.setdefault(inv["case_id"], []).append(inv)

        for case in cases:
            self._sequence = 0
            self._case_timeline(case)
            for inv in by_case.get(case["id"], []):
                self._investigation_timeline(case, inv)

        self.ctx.generated_phases.add(self.PHASE)
        counts: dict[str, int] = {}
        for row in self.data["audit_logs"]:
            key = f"{row['entity_type'].lower()} {row['action']}"
            counts[key] = counts.get(key, 0) + 1
        print(f"    Generated: {len(self.data['audit_logs']):,} audit entries")
        print("    By action: " + ", ".join(f"{count:,} {name}" for name, count in counts.items()))

    # =========================================================================
    # Entries
    # =========================================================================

    def _actor_name(self, employee_id: str | None) -> str:
        employee = self.ctx.employees_by_id.get(employee_id) if employee_id else None
        if employee is None:
            return "Unknown"
        return f"{employee['first_name']} {employee['last_name']}"

    def _entry(
        self,
        case: dict,
        entity_type: str,
        entity_id: str,
        action: str,
        category: str,
        description: str,
        created_at,
        actor_type: str = ACTOR_USER,
        actor_id: str | None = None,
        changes: dict | None = None,
    ) -> None:
        self._sequence += 1
        code = f"ACT-{case['reference_number']}-{self._sequence:03d}"
        by_user = actor_type == ACTOR_USER
        self.data["audit_logs"].append(
            {
                "id": self.ctx.make_id("audit_log", code),
                "organization_id": self.ctx.organization_id,
                "code": code,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "case_id": case["id"],
                "action": action,
                "action_category": category,
                "action_description": description,
                "actor_type": actor_type,
                "actor_id": actor_id if by_user else None,
                "actor_name": self._actor_name(actor_id) if by_user else ACTOR_NAMES[actor_type],
                "changes": changes,
                "context": {"reference_number": case["reference_number"]},
                "ip_address": self.fake.ipv4_private() if by_user else None,
                "user_agent": self.fake.user_agent() if by_user else None,
                "created_at": created_at,
            }
        )

    def _case_timeline(self, case: dict) -> None:
        s = self.sampler
        created = case["created_at"]
        end = case["closed_at"] or self.ctx.current_date

        def after_hours(bounds):
            return min(created + timedelta(hours=s.randint(*bounds)), end)

        def after_days(days):
            return moment_between(s, min(created + timedelta(days=days), end), end)

        def log(action, category, description, moment, **kwargs):
            self._entry(case, ENTITY_CASE, case["id"], action, category, description, moment, **kwargs)

        creator = s.choice(self._users)
        log(
            "created", "CREATE",
            f"Case {case['reference_number']} created from intake",
            created, actor_id=creator,
        )

        if s.chance(ACTIVITY_RATES["ai_enrichment"]):
            category = self.ctx.categories_by_id.get(case["category_id"])
            description = s.choice(AI_ENRICHMENT_TEMPLATES).format(
                score=s.randint(72, 97),
                category=category["name"] if category else "General",
            )
            log("ai_enrichment", "AI", description, after_hours(AI_ENRICHMENT_HOURS), actor_type=ACTOR_AI)

        if case["status"] != "NEW" and s.chance(ACTIVITY_RATES["assigned"]):
            actor_id, assignee_id = s.choice(self._users), s.choice(self._users)
            description = s.choice(ASSIGNMENT_TEMPLATES).format(
                actor=self._actor_name(actor_id), assignee=self._actor_name(assignee_id)
            )
            log(
                "assigned", "UPDATE", description, after_hours(ASSIGNMENT_HOURS),
                actor_id=actor_id, changes={"assignee_id": {"old": None, "new": assignee_id}},
            )

        if case["status"] in ("OPEN", "CLOSED"):
            transitions = [("NEW", "OPEN", after_hours(OPENED_HOURS))]
            if case["status"] == "CLOSED" and case["closed_at"] is not None:
                transitions.append(("OPEN", "CLOSED", case["closed_at"]))
            for old, new, moment in transitions:
                actor_id = s.choice(self._users)
                description = s.choice(STATUS_CHANGE_TEMPLATES[new]).format(actor=self._actor_name(actor_id))
                log(
                    "status_changed", "UPDATE", description, moment,
                    actor_id=actor_id, changes={"status": {"old": old, "new": new}},
                )

        alternatives = [p for p in self.config.distribution("case_priority").values() if p != case["priority"]]
        if alternatives and s.chance(ACTIVITY_RATES["priority_changed"]):
            old = case["priority"]
            new = s.choice(alternatives)
            actor_id = s.choice(self._users)
            description = s.choice(PRIORITY_CHANGE_TEMPLATES).format(
                actor=self._actor_name(actor_id), old=old, new=new, reason=s.choice(PRIORITY_REASONS)
            )
            log(
                "priority_changed", "UPDATE", description, after_days(PRIORITY_CHANGE_LEAD_DAYS),
                actor_id=actor_id, changes={"priority": {"old": old, "new": new}},
            )

        if s.chance(ACTIVITY_RATES["note_added"]):
            moments = sorted(after_days(NOTE_LEAD_DAYS) for _ in range(s.randint(*NOTES_PER_CASE)))
            for moment in moments:
                actor_id = s.choice(self._users)
                description = s.choice(NOTE_TEMPLATES).format(actor=self._actor_name(actor_id))
                log("note_added", "CREATE", description, moment, actor_id=actor_id)

        if s.chance(ACTIVITY_RATES["cco_escalated"]):
            actor_id = s.choice(self._users)
            description = s.choice(CCO_ESCALATION_TEMPLATES).format(actor=self._actor_name(actor_id))
            log("cco_escalated", "UPDATE", description, after_days(CCO_ESCALATION_LEAD_DAYS), actor_id=actor_id)

        # Only cases that stayed open long enough to near a deadline
        if end - created >= timedelta(days=SLA_WARNING_LEAD_DAYS) and s.chance(ACTIVITY_RATES["sla_warning"]):
            description = s.choice(SLA_WARNING_TEMPLATES).format(days=s.randint(*SLA_WARNING_DAYS_LEFT))
            log("sla_warning", "SYSTEM", description, after_days(SLA_WARNING_LEAD_DAYS), actor_type=ACTOR_SYSTEM)

    def _investigation_timeline(self, case: dict, inv: dict) -> None:
        s = self.sampler
        actor_id = inv["primary_investigator_id"] or s.choice(self._users)
        name = self._actor_name(actor_id)
        self._entry(
            case, ENTITY_INVESTIGATION, inv["id"], "created", "CREATE",
            f"Investigation opened for case {case['reference_number']} by {name}",
            inv["created_at"], actor_id=actor_id,
        )
        if inv["status"] == "CLOSED" and inv["closed_at"] is not None:
            outcome = (inv["outcome"] or "CLOSED").replace("_", " ").lower()
            description = s.choice(INVESTIGATION_CLOSED_TEMPLATES).format(actor=name, outcome=outcome)
            self._entry(
                case, ENTITY_INVESTIGATION, inv["id"], "closed", "UPDATE", description,
                inv["closed_at"], actor_id=actor_id,
                changes={"status": {"old": "INVESTIGATING", "new": "CLOSED"}, "outcome": inv["outcome"]},
            )
