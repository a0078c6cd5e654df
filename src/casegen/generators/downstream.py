"""
Downstream attachers: terminal phases layered over committed cases,
intake records and employees.

Tables generated:
- campaigns, campaign_responses
- workflow_instances
- notifications
- saved_views
- ai_conversations
- reports

Attachers only read upstream rows (through ctx.read_back or the context's
ID maps) and never modify them. Nothing depends on their output, so the
pipeline logs and skips an attacher that fails.
"""

from datetime import timedelta

from .base import BasePhaseGenerator
from .cases import ORIGIN_FLAGSHIP
from .taxonomy import slugify
from ..constants.attachers import (
    AI_CONVERSATION_OPEN_CASE_SAMPLE,
    AI_CONVERSATION_SCRIPTS,
    CAMPAIGN_COMPLETION_RANGE,
    CAMPAIGN_DURATION_DAYS,
    CAMPAIGN_TEMPLATES,
    CASE_WORKFLOW_STAGES,
    DISCLOSURE_WORKFLOW_STAGES,
    NOTIFICATION_CHANNEL_DISTRIBUTION,
    NOTIFICATION_READ_RATE,
    NOTIFICATION_TITLES,
    NOTIFICATION_TYPE_DISTRIBUTION,
    NOTIFICATION_WINDOW_DAYS,
    POLICY_WORKFLOW_DRAFTS,
    REPORT_DEFINITIONS,
    SAVED_VIEWS,
    WORKFLOW_STEPS,
)
from ..constants.organization import DEMO_USER_KEYS
from ..errors import MissingPrerequisiteError
from ..sampling import DistributionConfig

OPEN_STATUSES = ("NEW", "OPEN")
# Responses arriving this long after a campaign's due date still count
CAMPAIGN_GRACE_DAYS = 30
AUDIENCE_SHARE = {"SALES": 0.15}


def step_states(steps: list[str], current: str, started_at) -> list[dict]:
    """Completed steps before current, in_progress at current, pending after."""
    index = steps.index(current) if current in steps else 0
    states = []
    for position, step in enumerate(steps):
        if position < index:
            status = "completed"
        elif position == index:
            status = "in_progress"
        else:
            status = "pending"
        states.append(
            {
                "step": step,
                "status": status,
                "entered_at": started_at.isoformat() if position <= index else None,
            }
        )
    return states


class _DemoUserMixin:
    """Demo personas present in this run, in declaration order."""

    def demo_user_ids(self) -> list[str]:
        ids = [self.ctx.persona_ids[k] for k in DEMO_USER_KEYS if k in self.ctx.persona_ids]
        if not ids:
            raise MissingPrerequisiteError(self.PHASE, "no demo personas in the employee set")
        return ids


# =============================================================================
# Campaigns
# =============================================================================


class CampaignGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Disclosure, attestation and survey campaigns plus response attribution."""

    PHASE = "campaigns"

    def generate(self) -> None:
        target = self.config.volumes["campaigns"]
        print(f"  Phase {self.PHASE}: Campaigns ({target} target)")
        s = self.sampler
        now = self.ctx.current_date
        owner_id = self.ctx.persona_ids.get("cco") or self.demo_user_ids()[0]

        employees = self.data["employees"]
        managers = sum(1 for e in employees if e["job_level"] != "IC")
        campaigns = []
        for n in range(target):
            template = CAMPAIGN_TEMPLATES[n % len(CAMPAIGN_TEMPLATES)]
            launched_at = self.temporal.sample_historical_date(self.config.rates["recency_bias"])
            due_at = launched_at + timedelta(days=s.randint(*CAMPAIGN_DURATION_DAYS))
            if template["audience"] == "MANAGERS":
                target_count = managers
            else:
                target_count = int(len(employees) * AUDIENCE_SHARE.get(template["audience"], 1.0))
            rate = round(s.uniform(*CAMPAIGN_COMPLETION_RANGE), 3)
            code = f"CMP-{n + 1:03d}"
            campaigns.append(
                {
                    "id": self.ctx.make_id("campaign", code),
                    "organization_id": self.ctx.organization_id,
                    "code": code,
                    "name": f"{template['name']} {launched_at.year}",
                    "campaign_type": template["type"],
                    "audience": template["audience"],
                    "intake_type": template["intake_type"],
                    "owner_id": owner_id,
                    "status": "ACTIVE" if due_at > now else "COMPLETED",
                    "target_count": target_count,
                    "completed_count": int(target_count * rate),
                    "completion_rate": rate,
                    "launched_at": launched_at,
                    "due_at": due_at,
                    "created_at": launched_at,
                }
            )
        self.data["campaigns"].extend(campaigns)

        records = self.ctx.read_back("intake_records", {"source_channel": "CAMPAIGN"}, ("reference_number",))
        responses = self._attribute(campaigns, records)
        self.data["campaign_responses"].extend(responses)

        self.ctx.generated_phases.add(self.PHASE)
        print(
            f"    Generated: {len(campaigns)} campaigns, "
            f"{len(responses):,} attributed responses of {len(records):,} campaign intake records"
        )

    def _attribute(self, campaigns: list[dict], records: list[dict]) -> list[dict]:
        """
        Attribute each campaign-channel intake record to the campaign of its
        intake type whose window is nearest in time.

        A record inside a campaign's window (launch to due plus grace) scores
        zero; otherwise the distance to the window counts. Records with no
        campaign of their type stay unattributed.
        """
        by_type: dict[str, list[dict]] = {}
        for campaign in campaigns:
            by_type.setdefault(campaign["intake_type"], []).append(campaign)

        responses = []
        for record in records:
            candidates = by_type.get(record["intake_type"])
            if not candidates:
                continue
            moment = record["created_at"]

            def distance(campaign: dict) -> float:
                end = campaign["due_at"] + timedelta(days=CAMPAIGN_GRACE_DAYS)
                if campaign["launched_at"] <= moment <= end:
                    return 0.0
                gap = campaign["launched_at"] - moment if moment < campaign["launched_at"] else moment - end
                return gap.total_seconds()

            campaign = min(candidates, key=lambda c: (distance(c), c["code"]))
            responses.append(
                {
                    "id": self.ctx.make_id("campaign_response", f"{campaign['id']}:{record['id']}"),
                    "organization_id": self.ctx.organization_id,
                    "campaign_id": campaign["id"],
                    "intake_record_id": record["id"],
                    "responded_at": moment,
                    "created_at": moment,
                }
            )
        return responses


# =============================================================================
# Workflows
# =============================================================================


class WorkflowGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Policy approvals, case routing and disclosure review instances."""

    PHASE = "workflows"

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Workflow instances")
        self._policy_approvals()
        self._case_routing()
        self._disclosure_reviews()

        self.ctx.generated_phases.add(self.PHASE)
        counts = {}
        for row in self.data["workflow_instances"]:
            counts[row["workflow_type"]] = counts.get(row["workflow_type"], 0) + 1
        print(
            "    Generated: "
            + ", ".join(f"{count} {name.lower()}" for name, count in counts.items())
        )

    def _row(self, code, workflow_type, current_step, started_at, due_at, **refs) -> dict:
        steps = WORKFLOW_STEPS[workflow_type]
        return {
            "id": self.ctx.make_id("workflow_instance", code),
            "organization_id": self.ctx.organization_id,
            "code": code,
            "workflow_type": workflow_type,
            "entity_name": refs.get("entity_name"),
            "case_id": refs.get("case_id"),
            "intake_record_id": refs.get("intake_record_id"),
            "assignee_id": self.sampler.choice(self.demo_user_ids()),
            "current_step": current_step,
            "step_states": step_states(steps, current_step, started_at),
            "started_at": started_at,
            "due_at": due_at,
            "created_at": started_at,
        }

    def _policy_approvals(self) -> None:
        now = self.ctx.current_date
        for n, draft in enumerate(POLICY_WORKFLOW_DRAFTS, start=1):
            started_at = now - timedelta(days=draft["days_ago"])
            self.data["workflow_instances"].append(
                self._row(
                    f"WF-POL-{n:02d}",
                    "POLICY_APPROVAL",
                    draft["step"],
                    started_at,
                    started_at + timedelta(days=14),
                    entity_name=draft["policy"],
                )
            )

    def _case_routing(self) -> None:
        open_cases = [
            c for c in self.ctx.read_back("cases", None, ("created_at", "reference_number"))
            if c["status"] in OPEN_STATUSES
        ]
        queue = iter(reversed(open_cases))
        n = 0
        for stage, count, sla_days in CASE_WORKFLOW_STAGES:
            for _ in range(count):
                case = next(queue, None)
                if case is None:
                    return
                n += 1
                started_at = case["created_at"]
                self.data["workflow_instances"].append(
                    self._row(
                        f"WF-CASE-{n:02d}",
                        "CASE_ROUTING",
                        stage,
                        started_at,
                        started_at + timedelta(days=sla_days),
                        case_id=case["id"],
                        entity_name=case["reference_number"],
                    )
                )

    def _disclosure_reviews(self) -> None:
        disclosures = self.ctx.read_back(
            "intake_records", {"intake_type": "DISCLOSURE_RESPONSE"}, ("created_at", "reference_number")
        )
        queue = iter(reversed(disclosures))
        n = 0
        for stage, count in DISCLOSURE_WORKFLOW_STAGES:
            for _ in range(count):
                record = next(queue, None)
                if record is None:
                    return
                n += 1
                self.data["workflow_instances"].append(
                    self._row(
                        f"WF-DIS-{n:02d}",
                        "DISCLOSURE_REVIEW",
                        stage,
                        record["created_at"],
                        record["created_at"] + timedelta(days=10),
                        intake_record_id=record["id"],
                        entity_name=record["reference_number"],
                    )
                )


# =============================================================================
# Notifications
# =============================================================================


class NotificationGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Recent notifications for each demo persona, linked to real cases."""

    PHASE = "notifications"

    def generate(self) -> None:
        s = self.sampler
        volumes = self.config.volumes
        now = self.ctx.current_date
        print(
            f"  Phase {self.PHASE}: Notifications "
            f"({volumes['notifications_min']}-{volumes['notifications_max']} per demo user)"
        )
        cases = self.ctx.read_back("cases", None, ("reference_number",))
        if not cases:
            raise MissingPrerequisiteError(self.PHASE, "no committed cases to notify about")
        type_dist = DistributionConfig(NOTIFICATION_TYPE_DISTRIBUTION, name="notification_type")
        channel_dist = DistributionConfig(NOTIFICATION_CHANNEL_DISTRIBUTION, name="notification_channel")
        window_minutes = NOTIFICATION_WINDOW_DAYS * 24 * 60

        for key in DEMO_USER_KEYS:
            recipient_id = self.ctx.persona_ids.get(key)
            if recipient_id is None:
                continue
            for n in range(s.randint(volumes["notifications_min"], volumes["notifications_max"])):
                notification_type = s.sample(type_dist)
                channel = s.sample(channel_dist)
                case = s.choice(cases)
                title = s.choice(NOTIFICATION_TITLES[notification_type]).format(
                    ref=case["reference_number"]
                )
                created_at = now - timedelta(minutes=s.randint(1, window_minutes))
                read_at = None
                if s.chance(NOTIFICATION_READ_RATE):
                    read_at = min(created_at + timedelta(minutes=s.randint(5, 720)), now)
                code = f"NTF-{key}-{n + 1:04d}"
                self.data["notifications"].append(
                    {
                        "id": self.ctx.make_id("notification", code),
                        "organization_id": self.ctx.organization_id,
                        "code": code,
                        "recipient_id": recipient_id,
                        "notification_type": notification_type,
                        "channel": channel,
                        "title": title,
                        "case_id": case["id"],
                        "is_read": read_at is not None,
                        "read_at": read_at,
                        "created_at": created_at,
                    }
                )

        self.ctx.generated_phases.add(self.PHASE)
        rows = self.data["notifications"]
        unread = sum(1 for r in rows if not r["is_read"])
        print(f"    Generated: {len(rows):,} notifications ({unread:,} unread)")


# =============================================================================
# Saved views
# =============================================================================


class SavedViewGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Default saved views per module, owned by the compliance lead."""

    PHASE = "saved_views"

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Saved views")
        owner_id = self.ctx.persona_ids.get("cco") or self.demo_user_ids()[0]
        now = self.ctx.current_date
        for module, views in SAVED_VIEWS.items():
            for order, view in enumerate(views):
                code = f"{module.lower()}-{slugify(view['name'])}"
                self.data["saved_views"].append(
                    {
                        "id": self.ctx.make_id("saved_view", code),
                        "organization_id": self.ctx.organization_id,
                        "code": code,
                        "module": module,
                        "name": view["name"],
                        "owner_id": owner_id,
                        "columns": list(view["columns"]),
                        "filters": dict(view["filters"]),
                        "sort": dict(view["sort"]),
                        "view_mode": view["view_mode"],
                        "is_default": view["is_default"],
                        "is_shared": True,
                        "display_order": order,
                        "created_at": now,
                    }
                )
        self.ctx.generated_phases.add(self.PHASE)
        print(f"    Generated: {len(self.data['saved_views'])} saved views")


# =============================================================================
# AI conversations
# =============================================================================


class AiConversationGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Templated assistant conversations on flagship and open cases."""

    PHASE = "ai_conversations"

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: AI conversations")
        s = self.sampler
        now = self.ctx.current_date
        users = self.demo_user_ids()

        cases = self.ctx.read_back("cases", None, ("reference_number",))
        flagships = [c for c in cases if c["origin"] == ORIGIN_FLAGSHIP]
        open_cases = [c for c in cases if c["status"] in OPEN_STATUSES and c["origin"] != ORIGIN_FLAGSHIP]
        selected = flagships + s.sample_k(open_cases, min(AI_CONVERSATION_OPEN_CASE_SAMPLE, len(open_cases)))

        related: dict[str, int] = {}
        for assoc in self.ctx.read_back("intake_case_associations"):
            related[assoc["case_id"]] = related.get(assoc["case_id"], 0) + 1

        for case in selected:
            script = s.choice(AI_CONVERSATION_SCRIPTS)
            started_at = max(case["created_at"], now - timedelta(days=s.randint(1, 30)))
            category = self.ctx.categories_by_id.get(case["category_id"])
            values = {
                "ref": case["reference_number"],
                "severity": (case["severity"] or "MEDIUM").lower(),
                "category": category["name"].lower() if category else "compliance",
                "age": (now - case["created_at"]).days,
                "summary": case["ai_summary"] or case["summary"] or "",
                "related": related.get(case["id"], 0),
            }
            messages = []
            moment = started_at
            for role, template in script:
                moment = min(moment + timedelta(seconds=s.randint(20, 240)), now)
                messages.append(
                    {"role": role, "content": template.format(**values), "sent_at": moment.isoformat()}
                )
            code = f"AIC-{case['reference_number']}"
            self.data["ai_conversations"].append(
                {
                    "id": self.ctx.make_id("ai_conversation", code),
                    "organization_id": self.ctx.organization_id,
                    "code": code,
                    "case_id": case["id"],
                    "user_id": s.choice(users),
                    "title": f"Assistant on {case['reference_number']}",
                    "messages": messages,
                    "created_at": started_at,
                    "updated_at": moment,
                }
            )

        self.ctx.generated_phases.add(self.PHASE)
        print(
            f"    Generated: {len(self.data['ai_conversations'])} conversations "
            f"({len(flagships)} on flagship cases)"
        )


# =============================================================================
# Reports
# =============================================================================


class ReportGenerator(BasePhaseGenerator, _DemoUserMixin):
    """Static report definitions, shared across the organization."""

    PHASE = "reports"

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Report definitions ({len(REPORT_DEFINITIONS)})")
        s = self.sampler
        now = self.ctx.current_date
        users = self.demo_user_ids()
        for definition in REPORT_DEFINITIONS:
            self.data["reports"].append(
                {
                    "id": self.ctx.make_id("report", definition["code"]),
                    "organization_id": self.ctx.organization_id,
                    "code": definition["code"],
                    "name": definition["name"],
                    "entity_type": definition["entity"],
                    "owner_id": s.choice(users),
                    "is_shared": True,
                    "config": {"chart": definition["chart"], "group_by": definition["group_by"]},
                    "created_at": now - timedelta(days=s.randint(1, 180)),
                }
            )
        self.ctx.generated_phases.add(self.PHASE)
        print(f"    Generated: {len(self.data['reports'])} reports")
