"""
Intake-Record Generator: immutable base facts (reports) cases derive from.

Tables generated:
- intake_records

Per record, in a fixed draw order:
- edge case by index (long, unicode, boundary date, minimal)
- optional join of a planned linked incident (multi-reporter cluster)
- channel-mix bucket, then an intake type within it; source channel from
  the type; category, severity (conditioned on type)
- reporter type: anonymous / confidential / identified, driven by the
  category's anonymity rate plus a fixed confidential split
- timestamp: seasonal historical date or boundary date, moved into the
  reporting region's business hours
- type-specific content, reporter details, status, optional location and AI
  enrichment
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .base import BasePhaseGenerator
from .. import narrative
from ..constants.distributions import INTAKE_TYPE_TO_CHANNEL
from ..errors import MissingPrerequisiteError
from ..sampling import DistributionConfig
from ..temporal import edge_case_for

ORIGIN_GENERATED = "generated"

LINKED_INCIDENT_SIZE = (2, 4)
LINKED_INCIDENT_WINDOW_DAYS = (1, 14)

COUNTRY_BY_REPORTING_REGION = {"AMERICAS": "US", "EMEA": "GB", "APAC": "JP"}


@dataclass
class LinkedIncident:
    """Planned multi-reporter incident; the first record filed is the primary."""

    code: str
    category_id: str
    incident_date: datetime
    reporter_count: int
    records_created: int = 0

    @property
    def needs_reporters(self) -> bool:
        return self.records_created < self.reporter_count


def intake_status(intake_type: str, sampler) -> str:
    """Status conditioned on intake type."""
    if intake_type == "HOTLINE_REPORT":
        return "PENDING_QA" if sampler.chance(0.05) else "RELEASED"
    if intake_type in ("WEB_FORM_SUBMISSION", "INCIDENT_FORM"):
        return "RECEIVED"
    if intake_type in ("DISCLOSURE_RESPONSE", "ATTESTATION_RESPONSE", "SURVEY_RESPONSE"):
        return "COMPLETED"
    return "RELEASED"


class IntakeGenerator(BasePhaseGenerator):
    """
    Generate intake records with category-conditioned anonymity and
    linked-incident clusters.
    """

    PHASE = "intake"

    def __init__(self, ctx) -> None:
        super().__init__(ctx)
        self.incidents: list[LinkedIncident] = []
        self._branch_dist: DistributionConfig | None = None
        self._leaves_by_branch: dict[str, list[dict]] = {}
        self._employees: list[dict] = []

    def check_prerequisites(self) -> None:
        prereq = self.config.prerequisites
        parents = [c for c in self.data["categories"] if c["level"] == 0]
        if len(parents) < prereq["min_category_count"]:
            raise MissingPrerequisiteError(
                self.PHASE,
                f"found {len(parents)} top-level categories, "
                f"at least {prereq['min_category_count']} required",
            )
        if len(self.ctx.location_ids) < prereq["min_location_count"]:
            raise MissingPrerequisiteError(
                self.PHASE,
                f"found {len(self.ctx.location_ids)} locations, "
                f"at least {prereq['min_location_count']} required",
            )
        if not self.data["employees"]:
            raise MissingPrerequisiteError(self.PHASE, "no employees generated")

    def generate(self) -> None:
        target = self.config.volumes["intake_records"]
        print(f"  Phase {self.PHASE}: Intake records ({target:,} target)")

        parents = [c for c in self.data["categories"] if c["level"] == 0]
        self._branch_dist = DistributionConfig(
            [(c["code"], c["weight"]) for c in parents], name="category_branch"
        )
        for parent in parents:
            self._leaves_by_branch[parent["code"]] = [
                c for c in self.data["categories"] if c["parent_id"] == parent["id"]
            ] or [parent]
        self._employees = self.data["employees"]

        self.incidents = self._plan_linked_incidents(target)
        for index in range(target):
            self.data["intake_records"].append(self._generate_record(index))

        self.ctx.generated_phases.add(self.PHASE)
        records = self.data["intake_records"]
        anonymous = sum(1 for r in records if r["reporter_type"] == "ANONYMOUS")
        linked = sum(1 for r in records if r["custom_fields"] and "linked_incident" in r["custom_fields"])
        print(
            f"    Generated: {len(records):,} intake records "
            f"({anonymous:,} anonymous, {linked} linked across "
            f"{sum(1 for i in self.incidents if i.records_created)} incidents)"
        )

    # =========================================================================
    # Linked incidents
    # =========================================================================

    def _plan_linked_incidents(self, target: int) -> list[LinkedIncident]:
        average_size = sum(LINKED_INCIDENT_SIZE) / 2
        count = int(target * self.config.rates["linked_incident"] / average_size)
        incidents = []
        for n in range(count):
            incidents.append(
                LinkedIncident(
                    code=f"INC-{n + 1:04d}",
                    reporter_count=self.sampler.randint(*LINKED_INCIDENT_SIZE),
                    incident_date=self.temporal.sample_historical_date(
                        self.config.rates["recency_bias"]
                    ),
                    category_id=self._sample_category()["id"],
                )
            )
        return incidents

    def _join_incident(self) -> LinkedIncident | None:
        if not self.sampler.chance(self.config.rates["linked_incident_join"]):
            return None
        for incident in self.incidents:
            if incident.needs_reporters:
                return incident
        return None

    # =========================================================================
    # Record
    # =========================================================================

    def _sample_category(self) -> dict:
        branch = self.sampler.sample(self._branch_dist)
        return self.sampler.choice(self._leaves_by_branch[branch])

    def _reporter_type(self, category: dict) -> str:
        rate = category["anonymity_rate"]
        if rate is None:
            rate = self.config.distribution("anonymity").probabilities().get("ANONYMOUS", 0.0)
        roll = self.sampler.random()
        if roll < rate:
            return "ANONYMOUS"
        if roll < rate + self.config.rates["confidential_split"]:
            return "CONFIDENTIAL"
        return "IDENTIFIED"

    def _base_date(self, index: int, incident: LinkedIncident | None) -> datetime:
        boundary = self.temporal.boundary_date_for(index)
        if boundary is not None:
            return datetime(boundary.year, boundary.month, boundary.day)
        if incident is not None:
            latest = (self.ctx.current_date - timedelta(days=1)).replace(
                hour=0, minute=0, second=0, microsecond=0
            )
            moment = incident.incident_date + timedelta(
                days=self.sampler.randint(*LINKED_INCIDENT_WINDOW_DAYS)
            )
            return min(moment, latest)
        return self.temporal.sample_historical_date(self.config.rates["recency_bias"])

    def _details(
        self,
        edge_case: str | None,
        incident: LinkedIncident | None,
        intake_type: str,
        branch: str,
        created_at: datetime,
    ) -> str:
        s, fake = self.sampler, self.fake
        if edge_case == "long":
            return narrative.build_narrative(s, branch, long=True)
        if edge_case == "unicode":
            return narrative.unicode_narrative(s, branch)
        if edge_case == "minimal":
            return narrative.minimal_narrative()
        if incident is not None:
            if incident.records_created == 0:
                return narrative.build_narrative(s, branch)
            return narrative.corroborating_narrative(s, branch)
        if intake_type == "CHATBOT_TRANSCRIPT":
            return narrative.chatbot_transcript(s, branch, created_at.isoformat())
        if intake_type == "DISCLOSURE_RESPONSE":
            return narrative.disclosure_response(s, fake)
        if intake_type == "ATTESTATION_RESPONSE":
            return narrative.attestation_response(s, fake, compliant=s.chance(0.85))
        if intake_type == "SURVEY_RESPONSE":
            return narrative.survey_response(s, fake)
        if intake_type == "PROXY_REPORT":
            return narrative.proxy_report(s, branch)
        if intake_type == "INCIDENT_FORM":
            incident_day = (created_at - timedelta(days=s.randint(0, 7))).date().isoformat()
            return narrative.incident_form(s, fake, branch, incident_day)
        return narrative.build_narrative(s, branch)

    def _generate_record(self, index: int) -> dict:
        s = self.sampler
        edge_case = edge_case_for(index)
        incident = self._join_incident()

        bucket = s.sample(self.config.distribution("channel"))
        intake_type = s.sample(self.config.distribution(f"intake_type.{bucket}"))
        channel = INTAKE_TYPE_TO_CHANNEL[intake_type]
        if incident is not None:
            category = self.ctx.categories_by_id[incident.category_id]
        else:
            category = self._sample_category()
        branch = category["code"].split("-")[0]
        severity = s.sample(self.config.distribution(f"severity.{intake_type}"))
        reporter_type = self._reporter_type(category)

        base_date = self._base_date(index, incident)
        employee = s.choice(self._employees)
        location = self.ctx.locations_by_id.get(employee["location_id"])
        if location is not None:
            region = location["reporting_region"]
        else:
            region = s.sample(self.config.distribution("reporting_region"))
        created_at = self.temporal.adjust_for_region(base_date, region)

        details = self._details(edge_case, incident, intake_type, branch, created_at)
        reference = f"RIU-{created_at.year}-{index + 1:05d}"

        access_code = s.token(12) if reporter_type == "ANONYMOUS" else None
        reporter_name = reporter_email = reporter_phone = None
        if reporter_type == "IDENTIFIED":
            reporter_name = self.fake.name()
            reporter_email = self.fake.email()
            reporter_phone = self.fake.phone_number() if s.chance(0.7) else None
        elif reporter_type == "CONFIDENTIAL":
            reporter_email = self.fake.email()
            reporter_phone = self.fake.phone_number() if s.chance(0.5) else None

        status = intake_status(intake_type, s)

        location_name = location_city = location_state = location_country = None
        if s.chance(0.6):
            location_name = f"{self.fake.company()} Office"
            location_city = self.fake.city()
            location_state = self.fake.state()
            location_country = COUNTRY_BY_REPORTING_REGION[region]

        ai_summary = ai_risk_score = None
        if s.chance(0.3):
            ai_summary = " ".join(self.fake.sentences(2))
            ai_risk_score = round(s.uniform(0.2, 0.9), 3)

        custom_fields = None
        if incident is not None or edge_case is not None:
            custom_fields = {}
            if incident is not None:
                custom_fields["linked_incident"] = incident.code
                custom_fields["is_primary_report"] = incident.records_created == 0
                incident.records_created += 1
            if edge_case is not None:
                custom_fields["edge_case"] = edge_case

        return {
            "id": self.ctx.make_id("intake_record", reference),
            "organization_id": self.ctx.organization_id,
            "reference_number": reference,
            "origin": ORIGIN_GENERATED,
            "intake_type": intake_type,
            "source_channel": channel,
            "details": details,
            "summary": details[:200] + "..." if len(details) > 500 else None,
            "reporter_type": reporter_type,
            "anonymous_access_code": access_code,
            "reporter_name": reporter_name,
            "reporter_email": reporter_email,
            "reporter_phone": reporter_phone,
            "category_id": category["id"],
            "severity": severity,
            "status": status,
            "reporting_region": region,
            "location_id": employee["location_id"],
            "location_name": location_name,
            "location_city": location_city,
            "location_state": location_state,
            "location_country": location_country,
            "ai_summary": ai_summary,
            "ai_risk_score": ai_risk_score,
            "custom_fields": custom_fields,
            "created_at": created_at,
        }
