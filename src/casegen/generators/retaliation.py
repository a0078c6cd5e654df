"""
Retaliation Generator: follow-up reports filed after a closed case.

Tables generated:
- intake_records (origin "retaliation")
- cases (origin "retaliation")
- intake_case_associations
- case_links

A sample of closed cases gets a follow-up hotline report under HAR-RET,
dated 30-90 days after the original closed. Follow-ups that would land after
the current date are skipped. The follow-up case links back to the original
through a RETALIATION_FOLLOW_UP case link.
"""

from datetime import timedelta

from .base import BasePhaseGenerator
from .cases import case_row
from .intake import ORIGIN_GENERATED
from .. import narrative
from ..constants.narratives import RETALIATION_TYPES
from ..errors import MissingPrerequisiteError
from ..linker import ReferentialLinker
from ..sampling import DistributionConfig

ORIGIN_RETALIATION = "retaliation"
RETALIATION_CATEGORY = "HAR-RET"
LINK_TYPE = "RETALIATION_FOLLOW_UP"

DAYS_AFTER_ORIGINAL = (30, 90)
YEARS_PLACEHOLDER = (2, 7)
REPORTER_LINK_RATE = 0.80
# Follow-ups younger than this stay open
OPEN_WINDOW_DAYS = 30

_NARRATIVES = {name: snippets for name, _, snippets in RETALIATION_TYPES}


def retaliation_details(days_after: int, snippet: str) -> str:
    return (
        "I am filing this report because I believe I am experiencing retaliation "
        "for my previous complaint.\n\n"
        f"My original report was filed approximately {days_after} days ago.\n\n"
        f"{snippet}\n\n"
        "I request that this be treated as a retaliation complaint and "
        "investigated accordingly."
    )


class RetaliationGenerator(BasePhaseGenerator):
    """Generate retaliation follow-up chains for closed cases."""

    PHASE = "retaliation"

    def check_prerequisites(self) -> None:
        if RETALIATION_CATEGORY not in self.ctx.category_ids:
            raise MissingPrerequisiteError(
                self.PHASE, f"category {RETALIATION_CATEGORY} is not in the taxonomy"
            )

    def generate(self) -> None:
        target = self.config.volumes["retaliation_chains"]
        print(f"  Phase {self.PHASE}: Retaliation chains (up to {target})")

        closed = self.ctx.read_back(
            "cases", {"origin": ORIGIN_GENERATED, "status": "CLOSED"}, ("reference_number",)
        )
        originals = self.sampler.sample_k(closed, min(target, len(closed)))
        type_dist = DistributionConfig(
            [(name, weight) for name, weight, _ in RETALIATION_TYPES], name="retaliation_type"
        )
        linker = ReferentialLinker([], self.ctx.make_id, self.ctx.organization_id)

        created = skipped = 0
        for original in originals:
            if self._generate_chain(original, created + 1, type_dist, linker):
                created += 1
            else:
                skipped += 1

        self.ctx.generated_phases.add(self.PHASE)
        print(
            f"    Generated: {created} follow-up cases "
            f"({skipped} skipped past the current date)"
        )

    def _generate_chain(self, original: dict, n: int, type_dist, linker) -> bool:
        s = self.sampler
        now = self.ctx.current_date

        retaliation_type = s.sample(type_dist)
        days_after = s.randint(*DAYS_AFTER_ORIGINAL)
        link_type = "reporter" if s.chance(REPORTER_LINK_RATE) else "witness"
        snippet = s.choice(_NARRATIVES[retaliation_type]).replace(
            "{years}", str(s.randint(*YEARS_PLACEHOLDER))
        )

        anchor = original["closed_at"] or original["updated_at"]
        location = self.ctx.locations_by_id.get(original["location_id"])
        region = location["reporting_region"] if location else "AMERICAS"
        created_at = self.temporal.adjust_for_region(
            (anchor + timedelta(days=days_after)).replace(hour=0, minute=0, second=0, microsecond=0),
            region,
        )
        if created_at >= now:
            return False

        details = retaliation_details(days_after, snippet)
        severity = "HIGH" if retaliation_type == "termination_threat" else "MEDIUM"
        category_id = self.ctx.category_ids[RETALIATION_CATEGORY]
        if link_type == "reporter":
            reporter_type = original["reporter_type"] or "IDENTIFIED"
        else:
            reporter_type = "IDENTIFIED"
        access_code = s.token(12) if reporter_type == "ANONYMOUS" else None

        intake = self._intake_record(
            n, created_at, details, severity, category_id, reporter_type, access_code, original, region
        )
        self.data["intake_records"].append(intake)

        case_created = min(created_at + timedelta(hours=s.randint(1, 4)), now)
        if (now - case_created).days < OPEN_WINDOW_DAYS:
            status, updated_at, closed_at = "OPEN", case_created, None
        else:
            duration = s.randint(*self.config.case_timing["medium"])
            status = "CLOSED"
            updated_at = closed_at = min(case_created + timedelta(days=duration), now)

        chain = {
            "retaliation_type": retaliation_type,
            "original_case_id": original["id"],
            "days_after_original": days_after,
            "link_type": link_type,
        }
        case = case_row(
            self.ctx,
            f"CASE-{case_created.year}-R{n:04d}",
            origin=ORIGIN_RETALIATION,
            status=status,
            status_rationale="Investigation complete" if closed_at else None,
            priority="HIGH",
            severity=severity,
            complexity="medium",
            source_channel="HOTLINE",
            category_id=category_id,
            location_id=original["location_id"],
            reporter_type=reporter_type,
            anonymous_access_code=access_code,
            subject_employee_id=original["subject_employee_id"],
            subject_team_id=original["subject_team_id"],
            details=details,
            summary=narrative.truncate(details),
            tags=["retaliation-follow-up"],
            custom_fields=dict(chain, is_retaliation=True),
            created_at=case_created,
            updated_at=updated_at,
            closed_at=closed_at,
        )
        self.data["cases"].append(case)
        self.data["intake_case_associations"].extend(linker.link(case, [intake]))
        self.ctx.case_ids[case["reference_number"]] = case["id"]

        self.data["case_links"].append(
            {
                "id": self.ctx.make_id("case_link", f"{original['id']}:{case['id']}"),
                "organization_id": self.ctx.organization_id,
                "source_case_id": original["id"],
                "target_case_id": case["id"],
                "link_type": LINK_TYPE,
                "metadata": chain,
                "created_at": case_created,
            }
        )
        return True

    def _intake_record(
        self, n, created_at, details, severity, category_id, reporter_type, access_code, original, region
    ) -> dict:
        reference = f"RIU-{created_at.year}-R{n:04d}"
        identified = reporter_type == "IDENTIFIED"
        return {
            "id": self.ctx.make_id("intake_record", reference),
            "organization_id": self.ctx.organization_id,
            "reference_number": reference,
            "origin": ORIGIN_RETALIATION,
            "intake_type": "HOTLINE_REPORT",
            "source_channel": "PHONE",
            "details": details,
            "summary": None,
            "reporter_type": reporter_type,
            "anonymous_access_code": access_code,
            "reporter_name": self.fake.name() if identified else None,
            "reporter_email": self.fake.email() if reporter_type != "ANONYMOUS" else None,
            "reporter_phone": None,
            "category_id": category_id,
            "severity": severity,
            "status": "RELEASED",
            "reporting_region": region,
            "location_id": original["location_id"],
            "location_name": None,
            "location_city": None,
            "location_state": None,
            "location_country": None,
            "ai_summary": None,
            "ai_risk_score": None,
            "custom_fields": {"retaliation_for": original["reference_number"]},
            "created_at": created_at,
        }
