"""
Location and Organization Generators: leaves of the pipeline.

Tables generated:
- locations
- divisions, business_units, departments, teams
- employees

Employees are generated top-down: named personas (CEO root first), then the
structure walk (business-unit heads, department heads, team leads), then bulk
contributors spread across divisions by weight. A manager is always created
before anyone reporting to them, so manager_id never points forward.
"""

import re
from collections import Counter
from datetime import timedelta

from .base import BasePhaseGenerator
from ..constants.locations import LOCATIONS, REGION_TO_REPORTING_REGION
from ..constants.organization import (
    DIVISIONS,
    EMAIL_DOMAIN,
    EMPLOYMENT_STATUS_DISTRIBUTION,
    EMPLOYEE_REGION_DISTRIBUTION,
    JOB_LEVEL_DISTRIBUTION,
    JOB_TITLES_BY_LEVEL,
    LANGUAGE_BY_REGION,
    NAMED_PERSONAS,
    TENURE_YEARS_DISTRIBUTION,
    WORK_MODE_BY_DIVISION,
)
from ..errors import MissingPrerequisiteError
from ..sampling import DistributionConfig

_EMAIL_RE = re.compile(r"[^a-z]")

DEFAULT_WORK_MODE = [("ONSITE", 40), ("HYBRID", 50), ("REMOTE", 10)]


def _email_local(first_name: str, last_name: str) -> str:
    return f"{_EMAIL_RE.sub('', first_name.lower())}.{_EMAIL_RE.sub('', last_name.lower())}"


class LocationGenerator(BasePhaseGenerator):
    """Generate the multi-region location catalog."""

    PHASE = "locations"

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Location catalog ({len(LOCATIONS)} sites)")
        now = self.ctx.current_date

        for loc in LOCATIONS:
            loc_id = self.ctx.make_id("location", loc["code"])
            row = {
                "id": loc_id,
                "organization_id": self.ctx.organization_id,
                "code": loc["code"],
                "name": loc["name"],
                "address_line1": self.fake.street_address(),
                "city": loc["city"],
                "country": loc["country"],
                "region": loc["region"],
                "reporting_region": REGION_TO_REPORTING_REGION[loc["region"]],
                "timezone": loc["timezone"],
                "is_headquarters": loc["is_headquarters"],
                "created_at": now,
            }
            self.data["locations"].append(row)
            self.ctx.location_ids[loc["code"]] = loc_id
            self.ctx.locations_by_id[loc_id] = row

        self.ctx.generated_phases.add(self.PHASE)
        by_region = Counter(loc["region"] for loc in self.data["locations"])
        print(
            f"    Generated: {len(self.data['locations'])} locations "
            f"({', '.join(f'{r} {n}' for r, n in by_region.items())})"
        )


class OrganizationGenerator(BasePhaseGenerator):
    """Generate divisions -> business units -> departments -> teams."""

    PHASE = "organization"

    def check_prerequisites(self) -> None:
        if not self.ctx.location_ids:
            raise MissingPrerequisiteError(self.PHASE, "no locations generated; teams need a home site")

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Organization structure ({len(DIVISIONS)} divisions)")
        now = self.ctx.current_date
        org_id = self.ctx.organization_id
        location_codes = list(self.ctx.location_ids)

        for div in DIVISIONS:
            div_id = self.ctx.make_id("division", div["code"])
            self.ctx.division_ids[div["code"]] = div_id
            self.data["divisions"].append(
                {
                    "id": div_id,
                    "organization_id": org_id,
                    "code": div["code"],
                    "name": div["name"],
                    "weight": div["weight"],
                    "created_at": now,
                }
            )
            for bu in div["business_units"]:
                bu_id = self.ctx.make_id("business_unit", bu["code"])
                self.ctx.business_unit_ids[bu["code"]] = bu_id
                self.data["business_units"].append(
                    {
                        "id": bu_id,
                        "organization_id": org_id,
                        "division_id": div_id,
                        "code": bu["code"],
                        "name": bu["name"],
                        "created_at": now,
                    }
                )
                for dept in bu["departments"]:
                    dept_id = self.ctx.make_id("department", dept["code"])
                    self.ctx.department_ids[dept["code"]] = dept_id
                    self.data["departments"].append(
                        {
                            "id": dept_id,
                            "organization_id": org_id,
                            "business_unit_id": bu_id,
                            "code": dept["code"],
                            "name": dept["name"],
                            "created_at": now,
                        }
                    )
                    for suffix in dept["teams"]:
                        team_code = f"{dept['code']}-{suffix}"
                        team_id = self.ctx.make_id("team", team_code)
                        self.ctx.team_ids[team_code] = team_id
                        home = self.sampler.choice(location_codes)
                        self.data["teams"].append(
                            {
                                "id": team_id,
                                "organization_id": org_id,
                                "department_id": dept_id,
                                "code": team_code,
                                "name": f"{dept['name']} - {suffix.title()}",
                                "location_id": self.ctx.location_ids[home],
                                "created_at": now,
                            }
                        )

        self.ctx.generated_phases.add(self.PHASE)
        print(
            f"    Generated: {len(self.data['divisions'])} divisions, "
            f"{len(self.data['business_units'])} business units, "
            f"{len(self.data['departments'])} departments, "
            f"{len(self.data['teams'])} teams"
        )


class EmployeeGenerator(BasePhaseGenerator):
    """
    Generate employees with manager-linked reporting chains.

    Named personas keep fixed names and e-mails; everyone else gets Faker
    names. direct_reports is derived once all rows exist.
    """

    PHASE = "employees"

    def __init__(self, ctx) -> None:
        super().__init__(ctx)
        self._seq = 0
        self._team_paths: dict[str, tuple[str, str, str]] = {}
        self._locations_by_region: dict[str, list[str]] = {}

    def check_prerequisites(self) -> None:
        minimum = self.config.prerequisites["min_location_count"]
        if len(self.ctx.location_ids) < minimum:
            raise MissingPrerequisiteError(
                self.PHASE,
                f"found {len(self.ctx.location_ids)} locations, at least {minimum} required",
            )
        if not self.ctx.team_ids:
            raise MissingPrerequisiteError(self.PHASE, "no teams generated")

    def generate(self) -> None:
        target = self.config.volumes["employees"]
        print(f"  Phase {self.PHASE}: Employees ({target:,} target)")

        for div in DIVISIONS:
            for bu in div["business_units"]:
                for dept in bu["departments"]:
                    for suffix in dept["teams"]:
                        self._team_paths[f"{dept['code']}-{suffix}"] = (div["code"], bu["code"], dept["code"])
        for loc_id, loc in self.ctx.locations_by_id.items():
            self._locations_by_region.setdefault(loc["region"], []).append(loc_id)

        self._generate_personas()
        self._generate_structure()
        self._generate_bulk(max(0, target - len(self.data["employees"])))
        self._derive_direct_reports()

        self.ctx.generated_phases.add(self.PHASE)
        levels = Counter(e["job_level"] for e in self.data["employees"])
        print(
            f"    Generated: {len(self.data['employees']):,} employees "
            f"({levels['C_SUITE']} executives, {levels['VP']} VPs, "
            f"{levels['DIRECTOR']} directors, {levels['MANAGER']:,} managers, "
            f"{levels['IC']:,} contributors)"
        )

    # =========================================================================
    # Tiers
    # =========================================================================

    def _generate_personas(self) -> None:
        for persona in NAMED_PERSONAS:
            manager_key = persona["manager"]
            row = self._employee(
                first_name=persona["first_name"],
                last_name=persona["last_name"],
                preferred_name=persona.get("preferred_name"),
                email=f"{_email_local(persona['first_name'], persona['last_name'])}@{EMAIL_DOMAIN}",
                job_title=persona["job_title"],
                job_level=persona["job_level"],
                manager_id=self.ctx.persona_ids[manager_key] if manager_key else None,
                location_id=self.ctx.location_ids[persona["location"]],
                division=persona.get("division"),
                persona_key=persona["key"],
                is_investigator=persona.get("investigator", False),
                employment_status="ACTIVE",
            )
            self.ctx.persona_ids[persona["key"]] = row["id"]
            if row["is_investigator"]:
                self.ctx.investigator_ids.append(row["id"])

    def _generate_structure(self) -> None:
        for div in DIVISIONS:
            vp_id = self.ctx.persona_ids.get(f"vp-{div['code'].lower()}", self.ctx.persona_ids["coo"])
            for bu in div["business_units"]:
                bu_head = self._employee(
                    job_title=f"Director, {bu['name']}",
                    job_level="DIRECTOR",
                    manager_id=vp_id,
                    location_id=self._sample_location(),
                    division=div["code"],
                    business_unit=bu["code"],
                )
                for dept in bu["departments"]:
                    dept_head = self._employee(
                        job_title=f"Senior Manager, {dept['name']}",
                        job_level="MANAGER",
                        manager_id=bu_head["id"],
                        location_id=self._sample_location(),
                        division=div["code"],
                        business_unit=bu["code"],
                        department=dept["code"],
                    )
                    for suffix in dept["teams"]:
                        team_code = f"{dept['code']}-{suffix}"
                        team_location = next(
                            t["location_id"] for t in self.data["teams"] if t["code"] == team_code
                        )
                        lead = self._employee(
                            job_title=f"Team Lead, {dept['name']}",
                            job_level="MANAGER",
                            manager_id=dept_head["id"],
                            location_id=team_location,
                            division=div["code"],
                            business_unit=bu["code"],
                            department=dept["code"],
                            team=team_code,
                        )
                        self.ctx.team_lead_ids[team_code] = lead["id"]
                        self.ctx.team_members[team_code] = []

    def _generate_bulk(self, count: int) -> None:
        division_dist = DistributionConfig(
            [(d["code"], d["weight"]) for d in DIVISIONS], name="division_weight"
        )
        teams_by_division: dict[str, list[str]] = {}
        for team_code, (div_code, _, _) in self._team_paths.items():
            teams_by_division.setdefault(div_code, []).append(team_code)

        for _ in range(count):
            div_code = self.sampler.sample(division_dist)
            team_code = self.sampler.choice(teams_by_division[div_code])
            _, bu_code, dept_code = self._team_paths[team_code]
            level = self.sampler.sample(JOB_LEVEL_DISTRIBUTION)
            row = self._employee(
                job_title=self.sampler.choice(JOB_TITLES_BY_LEVEL[level]),
                job_level=level,
                manager_id=self.ctx.team_lead_ids[team_code],
                location_id=self._sample_location(),
                division=div_code,
                business_unit=bu_code,
                department=dept_code,
                team=team_code,
            )
            self.ctx.team_members[team_code].append(row["id"])

    def _derive_direct_reports(self) -> None:
        reports = Counter(e["manager_id"] for e in self.data["employees"] if e["manager_id"])
        for row in self.data["employees"]:
            row["direct_reports"] = reports.get(row["id"], 0)

    # =========================================================================
    # Row builder
    # =========================================================================

    def _sample_location(self) -> str:
        region = self.sampler.sample(EMPLOYEE_REGION_DISTRIBUTION)
        return self.sampler.choice(self._locations_by_region[region])

    def _employee(
        self,
        job_title: str,
        job_level: str,
        manager_id: str | None,
        location_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        preferred_name: str | None = None,
        email: str | None = None,
        division: str | None = None,
        business_unit: str | None = None,
        department: str | None = None,
        team: str | None = None,
        persona_key: str | None = None,
        is_investigator: bool = False,
        employment_status: str | None = None,
    ) -> dict:
        self._seq += 1
        hris_id = f"EMP-{self._seq:06d}"
        first_name = first_name or self.fake.first_name()
        last_name = last_name or self.fake.last_name()
        if email is None:
            email = f"{_email_local(first_name, last_name)}.{self._seq}@{EMAIL_DOMAIN}"

        region = self.ctx.locations_by_id[location_id]["region"]
        work_modes = WORK_MODE_BY_DIVISION.get(division, DEFAULT_WORK_MODE)
        tenure_years = self.sampler.sample(TENURE_YEARS_DISTRIBUTION)
        hire_date = self.ctx.current_date - timedelta(
            days=365 * tenure_years - self.sampler.randint(0, 364)
        )

        emp_id = self.ctx.make_id("employee", hris_id)
        row = {
            "id": emp_id,
            "organization_id": self.ctx.organization_id,
            "hris_id": hris_id,
            "persona_key": persona_key,
            "first_name": first_name,
            "last_name": last_name,
            "preferred_name": preferred_name,
            "email": email,
            "phone": self.fake.phone_number(),
            "job_title": job_title,
            "job_level": job_level,
            "manager_id": manager_id,
            "division_id": self.ctx.division_ids.get(division) if division else None,
            "business_unit_id": self.ctx.business_unit_ids.get(business_unit) if business_unit else None,
            "department_id": self.ctx.department_ids.get(department) if department else None,
            "team_id": self.ctx.team_ids.get(team) if team else None,
            "location_id": location_id,
            "region": region,
            "language": self.sampler.sample(LANGUAGE_BY_REGION[region]),
            "work_mode": self.sampler.sample(work_modes),
            "employment_status": employment_status or self.sampler.sample(EMPLOYMENT_STATUS_DISTRIBUTION),
            "hire_date": hire_date.date(),
            "is_investigator": is_investigator,
            "direct_reports": 0,
            "created_at": self.ctx.current_date,
        }
        self.data["employees"].append(row)
        self.ctx.employee_ids[hris_id] = emp_id
        self.ctx.employees_by_id[emp_id] = row
        return row
