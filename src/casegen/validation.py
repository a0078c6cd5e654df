"""
Validation checks for a generated tenant.

Contains:
- Case ratio (cases per intake record)
- Case status distribution
- Investigation outcome coupling and substantiation rate
- Case and investigation timelines
- Pattern pool quotas
- Intake/case associations
- Organization tree shape
- Flagship fidelity

Each check returns (passed, message). Distribution checks are only
evaluated over populations large enough for the tolerance to be meaningful.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

import networkx as nx

from .constants.flagship import FLAGSHIP_CASES

if TYPE_CHECKING:
    from .generators import GenerationContext

MIN_STATUS_POPULATION = 1000
MIN_OUTCOME_POPULATION = 500
CASE_RATIO_TOLERANCE = 0.01
STATUS_TOLERANCE = 0.03
SUBSTANTIATION_TOLERANCE = 0.05

_RATIO_ORIGINS = ("generated", "flagship")


class DataValidator:
    """
    Validator for one run's generated rows.

    Works on GenerationContext.data, so it sees everything the run produced
    whether or not the store skipped it as a duplicate.
    """

    def __init__(self, ctx: GenerationContext) -> None:
        self.ctx = ctx

    @property
    def data(self) -> dict[str, list[dict]]:
        return self.ctx.data

    def _derived_cases(self) -> list[dict]:
        return [c for c in self.data["cases"] if c["origin"] in _RATIO_ORIGINS]

    def validate_case_ratio(self) -> tuple[bool, str]:
        """Derived case count matches round(intake count x case_ratio)."""
        cases = self._derived_cases()
        target = self.ctx.config.case_target
        if not cases:
            return False, "No cases generated"
        tolerance = max(1, round(target * CASE_RATIO_TOLERANCE))
        if abs(len(cases) - target) <= tolerance:
            return True, f"{len(cases):,} cases for a target of {target:,}"
        return False, f"{len(cases):,} cases (target: {target:,} +/- {tolerance})"

    def validate_status_distribution(self) -> tuple[bool, str]:
        """CLOSED fraction within 3 points of the configured target."""
        cases = self._derived_cases()
        if len(cases) < MIN_STATUS_POPULATION:
            return True, f"{len(cases)} cases, below {MIN_STATUS_POPULATION}; not evaluated"
        target = self.ctx.config.distribution("case_status").probabilities().get("CLOSED", 0.0)
        closed = sum(1 for c in cases if c["status"] == "CLOSED") / len(cases)
        if abs(closed - target) <= STATUS_TOLERANCE:
            return True, f"CLOSED = {closed:.1%} (target {target:.0%})"
        return False, f"CLOSED = {closed:.1%} (target {target:.0%} +/- {STATUS_TOLERANCE:.0%})"

    def validate_outcomes(self) -> tuple[bool, str]:
        """
        Outcome is set if and only if the investigation is CLOSED; root cause
        only with SUBSTANTIATED; substantiation rate near its target.
        """
        investigations = self.data["investigations"]
        if not investigations:
            return False, "No investigations generated"

        errors = []
        mismatched = [
            i for i in investigations if (i["outcome"] is not None) != (i["status"] == "CLOSED")
        ]
        if mismatched:
            errors.append(f"{len(mismatched)} investigations with outcome/status mismatch")
        stray_root_causes = [
            i for i in investigations if i["root_cause"] and i["outcome"] != "SUBSTANTIATED"
        ]
        if stray_root_causes:
            errors.append(f"{len(stray_root_causes)} root causes on non-substantiated outcomes")

        closed = [i for i in investigations if i["status"] == "CLOSED"]
        message = f"{len(closed):,} closed investigations"
        if len(closed) >= MIN_OUTCOME_POPULATION:
            target = self.ctx.config.distribution("investigation_outcome").probabilities().get(
                "SUBSTANTIATED", 0.0
            )
            rate = sum(1 for i in closed if i["outcome"] == "SUBSTANTIATED") / len(closed)
            message += f", substantiated = {rate:.1%}"
            if abs(rate - target) > SUBSTANTIATION_TOLERANCE:
                errors.append(f"substantiated = {rate:.1%} (target {target:.0%})")

        if errors:
            return False, "; ".join(errors)
        return True, message

    def validate_timelines(self) -> tuple[bool, str]:
        """created_at <= updated_at <= current date for every case and investigation."""
        now = self.ctx.current_date
        errors = []

        bad_cases = [
            c for c in self.data["cases"]
            if not (c["created_at"] <= c["updated_at"] <= now)
            or (c["closed_at"] is not None and not c["created_at"] <= c["closed_at"] <= now)
        ]
        if bad_cases:
            errors.append(f"{len(bad_cases)} cases with invalid timelines")

        bad_investigations = [
            i for i in self.data["investigations"]
            if i["closed_at"] is not None and not i["created_at"] <= i["closed_at"] <= now
        ]
        if bad_investigations:
            errors.append(f"{len(bad_investigations)} investigations closed outside their window")

        future_intake = [r for r in self.data["intake_records"] if r["created_at"] > now]
        if future_intake:
            errors.append(f"{len(future_intake)} intake records after the current date")

        if errors:
            return False, "; ".join(errors)
        return True, f"{len(self.data['cases']):,} case timelines valid"

    def validate_pool_quotas(self) -> tuple[bool, str]:
        """consumed <= quota for every repeat subject and hotspot manager."""
        patterns = self.ctx.patterns
        if patterns is None:
            return False, "Pattern pools were never built"
        over = [s for s in patterns.repeat_subjects if s.consumed > s.quota]
        over += [h for h in patterns.hotspots if h.consumed > h.quota]
        if over:
            return False, f"{len(over)} pool entries over quota"
        summary = patterns.summary()
        return True, (
            f"repeat subjects {summary['repeat_subjects']['consumed']}/"
            f"{summary['repeat_subjects']['quota']}, hotspots "
            f"{summary['hotspots']['consumed']}/{summary['hotspots']['quota']}"
        )

    def validate_associations(self) -> tuple[bool, str]:
        """Exactly one PRIMARY per case; no intake record linked twice."""
        associations = self.data["intake_case_associations"]
        primaries = Counter(a["case_id"] for a in associations if a["role"] == "PRIMARY")
        errors = []

        missing = [c for c in self.data["cases"] if primaries.get(c["id"], 0) != 1]
        if missing:
            errors.append(f"{len(missing)} cases without exactly one PRIMARY")

        per_record = Counter(a["intake_record_id"] for a in associations)
        reused = [rid for rid, count in per_record.items() if count > 1]
        if reused:
            errors.append(f"{len(reused)} intake records linked more than once")

        if errors:
            return False, "; ".join(errors)
        related = sum(1 for a in associations if a["role"] == "RELATED")
        return True, f"{len(associations):,} associations ({related} RELATED)"

    def validate_org_tree(self) -> tuple[bool, str]:
        """
        Reporting lines form one tree rooted at the single top employee, and
        the division > business unit > department > team chain is a tree.
        """
        employees = self.data["employees"]
        if not employees:
            return False, "No employees generated"

        reporting = nx.DiGraph()
        reporting.add_nodes_from(e["id"] for e in employees)
        for e in employees:
            if e["manager_id"] is not None:
                reporting.add_edge(e["manager_id"], e["id"])
        if reporting.number_of_nodes() != len(employees):
            return False, "Manager references outside the employee set"
        if not nx.is_arborescence(reporting):
            roots = [n for n, d in reporting.in_degree() if d == 0]
            return False, f"Reporting lines are not a single tree ({len(roots)} roots)"

        structure = nx.DiGraph()
        structure.add_node("root")
        for div in self.data["divisions"]:
            structure.add_edge("root", div["id"])
        for bu in self.data["business_units"]:
            structure.add_edge(bu["division_id"], bu["id"])
        for dept in self.data["departments"]:
            structure.add_edge(dept["business_unit_id"], dept["id"])
        for team in self.data["teams"]:
            structure.add_edge(team["department_id"], team["id"])
        if not nx.is_arborescence(structure):
            return False, "Organization structure is not a tree"

        depth = nx.dag_longest_path_length(reporting)
        return True, f"{len(employees):,} employees, reporting depth {depth}"

    def validate_flagships(self) -> tuple[bool, str]:
        """Flagship cases match their payload, including investigation outcomes."""
        cases = {c["reference_number"]: c for c in self.data["cases"] if c["origin"] == "flagship"}
        expected = FLAGSHIP_CASES[: min(len(FLAGSHIP_CASES), self.ctx.config.case_target)]
        investigations: dict[str, list[dict]] = {}
        for inv in self.data["investigations"]:
            investigations.setdefault(inv["case_id"], []).append(inv)

        errors = []
        for payload in expected:
            reference = f"{payload['reference_prefix']}-0001"
            case = cases.get(reference)
            if case is None:
                errors.append(f"{reference} missing")
                continue
            if (case["status"], case["severity"]) != (payload["status"], payload["severity"]):
                errors.append(f"{reference} status/severity differ from payload")
            found = investigations.get(case["id"], [])
            if self.data["investigations"] and len(found) != payload["investigation_count"]:
                errors.append(
                    f"{reference} has {len(found)} investigations, expected {payload['investigation_count']}"
                )
            if payload["outcome"] is not None and any(i["outcome"] != payload["outcome"] for i in found):
                errors.append(f"{reference} outcome differs from {payload['outcome']}")

        if errors:
            return False, "; ".join(errors)
        return True, f"{len(expected)} flagship cases match their payloads"

    def run_all_validations(self) -> list[tuple[str, bool, str]]:
        """
        Run all validation checks.

        Returns:
            List of (check_name, passed, message) tuples
        """
        validations = [
            ("case_ratio", self.validate_case_ratio),
            ("status_distribution", self.validate_status_distribution),
            ("outcomes", self.validate_outcomes),
            ("timelines", self.validate_timelines),
            ("pool_quotas", self.validate_pool_quotas),
            ("associations", self.validate_associations),
            ("org_tree", self.validate_org_tree),
            ("flagships", self.validate_flagships),
        ]
        return [(name, *check()) for name, check in validations]

    def print_validation_report(self) -> bool:
        """
        Run all validations and print a summary.

        Returns:
            True if all validations passed, False otherwise
        """
        print()
        print("=" * 60)
        print("Validation Suite")
        print("=" * 60)
        results = self.run_all_validations()
        passed_checks = sum(1 for _, ok, _ in results if ok)
        print(f"Validation: {passed_checks}/{len(results)} checks passed")
        for name, ok, message in results:
            status = "+" if ok else "x"
            print(f"  {status} {name}: {message}")
        return passed_checks == len(results)
