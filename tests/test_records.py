"""
Tests for the core record phases: intake records, cases, retaliation
chains and investigations.

Most checks read the shared session run; prerequisite failures use a bare
store-less context.
"""

from collections import Counter, defaultdict
from datetime import date, timedelta

import pytest

from casegen.constants.distributions import INTAKE_TYPE_TO_CHANNEL
from casegen.constants.flagship import FLAGSHIP_CASES
from casegen.errors import MissingPrerequisiteError
from casegen.generators import CaseGenerator, InvestigationGenerator
from casegen.generators.cases import case_row
from casegen.generators.investigations import sla_status
from casegen.generators.retaliation import LINK_TYPE, retaliation_details
from casegen.validation import DataValidator

from conftest import REFERENCE_PHASES, make_context, make_small_config


def by_origin(rows, origin):
    return [r for r in rows if r["origin"] == origin]


def associations_by_case(data) -> dict:
    grouped = defaultdict(list)
    for assoc in data["intake_case_associations"]:
        grouped[assoc["case_id"]].append(assoc)
    return grouped


class TestIntakeRecords:
    """Immutable base facts."""

    def test_volume_and_unique_references(self, seeded_data, seeded_ctx):
        generated = by_origin(seeded_data["intake_records"], "generated")
        assert len(generated) == seeded_ctx.config.volumes["intake_records"]
        references = [r["reference_number"] for r in seeded_data["intake_records"]]
        assert len(set(references)) == len(references)

    def test_before_reference_date(self, seeded_data, seeded_ctx):
        assert all(r["created_at"] < seeded_ctx.current_date for r in seeded_data["intake_records"])

    def test_channel_follows_type(self, seeded_data):
        for record in by_origin(seeded_data["intake_records"], "generated"):
            assert record["source_channel"] == INTAKE_TYPE_TO_CHANNEL[record["intake_type"]]

    def test_reporter_details_follow_reporter_type(self, seeded_data):
        for record in seeded_data["intake_records"]:
            if record["reporter_type"] == "ANONYMOUS":
                assert record["anonymous_access_code"]
                assert record["reporter_name"] is None
            else:
                assert record["anonymous_access_code"] is None
            if record["reporter_type"] == "IDENTIFIED":
                assert record["reporter_name"]

    def test_categories_are_leaves(self, seeded_data, seeded_ctx):
        for record in seeded_data["intake_records"]:
            assert seeded_ctx.categories_by_id[record["category_id"]]["level"] == 1

    def test_edge_case_indexes(self, seeded_data):
        generated = by_origin(seeded_data["intake_records"], "generated")
        record = next(r for r in generated if r["reference_number"].endswith("-00101"))
        assert record["custom_fields"]["edge_case"] == "long"

    def test_linked_incidents_have_one_primary(self, seeded_data):
        incidents = defaultdict(list)
        for record in seeded_data["intake_records"]:
            fields = record["custom_fields"] or {}
            if "linked_incident" in fields:
                incidents[fields["linked_incident"]].append(record)
        for code, records in incidents.items():
            assert sum(1 for r in records if r["custom_fields"]["is_primary_report"]) == 1, code
            assert len({r["category_id"] for r in records}) == 1


class TestChannelMix:
    """The configured channel mix drives intake types."""

    def test_default_mix(self):
        config = make_small_config(volumes={"intake_records": 2000})
        ctx = make_context(config, *REFERENCE_PHASES, "intake")
        channels = Counter(r["source_channel"] for r in ctx.data["intake_records"])
        assert 0.55 <= channels["PHONE"] / 2000 <= 0.65
        assert 0.25 <= channels["WEB_FORM"] / 2000 <= 0.35

    def test_override_changes_output(self):
        config = make_small_config(distributions={"channel": {"PHONE": 0, "WEB_FORM": 1, "OTHER": 0}})
        ctx = make_context(config, *REFERENCE_PHASES, "intake")
        records = ctx.data["intake_records"]
        assert {r["source_channel"] for r in records} == {"WEB_FORM"}
        assert {r["intake_type"] for r in records} <= {"WEB_FORM_SUBMISSION", "INCIDENT_FORM"}


class TestShiftedReferenceDate:
    """A non-default current date with a one-year history window."""

    @pytest.fixture(scope="class")
    def shifted_ctx(self):
        config = make_small_config(
            current_date="2024-06-01", history_years=1, volumes={"intake_records": 600}
        )
        return make_context(config, *REFERENCE_PHASES, "intake", "cases")

    def test_intake_inside_window(self, shifted_ctx):
        now = shifted_ctx.current_date
        window_start = now - timedelta(days=365)
        for record in shifted_ctx.data["intake_records"]:
            assert window_start.date() <= record["created_at"].date() < now.date()

    def test_boundary_records_use_window_edges(self, shifted_ctx):
        records = shifted_ctx.data["intake_records"][500:520]
        assert all(r["custom_fields"]["edge_case"] == "boundary_date" for r in records)
        days = {r["created_at"].date() for r in records}
        assert date(2024, 2, 29) in days
        assert days <= {
            date(2023, 11, 5), date(2023, 12, 31), date(2024, 1, 1), date(2024, 2, 29), date(2024, 3, 10),
        }

    def test_cases_follow_their_intake(self, shifted_ctx):
        intake = {r["id"]: r for r in shifted_ctx.data["intake_records"]}
        cases = {c["id"]: c for c in by_origin(shifted_ctx.data["cases"], "generated")}
        for assoc in shifted_ctx.data["intake_case_associations"]:
            if assoc["case_id"] not in cases:
                continue
            assert intake[assoc["intake_record_id"]]["created_at"] <= cases[assoc["case_id"]]["created_at"]

    def test_timelines_validate(self, shifted_ctx):
        ok, message = DataValidator(shifted_ctx).validate_timelines()
        assert ok, message


class TestCases:
    """Flagship and regular cases."""

    def test_case_count_matches_ratio(self, seeded_data, seeded_ctx):
        derived = [c for c in seeded_data["cases"] if c["origin"] in ("generated", "flagship")]
        assert len(derived) == seeded_ctx.config.case_target

    def test_flagships_inserted_verbatim(self, seeded_data):
        cases = {c["reference_number"]: c for c in by_origin(seeded_data["cases"], "flagship")}
        assert len(cases) == len(FLAGSHIP_CASES)
        for payload in FLAGSHIP_CASES:
            case = cases[f"{payload['reference_prefix']}-0001"]
            assert case["status"] == payload["status"]
            assert case["severity"] == payload["severity"]
            assert case["details"] == payload["narrative"]
            assert case["custom_fields"]["flagship"] == payload["name"]
            assert "flagship" in case["tags"]

    def test_exactly_one_primary(self, seeded_data):
        grouped = associations_by_case(seeded_data)
        for case in seeded_data["cases"]:
            roles = Counter(a["role"] for a in grouped[case["id"]])
            assert roles["PRIMARY"] == 1, case["reference_number"]

    def test_intake_record_linked_at_most_once(self, seeded_data):
        counts = Counter(a["intake_record_id"] for a in seeded_data["intake_case_associations"])
        assert max(counts.values()) == 1

    def test_consolidated_reports(self, seeded_data):
        grouped = associations_by_case(seeded_data)
        for case in by_origin(seeded_data["cases"], "generated"):
            expected = (case["custom_fields"] or {}).get("consolidated_reports", 1)
            assert len(grouped[case["id"]]) == expected

    def test_created_after_primary_intake(self, seeded_data, seeded_ctx):
        intake = {r["id"]: r for r in seeded_data["intake_records"]}
        grouped = associations_by_case(seeded_data)
        for case in by_origin(seeded_data["cases"], "generated"):
            primary = next(a for a in grouped[case["id"]] if a["role"] == "PRIMARY")
            assert intake[primary["intake_record_id"]]["created_at"] <= case["created_at"]
            assert case["created_at"] <= seeded_ctx.current_date

    def test_related_reports_filed_before_case(self, seeded_data):
        intake = {r["id"]: r for r in seeded_data["intake_records"]}
        cases = {c["id"]: c for c in seeded_data["cases"]}
        related = [a for a in seeded_data["intake_case_associations"] if a["role"] == "RELATED"]
        assert related
        for assoc in related:
            assert intake[assoc["intake_record_id"]]["created_at"] <= cases[assoc["case_id"]]["created_at"]

    def test_status_timeline(self, seeded_data, seeded_ctx):
        now = seeded_ctx.current_date
        for case in seeded_data["cases"]:
            assert case["created_at"] <= case["updated_at"] <= now
            if case["status"] == "CLOSED":
                assert case["closed_at"] is not None
                assert case["created_at"] <= case["closed_at"] <= now
            else:
                assert case["closed_at"] is None

    def test_rfi_cases_have_no_subject(self, seeded_data):
        for case in by_origin(seeded_data["cases"], "generated"):
            if case["case_type"] == "RFI":
                assert case["subject_employee_id"] is None

    def test_risk_scores(self, seeded_data):
        for case in by_origin(seeded_data["cases"], "generated"):
            assert 15 <= case["ai_risk_score"] <= 100

    def test_pool_tags_match_consumption(self, seeded_data, seeded_ctx):
        summary = seeded_ctx.patterns.summary()
        tagged = Counter(t for c in seeded_data["cases"] for t in c["tags"])
        assert tagged["repeat-subject"] == summary["repeat_subjects"]["consumed"]
        assert tagged["hotspot-team"] == summary["hotspots"]["consumed"]

    def test_case_row_rejects_unknown_columns(self, reference_ctx):
        with pytest.raises(KeyError, match="colour"):
            case_row(reference_ctx, "CASE-2025-00001", colour="red")

    def test_requires_pattern_pools(self, small_config):
        ctx = make_context(small_config, "taxonomy", "locations", "organization", "employees")
        with pytest.raises(MissingPrerequisiteError, match="pattern pools"):
            CaseGenerator(ctx).check_prerequisites()

    def test_requires_intake_records(self, reference_ctx):
        reference_ctx.reseed("cases")
        with pytest.raises(MissingPrerequisiteError, match="no committed intake records"):
            CaseGenerator(reference_ctx).generate()


class TestRetaliation:
    """Follow-up chains on closed cases."""

    def test_chain_count(self, seeded_data, seeded_ctx):
        cases = by_origin(seeded_data["cases"], "retaliation")
        assert 0 < len(cases) <= seeded_ctx.config.volumes["retaliation_chains"]
        assert len(seeded_data["case_links"]) == len(cases)

    def test_links_point_at_closed_originals(self, seeded_data):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        for link in seeded_data["case_links"]:
            original = cases[link["source_case_id"]]
            follow_up = cases[link["target_case_id"]]
            assert link["link_type"] == LINK_TYPE
            assert original["origin"] == "generated"
            assert original["status"] == "CLOSED"
            assert follow_up["origin"] == "retaliation"
            assert follow_up["custom_fields"]["original_case_id"] == original["id"]
            assert follow_up["created_at"] >= original["closed_at"] + timedelta(days=29)

    def test_filed_under_retaliation_category(self, seeded_data, seeded_ctx):
        category_id = seeded_ctx.category_ids["HAR-RET"]
        for case in by_origin(seeded_data["cases"], "retaliation"):
            assert case["category_id"] == category_id
            assert "retaliation-follow-up" in case["tags"]

    def test_follow_up_intake(self, seeded_data):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        intake = by_origin(seeded_data["intake_records"], "retaliation")
        originals = {
            cases[link["source_case_id"]]["reference_number"] for link in seeded_data["case_links"]
        }
        assert {r["custom_fields"]["retaliation_for"] for r in intake} == originals
        assert all(r["intake_type"] == "HOTLINE_REPORT" for r in intake)

    def test_details_template(self):
        text = retaliation_details(45, "My manager excluded me from meetings.")
        assert "approximately 45 days ago" in text
        assert "My manager excluded me from meetings." in text


class TestInvestigations:
    """Investigations per triaged case."""

    def test_outcome_only_when_closed(self, seeded_data):
        for inv in seeded_data["investigations"]:
            assert (inv["outcome"] is not None) == (inv["status"] == "CLOSED")
            if inv["outcome"] != "SUBSTANTIATED":
                assert inv["root_cause"] is None
                assert inv["lessons_learned"] is None

    def test_closed_window(self, seeded_data, seeded_ctx):
        now = seeded_ctx.current_date
        for inv in seeded_data["investigations"]:
            if inv["status"] != "CLOSED":
                continue
            assert inv["created_at"] <= inv["closed_at"] <= now
            assert inv["findings_date"] <= inv["closed_at"]
            assert inv["closure_approved_at"] <= now
            assert inv["assigned_at"] <= inv["closed_at"]

    def test_closed_cases_have_closed_investigations(self, seeded_data):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        for inv in seeded_data["investigations"]:
            case_closed = cases[inv["case_id"]]["status"] == "CLOSED"
            assert (inv["status"] == "CLOSED") == case_closed

    def test_flagship_counts_and_outcomes(self, seeded_data):
        per_case = defaultdict(list)
        for inv in seeded_data["investigations"]:
            per_case[inv["case_id"]].append(inv)
        for case in by_origin(seeded_data["cases"], "flagship"):
            fields = case["custom_fields"]
            found = per_case[case["id"]]
            assert len(found) == fields["investigation_count"]
            assert all(inv["outcome"] == fields["outcome"] for inv in found)

    def test_regulatory_overlay(self, seeded_data):
        for inv in seeded_data["investigations"]:
            if inv["is_regulatory"]:
                assert inv["investigation_number"] == 2
                assert (inv["investigation_type"], inv["department"]) == ("FULL", "COMPLIANCE")

    def test_investigators(self, seeded_data, seeded_ctx):
        pool = set(seeded_ctx.investigator_ids)
        for inv in seeded_data["investigations"]:
            assert 1 <= len(inv["investigator_ids"]) <= 3
            assert set(inv["investigator_ids"]) <= pool
            assert inv["primary_investigator_id"] == inv["investigator_ids"][0]

    def test_unique_per_case_number(self, seeded_data):
        keys = [(inv["case_id"], inv["investigation_number"]) for inv in seeded_data["investigations"]]
        assert len(set(keys)) == len(keys)

    def test_sla_status(self):
        from datetime import datetime

        now = datetime(2026, 2, 2)
        assert sla_status(None, now) == "ON_TRACK"
        assert sla_status(now - timedelta(days=2), now) == "OVERDUE"
        assert sla_status(now + timedelta(days=3), now) == "WARNING"
        assert sla_status(now + timedelta(days=30), now) == "ON_TRACK"

    def test_requires_cases(self, small_config):
        ctx = make_context(small_config, *REFERENCE_PHASES)
        ctx.reseed("investigations")
        generator = InvestigationGenerator(ctx)
        generator.check_prerequisites()
        with pytest.raises(MissingPrerequisiteError, match="committed case"):
            generator.generate()
