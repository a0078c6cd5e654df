"""
Tests for the downstream attachers (campaigns, workflows, notifications,
saved views, AI conversations, reports, activity).
"""

from collections import Counter
from datetime import datetime

import pytest

from casegen.constants.attachers import (
    AI_CONVERSATION_OPEN_CASE_SAMPLE,
    CAMPAIGN_TEMPLATES,
    CASE_WORKFLOW_STAGES,
    POLICY_WORKFLOW_DRAFTS,
    REPORT_DEFINITIONS,
    SAVED_VIEWS,
)
from casegen.constants.organization import DEMO_USER_KEYS
from casegen.errors import MissingPrerequisiteError
from casegen.generators import ActivityGenerator, ReportGenerator
from casegen.generators.downstream import step_states

from conftest import REFERENCE_PHASES, make_context


class TestCampaigns:
    """Campaign catalog and response attribution."""

    def test_campaigns(self, seeded_data, seeded_ctx):
        campaigns = seeded_data["campaigns"]
        assert [c["code"] for c in campaigns] == [f"CMP-{n:03d}" for n in range(1, 8)]
        assert [c["campaign_type"] for c in campaigns] == [t["type"] for t in CAMPAIGN_TEMPLATES]
        for campaign in campaigns:
            assert campaign["launched_at"] < campaign["due_at"]
            assert 0 <= campaign["completed_count"] <= campaign["target_count"]
            expected = "ACTIVE" if campaign["due_at"] > seeded_ctx.current_date else "COMPLETED"
            assert campaign["status"] == expected

    def test_responses_only_for_campaign_channel(self, seeded_data):
        intake = {r["id"]: r for r in seeded_data["intake_records"]}
        campaigns = {c["id"]: c for c in seeded_data["campaigns"]}
        for response in seeded_data["campaign_responses"]:
            record = intake[response["intake_record_id"]]
            assert record["source_channel"] == "CAMPAIGN"
            assert campaigns[response["campaign_id"]]["intake_type"] == record["intake_type"]

    def test_every_campaign_record_attributed_once(self, seeded_data):
        campaign_records = [
            r for r in seeded_data["intake_records"] if r["source_channel"] == "CAMPAIGN"
        ]
        attributed = Counter(r["intake_record_id"] for r in seeded_data["campaign_responses"])
        assert len(attributed) == len(campaign_records)
        assert all(count == 1 for count in attributed.values())

    def test_intake_records_untouched(self, seeded_data, seeded_run):
        _, store, _ = seeded_run
        assert store.count("intake_records") == len(seeded_data["intake_records"])


class TestWorkflows:
    """Workflow instances and their step states."""

    def test_policy_approvals(self, seeded_data):
        policies = [w for w in seeded_data["workflow_instances"] if w["workflow_type"] == "POLICY_APPROVAL"]
        assert len(policies) == len(POLICY_WORKFLOW_DRAFTS)
        assert [w["current_step"] for w in policies] == [d["step"] for d in POLICY_WORKFLOW_DRAFTS]

    def test_case_routing_on_open_cases(self, seeded_data):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        routing = [w for w in seeded_data["workflow_instances"] if w["workflow_type"] == "CASE_ROUTING"]
        assert 0 < len(routing) <= sum(count for _, count, _ in CASE_WORKFLOW_STAGES)
        for workflow in routing:
            assert cases[workflow["case_id"]]["status"] in ("NEW", "OPEN")
        assert len({w["case_id"] for w in routing}) == len(routing)

    def test_disclosure_reviews(self, seeded_data):
        intake = {r["id"]: r for r in seeded_data["intake_records"]}
        for workflow in seeded_data["workflow_instances"]:
            if workflow["workflow_type"] == "DISCLOSURE_REVIEW":
                assert intake[workflow["intake_record_id"]]["intake_type"] == "DISCLOSURE_RESPONSE"

    def test_unique_codes(self, seeded_data):
        codes = [w["code"] for w in seeded_data["workflow_instances"]]
        assert len(set(codes)) == len(codes)

    def test_step_states(self):
        started = datetime(2026, 1, 20)
        states = step_states(["a", "b", "c", "d"], "c", started)
        assert [s["status"] for s in states] == ["completed", "completed", "in_progress", "pending"]
        assert states[2]["entered_at"] == started.isoformat()
        assert states[3]["entered_at"] is None

    def test_step_states_unknown_step_starts_at_first(self):
        states = step_states(["a", "b"], "zzz", datetime(2026, 1, 20))
        assert [s["status"] for s in states] == ["in_progress", "pending"]


class TestNotifications:
    """Per-persona notifications."""

    def test_volume_per_demo_user(self, seeded_data, seeded_ctx):
        volumes = seeded_ctx.config.volumes
        per_user = Counter(n["recipient_id"] for n in seeded_data["notifications"])
        demo_ids = {seeded_ctx.persona_ids[k] for k in DEMO_USER_KEYS}
        assert set(per_user) == demo_ids
        for count in per_user.values():
            assert volumes["notifications_min"] <= count <= volumes["notifications_max"]

    def test_read_state(self, seeded_data, seeded_ctx):
        now = seeded_ctx.current_date
        for notification in seeded_data["notifications"]:
            assert notification["is_read"] == (notification["read_at"] is not None)
            assert notification["created_at"] < now
            if notification["read_at"] is not None:
                assert notification["created_at"] <= notification["read_at"] <= now

    def test_titles_reference_linked_case(self, seeded_data):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        for notification in seeded_data["notifications"]:
            assert cases[notification["case_id"]]["reference_number"] in notification["title"]


class TestSavedViewsAndReports:
    """Static catalogs."""

    def test_saved_views(self, seeded_data):
        views = seeded_data["saved_views"]
        assert len(views) == sum(len(v) for v in SAVED_VIEWS.values()) == 10
        defaults = Counter(v["module"] for v in views if v["is_default"])
        assert defaults == Counter({module: 1 for module in SAVED_VIEWS})

    def test_reports(self, seeded_data, seeded_ctx):
        reports = seeded_data["reports"]
        assert len(reports) == len(REPORT_DEFINITIONS) == 14
        demo_ids = {seeded_ctx.persona_ids[k] for k in DEMO_USER_KEYS}
        assert all(r["owner_id"] in demo_ids for r in reports)

    def test_reports_need_demo_personas(self, small_config):
        ctx = make_context(small_config)
        ctx.reseed("reports")
        with pytest.raises(MissingPrerequisiteError, match="demo personas"):
            ReportGenerator(ctx).generate()


class TestAiConversations:
    """Assistant conversations on flagship and open cases."""

    def test_count(self, seeded_data):
        cases = seeded_data["cases"]
        flagships = sum(1 for c in cases if c["origin"] == "flagship")
        open_regular = sum(
            1 for c in cases if c["origin"] != "flagship" and c["status"] in ("NEW", "OPEN")
        )
        expected = flagships + min(AI_CONVERSATION_OPEN_CASE_SAMPLE, open_regular)
        assert len(seeded_data["ai_conversations"]) == expected

    def test_messages_ordered_and_bounded(self, seeded_data, seeded_ctx):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        now = seeded_ctx.current_date.isoformat()
        for conversation in seeded_data["ai_conversations"]:
            sent = [m["sent_at"] for m in conversation["messages"]]
            assert sent == sorted(sent)
            assert sent[-1] <= now
            assert conversation["created_at"] >= cases[conversation["case_id"]]["created_at"]
            assert cases[conversation["case_id"]]["reference_number"] in conversation["title"]


class TestActivity:
    """Audit-log timeline over cases and investigations."""

    def test_one_created_entry_per_case(self, seeded_data):
        created = Counter(
            a["entity_id"] for a in seeded_data["audit_logs"]
            if a["entity_type"] == "CASE" and a["action"] == "created"
        )
        assert set(created) == {c["id"] for c in seeded_data["cases"]}
        assert set(created.values()) == {1}

    def test_entries_inside_entity_window(self, seeded_data, seeded_ctx):
        now = seeded_ctx.current_date
        entities = {c["id"]: c for c in seeded_data["cases"]}
        entities.update({i["id"]: i for i in seeded_data["investigations"]})
        for entry in seeded_data["audit_logs"]:
            entity = entities[entry["entity_id"]]
            assert entity["created_at"] <= entry["created_at"] <= (entity["closed_at"] or now)

    def test_case_created_entry_at_creation(self, seeded_data):
        cases = {c["id"]: c for c in seeded_data["cases"]}
        for entry in seeded_data["audit_logs"]:
            if entry["entity_type"] == "CASE" and entry["action"] == "created":
                assert entry["created_at"] == cases[entry["entity_id"]]["created_at"]

    def test_actors(self, seeded_data, seeded_ctx):
        employees = seeded_ctx.employees_by_id
        for entry in seeded_data["audit_logs"]:
            assert entry["actor_type"] in ("USER", "SYSTEM", "AI")
            if entry["actor_type"] == "USER":
                assert entry["actor_id"] in employees
                assert entry["ip_address"] is not None
            else:
                assert entry["actor_id"] is None
                assert entry["ip_address"] is None
        categories = {a["action"]: a["action_category"] for a in seeded_data["audit_logs"]}
        assert categories.get("ai_enrichment", "AI") == "AI"
        assert categories.get("sla_warning", "SYSTEM") == "SYSTEM"

    def test_closed_entries_follow_status(self, seeded_data):
        investigations = {i["id"]: i for i in seeded_data["investigations"]}
        cases = {c["id"]: c for c in seeded_data["cases"]}
        for entry in seeded_data["audit_logs"]:
            if entry["entity_type"] == "INVESTIGATION" and entry["action"] == "closed":
                inv = investigations[entry["entity_id"]]
                assert inv["status"] == "CLOSED"
                assert entry["created_at"] == inv["closed_at"]
            if entry["action"] == "status_changed" and entry["changes"]["status"]["new"] == "CLOSED":
                assert cases[entry["entity_id"]]["status"] == "CLOSED"

    def test_every_investigation_started(self, seeded_data):
        started = {
            a["entity_id"] for a in seeded_data["audit_logs"]
            if a["entity_type"] == "INVESTIGATION" and a["action"] == "created"
        }
        assert started == {i["id"] for i in seeded_data["investigations"]}

    def test_new_cases_never_assigned(self, seeded_data):
        new_cases = {c["id"] for c in seeded_data["cases"] if c["status"] == "NEW"}
        for entry in seeded_data["audit_logs"]:
            if entry["action"] in ("assigned", "status_changed"):
                assert entry["entity_id"] not in new_cases

    def test_unique_codes(self, seeded_data):
        codes = [a["code"] for a in seeded_data["audit_logs"]]
        assert len(codes) == len(set(codes))

    def test_needs_committed_cases(self, small_config):
        ctx = make_context(small_config, *REFERENCE_PHASES)
        ctx.reseed("activity")
        with pytest.raises(MissingPrerequisiteError, match="no committed cases"):
            ActivityGenerator(ctx).generate()
