"""
Tests for the intake/case referential linker.
"""

from datetime import datetime

import pytest

from casegen.linker import ROLE_PRIMARY, ROLE_RELATED, ReferentialLinker


def make_records(categories):
    return [
        {"id": f"r{i}", "category_id": category, "created_at": datetime(2025, 1, i + 1)}
        for i, category in enumerate(categories)
    ]


@pytest.fixture
def linker():
    records = make_records(["c1", "c2", "c1", "c3", "c2"])
    return ReferentialLinker(records, lambda entity, key: f"{entity}:{key}", "org-1")


class TestQueue:
    """Queue order and consumption tracking."""

    def test_next_primary_in_order(self, linker):
        assert [linker.next_primary()["id"] for _ in range(5)] == ["r0", "r1", "r2", "r3", "r4"]
        assert linker.next_primary() is None
        assert linker.unconsumed == 0

    def test_claim_matching_prefers_category(self, linker):
        assert linker.claim_matching("c3")["id"] == "r3"
        # r3 is skipped by the queue afterwards
        assert [linker.next_primary()["id"] for _ in range(4)] == ["r0", "r1", "r2", "r4"]

    def test_claim_matching_falls_back_to_queue(self, linker):
        assert linker.claim_matching("missing")["id"] == "r0"
        assert linker.consumed_count == 1

    def test_claim_matching_before_cutoff(self, linker):
        assert linker.claim_matching("c2", before=datetime(2025, 1, 3))["id"] == "r1"
        # r3 is the only c3 record and was filed after the cutoff
        assert linker.claim_matching("c3", before=datetime(2025, 1, 3))["id"] == "r0"

    def test_fold_extra_respects_spare_pool(self, linker):
        linker.next_primary()
        # 4 unconsumed, 3 cases still need a primary: one spare record
        extras = linker.fold_extra(2, cases_remaining=3)
        assert [r["id"] for r in extras] == ["r1"]
        assert linker.fold_extra(2, cases_remaining=3) == []

    def test_fold_extra_without_spare(self, linker):
        assert linker.fold_extra(2, cases_remaining=5) == []
        assert linker.unconsumed == 5


class TestLink:
    """Association rows."""

    def test_one_primary_then_related(self, linker):
        case = {"id": "case-1", "reference_number": "CASE-2025-00001", "created_at": datetime(2025, 2, 1)}
        records = [linker.next_primary(), linker.next_primary(), linker.next_primary()]
        rows = linker.link(case, records)
        assert [r["role"] for r in rows] == [ROLE_PRIMARY, ROLE_RELATED, ROLE_RELATED]
        assert {r["case_id"] for r in rows} == {"case-1"}
        assert [r["intake_record_id"] for r in rows] == ["r0", "r1", "r2"]
        assert all(r["organization_id"] == "org-1" for r in rows)
        assert all(r["created_at"] == case["created_at"] for r in rows)
        assert rows[0]["id"] == "intake_case_association:r0:case-1"

    def test_no_records_rejected(self, linker):
        case = {"id": "case-1", "reference_number": "CASE-2025-00001", "created_at": datetime(2025, 2, 1)}
        with pytest.raises(ValueError, match="no intake records"):
            linker.link(case, [])
