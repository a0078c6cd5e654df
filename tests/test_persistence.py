"""
Tests for the batch persistence adapter, dependency tracker and
in-memory store.
"""

from datetime import datetime

import pytest

from casegen.errors import MissingPrerequisiteError, PersistenceBatchError
from casegen.persistence import (
    TABLE_ORDER,
    TABLES,
    BatchPersistenceAdapter,
    DependencyTracker,
    InMemoryStore,
)

NOW = datetime(2026, 2, 2)


def category_rows(count: int, org_id: str = "org-1") -> list[dict]:
    return [
        {
            "id": f"cat-{i}",
            "organization_id": org_id,
            "code": f"C{i:03d}",
            "name": f"Category {i}",
            "created_at": NOW,
        }
        for i in range(count)
    ]


class WriteOnlyStore(InMemoryStore):
    """Store that accepts writes but never returns committed rows."""

    def fetch(self, table, filters=None, order_by=()):
        return []


class FailingAfterStore(InMemoryStore):
    """Store whose writes to one table fail once good_calls calls have succeeded."""

    def __init__(self, table: str, good_calls: int) -> None:
        super().__init__()
        self.fail_table = table
        self.good_calls = good_calls

    def insert_batch(self, table, rows):
        calls = self.insert_calls.get(table, 0)
        if table == self.fail_table and calls >= self.good_calls:
            self.insert_calls[table] = calls + 1
            raise RuntimeError("disk full")
        return super().insert_batch(table, rows)


@pytest.fixture
def adapter():
    adapter = BatchPersistenceAdapter(InMemoryStore(), batch_size=10)
    adapter.tracker.mark_committed("organizations", 1)
    return adapter


class TestTableMetadata:
    """Table catalog."""

    def test_parents_precede_children(self):
        position = {name: i for i, name in enumerate(TABLE_ORDER)}
        for name, spec in TABLES.items():
            for parent in spec.parents:
                assert position[parent] < position[name], f"{parent} must precede {name}"

    def test_every_table_has_natural_key(self):
        assert all(spec.natural_key for spec in TABLES.values())


class TestDependencyTracker:
    """Parent-before-child flush order."""

    def test_blocked_until_all_parents_committed(self):
        tracker = DependencyTracker()
        assert not tracker.can_flush("intake_case_associations")
        tracker.mark_committed("intake_records", 10)
        assert tracker.missing_parents("intake_case_associations") == ["cases"]
        tracker.mark_committed("cases", 5)
        assert tracker.can_flush("intake_case_associations")

    def test_row_counts_accumulate(self):
        tracker = DependencyTracker({"a": ()})
        tracker.mark_committed("a", 3)
        tracker.mark_committed("a", 4)
        assert tracker.row_counts["a"] == 7
        assert tracker.get_summary()["total_rows"] == 7


class TestBatchPersistenceAdapter:
    """Batching, duplicate skipping and retry."""

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            BatchPersistenceAdapter(InMemoryStore(), batch_size=0)

    def test_unknown_table(self, adapter):
        with pytest.raises(ValueError, match="Unknown table"):
            adapter.add("widgets", [])

    def test_flush_before_parent_rejected(self, adapter):
        adapter.add("cases", [{"id": "x"}])
        with pytest.raises(ValueError, match="Cannot flush 'cases'"):
            adapter.flush("cases")

    def test_batches(self, adapter):
        adapter.add("categories", category_rows(25))
        assert adapter.pending("categories") == 25
        assert adapter.flush("categories") == 25
        stats = adapter.get_stats()["tables"]["categories"]
        assert stats == {"generated": 25, "inserted": 25, "skipped": 0, "batches": 3}
        assert adapter.store.count("categories") == 25
        assert adapter.tracker.is_committed("categories")

    def test_duplicates_skipped(self, adapter):
        rows = category_rows(12)
        adapter.add("categories", rows)
        adapter.flush("categories")
        adapter.add("categories", rows)
        assert adapter.flush("categories") == 0
        stats = adapter.get_stats()
        assert stats["tables"]["categories"]["skipped"] == 12
        assert stats["total_inserted"] == 12
        assert adapter.store.count("categories") == 12

    def test_retry_once(self):
        store = InMemoryStore(fail_on={"categories": 1})
        adapter = BatchPersistenceAdapter(store, batch_size=100)
        adapter.tracker.mark_committed("organizations")
        adapter.add("categories", category_rows(5))
        assert adapter.flush("categories") == 5
        assert store.insert_calls["categories"] == 2

    def test_second_failure_raises(self):
        store = InMemoryStore(fail_on={"categories": 2})
        adapter = BatchPersistenceAdapter(store, batch_size=100)
        adapter.tracker.mark_committed("organizations")
        adapter.add("categories", category_rows(5))
        with pytest.raises(PersistenceBatchError) as exc_info:
            adapter.flush("categories")
        assert exc_info.value.table == "categories"
        assert exc_info.value.batch_index == 0
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_earlier_batches_stay_committed(self):
        store = FailingAfterStore("categories", good_calls=1)
        adapter = BatchPersistenceAdapter(store, batch_size=10)
        adapter.tracker.mark_committed("organizations")
        adapter.add("categories", category_rows(25))
        with pytest.raises(PersistenceBatchError) as exc_info:
            adapter.flush("categories")
        assert exc_info.value.batch_index == 1
        assert store.count("categories") == 10

    def test_discard(self, adapter):
        adapter.add("categories", category_rows(4))
        assert adapter.discard("categories") == 4
        assert adapter.pending("categories") == 0
        assert adapter.discard("categories") == 0


class TestInMemoryStore:
    """Natural-key storage and filtered reads."""

    def test_fetch_filters_and_orders(self):
        store = InMemoryStore()
        rows = category_rows(3, "org-1") + category_rows(2, "org-2")
        rows[0]["code"], rows[2]["code"] = "Z", "A"
        store.insert_batch("categories", rows)
        fetched = store.fetch("categories", {"organization_id": "org-1"}, ("code",))
        assert [r["code"] for r in fetched] == ["A", "C001", "Z"]
        assert store.count("categories", {"organization_id": "org-2"}) == 2
        assert store.count("categories") == 5

    def test_fetch_returns_copies(self):
        store = InMemoryStore()
        store.insert_batch("categories", category_rows(1))
        store.fetch("categories")[0]["name"] = "changed"
        assert store.fetch("categories")[0]["name"] == "Category 0"

    def test_ensure_organization_idempotent(self):
        store = InMemoryStore()
        org = {"id": "org-1", "slug": "acme-co", "name": "Acme Co.", "created_at": NOW}
        store.ensure_organization(org)
        again = store.ensure_organization(dict(org, name="Renamed"))
        assert again["name"] == "Acme Co."
        assert store.count("organizations") == 1
        assert store.find_organization("other") is None

    def test_ensure_organization_unreadable(self):
        org = {"id": "org-1", "slug": "acme-co", "name": "Acme Co.", "created_at": NOW}
        with pytest.raises(MissingPrerequisiteError, match="acme-co"):
            WriteOnlyStore().ensure_organization(org)
