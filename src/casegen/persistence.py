"""
Batch persistence adapter and record stores.

Flow: generator rows -> BatchPersistenceAdapter (buffer, chunk, retry once)
-> RecordStore.insert_batch (insert, skip on natural-key conflict).

Usage:
    store = PostgresStore(get_connection(dsn))
    adapter = BatchPersistenceAdapter(store, batch_size=100)
    adapter.tracker.mark_committed("organizations", 1)

    adapter.add("categories", rows)
    adapter.flush("categories")

A table may only flush after every parent table in TABLES has been
committed. Each batch is one unit of work: a batch that fails twice raises
PersistenceBatchError and earlier batches stay committed.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from importlib import resources
from typing import Any, Iterable

import psycopg2
from psycopg2.extensions import connection as PgConnection
from psycopg2.extras import Json, RealDictCursor, execute_values

from .errors import MissingPrerequisiteError, PersistenceBatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSpec:
    """
    Persistence metadata for one table.

    Attributes:
        name: Table name
        natural_key: Columns of the uniqueness constraint used to skip duplicates
        parents: Tables that must be committed before this one flushes
        json_columns: Columns stored as JSONB
    """

    name: str
    natural_key: tuple[str, ...]
    parents: tuple[str, ...] = ()
    json_columns: tuple[str, ...] = ()


_ORG = ("organizations",)

# Declared in dependency order
TABLES: dict[str, TableSpec] = {
    spec.name: spec
    for spec in (
        TableSpec("organizations", ("slug",)),
        TableSpec("categories", ("organization_id", "code"), _ORG),
        TableSpec("locations", ("organization_id", "code"), _ORG),
        TableSpec("divisions", ("organization_id", "code"), _ORG),
        TableSpec("business_units", ("organization_id", "code"), ("divisions",)),
        TableSpec("departments", ("organization_id", "code"), ("business_units",)),
        TableSpec("teams", ("organization_id", "code"), ("departments",)),
        TableSpec("employees", ("organization_id", "hris_id"), ("locations", "teams")),
        TableSpec(
            "intake_records",
            ("organization_id", "reference_number"),
            ("categories", "locations", "employees"),
            ("custom_fields",),
        ),
        TableSpec(
            "cases",
            ("organization_id", "reference_number"),
            ("categories", "locations", "employees", "intake_records"),
            ("tags", "custom_fields"),
        ),
        TableSpec(
            "intake_case_associations",
            ("intake_record_id", "case_id"),
            ("intake_records", "cases"),
        ),
        TableSpec("case_links", ("source_case_id", "target_case_id"), ("cases",), ("metadata",)),
        TableSpec(
            "investigations",
            ("case_id", "investigation_number"),
            ("cases", "employees"),
            ("investigator_ids", "reassignment_history"),
        ),
        TableSpec("campaigns", ("organization_id", "code"), ("employees",)),
        TableSpec("campaign_responses", ("campaign_id", "intake_record_id"), ("campaigns", "intake_records")),
        TableSpec(
            "workflow_instances",
            ("organization_id", "code"),
            ("cases", "intake_records", "employees"),
            ("step_states",),
        ),
        TableSpec("notifications", ("organization_id", "code"), ("employees", "cases")),
        TableSpec("saved_views", ("organization_id", "code"), ("employees",), ("columns", "filters", "sort")),
        TableSpec("ai_conversations", ("organization_id", "code"), ("cases", "employees"), ("messages",)),
        TableSpec("reports", ("organization_id", "code"), ("employees",), ("config",)),
        TableSpec(
            "audit_logs",
            ("organization_id", "code"),
            ("cases", "investigations", "employees"),
            ("changes", "context"),
        ),
    )
}

TABLE_ORDER: list[str] = list(TABLES)


class DependencyTracker:
    """
    Tracks which tables are committed so flushes respect FK order.

    A table can flush only once ALL its parent tables are committed.

    Attributes:
        parents: Dict mapping each table to its parent tables
        committed: Set of tables with at least one completed flush
        row_counts: Rows inserted per table, accumulated across flushes
    """

    __slots__ = ("parents", "committed", "row_counts")

    def __init__(self, parents: dict[str, Iterable[str]] | None = None) -> None:
        if parents is None:
            parents = {name: spec.parents for name, spec in TABLES.items()}
        self.parents = {table: tuple(deps) for table, deps in parents.items()}
        self.committed: set[str] = set()
        self.row_counts: dict[str, int] = {}

    def can_flush(self, table: str) -> bool:
        return all(parent in self.committed for parent in self.parents.get(table, ()))

    def missing_parents(self, table: str) -> list[str]:
        return [p for p in self.parents.get(table, ()) if p not in self.committed]

    def mark_committed(self, table: str, row_count: int = 0) -> None:
        self.committed.add(table)
        self.row_counts[table] = self.row_counts.get(table, 0) + row_count

    def is_committed(self, table: str) -> bool:
        return table in self.committed

    def get_summary(self) -> dict[str, Any]:
        """Return summary of tracker state."""
        return {
            "committed_count": len(self.committed),
            "total_rows": sum(self.row_counts.values()),
            "blocked": {
                table: self.missing_parents(table)
                for table in self.parents
                if table not in self.committed and not self.can_flush(table)
            },
        }


# =============================================================================
# Stores
# =============================================================================


class RecordStore(ABC):
    """
    External store protocol.

    Implementations insert with duplicate-skipping on each table's natural
    key, and serve filtered reads of committed rows.
    """

    @abstractmethod
    def insert_batch(self, table: str, rows: list[dict[str, Any]]) -> int:
        """Insert rows, skipping natural-key conflicts. Returns rows actually inserted."""

    @abstractmethod
    def fetch(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        """Committed rows matching all equality filters."""

    @abstractmethod
    def count(self, table: str, filters: dict[str, Any] | None = None) -> int:
        pass

    def find_organization(self, slug: str) -> dict[str, Any] | None:
        rows = self.fetch("organizations", {"slug": slug})
        return rows[0] if rows else None

    def ensure_organization(self, organization: dict[str, Any]) -> dict[str, Any]:
        """Create the organization row unless one with the same slug exists."""
        self.insert_batch("organizations", [organization])
        found = self.find_organization(organization["slug"])
        if found is None:
            raise MissingPrerequisiteError(
                "organization", f"organization '{organization['slug']}' not readable after insert"
            )
        return found

    def close(self) -> None:
        pass


class InMemoryStore(RecordStore):
    """
    Dict-backed store keyed by natural key.

    Args:
        fail_on: Table -> number of upcoming insert_batch calls that raise,
            for exercising the retry path
    """

    def __init__(self, fail_on: dict[str, int] | None = None) -> None:
        self.tables: dict[str, dict[tuple, dict[str, Any]]] = {name: {} for name in TABLES}
        self.fail_on = dict(fail_on or {})
        self.insert_calls: dict[str, int] = {}

    def insert_batch(self, table: str, rows: list[dict[str, Any]]) -> int:
        spec = TABLES[table]
        self.insert_calls[table] = self.insert_calls.get(table, 0) + 1
        if self.fail_on.get(table, 0) > 0:
            self.fail_on[table] -= 1
            raise RuntimeError(f"injected failure writing {table}")

        stored = self.tables[table]
        inserted = 0
        for row in rows:
            key = tuple(row[col] for col in spec.natural_key)
            if key in stored:
                continue
            stored[key] = copy.deepcopy(row)
            inserted += 1
        return inserted

    def fetch(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        filters = filters or {}
        rows = [
            copy.deepcopy(row)
            for row in self.tables[table].values()
            if all(row.get(col) == value for col, value in filters.items())
        ]
        order = list(order_by)
        if order:
            rows.sort(key=lambda r: tuple(r[col] for col in order))
        return rows

    def count(self, table: str, filters: dict[str, Any] | None = None) -> int:
        if not filters:
            return len(self.tables[table])
        return len(self.fetch(table, filters))


def get_connection(dsn: str) -> PgConnection:
    """
    Get a PostgreSQL connection.

    Args:
        dsn: libpq connection string or URL

    Returns:
        PostgreSQL connection
    """
    return psycopg2.connect(dsn)


class PostgresStore(RecordStore):
    """
    PostgreSQL store using INSERT ... ON CONFLICT DO NOTHING.

    One commit per insert_batch call; a failing batch is rolled back before
    the error propagates.
    """

    def __init__(self, conn: PgConnection) -> None:
        self.conn = conn

    @classmethod
    def from_dsn(cls, dsn: str) -> PostgresStore:
        return cls(get_connection(dsn))

    def ensure_schema(self) -> None:
        """Create all tables from the packaged schema.sql (idempotent)."""
        ddl = resources.files("casegen").joinpath("schema.sql").read_text(encoding="utf-8")
        with self.conn.cursor() as cur:
            cur.execute(ddl)
        self.conn.commit()

    def insert_batch(self, table: str, rows: list[dict[str, Any]]) -> int:
        if not rows:
            return 0
        spec = TABLES[table]
        columns = list(rows[0])
        values = [
            tuple(
                Json(row[col]) if col in spec.json_columns and row[col] is not None else row[col]
                for col in columns
            )
            for row in rows
        ]
        query = (
            f"INSERT INTO {table} ({', '.join(columns)}) VALUES %s "
            f"ON CONFLICT ({', '.join(spec.natural_key)}) DO NOTHING RETURNING id"
        )
        try:
            with self.conn.cursor() as cur:
                inserted = execute_values(cur, query, values, page_size=len(values), fetch=True)
            self.conn.commit()
        except psycopg2.Error:
            self.conn.rollback()
            raise
        return len(inserted)

    def _where(self, filters: dict[str, Any] | None) -> tuple[str, list[Any]]:
        if not filters:
            return "", []
        clauses = [f"{col} = %s" for col in filters]
        return " WHERE " + " AND ".join(clauses), list(filters.values())

    def fetch(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: Iterable[str] = (),
    ) -> list[dict[str, Any]]:
        if table not in TABLES:
            raise ValueError(f"Unknown table '{table}'")
        where, params = self._where(filters)
        order = list(order_by)
        query = f"SELECT * FROM {table}{where}"
        if order:
            query += " ORDER BY " + ", ".join(order)
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(query, params)
            rows = [dict(r) for r in cur.fetchall()]
        self.conn.commit()
        return rows

    def count(self, table: str, filters: dict[str, Any] | None = None) -> int:
        if table not in TABLES:
            raise ValueError(f"Unknown table '{table}'")
        where, params = self._where(filters)
        with self.conn.cursor() as cur:
            cur.execute(f"SELECT COUNT(*) FROM {table}{where}", params)
            (total,) = cur.fetchone()
        self.conn.commit()
        return int(total)

    def close(self) -> None:
        self.conn.close()


# =============================================================================
# Adapter
# =============================================================================


class BatchPersistenceAdapter:
    """
    Buffers generated rows and flushes them in bounded batches.

    Attributes:
        store: Target RecordStore
        batch_size: Maximum rows per insert_batch call
        tracker: DependencyTracker enforcing parent-before-child flushes
        stats: Table -> {"generated", "inserted", "skipped", "batches"}
    """

    def __init__(
        self,
        store: RecordStore,
        batch_size: int = 100,
        tracker: DependencyTracker | None = None,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.store = store
        self.batch_size = batch_size
        self.tracker = tracker if tracker is not None else DependencyTracker()
        self.stats: dict[str, dict[str, int]] = {}
        self._buffers: dict[str, list[dict[str, Any]]] = {}

    def add(self, table: str, rows: Iterable[dict[str, Any]]) -> None:
        if table not in TABLES:
            raise ValueError(f"Unknown table '{table}'")
        self._buffers.setdefault(table, []).extend(rows)

    def pending(self, table: str) -> int:
        return len(self._buffers.get(table, []))

    def discard(self, table: str) -> int:
        """Drop buffered rows of a table without writing them."""
        return len(self._buffers.pop(table, []))

    def flush(self, table: str) -> int:
        """
        Write the buffered rows of one table.

        Returns:
            Rows inserted (duplicates skipped by the store are not counted)

        Raises:
            ValueError: A parent table has not been committed yet
            PersistenceBatchError: A batch failed twice
        """
        if not self.tracker.can_flush(table):
            raise ValueError(
                f"Cannot flush '{table}' before {self.tracker.missing_parents(table)}"
            )
        rows = self._buffers.pop(table, [])
        stats = self.stats.setdefault(
            table, {"generated": 0, "inserted": 0, "skipped": 0, "batches": 0}
        )

        inserted = 0
        for batch_index, start in enumerate(range(0, len(rows), self.batch_size)):
            batch = rows[start:start + self.batch_size]
            count = self._write_batch(table, batch, batch_index)
            inserted += count
            stats["batches"] += 1

        stats["generated"] += len(rows)
        stats["inserted"] += inserted
        stats["skipped"] += len(rows) - inserted
        self.tracker.mark_committed(table, inserted)
        return inserted

    def flush_tables(self, tables: Iterable[str]) -> dict[str, int]:
        """Flush several tables in the given order."""
        return {table: self.flush(table) for table in tables}

    def _write_batch(self, table: str, batch: list[dict[str, Any]], batch_index: int) -> int:
        try:
            return self.store.insert_batch(table, batch)
        except Exception as exc:
            logger.warning(
                "Batch %d of '%s' failed (%s); retrying once", batch_index, table, exc
            )
        try:
            return self.store.insert_batch(table, batch)
        except Exception as exc:
            raise PersistenceBatchError(table, batch_index, exc) from exc

    def get_stats(self) -> dict[str, Any]:
        """Return adapter statistics."""
        return {
            "tables": {t: dict(s) for t, s in self.stats.items()},
            "total_inserted": sum(s["inserted"] for s in self.stats.values()),
            "total_skipped": sum(s["skipped"] for s in self.stats.values()),
            "tracker_summary": self.tracker.get_summary(),
        }
