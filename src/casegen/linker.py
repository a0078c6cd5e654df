"""
Referential linker between intake records and cases.

Holds the ordered queue of committed intake records and hands them out as
case primaries, consolidation extras or flagship anchors. Each record is
consumed at most once, and every linked case gets exactly one PRIMARY
association.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterator

ROLE_PRIMARY = "PRIMARY"
ROLE_RELATED = "RELATED"


class ReferentialLinker:
    """
    Intake-record queue with consumption tracking.

    Args:
        records: Committed intake records, ordered by created_at
        make_id: Factory for deterministic association identifiers
        organization_id: Owning organization for emitted associations
    """

    def __init__(
        self,
        records: list[dict[str, Any]],
        make_id: Callable[[str, str], str],
        organization_id: str,
    ) -> None:
        self.records = list(records)
        self.make_id = make_id
        self.organization_id = organization_id
        self._consumed: set[str] = set()
        self._cursor = 0

    def __len__(self) -> int:
        return len(self.records)

    @property
    def unconsumed(self) -> int:
        return len(self.records) - len(self._consumed)

    @property
    def consumed_count(self) -> int:
        return len(self._consumed)

    def _pending(self) -> Iterator[dict[str, Any]]:
        while self._cursor < len(self.records):
            record = self.records[self._cursor]
            if record["id"] not in self._consumed:
                yield record
            self._cursor += 1

    def _take(self, record: dict[str, Any]) -> dict[str, Any]:
        self._consumed.add(record["id"])
        return record

    def next_primary(self) -> dict[str, Any] | None:
        """Earliest unconsumed record in queue order."""
        for record in self._pending():
            return self._take(record)
        return None

    def claim_matching(self, category_id: str, before: datetime | None = None) -> dict[str, Any] | None:
        """
        Earliest unconsumed record filed under category_id (and no later than
        `before`, when given), else the next record in the queue.
        """
        for record in self.records[self._cursor:]:
            if before is not None and record["created_at"] > before:
                break
            if record["id"] not in self._consumed and record["category_id"] == category_id:
                return self._take(record)
        return self.next_primary()

    def fold_extra(self, requested: int, cases_remaining: int) -> list[dict[str, Any]]:
        """
        Up to `requested` additional records for consolidation.

        Never takes more than the spare pool (unconsumed minus the primaries
        still needed by the remaining cases).
        """
        spare = self.unconsumed - cases_remaining
        extras: list[dict[str, Any]] = []
        if spare <= 0:
            return extras
        for record in self._pending():
            if len(extras) >= min(requested, spare):
                break
            extras.append(self._take(record))
        return extras

    def link(
        self,
        case: dict[str, Any],
        records: list[dict[str, Any]],
        created_at: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """
        Association rows for a case: PRIMARY for the first record, RELATED
        for the rest.
        """
        if not records:
            raise ValueError(f"Case {case['reference_number']} has no intake records to link")
        when = created_at or case["created_at"]
        rows = []
        for position, record in enumerate(records):
            rows.append(
                {
                    "id": self.make_id("intake_case_association", f"{record['id']}:{case['id']}"),
                    "organization_id": self.organization_id,
                    "intake_record_id": record["id"],
                    "case_id": case["id"],
                    "role": ROLE_PRIMARY if position == 0 else ROLE_RELATED,
                    "created_at": when,
                }
            )
        return rows
