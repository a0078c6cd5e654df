"""
Taxonomy Generator: hierarchical category tree.

Tables generated:
- categories

Parents are emitted before their children, so every parent_id refers to a
row earlier in the table. Children inherit severity, SLA days and
requires_investigation from their parent; anonymity rate is inherited
unless the child overrides it.
"""

import re

from .base import BasePhaseGenerator
from ..constants.taxonomy import CATEGORY_TAXONOMY

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_RE.sub("-", name.lower()).strip("-")


class TaxonomyGenerator(BasePhaseGenerator):
    """Generate the category taxonomy (7 parents x 4 children)."""

    PHASE = "taxonomy"

    def generate(self) -> None:
        print(f"  Phase {self.PHASE}: Category taxonomy ({len(CATEGORY_TAXONOMY)} parents)")
        now = self.ctx.current_date
        org_id = self.ctx.organization_id

        for sort_order, parent in enumerate(CATEGORY_TAXONOMY):
            parent_path = f"/{slugify(parent['name'])}"
            parent_row = {
                "id": self.ctx.make_id("category", parent["code"]),
                "organization_id": org_id,
                "code": parent["code"],
                "name": parent["name"],
                "parent_id": None,
                "level": 0,
                "path": parent_path,
                "severity_default": parent["severity"],
                "sla_days": parent["sla_days"],
                "requires_investigation": parent["requires_investigation"],
                "anonymity_rate": parent["anonymity_rate"],
                "weight": parent["weight"],
                "sort_order": sort_order,
                "created_at": now,
            }
            self._add(parent_row)

            for child_order, child in enumerate(parent["children"]):
                self._add(
                    {
                        "id": self.ctx.make_id("category", child["code"]),
                        "organization_id": org_id,
                        "code": child["code"],
                        "name": child["name"],
                        "parent_id": parent_row["id"],
                        "level": 1,
                        "path": f"{parent_path}/{slugify(child['name'])}",
                        "severity_default": parent_row["severity_default"],
                        "sla_days": parent_row["sla_days"],
                        "requires_investigation": parent_row["requires_investigation"],
                        "anonymity_rate": child.get("anonymity_rate", parent_row["anonymity_rate"]),
                        "weight": None,
                        "sort_order": child_order,
                        "created_at": now,
                    }
                )

        self.ctx.generated_phases.add(self.PHASE)
        parents = sum(1 for c in self.data["categories"] if c["level"] == 0)
        print(
            f"    Generated: {len(self.data['categories'])} categories "
            f"({parents} parents, {len(self.data['categories']) - parents} children)"
        )

    def _add(self, row: dict) -> None:
        self.data["categories"].append(row)
        self.ctx.category_ids[row["code"]] = row["id"]
        self.ctx.categories_by_id[row["id"]] = row
