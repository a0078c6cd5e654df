"""
Constants Package - Static reference data for demo tenant generation.

Modules:
- taxonomy: Category tree (7 parents x 4 children)
- locations: 52-site location catalog across US, EMEA and APAC
- organization: Division tree, named personas, bulk employee attributes
- distributions: Default weighted distributions, rates, seed offsets
- flagship: Hand-authored flagship storylines
- narratives: Narrative, findings and retaliation text templates
- attachers: Campaign, workflow, notification, view and report catalogs

Usage:
    from casegen.constants import CATEGORY_TAXONOMY, LOCATIONS, FLAGSHIP_CASES
"""

from .attachers import (
    CAMPAIGN_TEMPLATES,
    NOTIFICATION_TYPE_DISTRIBUTION,
    REPORT_DEFINITIONS,
    SAVED_VIEWS,
)
from .distributions import (
    CASE_STATUS_DISTRIBUTION,
    INTAKE_TYPE_DISTRIBUTION,
    INVESTIGATION_OUTCOME_DISTRIBUTION,
    MASTER_SEED,
    SEED_OFFSETS,
)
from .flagship import FLAGSHIP_CASES
from .locations import LOCATIONS
from .organization import DIVISIONS, NAMED_PERSONAS
from .taxonomy import CATEGORY_TAXONOMY

__all__ = [
    # Reference data
    "CATEGORY_TAXONOMY",
    "LOCATIONS",
    "DIVISIONS",
    "NAMED_PERSONAS",
    # Distributions
    "MASTER_SEED",
    "SEED_OFFSETS",
    "INTAKE_TYPE_DISTRIBUTION",
    "CASE_STATUS_DISTRIBUTION",
    "INVESTIGATION_OUTCOME_DISTRIBUTION",
    # Storylines
    "FLAGSHIP_CASES",
    # Attachers
    "CAMPAIGN_TEMPLATES",
    "NOTIFICATION_TYPE_DISTRIBUTION",
    "SAVED_VIEWS",
    "REPORT_DEFINITIONS",
]
