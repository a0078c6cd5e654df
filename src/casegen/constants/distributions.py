"""
Default weighted distributions and timing ranges.

Every table is an ordered list of (value, weight) pairs. Order is significant:
the sampler resolves a draw that lands exactly on a cumulative boundary to the
earlier-listed value.
"""

# =============================================================================
# Run defaults
# =============================================================================

MASTER_SEED = 20260202
CURRENT_DATE = "2026-02-02"
HISTORY_YEARS = 3
ORGANIZATION_SLUG = "acme-co"
BATCH_SIZE = 100

VOLUMES: dict[str, int] = {
    "employees": 20000,
    "intake_records": 5000,
    "campaigns": 20,
    "retaliation_chains": 50,
    "notifications_min": 50,
    "notifications_max": 100,
}

# Per-domain offsets added to the master seed before each phase
SEED_OFFSETS: dict[str, int] = {
    "taxonomy": 100,
    "locations": 200,
    "organization": 300,
    "employees": 400,
    "patterns": 500,
    "campaigns": 600,
    "notifications": 700,
    "saved_views": 900,
    "reports": 950,
    "cases": 3000,
    "investigations": 3500,
    "intake": 4000,
    "activity": 5000,
    "retaliation": 5200,
    "ai_conversations": 7000,
    "workflows": 8000,
}

# =============================================================================
# Rates
# =============================================================================

RATES: dict[str, float] = {
    "case_ratio": 0.90,
    "consolidation": 0.10,
    "repeat_subject": 0.10,
    "hotspot": 0.15,
    "linked_incident": 0.05,
    "linked_incident_join": 0.10,
    "new_case_investigation": 0.50,
    "regulatory_overlay": 0.10,
    "reassignment": 0.10,
    "confidential_split": 0.25,
    "recency_bias": 0.30,
}

PREREQUISITES: dict[str, int] = {
    "min_category_count": 7,
    "min_location_count": 10,
}

# =============================================================================
# Intake records
# =============================================================================

INTAKE_TYPE_DISTRIBUTION = [
    ("HOTLINE_REPORT", 55),
    ("WEB_FORM_SUBMISSION", 25),
    ("DISCLOSURE_RESPONSE", 8),
    ("ATTESTATION_RESPONSE", 5),
    ("INCIDENT_FORM", 3),
    ("PROXY_REPORT", 2),
    ("CHATBOT_TRANSCRIPT", 1.5),
    ("SURVEY_RESPONSE", 0.5),
]

INTAKE_TYPE_TO_CHANNEL: dict[str, str] = {
    "HOTLINE_REPORT": "PHONE",
    "WEB_FORM_SUBMISSION": "WEB_FORM",
    "DISCLOSURE_RESPONSE": "CAMPAIGN",
    "ATTESTATION_RESPONSE": "CAMPAIGN",
    "INCIDENT_FORM": "WEB_FORM",
    "PROXY_REPORT": "PROXY",
    "CHATBOT_TRANSCRIPT": "CHATBOT",
    "SURVEY_RESPONSE": "CAMPAIGN",
}

SEVERITY_BY_INTAKE_TYPE: dict[str, list[tuple[str, float]]] = {
    "HOTLINE_REPORT": [("HIGH", 30), ("MEDIUM", 50), ("LOW", 20)],
    "WEB_FORM_SUBMISSION": [("HIGH", 23), ("MEDIUM", 55), ("LOW", 22)],
    "DISCLOSURE_RESPONSE": [("HIGH", 10), ("MEDIUM", 40), ("LOW", 50)],
    "ATTESTATION_RESPONSE": [("HIGH", 5), ("MEDIUM", 25), ("LOW", 70)],
    "INCIDENT_FORM": [("HIGH", 35), ("MEDIUM", 45), ("LOW", 20)],
    "PROXY_REPORT": [("HIGH", 25), ("MEDIUM", 50), ("LOW", 25)],
    "CHATBOT_TRANSCRIPT": [("HIGH", 17), ("MEDIUM", 50), ("LOW", 33)],
    "SURVEY_RESPONSE": [("HIGH", 5), ("MEDIUM", 30), ("LOW", 65)],
}

REPORTING_REGION_DISTRIBUTION = [("AMERICAS", 50), ("EMEA", 35), ("APAC", 15)]

# Channel mix: a channel bucket is drawn first, then an intake type whose
# channel falls in that bucket (weighted by INTAKE_TYPE_DISTRIBUTION). Types
# on channels not named here share the OTHER bucket.
OTHER_CHANNEL = "OTHER"
CHANNEL_DISTRIBUTION = [("PHONE", 60), ("WEB_FORM", 30), (OTHER_CHANNEL, 10)]

# Fallback anonymity split when a category carries no explicit rate
ANONYMITY_DISTRIBUTION = [("ANONYMOUS", 40), ("IDENTIFIED", 60)]

# =============================================================================
# Cases
# =============================================================================

CASE_STATUS_DISTRIBUTION = [("NEW", 3), ("OPEN", 7), ("CLOSED", 90)]

CASE_PRIORITY_DISTRIBUTION = [("CRITICAL", 2), ("HIGH", 8), ("MEDIUM", 30), ("LOW", 60)]

CASE_TYPE_DISTRIBUTION = [("REPORT", 90), ("RFI", 10)]

CASE_COMPLEXITY_DISTRIBUTION = [("simple", 60), ("medium", 30), ("complex", 10)]

INTAKE_TO_CASE_CHANNEL: dict[str, str] = {
    "PHONE": "HOTLINE",
    "WEB_FORM": "WEB_FORM",
    "CHATBOT": "CHATBOT",
    "EMAIL": "DIRECT_ENTRY",
    "PROXY": "PROXY",
    "DIRECT_ENTRY": "DIRECT_ENTRY",
    "CAMPAIGN": "WEB_FORM",
}

# Closed-case duration in days, by complexity (inclusive ranges)
CASE_TIMING: dict[str, tuple[int, int]] = {
    "simple": (2, 4),
    "medium": (7, 21),
    "complex": (30, 90),
}

# =============================================================================
# Investigations
# =============================================================================

INVESTIGATION_TYPE_DISTRIBUTION = [("FULL", 55), ("LIMITED", 30), ("INQUIRY", 15)]

INVESTIGATION_DEPARTMENT_DISTRIBUTION = [
    ("HR", 35),
    ("LEGAL", 25),
    ("COMPLIANCE", 20),
    ("SAFETY", 10),
    ("OTHER", 10),
]

OPEN_INVESTIGATION_STATUS_DISTRIBUTION = [
    ("NEW", 10),
    ("ASSIGNED", 20),
    ("INVESTIGATING", 50),
    ("PENDING_REVIEW", 15),
    ("ON_HOLD", 5),
]

INVESTIGATION_OUTCOME_DISTRIBUTION = [
    ("SUBSTANTIATED", 60),
    ("UNSUBSTANTIATED", 30),
    ("INCONCLUSIVE", 10),
]

# Closed-investigation duration in days, by case priority
INVESTIGATION_DURATION_BY_PRIORITY: dict[str, tuple[int, int]] = {
    "CRITICAL": (5, 15),
    "HIGH": (7, 21),
    "MEDIUM": (10, 30),
    "LOW": (14, 45),
}
