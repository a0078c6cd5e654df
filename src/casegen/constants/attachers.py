"""
Catalogs for the downstream attachers: campaigns, workflows, notifications,
saved views, AI conversations and reports.
"""

# =============================================================================
# Campaigns
# =============================================================================

CAMPAIGN_TEMPLATES: list[dict] = [
    {"type": "DISCLOSURE", "name": "Annual Conflict of Interest Disclosure", "audience": "ALL_EMPLOYEES", "intake_type": "DISCLOSURE_RESPONSE"},
    {"type": "DISCLOSURE", "name": "Gifts and Entertainment Disclosure", "audience": "SALES", "intake_type": "DISCLOSURE_RESPONSE"},
    {"type": "DISCLOSURE", "name": "Outside Employment Disclosure", "audience": "MANAGERS", "intake_type": "DISCLOSURE_RESPONSE"},
    {"type": "ATTESTATION", "name": "Code of Conduct Attestation", "audience": "ALL_EMPLOYEES", "intake_type": "ATTESTATION_RESPONSE"},
    {"type": "ATTESTATION", "name": "Anti-Bribery Policy Attestation", "audience": "MANAGERS", "intake_type": "ATTESTATION_RESPONSE"},
    {"type": "ATTESTATION", "name": "Data Privacy Training Attestation", "audience": "ALL_EMPLOYEES", "intake_type": "ATTESTATION_RESPONSE"},
    {"type": "SURVEY", "name": "Workplace Culture Survey", "audience": "ALL_EMPLOYEES", "intake_type": "SURVEY_RESPONSE"},
]

CAMPAIGN_DURATION_DAYS = (14, 45)
CAMPAIGN_COMPLETION_RANGE = (0.72, 0.98)

# =============================================================================
# Workflows
# =============================================================================

POLICY_WORKFLOW_DRAFTS: list[dict] = [
    {"policy": "Remote Work Policy", "stage": "legal_review", "step": "legal-signoff", "days_ago": 3},
    {"policy": "Travel and Expense Policy", "stage": "draft", "step": "author-edit", "days_ago": 7},
    {"policy": "Social Media Policy", "stage": "compliance_review", "step": "compliance-check", "days_ago": 5},
    {"policy": "Whistleblower Protection Policy", "stage": "final_approval", "step": "cco-approval", "days_ago": 2},
    {"policy": "Vendor Onboarding Policy", "stage": "draft", "step": "author-edit", "days_ago": 12},
]

# stage -> (case count, SLA days)
CASE_WORKFLOW_STAGES: list[tuple[str, int, int]] = [
    ("triage", 3, 2),
    ("investigation", 4, 30),
    ("review", 2, 7),
    ("legal_hold", 1, 90),
]

DISCLOSURE_WORKFLOW_STAGES: list[tuple[str, int]] = [
    ("under_review", 3),
    ("mitigation_required", 2),
]

WORKFLOW_STEPS: dict[str, list[str]] = {
    "POLICY_APPROVAL": ["author-edit", "compliance-check", "legal-signoff", "cco-approval", "publish"],
    "CASE_ROUTING": ["triage", "investigation", "review", "legal_hold", "closure"],
    "DISCLOSURE_REVIEW": ["submitted", "under_review", "mitigation_required", "approved"],
}

# =============================================================================
# Notifications
# =============================================================================

NOTIFICATION_TYPE_DISTRIBUTION = [
    ("ASSIGNMENT", 30),
    ("STATUS_UPDATE", 20),
    ("COMMENT", 15),
    ("ESCALATION", 10),
    ("DEADLINE", 10),
    ("APPROVAL", 10),
    ("COMPLETION", 5),
]

NOTIFICATION_CHANNEL_DISTRIBUTION = [("IN_APP", 70), ("EMAIL", 30)]

NOTIFICATION_READ_RATE = 0.70
NOTIFICATION_WINDOW_DAYS = 30

NOTIFICATION_TITLES: dict[str, list[str]] = {
    "ASSIGNMENT": ["You were assigned {ref}", "New case assigned: {ref}"],
    "STATUS_UPDATE": ["{ref} changed status", "Status update on {ref}"],
    "COMMENT": ["New comment on {ref}", "{ref}: a teammate replied"],
    "ESCALATION": ["{ref} was escalated", "Escalation requested on {ref}"],
    "DEADLINE": ["{ref} is due soon", "Deadline approaching for {ref}"],
    "APPROVAL": ["Approval needed for {ref}", "{ref} is awaiting your sign-off"],
    "COMPLETION": ["{ref} was closed", "Investigation completed on {ref}"],
}

# =============================================================================
# Saved views
# =============================================================================

SAVED_VIEWS: dict[str, list[dict]] = {
    "CASES": [
        {"name": "All Cases", "columns": ["reference_number", "status", "priority", "severity", "created_at"], "filters": {}, "sort": {"created_at": "desc"}, "view_mode": "table", "is_default": True},
        {"name": "Open Cases", "columns": ["reference_number", "status", "priority", "updated_at"], "filters": {"status": ["NEW", "OPEN"]}, "sort": {"updated_at": "desc"}, "view_mode": "table", "is_default": False},
        {"name": "High Severity Cases", "columns": ["reference_number", "severity", "category_id", "created_at"], "filters": {"severity": ["HIGH"]}, "sort": {"created_at": "desc"}, "view_mode": "table", "is_default": False},
        {"name": "Case Pipeline", "columns": ["reference_number", "status", "priority"], "filters": {}, "sort": {"priority": "asc"}, "view_mode": "board", "is_default": False},
    ],
    "INVESTIGATIONS": [
        {"name": "All Investigations", "columns": ["case_id", "investigation_number", "status", "due_date"], "filters": {}, "sort": {"created_at": "desc"}, "view_mode": "table", "is_default": True},
        {"name": "Active Investigations", "columns": ["case_id", "status", "sla_status", "due_date"], "filters": {"status": ["ASSIGNED", "INVESTIGATING", "PENDING_REVIEW"]}, "sort": {"due_date": "asc"}, "view_mode": "table", "is_default": False},
        {"name": "Investigation Board", "columns": ["case_id", "status"], "filters": {}, "sort": {"status": "asc"}, "view_mode": "board", "is_default": False},
    ],
    "INTAKE_FORMS": [
        {"name": "All Submissions", "columns": ["reference_number", "type", "channel", "created_at"], "filters": {}, "sort": {"created_at": "desc"}, "view_mode": "table", "is_default": True},
        {"name": "Pending Review", "columns": ["reference_number", "type", "status"], "filters": {"status": ["PENDING_QA", "RECEIVED"]}, "sort": {"created_at": "asc"}, "view_mode": "table", "is_default": False},
        {"name": "Anonymous Reports", "columns": ["reference_number", "reporter_type", "category_id"], "filters": {"reporter_type": ["ANONYMOUS"]}, "sort": {"created_at": "desc"}, "view_mode": "table", "is_default": False},
    ],
}

# =============================================================================
# AI conversations
# =============================================================================

AI_CONVERSATION_SCRIPTS: list[list[tuple[str, str]]] = [
    [
        ("user", "Summarize {ref} for me."),
        ("assistant", "{ref} is a {severity} {category} matter opened {age} days ago. {summary}"),
        ("user", "What should I do next?"),
        ("assistant", "Schedule interviews with the reporter and named witnesses, then request the relevant records."),
    ],
    [
        ("user", "Are there related reports for {ref}?"),
        ("assistant", "I found {related} related intake record(s) linked to {ref}. The earliest was filed {age} days ago."),
    ],
    [
        ("user", "Draft an interview plan for {ref}."),
        ("assistant", "Start with the reporter, then the two closest witnesses, then the subject. Keep questions open-ended and document the timeline."),
        ("user", "Add a question about prior complaints."),
        ("assistant", "Added: 'Are you aware of any earlier concerns raised about this conduct, formally or informally?'"),
    ],
]

AI_CONVERSATION_OPEN_CASE_SAMPLE = 20

# =============================================================================
# Reports
# =============================================================================

REPORT_DEFINITIONS: list[dict] = [
    {"code": "case-volume-by-category", "name": "Case Volume by Category", "entity": "CASES", "chart": "bar", "group_by": "category_id"},
    {"code": "time-to-close-trends", "name": "Time-to-Close Trends", "entity": "CASES", "chart": "line", "group_by": "month"},
    {"code": "sla-compliance-rate", "name": "SLA Compliance Rate", "entity": "INVESTIGATIONS", "chart": "kpi", "group_by": "sla_status"},
    {"code": "disclosure-completion", "name": "Disclosure Completion Rates", "entity": "CAMPAIGNS", "chart": "bar", "group_by": "campaign_id"},
    {"code": "open-cases-by-priority", "name": "Open Cases by Priority", "entity": "CASES", "chart": "pie", "group_by": "priority"},
    {"code": "anonymous-vs-named", "name": "Anonymous vs Named Reports", "entity": "INTAKE_FORMS", "chart": "pie", "group_by": "reporter_type"},
    {"code": "cases-by-region", "name": "Cases by Location and Region", "entity": "CASES", "chart": "map", "group_by": "region"},
    {"code": "investigator-workload", "name": "Investigator Workload", "entity": "INVESTIGATIONS", "chart": "bar", "group_by": "primary_investigator_id"},
    {"code": "intake-trends", "name": "Intake Trends", "entity": "INTAKE_FORMS", "chart": "line", "group_by": "month"},
    {"code": "quarterly-board-summary", "name": "Quarterly Board Summary", "entity": "CASES", "chart": "table", "group_by": "quarter"},
    {"code": "my-open-cases", "name": "My Open Cases", "entity": "CASES", "chart": "table", "group_by": None},
    {"code": "monthly-intake-volume", "name": "Monthly Intake Volume", "entity": "INTAKE_FORMS", "chart": "bar", "group_by": "month"},
    {"code": "top-repeat-subjects", "name": "Top 10 Repeat Subjects", "entity": "CASES", "chart": "table", "group_by": "subject_employee_id"},
    {"code": "campaign-compliance-score", "name": "Campaign Compliance Score", "entity": "CAMPAIGNS", "chart": "kpi", "group_by": None},
]

# =============================================================================
# Activity
# =============================================================================

# Per-case chance of each optional timeline entry
ACTIVITY_RATES: dict[str, float] = {
    "ai_enrichment": 0.80,
    "assigned": 0.90,
    "priority_changed": 0.10,
    "note_added": 0.50,
    "cco_escalated": 0.04,
    "sla_warning": 0.06,
}

# Hours after case creation: (low, high)
AI_ENRICHMENT_HOURS = (1, 4)
ASSIGNMENT_HOURS = (2, 24)
OPENED_HOURS = (4, 48)

# Days after case creation before the entry may appear
PRIORITY_CHANGE_LEAD_DAYS = 1
NOTE_LEAD_DAYS = 1
CCO_ESCALATION_LEAD_DAYS = 2
SLA_WARNING_LEAD_DAYS = 20

NOTES_PER_CASE = (1, 3)
SLA_WARNING_DAYS_LEFT = (3, 7)

STATUS_CHANGE_TEMPLATES: dict[str, list[str]] = {
    "OPEN": [
        "{actor} opened case for investigation",
        "{actor} moved case to active status",
        "Case assigned and investigation initiated by {actor}",
    ],
    "CLOSED": [
        "{actor} closed case with findings documented",
        "Investigation complete, case closed by {actor}",
        "{actor} marked case as resolved",
        "Case closure approved by {actor}",
    ],
}

ASSIGNMENT_TEMPLATES = [
    "{actor} assigned case to {assignee} for investigation",
    "{actor} transferred case ownership to {assignee}",
    "{actor} delegated case handling to {assignee}",
]

PRIORITY_CHANGE_TEMPLATES = [
    "{actor} escalated priority from {old} to {new} due to {reason}",
    "Priority changed to {new} by {actor}",
    "{actor} updated case priority: {old} to {new}",
]

PRIORITY_REASONS = [
    "regulatory concern",
    "executive involvement",
    "media exposure risk",
    "pattern detection",
    "SLA compliance",
    "witness availability",
    "retaliation risk",
    "legal guidance",
]

NOTE_TEMPLATES = [
    "{actor} added investigation note",
    "Case note recorded by {actor}",
    "{actor} documented interview findings",
    "{actor} added update to case timeline",
    "Evidence review notes added by {actor}",
    "{actor} recorded witness statement summary",
]

CCO_ESCALATION_TEMPLATES = [
    "{actor} escalated case to CCO for executive review",
    "Case flagged for CCO attention by {actor}",
    "{actor} requested CCO involvement due to severity",
]

SLA_WARNING_TEMPLATES = [
    "[SYSTEM] SLA warning: case approaching {days}-day deadline",
    "[SYSTEM] Automated alert: SLA compliance at risk",
    "[SYSTEM] Case deadline warning, {days} days remaining",
]

AI_ENRICHMENT_TEMPLATES = [
    "[AI] Generated case summary from intake details",
    "[AI] Risk assessment completed with confidence score {score}%",
    "[AI] Category suggestion: {category} (confidence: {score}%)",
    "[AI] Similar case patterns identified",
]

INVESTIGATION_CLOSED_TEMPLATES = [
    "{actor} closed investigation with outcome: {outcome}",
    "Investigation concluded by {actor}: {outcome}",
    "{actor} finalized investigation findings",
]
