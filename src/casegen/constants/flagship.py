"""
Flagship storylines: hand-authored cases inserted verbatim.

Each payload carries the full case and its investigation outcome. They are
consumed in declaration order, at most once each, and count against the
overall case volume target.

Fields:
    name: Memorable title shown in demos
    category_code: Taxonomy leaf the case is filed under
    severity: HIGH / MEDIUM / LOW
    status: NEW / OPEN / CLOSED
    duration_days: Days from creation to closure (0 while open)
    investigation_count: Number of investigations attached to the case
    outcome: Investigation outcome for closed cases, None while open
    reference_prefix: Reference number stem, suffixed with "-0001"
"""

FLAGSHIP_CASES: list[dict] = [
    {
        "name": "The Chicago Warehouse Incident",
        "category_code": "HAR-BUL",
        "severity": "HIGH",
        "status": "OPEN",
        "duration_days": 0,
        "investigation_count": 1,
        "outcome": None,
        "reference_prefix": "CASE-2026-CHI",
        "has_escalation": True,
        "external_party_type": None,
        "ai_risk_score": 85,
        "narrative": (
            "Three warehouse associates on the third shift at the Chicago distribution "
            "center reported that their supervisor routinely shouts at the floor team, "
            "threatens terminations over minor picking errors and, on the night of the "
            "most recent incident, threw a clipboard against the wall next to an "
            "associate. Security footage from the loading bay was preserved. Two earlier "
            "verbal complaints at the supervisor's previous site were closed informally."
        ),
        "ai_summary": (
            "High-severity bullying case at a distribution center. Several independent "
            "reporters describe the same escalating conduct, and prior informal "
            "complaints were never documented. Immediate interim measures recommended."
        ),
        "demo_points": [
            "Multiple independent reporters corroborating one pattern",
            "Prior complaint history at another site",
            "Escalated to the Chief Compliance Officer",
        ],
    },
    {
        "name": "Q3 Financial Irregularities",
        "category_code": "FIN-EXP",
        "severity": "HIGH",
        "status": "CLOSED",
        "duration_days": 67,
        "investigation_count": 2,
        "outcome": "SUBSTANTIATED",
        "reference_prefix": "CASE-2025-FIN",
        "has_escalation": True,
        "external_party_type": "legal",
        "ai_risk_score": 92,
        "narrative": (
            "A new quarterly expense audit flagged roughly $127,000 of claims by a "
            "regional sales director that could not be matched to business activity: "
            "client dinners without attendee lists, hotel stays in cities with no "
            "meetings, conference fees for events other staff attended and repeated "
            "resort charges outside the approved vendor list. Outside counsel ran a "
            "forensic review of card statements, travel bookings and CRM activity."
        ),
        "ai_summary": (
            "Expense fraud investigation covering eighteen months of unverified claims. "
            "Forensic review shows a consistent pattern of misuse. Parallel HR and legal "
            "tracks; civil recovery initiated after substantiation."
        ),
        "demo_points": [
            "Dual investigation tracks (HR and Legal)",
            "Forensic document analysis",
            "Outside counsel involvement",
        ],
    },
    {
        "name": "Executive Expense Report",
        "category_code": "FIN-FRD",
        "severity": "HIGH",
        "status": "OPEN",
        "duration_days": 0,
        "investigation_count": 1,
        "outcome": None,
        "reference_prefix": "CASE-2026-EXP",
        "has_escalation": True,
        "external_party_type": None,
        "ai_risk_score": 88,
        "narrative": (
            "An accounts payable analyst reported that a senior vice president's "
            "assistant has been splitting large invoices into amounts just below the "
            "approval threshold, and that several of the split invoices were paid to a "
            "consulting firm registered at a residential address."
        ),
        "ai_summary": (
            "Possible approval-threshold circumvention by an executive office. Invoice "
            "splitting and an unverified vendor warrant a restricted-access "
            "investigation reporting directly to the audit committee."
        ),
        "demo_points": [
            "Executive-level subject with restricted visibility",
            "Threshold-splitting pattern detection",
        ],
    },
    {
        "name": "Manufacturing Safety Incident",
        "category_code": "SAF-WRK",
        "severity": "HIGH",
        "status": "CLOSED",
        "duration_days": 45,
        "investigation_count": 2,
        "outcome": "SUBSTANTIATED",
        "reference_prefix": "CASE-2025-SAF",
        "has_escalation": True,
        "external_party_type": "regulator",
        "ai_risk_score": 95,
        "narrative": (
            "A line operator at the pharma manufacturing plant was injured when a guard "
            "interlock on a blister-pack press had been bypassed to keep output up "
            "during a production push. Coworkers said the bypass had been in place for "
            "weeks and that a shift lead told them to leave it alone."
        ),
        "ai_summary": (
            "Serious safety incident with a disabled machine guard. Reportable to the "
            "workplace safety regulator. Root cause points to production pressure "
            "overriding lockout procedures."
        ),
        "demo_points": [
            "Regulator notification workflow",
            "Safety and management review investigations",
        ],
    },
    {
        "name": "Healthcare Data Breach",
        "category_code": "DAT-HIP",
        "severity": "HIGH",
        "status": "CLOSED",
        "duration_days": 38,
        "investigation_count": 1,
        "outcome": "SUBSTANTIATED",
        "reference_prefix": "CASE-2026-HIP",
        "has_escalation": True,
        "external_party_type": "regulator",
        "ai_risk_score": 93,
        "narrative": (
            "Access logs showed a billing clerk opening the records of more than four "
            "hundred patients who had no open billing activity, including several "
            "well-known local figures. A screenshot of one record later appeared in a "
            "private social media group."
        ),
        "ai_summary": (
            "Unauthorized access to protected health information with evidence of "
            "disclosure. Breach notification obligations apply. Access-review controls "
            "failed to flag the pattern."
        ),
        "demo_points": [
            "Breach notification timeline",
            "Access log evidence attached to the case",
        ],
    },
    {
        "name": "Systematic Discrimination Pattern",
        "category_code": "HAR-DIS",
        "severity": "HIGH",
        "status": "OPEN",
        "duration_days": 0,
        "investigation_count": 1,
        "outcome": None,
        "reference_prefix": "CASE-2026-DIS",
        "has_escalation": True,
        "external_party_type": "legal",
        "ai_risk_score": 91,
        "narrative": (
            "Four engineers on the same platform team submitted a joint report showing "
            "that women on the team consistently received lower review ratings and "
            "fewer promotion nominations than men with comparable project outcomes "
            "over three review cycles under the same manager."
        ),
        "ai_summary": (
            "Group complaint alleging systemic bias in performance ratings. Statistical "
            "comparison supplied by reporters. Outside employment counsel engaged."
        ),
        "demo_points": [
            "Group complaint with statistical evidence",
            "Legal privilege handling",
        ],
    },
    {
        "name": "Vendor Kickback Scheme",
        "category_code": "FIN-VEN",
        "severity": "HIGH",
        "status": "CLOSED",
        "duration_days": 89,
        "investigation_count": 2,
        "outcome": "SUBSTANTIATED",
        "reference_prefix": "CASE-2025-FRD",
        "has_escalation": True,
        "external_party_type": "law_enforcement",
        "ai_risk_score": 97,
        "narrative": (
            "A procurement analyst noticed that one facilities vendor won every bid in "
            "a region despite higher prices, and that the procurement manager who ran "
            "those bids had recently bought a lake house through a company owned by the "
            "vendor's founder."
        ),
        "ai_summary": (
            "Procurement kickback scheme with a related-party property transaction. "
            "Referred to law enforcement after the internal investigation "
            "substantiated the allegations."
        ),
        "demo_points": [
            "Law enforcement referral",
            "Procurement data analysis",
        ],
    },
    {
        "name": "Workplace Violence Threat",
        "category_code": "SAF-WRK",
        "severity": "HIGH",
        "status": "CLOSED",
        "duration_days": 12,
        "investigation_count": 1,
        "outcome": "SUBSTANTIATED",
        "reference_prefix": "CASE-2026-WPV",
        "has_escalation": True,
        "external_party_type": "law_enforcement",
        "ai_risk_score": 98,
        "narrative": (
            "After a disciplinary meeting, an employee in the retail fulfillment center "
            "told two coworkers he would 'make sure everyone regrets this' and "
            "described bringing a weapon to the site. One coworker reported it through "
            "the hotline the same evening."
        ),
        "ai_summary": (
            "Credible threat of workplace violence. Threat assessment team engaged, "
            "site security increased and local police notified within hours."
        ),
        "demo_points": [
            "Rapid escalation and threat assessment",
            "Short resolution timeline",
        ],
    },
    {
        "name": "COI Disclosure - Board Member",
        "category_code": "COI-BRD",
        "severity": "MEDIUM",
        "status": "CLOSED",
        "duration_days": 21,
        "investigation_count": 1,
        "outcome": "SUBSTANTIATED",
        "reference_prefix": "CASE-2026-COI",
        "has_escalation": True,
        "external_party_type": None,
        "ai_risk_score": 65,
        "narrative": (
            "A board member's annual disclosure omitted a seat on the advisory board of "
            "a medical device supplier that was bidding for a multi-year contract with "
            "the hospital services unit."
        ),
        "ai_summary": (
            "Undisclosed outside directorship with an active bidder. Recusal and "
            "disclosure update required; contract award paused pending review."
        ),
        "demo_points": [
            "Disclosure campaign linkage",
            "Board-level conflict handling",
        ],
    },
    {
        "name": "Retaliation After Safety Report",
        "category_code": "HAR-RET",
        "severity": "HIGH",
        "status": "OPEN",
        "duration_days": 0,
        "investigation_count": 1,
        "outcome": None,
        "reference_prefix": "CASE-2026-RET",
        "has_escalation": True,
        "external_party_type": None,
        "ai_risk_score": 89,
        "narrative": (
            "A maintenance technician who reported the bypassed press guard says that "
            "since the report he has been moved to night shifts, left out of overtime "
            "and given his first written warning in nine years."
        ),
        "ai_summary": (
            "Retaliation allegation linked to an earlier substantiated safety case. "
            "Timing of adverse actions closely follows the protected report."
        ),
        "demo_points": [
            "Linked to an earlier safety case",
            "Retaliation pattern detection",
        ],
    },
]
