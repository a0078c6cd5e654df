"""
Category taxonomy: 7 parent categories with 4 children each (35 nodes).

Children inherit severity, SLA days and requires_investigation from their
parent. Each node may override the parent's anonymity rate, which drives the
reporter-type split in the intake generator. Parent weights drive how often
an intake record lands in that branch.
"""

CATEGORY_TAXONOMY: list[dict] = [
    {
        "code": "HAR",
        "name": "Harassment",
        "severity": "HIGH",
        "sla_days": 14,
        "requires_investigation": True,
        "anonymity_rate": 0.55,
        "weight": 22,
        "children": [
            {"code": "HAR-SEX", "name": "Sexual Harassment", "anonymity_rate": 0.60},
            {"code": "HAR-DIS", "name": "Discrimination", "anonymity_rate": 0.50},
            {"code": "HAR-BUL", "name": "Bullying and Intimidation"},
            {"code": "HAR-RET", "name": "Retaliation", "anonymity_rate": 0.70},
        ],
    },
    {
        "code": "FIN",
        "name": "Fraud and Financial",
        "severity": "HIGH",
        "sla_days": 21,
        "requires_investigation": True,
        "anonymity_rate": 0.35,
        "weight": 18,
        "children": [
            {"code": "FIN-FRD", "name": "Fraud"},
            {"code": "FIN-EXP", "name": "Expense Misconduct"},
            {"code": "FIN-VEN", "name": "Vendor Kickbacks", "anonymity_rate": 0.45},
            {"code": "FIN-TIM", "name": "Timesheet Falsification"},
        ],
    },
    {
        "code": "COI",
        "name": "Conflicts of Interest",
        "severity": "MEDIUM",
        "sla_days": 30,
        "requires_investigation": True,
        "anonymity_rate": 0.25,
        "weight": 12,
        "children": [
            {"code": "COI-REL", "name": "Personal Relationships"},
            {"code": "COI-BUS", "name": "Outside Business Interests"},
            {"code": "COI-GIF", "name": "Gifts and Entertainment", "anonymity_rate": 0.20},
            {"code": "COI-BRD", "name": "Board and Outside Directorships"},
        ],
    },
    {
        "code": "SAF",
        "name": "Safety and Health",
        "severity": "HIGH",
        "sla_days": 7,
        "requires_investigation": True,
        "anonymity_rate": 0.30,
        "weight": 14,
        "children": [
            {"code": "SAF-WRK", "name": "Workplace Safety"},
            {"code": "SAF-ENV", "name": "Environmental Compliance"},
            {"code": "SAF-PRD", "name": "Product Safety"},
            {"code": "SAF-INF", "name": "Infection Control"},
        ],
    },
    {
        "code": "DAT",
        "name": "Data and Privacy",
        "severity": "MEDIUM",
        "sla_days": 21,
        "requires_investigation": True,
        "anonymity_rate": 0.40,
        "weight": 10,
        "children": [
            {"code": "DAT-BRE", "name": "Data Breach"},
            {"code": "DAT-ACC", "name": "Unauthorized Access"},
            {"code": "DAT-HIP", "name": "Patient Privacy"},
            {"code": "DAT-PRI", "name": "Privacy Rights"},
        ],
    },
    {
        "code": "POL",
        "name": "Policy Violations",
        "severity": "LOW",
        "sla_days": 30,
        "requires_investigation": True,
        "anonymity_rate": 0.35,
        "weight": 18,
        "children": [
            {"code": "POL-HR", "name": "HR Policy"},
            {"code": "POL-IT", "name": "IT Acceptable Use"},
            {"code": "POL-TRV", "name": "Travel Policy"},
            {"code": "POL-MIS", "name": "General Misconduct"},
        ],
    },
    {
        "code": "RFI",
        "name": "Request for Information",
        "severity": "LOW",
        "sla_days": 14,
        "requires_investigation": False,
        "anonymity_rate": 0.15,
        "weight": 6,
        "children": [
            {"code": "RFI-GEN", "name": "General Inquiry"},
            {"code": "RFI-POL", "name": "Policy Question"},
            {"code": "RFI-PRC", "name": "Process Guidance"},
            {"code": "RFI-STS", "name": "Report Status Inquiry"},
        ],
    },
]

# Parent code used when a narrative template set has no entry for a branch
DEFAULT_NARRATIVE_BRANCH = "POL"
