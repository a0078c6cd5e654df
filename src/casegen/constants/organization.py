"""
Organizational reference data for the demo tenant (Acme Co.).

Structure: Division -> Business Unit -> Department -> Team. Division weights
drive how bulk employees are spread across the tree.

Named personas are generated first, top-down, so every manager reference
points at an employee that already exists.
"""

ORGANIZATION_NAME = "Acme Co."
EMAIL_DOMAIN = "acme.example.com"

DIVISIONS: list[dict] = [
    {
        "code": "HLTH",
        "name": "Healthcare",
        "weight": 50,
        "business_units": [
            {
                "code": "HOSP",
                "name": "Hospital Services",
                "departments": [
                    {"code": "NURS", "name": "Nursing", "teams": ["ICU", "ER", "PEDS"]},
                    {"code": "HADM", "name": "Hospital Administration", "teams": ["ADMIT", "BILL"]},
                    {"code": "CLIN", "name": "Clinical Operations", "teams": ["LAB", "RAD", "PHAR"]},
                ],
            },
            {
                "code": "PHRM",
                "name": "Pharmaceuticals",
                "departments": [
                    {"code": "RND", "name": "Research and Development", "teams": ["DISC", "TRIAL"]},
                    {"code": "PMFG", "name": "Pharma Manufacturing", "teams": ["LINE1", "LINE2", "QC"]},
                    {"code": "PREG", "name": "Regulatory Affairs", "teams": ["SUBM", "LABEL"]},
                ],
            },
            {
                "code": "MEDEV",
                "name": "Medical Devices",
                "departments": [
                    {"code": "MDENG", "name": "Device Engineering", "teams": ["HW", "FW"]},
                    {"code": "MDSLS", "name": "Device Sales", "teams": ["EAST", "WEST"]},
                ],
            },
        ],
    },
    {
        "code": "TECH",
        "name": "Technology",
        "weight": 20,
        "business_units": [
            {
                "code": "SOFT",
                "name": "Software Products",
                "departments": [
                    {"code": "DEV", "name": "Engineering", "teams": ["CORE", "WEB", "MOB"]},
                    {"code": "PROD", "name": "Product Management", "teams": ["PLAT", "GROW"]},
                    {"code": "QA", "name": "Quality Assurance", "teams": ["AUTO", "MAN"]},
                ],
            },
            {
                "code": "CLOUD",
                "name": "Cloud Services",
                "departments": [
                    {"code": "OPS", "name": "Cloud Operations", "teams": ["SRE", "NOC"]},
                    {"code": "ARCH", "name": "Solutions Architecture", "teams": ["ENT", "SMB"]},
                ],
            },
        ],
    },
    {
        "code": "RETL",
        "name": "Retail",
        "weight": 20,
        "business_units": [
            {
                "code": "STORE",
                "name": "Store Operations",
                "departments": [
                    {"code": "SMGMT", "name": "Store Management", "teams": ["NORTH", "SOUTH"]},
                    {"code": "MERCH", "name": "Merchandising", "teams": ["APPAR", "HOME"]},
                    {"code": "CSERV", "name": "Customer Service", "teams": ["PHONE", "CHAT"]},
                ],
            },
            {
                "code": "ECOM",
                "name": "E-Commerce",
                "departments": [
                    {"code": "DGTL", "name": "Digital Marketing", "teams": ["SEO", "SOCIAL"]},
                    {"code": "FULF", "name": "Fulfillment", "teams": ["PICK", "SHIP", "RTRN"]},
                ],
            },
        ],
    },
    {
        "code": "ENRG",
        "name": "Energy",
        "weight": 10,
        "business_units": [
            {
                "code": "RENEW",
                "name": "Renewables",
                "departments": [
                    {"code": "SOLAR", "name": "Solar Operations", "teams": ["FARM", "MAINT"]},
                    {"code": "WIND", "name": "Wind Operations", "teams": ["ONSH", "OFFSH"]},
                ],
            },
            {
                "code": "TRAD",
                "name": "Traditional Energy",
                "departments": [
                    {"code": "EXPL", "name": "Exploration", "teams": ["GEO", "DRILL"]},
                    {"code": "REFIN", "name": "Refining", "teams": ["PROC", "SAFE"]},
                ],
            },
        ],
    },
]

# =============================================================================
# Named personas
# =============================================================================
# "manager" refers to another persona's key; None marks the single root.
# Order matters: a persona may only reference personas listed above it.

NAMED_PERSONAS: list[dict] = [
    {"key": "ceo", "first_name": "Robert", "last_name": "Chen", "preferred_name": "Bob", "job_title": "Chief Executive Officer", "job_level": "C_SUITE", "manager": None, "location": "NYC-HQ"},
    {"key": "cfo", "first_name": "Sarah", "last_name": "Mitchell", "job_title": "Chief Financial Officer", "job_level": "C_SUITE", "manager": "ceo", "location": "NYC-HQ"},
    {"key": "coo", "first_name": "Michael", "last_name": "Rodriguez", "job_title": "Chief Operating Officer", "job_level": "C_SUITE", "manager": "ceo", "location": "NYC-HQ"},
    {"key": "cto", "first_name": "Jennifer", "last_name": "Park", "job_title": "Chief Technology Officer", "job_level": "C_SUITE", "manager": "ceo", "location": "SFO-01"},
    {"key": "cco", "first_name": "Margaret", "last_name": "Thompson", "preferred_name": "Maggie", "job_title": "Chief Compliance Officer", "job_level": "C_SUITE", "manager": "ceo", "location": "NYC-HQ"},
    {"key": "clo", "first_name": "David", "last_name": "Okonkwo", "job_title": "Chief Legal Officer", "job_level": "C_SUITE", "manager": "ceo", "location": "NYC-HQ"},
    {"key": "chro", "first_name": "Elena", "last_name": "Vasquez", "job_title": "Chief Human Resources Officer", "job_level": "C_SUITE", "manager": "ceo", "location": "NYC-HQ"},
    {"key": "vp-hlth", "first_name": "William", "last_name": "Harrison", "job_title": "President, Healthcare", "job_level": "VP", "manager": "coo", "location": "BOS-01", "division": "HLTH"},
    {"key": "vp-tech", "first_name": "Priya", "last_name": "Sharma", "job_title": "President, Technology", "job_level": "VP", "manager": "coo", "location": "SFO-01", "division": "TECH"},
    {"key": "vp-retl", "first_name": "James", "last_name": "O'Brien", "job_title": "President, Retail", "job_level": "VP", "manager": "coo", "location": "CHI-01", "division": "RETL"},
    {"key": "vp-enrg", "first_name": "Fatima", "last_name": "Al-Hassan", "job_title": "President, Energy", "job_level": "VP", "manager": "coo", "location": "IAH-01", "division": "ENRG"},
    {"key": "lead-investigator", "first_name": "Thomas", "last_name": "Washington", "job_title": "Lead Investigator", "job_level": "DIRECTOR", "manager": "cco", "location": "NYC-HQ", "investigator": True},
    {"key": "investigator-1", "first_name": "Angela", "last_name": "Martinez", "job_title": "Senior Investigator", "job_level": "MANAGER", "manager": "lead-investigator", "location": "NYC-HQ", "investigator": True},
    {"key": "investigator-2", "first_name": "Kevin", "last_name": "Nguyen", "job_title": "Investigator", "job_level": "IC", "manager": "lead-investigator", "location": "CHI-01", "investigator": True},
    {"key": "investigator-3", "first_name": "Lisa", "last_name": "Johnson", "job_title": "Investigator", "job_level": "IC", "manager": "lead-investigator", "location": "LON-HQ", "investigator": True},
    {"key": "investigator-4", "first_name": "Marcus", "last_name": "Williams", "job_title": "Investigator", "job_level": "IC", "manager": "lead-investigator", "location": "TYO-HQ", "investigator": True},
    {"key": "legal-counsel", "first_name": "Patricia", "last_name": "Chen", "job_title": "Senior Legal Counsel", "job_level": "DIRECTOR", "manager": "clo", "location": "NYC-HQ"},
    {"key": "hrbp-us", "first_name": "Rachel", "last_name": "Foster", "job_title": "HR Business Partner, US", "job_level": "MANAGER", "manager": "chro", "location": "NYC-HQ"},
    {"key": "hrbp-emea", "first_name": "Hans", "last_name": "Mueller", "job_title": "HR Business Partner, EMEA", "job_level": "MANAGER", "manager": "chro", "location": "LON-HQ"},
    {"key": "hrbp-apac", "first_name": "Yuki", "last_name": "Tanaka", "job_title": "HR Business Partner, APAC", "job_level": "MANAGER", "manager": "chro", "location": "TYO-HQ"},
]

# Personas who receive notifications and own saved views
DEMO_USER_KEYS: list[str] = [
    "cco",
    "lead-investigator",
    "investigator-1",
    "investigator-2",
    "investigator-3",
    "investigator-4",
    "legal-counsel",
    "hrbp-us",
]

# =============================================================================
# Bulk employee attributes
# =============================================================================

# Bulk contributors only; directors and above come from the structure walk
JOB_LEVEL_DISTRIBUTION = [("IC", 88), ("MANAGER", 12)]

EMPLOYMENT_STATUS_DISTRIBUTION = [("ACTIVE", 95), ("ON_LEAVE", 3), ("INACTIVE", 2)]

EMPLOYEE_REGION_DISTRIBUTION = [("US", 50), ("EMEA", 30), ("APAC", 20)]

LANGUAGE_BY_REGION: dict[str, list[tuple[str, float]]] = {
    "US": [("en", 95), ("es", 5)],
    "EMEA": [("en", 50), ("de", 20), ("fr", 15), ("es", 10), ("it", 5)],
    "APAC": [("en", 40), ("ja", 25), ("zh", 20), ("ko", 10), ("hi", 5)],
}

WORK_MODE_BY_DIVISION: dict[str, list[tuple[str, float]]] = {
    "HLTH": [("ONSITE", 80), ("HYBRID", 15), ("REMOTE", 5)],
    "TECH": [("ONSITE", 20), ("HYBRID", 50), ("REMOTE", 30)],
    "RETL": [("ONSITE", 75), ("HYBRID", 20), ("REMOTE", 5)],
    "ENRG": [("ONSITE", 70), ("HYBRID", 25), ("REMOTE", 5)],
}

# Tenure in years, weighted toward the first few years
TENURE_YEARS_DISTRIBUTION = [
    (1, 15), (2, 14), (3, 12), (4, 10), (5, 9), (6, 8), (7, 7), (8, 6),
    (9, 5), (10, 4), (11, 3), (12, 3), (13, 2), (14, 1), (15, 1),
]

JOB_TITLES_BY_LEVEL: dict[str, list[str]] = {
    "IC": ["Associate", "Specialist", "Analyst", "Coordinator", "Technician", "Engineer", "Representative"],
    "MANAGER": ["Manager", "Team Lead", "Supervisor"],
    "DIRECTOR": ["Director", "Senior Manager"],
    "VP": ["Vice President"],
}
