"""
Template text used by the narrative builders.

Placeholders in {braces} are filled at generation time:
    {role}      job role of the subject
    {location}  site or area
    {duration}  how long the conduct has gone on
    {amount}    a dollar amount
    {years}     tenure in years (retaliation snippets)
"""

NARRATIVE_TEMPLATES: dict[str, list[tuple[str, str]]] = {
    "HAR": [
        ("I need to report ongoing behavior from a {role} in my area.",
         "For {duration} this person has made comments about my appearance and personal life in front of the team. When I asked them to stop they laughed it off."),
        ("I am reporting a hostile work environment at {location}.",
         "A {role} regularly shouts at staff, singles people out during meetings and has told several of us we will be 'managed out' if we complain."),
        ("Something happened at the team event that I think HR should know about.",
         "A {role} made unwanted physical contact with a coworker and continued after being told to stop. Several people saw it."),
    ],
    "FIN": [
        ("I have concerns about expense claims in my department.",
         "A {role} has been submitting receipts for client meals that I know did not happen. The total over {duration} is around {amount}."),
        ("I think a vendor is being favored improperly.",
         "Purchase orders at {location} keep going to the same supplier at higher prices. A {role} approves them without the usual competitive quotes."),
        ("I want to report timesheet problems.",
         "Several people on my shift are recording hours they did not work, and the {role} signs off on them every week."),
    ],
    "COI": [
        ("I may have a conflict I need to disclose, or someone else does.",
         "A {role} is hiring a contractor owned by a close family member and did not disclose the relationship to procurement."),
        ("I am concerned about gifts from a supplier.",
         "Over {duration} a supplier has given a {role} event tickets and a holiday trip worth about {amount}."),
        ("A manager is running a side business.",
         "A {role} at {location} runs a consulting company that sells services to our own customers."),
    ],
    "SAF": [
        ("I want to report an unsafe condition at {location}.",
         "Machine guards on the line have been removed to speed up changeovers. A {role} told us not to put them back."),
        ("There was a near miss this week that was not logged.",
         "A forklift nearly struck a coworker in an aisle with no marked walkway. The {role} told us not to file an incident form."),
        ("Safety training is being skipped.",
         "New hires at {location} start on equipment before completing training because the {role} says we are short staffed."),
    ],
    "DAT": [
        ("I think patient or customer data is being accessed without a reason.",
         "A {role} looked up records of people they know personally, including a neighbor, over the last {duration}."),
        ("Confidential files are being shared improperly.",
         "Spreadsheets with employee salaries and home addresses were sent to a personal email account by a {role}."),
        ("A laptop with sensitive data was lost.",
         "A {role} at {location} lost an unencrypted laptop and did not report it for several days."),
    ],
    "POL": [
        ("I am reporting a policy violation.",
         "A {role} has repeatedly ignored the travel policy, booking first class and personal side trips on company funds."),
        ("Company systems are being misused.",
         "A {role} uses company equipment to run personal projects during work hours at {location}."),
        ("Our team is being told to bypass the approval process.",
         "For {duration} the {role} has told us to skip required sign-offs to hit deadlines."),
    ],
    "RFI": [
        ("I have a question about the code of conduct.",
         "Can I accept a small gift from a long-time supplier during the holidays, and do I need to log it?"),
        ("I would like guidance on a process.",
         "What is the correct way to escalate a concern about my {role} if the concern involves my own manager?"),
        ("I am following up on a previous report.",
         "I submitted a report {duration} ago and would like to know whether anyone has reviewed it."),
    ],
}

PLACEHOLDER_VALUES: dict[str, list[str]] = {
    "role": ["supervisor", "shift lead", "manager", "senior manager", "director", "team lead", "coworker", "department head"],
    "location": ["the warehouse", "the main office", "the east wing", "the loading dock", "the call center", "the lab", "the plant floor"],
    "duration": ["two weeks", "about a month", "three months", "six months", "most of the year", "over a year"],
    "amount": ["$2,500", "$8,000", "$15,000", "$40,000", "$75,000"],
}

NARRATIVE_DETAILS: list[str] = [
    "incidents witnessed by other team members",
    "messages that I have saved",
    "a pattern that started after the last reorganization",
    "behavior that happens mostly on the night shift",
    "conduct that has been raised informally before",
]

CORROBORATING_OPENERS: list[str] = [
    "I am writing to corroborate a report that may already have been filed.",
    "I saw the same incident that I believe someone else reported.",
    "I have more information about a situation that may already be under review.",
    "I want to add my account to an existing complaint.",
    "I experienced the same issue that others have reported.",
]

UNICODE_SNIPPETS: list[str] = [
    "Employee 李明 (Li Ming) said the incident happened in the Shanghai office.",
    "My colleague Müller made comments about François' accent.",
    "The email subject was '¡Urgente! Revisión necesaria' and it was sent to the whole team.",
    "A witness statement from Björk Guðmundsdóttir confirms the timeline.",
    "The message said '这是不可接受的', which means 'this is unacceptable'.",
    "Employee Özgür reported harassment from a colleague named Wojciech.",
    "The document was titled 'Política de Ética Empresarial' and was never translated.",
    "The team in São Paulo reported similar problems with the same manager.",
    "Håkon from the Oslo office backed up the complaint.",
]

MINIMAL_NARRATIVE = "Report filed."

LONG_NARRATIVE_SECTIONS: list[str] = [
    "Background: the team was restructured earlier this year and reporting lines changed twice.",
    "Timeline: the first incident happened shortly after the restructuring, and there have been more since.",
    "Impact: several people have asked to transfer, and two have resigned citing the environment.",
    "Prior attempts: concerns were raised informally with the department head without visible follow-up.",
    "Evidence: I have emails, chat messages and a personal log of dates and times.",
    "Requested outcome: a fair review, and protection for everyone who speaks up.",
]

DISCLOSURE_TYPES: list[str] = [
    "outside employment",
    "board membership",
    "financial interest",
    "family relationship",
    "vendor relationship",
]

ATTESTATION_EXCEPTIONS: list[str] = [
    "I have questions about the outside employment section.",
    "I need clarification on the gift policy threshold.",
    "I think my current situation may be a conflict.",
    "I disagree with some provisions and would like to discuss them.",
]

# =============================================================================
# Case enrichment
# =============================================================================

AI_SUMMARY_PREFIXES: list[str] = [
    "{severity} {category} report.",
    "Report involving potential {category} concerns.",
    "{category} allegation requiring review.",
]

AI_SUMMARY_MIDDLES: list[str] = [
    "Several factors indicate a thorough review is warranted.",
    "Pattern analysis suggests this may need prompt attention.",
    "Initial assessment indicates the standard protocol applies.",
    "Preliminary review suggests a straightforward path.",
]

AI_SUMMARY_ENDINGS: list[str] = [
    "Recommend the standard investigation timeline.",
    "Prioritize according to organizational risk.",
    "Consider witness interviews and document review.",
    "Monitor for related reports.",
]

SEVERITY_LABELS: dict[str, str] = {
    "HIGH": "High-severity",
    "MEDIUM": "Moderate",
    "LOW": "Low-priority",
}

HIGH_RISK_BRANCHES = ("HAR", "FIN")

# =============================================================================
# Investigation findings
# =============================================================================

FINDINGS_SUMMARIES: dict[str, list[str]] = {
    "SUBSTANTIATED": [
        "The investigation found sufficient evidence to support the allegations.",
        "Witness statements and documents corroborate the reported concerns.",
        "Analysis confirms the policy violations occurred as described.",
        "A preponderance of evidence supports the complaint.",
    ],
    "UNSUBSTANTIATED": [
        "The investigation did not find sufficient evidence to support the allegations.",
        "Available evidence does not corroborate the reported concerns.",
        "Witness accounts conflict with the reported narrative.",
        "No policy violation was identified.",
    ],
    "INCONCLUSIVE": [
        "The investigation could not determine whether the alleged conduct occurred.",
        "Conflicting accounts prevent a definitive conclusion.",
        "Evidence is insufficient to support or refute the allegations.",
        "Key evidence was no longer available.",
    ],
}

ROOT_CAUSES: list[str] = [
    "Lack of clear policy communication",
    "Insufficient management oversight",
    "Inadequate training on expectations",
    "Cultural issues within the team",
    "Pressure to meet performance targets",
    "Breakdown in communication channels",
    "Failure to act on earlier warning signs",
]

LESSONS_LEARNED: list[str] = [
    "Targeted training for all team members.",
    "Clarify the policy in the employee handbook.",
    "Coaching for the responsible manager.",
    "Regular compliance check-ins for the unit.",
    "Review and update escalation procedures.",
    "Workload assessment for the affected team.",
]

CLOSURE_NOTES: list[str] = [
    "All investigation steps completed per protocol.",
    "Documentation archived per retention policy.",
    "Relevant parties notified of the outcome.",
    "Remediation plan implemented and verified.",
    "Follow-up scheduled in 90 days.",
    "No further action required at this time.",
]

STATUS_RATIONALES: dict[str, list[str]] = {
    "NEW": ["Received and pending initial review.", "Awaiting assignment."],
    "ASSIGNED": ["Assigned to investigator.", "Investigation plan being developed."],
    "INVESTIGATING": ["Active investigation in progress.", "Witness interviews scheduled.", "Evidence review ongoing."],
    "PENDING_REVIEW": ["Findings drafted, pending approval.", "Awaiting management review."],
    "ON_HOLD": ["Awaiting response from a key witness.", "Pending legal guidance."],
    "CLOSED": ["Investigation complete.", "Findings documented and approved."],
}

REASSIGNMENT_REASONS: list[str] = [
    "Workload balancing",
    "Conflict of interest identified",
    "Investigator on leave",
    "Subject matter expertise needed",
    "Manager reassignment",
]

# =============================================================================
# Retaliation
# =============================================================================

RETALIATION_TYPES: list[tuple[str, float, list[str]]] = [
    ("performance_review", 0.25, [
        "Shortly after my report I got my first negative review in {years} years.",
        "My rating dropped from 'exceeds' to 'needs improvement' with no explanation.",
        "My manager started documenting small issues that were never raised before.",
        "I was put on an improvement plan within weeks of my report.",
    ]),
    ("schedule_change", 0.15, [
        "My schedule was changed to the worst shift right after I filed my report.",
        "I was moved to nights even though I have the most seniority.",
        "My approved vacation was revoked right after my complaint.",
        "I now have to work weekends after being exempt for {years} years.",
    ]),
    ("role_reduction", 0.15, [
        "My responsibilities were cut after I took part in the investigation.",
        "I was taken off key projects without explanation.",
        "My team was moved to another manager and I was left with no reports.",
        "My client-facing duties were removed citing vague concerns.",
    ]),
    ("exclusion", 0.15, [
        "I am no longer invited to team meetings.",
        "Coworkers were told not to talk to me about the investigation or anything else.",
        "I was left off the distribution list for planning emails.",
        "I have been excluded from the team's social events since my report.",
    ]),
    ("hostile_behavior", 0.12, [
        "My manager has become openly hostile since my complaint.",
        "I was called a troublemaker in front of the team.",
        "Someone left a note on my desk telling me to watch myself.",
        "My supervisor now criticizes everything I do in public.",
    ]),
    ("termination_threat", 0.08, [
        "I was told my position might be eliminated in the next restructuring.",
        "My manager hinted that people who complain do not last long here.",
        "I was warned that one more mistake would end my {years}-year career here.",
        "HR mentioned my role was under review right after my report.",
    ]),
    ("transfer", 0.05, [
        "I was transferred to a site much farther from home.",
        "I was moved to a different department without being asked.",
        "My request to stay on my team was denied and I was reassigned.",
        "I was told to relocate or resign.",
    ]),
    ("workload_increase", 0.05, [
        "My workload doubled right after my complaint.",
        "I was given impossible deadlines that nobody else has.",
        "I was assigned tasks well outside my role.",
        "My overtime requests are denied while my assignments keep growing.",
    ]),
]
