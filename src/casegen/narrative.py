"""
Template-based text builders for intake records, cases and investigations.

All randomness comes from the caller's phase-scoped sampler and Faker
instance, so text is reproducible under the master seed. Faker date helpers
read the wall clock and are never used here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants.narratives import (
    AI_SUMMARY_ENDINGS,
    AI_SUMMARY_MIDDLES,
    AI_SUMMARY_PREFIXES,
    ATTESTATION_EXCEPTIONS,
    CORROBORATING_OPENERS,
    DISCLOSURE_TYPES,
    LONG_NARRATIVE_SECTIONS,
    MINIMAL_NARRATIVE,
    NARRATIVE_DETAILS,
    NARRATIVE_TEMPLATES,
    PLACEHOLDER_VALUES,
    SEVERITY_LABELS,
    UNICODE_SNIPPETS,
)
from .constants.taxonomy import DEFAULT_NARRATIVE_BRANCH

if TYPE_CHECKING:
    from faker import Faker

    from .sampling import WeightedSampler

SUMMARY_LIMIT = 200


def build_narrative(sampler: WeightedSampler, branch: str, long: bool = False) -> str:
    """Opener plus body from the branch's templates, placeholders filled."""
    templates = NARRATIVE_TEMPLATES.get(branch) or NARRATIVE_TEMPLATES[DEFAULT_NARRATIVE_BRANCH]
    opener, body = sampler.choice(templates)
    values = {key: sampler.choice(options) for key, options in PLACEHOLDER_VALUES.items()}
    text = (
        f"{opener.format(**values)}\n\n{body.format(**values)} "
        f"There are {sampler.choice(NARRATIVE_DETAILS)}."
    )
    if long:
        text += "\n\n" + "\n\n".join(LONG_NARRATIVE_SECTIONS)
    return text


def corroborating_narrative(sampler: WeightedSampler, branch: str) -> str:
    return f"{sampler.choice(CORROBORATING_OPENERS)}\n\n{build_narrative(sampler, branch)}"


def unicode_narrative(sampler: WeightedSampler, branch: str) -> str:
    snippets = sampler.sample_k(UNICODE_SNIPPETS, 2)
    return build_narrative(sampler, branch) + "\n\n" + " ".join(snippets)


def minimal_narrative() -> str:
    return MINIMAL_NARRATIVE


def truncate(text: str, limit: int = SUMMARY_LIMIT) -> str:
    """First `limit - 3` characters plus an ellipsis when text exceeds `limit`."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


# =============================================================================
# Intake-type specific content
# =============================================================================


def chatbot_transcript(sampler: WeightedSampler, branch: str, submitted_at: str) -> str:
    return (
        f"[Chatbot Transcript - {submitted_at}]\n\n"
        "User: I need to report something confidential.\n"
        "Bot: I understand. I'm here to help you file a report securely. "
        "Can you tell me more about your concern?\n"
        f"User: {build_narrative(sampler, branch)}\n"
        "Bot: Thank you. Your report will be reviewed by the compliance team "
        "within 24-48 hours. Is there anything else you'd like to add?\n"
        "User: No, that's everything for now.\n"
        "Bot: Your report has been submitted. Keep your access code to check on its status."
    )


def disclosure_response(sampler: WeightedSampler, fake: Faker) -> str:
    disclosure_type = sampler.choice(DISCLOSURE_TYPES)
    return (
        "## Annual Conflict of Interest Disclosure\n\n"
        f"### Disclosure Type: {disclosure_type}\n\n"
        f"**Description:**\nI am disclosing a {disclosure_type} with {fake.company()}.\n\n"
        f"**Nature of Interest:**\n{fake.paragraph()}\n\n"
        "**Mitigation Measures:**\n"
        f"- {fake.sentence()}\n- {fake.sentence()}\n\n"
        "**Certification:**\nI certify that this disclosure is complete and accurate."
    )


def attestation_response(sampler: WeightedSampler, fake: Faker, compliant: bool) -> str:
    if compliant:
        return (
            "## Policy Attestation - Completed\n\n"
            "I acknowledge that I have read, understand, and agree to comply with "
            "the Code of Conduct.\n\n"
            f"**Training Score:** {sampler.randint(85, 100)}%"
        )
    return (
        "## Policy Attestation - Requires Review\n\n"
        "I am unable to complete this attestation without further discussion.\n\n"
        f"**Reason:**\n{sampler.choice(ATTESTATION_EXCEPTIONS)}\n\n"
        f"**Additional Comments:**\n{fake.paragraph()}"
    )


def survey_response(sampler: WeightedSampler, fake: Faker) -> str:
    return (
        "## Survey Response\n\n"
        "**Survey: Workplace Culture Assessment**\n\n"
        f"Q1: How would you rate the overall work environment?\nA: {sampler.randint(1, 5)}/5\n\n"
        f"Q2: Do you feel comfortable reporting concerns?\nA: {sampler.choice(['Yes', 'No', 'Sometimes'])}\n\n"
        f"Q3: Additional comments:\nA: {fake.paragraph()}"
    )


def proxy_report(sampler: WeightedSampler, branch: str) -> str:
    return (
        "[Submitted by manager on behalf of employee]\n\n"
        "Employee requested confidential submission through their manager.\n\n"
        + build_narrative(sampler, branch)
    )


def incident_form(sampler: WeightedSampler, fake: Faker, branch: str, incident_day: str) -> str:
    witnesses = (
        f"{fake.name()}, {fake.name()}" if sampler.chance(0.6) else "None identified"
    )
    return (
        "## Incident Report Form\n\n"
        f"**Date of Incident:** {incident_day}\n"
        f"**Location:** {fake.building_number()} {fake.street_name()}\n\n"
        f"**Description of Incident:**\n{build_narrative(sampler, branch)}\n\n"
        f"**Immediate Actions Taken:**\n{fake.sentence()}\n\n"
        f"**Witnesses:**\n{witnesses}"
    )


# =============================================================================
# Case enrichment
# =============================================================================


def ai_case_summary(sampler: WeightedSampler, severity: str, category_name: str) -> str:
    prefix = sampler.choice(AI_SUMMARY_PREFIXES).format(
        severity=SEVERITY_LABELS.get(severity, severity.title()),
        category=category_name,
    )
    return f"{prefix} {sampler.choice(AI_SUMMARY_MIDDLES)} {sampler.choice(AI_SUMMARY_ENDINGS)}"
