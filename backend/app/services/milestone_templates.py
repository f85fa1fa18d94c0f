"""
Standard milestone template.

Every client follows the same service process:
onboarding -> ad account -> landing page -> campaign -> launch -> optimization.
"""

from __future__ import annotations

from app.models.enums import MilestoneStatus
from app.models.milestone import MilestoneCreate

_STANDARD_MILESTONE_DEFINITIONS: list[tuple[str, str]] = [
    (
        "Client Onboarding",
        "Initial setup, requirements gathering, and strategy alignment. "
        "We learn about your business, goals, and target audience.",
    ),
    (
        "Ad Account Setup",
        "Connect Google Ads and Meta Ads accounts, grant agency access, "
        "and configure tracking pixels.",
    ),
    (
        "Landing Page Development",
        "Design and build conversion-optimized landing pages tailored to "
        "your campaigns and target audience.",
    ),
    (
        "Campaign Build",
        "Create ad campaigns, define audiences, develop ad creatives, "
        "and set up conversion tracking.",
    ),
    (
        "Launch",
        "Go live with your ad campaigns, monitor initial performance, "
        "and make early optimizations.",
    ),
    (
        "Ongoing Optimization",
        "Continuous improvement of ad performance, regular reporting, "
        "scaling successful campaigns, and testing new strategies.",
    ),
]


def get_standard_milestones() -> list[MilestoneCreate]:
    """Return a fresh copy of the 6-milestone template for a new client."""
    return [
        MilestoneCreate(
            title=title,
            description=description,
            order=index,
            status=MilestoneStatus.NOT_STARTED,
            progress=0,
            due_date=None,
        )
        for index, (title, description) in enumerate(_STANDARD_MILESTONE_DEFINITIONS, start=1)
    ]
