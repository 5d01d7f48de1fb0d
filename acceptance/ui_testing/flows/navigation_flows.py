"""
================================================================================
Navigation Flows
================================================================================

Click-through journeys between application pages. Each flow waits for its
link to be clickable before clicking and for the destination URL afterwards.

================================================================================
"""

from __future__ import annotations

from acceptance.ui_testing.framework.condition import element_clickable, url_contains
from acceptance.ui_testing.framework.flow import Flow

from .locators import APPLY_FOR_SERVICE_LINK, EDIT_PROFILE_LINK, HERO_CTA


OPEN_REGISTRATION_FROM_HOME = (
    Flow("open registration from home")
    .navigate("/", wait_for=element_clickable(HERO_CTA), name="open home page")
    .click(HERO_CTA, wait_for=url_contains("/register"), name="click hero call to action")
)

OPEN_SERVICES_FROM_DASHBOARD = (
    Flow("open services from dashboard")
    .navigate(
        "/dashboard",
        wait_for=element_clickable(APPLY_FOR_SERVICE_LINK),
        name="open dashboard",
    )
    .click(APPLY_FOR_SERVICE_LINK, wait_for=url_contains("/services"), name="apply for service")
)

OPEN_PROFILE_FROM_DASHBOARD = (
    Flow("open profile from dashboard")
    .navigate(
        "/dashboard",
        wait_for=element_clickable(EDIT_PROFILE_LINK),
        name="open dashboard",
    )
    .click(EDIT_PROFILE_LINK, wait_for=url_contains("/profile"), name="edit profile")
)


__all__ = [
    "OPEN_PROFILE_FROM_DASHBOARD",
    "OPEN_REGISTRATION_FROM_HOME",
    "OPEN_SERVICES_FROM_DASHBOARD",
]
