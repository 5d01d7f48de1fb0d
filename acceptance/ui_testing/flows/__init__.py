"""
================================================================================
Application Flows
================================================================================

Locators and reusable journeys for the application under test.

Each flow encapsulates:
    - The locators it drives
    - The waits that gate every action
    - The parameters it needs (credentials, role)

================================================================================
"""

from .auth_flows import AUTHENTICATE, SUBMIT_LOGIN, authenticate, submit_login
from .navigation_flows import (
    OPEN_PROFILE_FROM_DASHBOARD,
    OPEN_REGISTRATION_FROM_HOME,
    OPEN_SERVICES_FROM_DASHBOARD,
)

__all__ = [
    "AUTHENTICATE",
    "OPEN_PROFILE_FROM_DASHBOARD",
    "OPEN_REGISTRATION_FROM_HOME",
    "OPEN_SERVICES_FROM_DASHBOARD",
    "SUBMIT_LOGIN",
    "authenticate",
    "submit_login",
]
