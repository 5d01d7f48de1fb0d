"""
================================================================================
Application Locators
================================================================================

Element catalogue for the application under test.

Each entry lists its strategies in priority order: stable attributes first,
then CSS, then visible text. Text alternatives cover copy that differs
between builds (e.g. "Get Started" vs "Register").

NOTE:
  Real projects should prefer stable `data-testid` attributes; the
  alternatives below follow what the current frontend renders.

================================================================================
"""

from __future__ import annotations

from acceptance.ui_testing.framework.locator import Locator


# =============================================================================
# Common
# =============================================================================

NAV_BAR = Locator.by_tag("nav")
PAGE_HEADING = Locator.by_tag("h1")
SUBMIT_BUTTON = Locator.by_css("button[type='submit']")

# =============================================================================
# Home page
# =============================================================================

HERO_CTA = Locator.by_text("Get Started", tag="a") | Locator.by_text("Register", tag="a")
LOGIN_LINK = Locator.by_text("Login", tag="a")
FEATURES_SECTION = Locator.by_text("Why Choose") | Locator.by_text("Features")
FEATURE_CARD = Locator.by_text("Easy Appointments") | Locator.by_text("Document")

# =============================================================================
# Login page
# =============================================================================

EMAIL_INPUT = Locator.by_css("input[type='email']").or_(
    Locator.by_css("#email"),
    Locator.by_name("email"),
)
PASSWORD_INPUT = Locator.by_css("input[type='password']").or_(
    Locator.by_css("#password"),
    Locator.by_name("password"),
)
LOGIN_ERROR = Locator.by_css("form .bg-red-100") | Locator.by_css("[role='alert']")
SIGN_UP_LINK = Locator.by_text("Sign Up", tag="a")
BACK_TO_HOME_LINK = Locator.by_text("Back to Home", tag="a")


def role_option(role: str) -> Locator:
    """Radio button selecting the login role ("user" or "admin")."""
    return Locator.by_css(f"input[name='role'][value='{role}']") | Locator.by_attribute(
        "value", role
    )


# =============================================================================
# Registration page
# =============================================================================

REGISTER_FIELDS = {
    "firstName": Locator.by_name("firstName"),
    "lastName": Locator.by_name("lastName"),
    "email": Locator.by_name("email"),
    "phone": Locator.by_name("phone"),
    "password": Locator.by_name("password"),
    "confirmPassword": Locator.by_name("confirmPassword"),
}
REGISTER_EMAIL_ERROR = (
    Locator.by_css("input[name='email'] ~ p.text-red-500")
    | Locator.by_text("valid email")
    | Locator.by_css("p.text-red-500")
)

# =============================================================================
# Dashboard
# =============================================================================

DASHBOARD_STATS = Locator.by_text("Completed") | Locator.by_text("Upcoming")
QUICK_ACTIONS = Locator.by_text("Quick Actions")
APPLY_FOR_SERVICE_LINK = Locator.by_text("Apply for Service", tag="a")
EDIT_PROFILE_LINK = Locator.by_text("Edit Profile", tag="a")


__all__ = [
    "APPLY_FOR_SERVICE_LINK",
    "BACK_TO_HOME_LINK",
    "DASHBOARD_STATS",
    "EDIT_PROFILE_LINK",
    "EMAIL_INPUT",
    "FEATURE_CARD",
    "FEATURES_SECTION",
    "HERO_CTA",
    "LOGIN_ERROR",
    "LOGIN_LINK",
    "NAV_BAR",
    "PAGE_HEADING",
    "PASSWORD_INPUT",
    "QUICK_ACTIONS",
    "REGISTER_EMAIL_ERROR",
    "REGISTER_FIELDS",
    "SIGN_UP_LINK",
    "SUBMIT_BUTTON",
    "role_option",
]
