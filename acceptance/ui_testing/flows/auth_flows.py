"""
================================================================================
Authentication Flows
================================================================================

Login journeys reused as preconditions by dashboard scenarios.

Run parameters:
    email, password: credentials to submit
    role: "user" (default) or "admin"

A successful login lands on a URL containing "dashboard" ("/dashboard" for
users, "/admin/dashboard" for admins). The wait fails fast when the login
error banner appears instead of waiting out the whole timeout.

================================================================================
"""

from __future__ import annotations

from typing import Any, Mapping

from acceptance.ui_testing.framework.condition import (
    all_of,
    element_clickable,
    element_visible,
    url_contains,
)
from acceptance.ui_testing.framework.flow import Flow, FlowResult, param
from acceptance.ui_testing.framework.harness_config import Credentials
from acceptance.ui_testing.framework.locator import Locator
from acceptance.ui_testing.framework.session import Session

from .locators import (
    EMAIL_INPUT,
    LOGIN_ERROR,
    PASSWORD_INPUT,
    SUBMIT_BUTTON,
    role_option,
)


def selected_role(params: Mapping[str, Any]) -> Locator:
    return role_option(params.get("role", "user"))


LOGIN_FORM_READY = all_of(
    element_visible(EMAIL_INPUT),
    element_visible(PASSWORD_INPUT),
    element_clickable(SUBMIT_BUTTON),
)

LANDED_ON_DASHBOARD = url_contains("dashboard").fail_on(
    element_visible(LOGIN_ERROR), reason="login error banner displayed"
)


SUBMIT_LOGIN = (
    Flow("submit login")
    .navigate("/login", wait_for=LOGIN_FORM_READY, name="open login page")
    .type_text(EMAIL_INPUT, param("email"), name="enter email")
    .type_text(PASSWORD_INPUT, param("password"), secret=True, name="enter password")
    .click(selected_role, name="select role")
    .click(SUBMIT_BUTTON, name="submit")
)

AUTHENTICATE = Flow("authenticate").then(SUBMIT_LOGIN).wait(
    LANDED_ON_DASHBOARD, name="land on dashboard"
)


def authenticate(session: Session, credentials: Credentials, role: str = "user") -> FlowResult:
    """
    Log in and wait for the dashboard.

    Raises:
        FlowFailed: Login did not reach the dashboard
    """
    result = AUTHENTICATE.run(
        session,
        {"email": credentials.email, "password": credentials.password, "role": role},
    )
    return result.raise_for_failure()


def submit_login(session: Session, email: str, password: str, role: str = "user") -> FlowResult:
    """Fill and submit the login form without waiting for the outcome."""
    result = SUBMIT_LOGIN.run(session, {"email": email, "password": password, "role": role})
    return result.raise_for_failure()


__all__ = [
    "AUTHENTICATE",
    "LANDED_ON_DASHBOARD",
    "LOGIN_FORM_READY",
    "SUBMIT_LOGIN",
    "authenticate",
    "submit_login",
]
