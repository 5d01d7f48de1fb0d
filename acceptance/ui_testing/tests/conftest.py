"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for live UI scenarios, providing fixtures for
configuration, browser sessions and authenticated sessions.

Key Features:
- One fresh browser session per scenario, closed on every exit path
- Scenarios skip (not fail) when no browser or no application is available
- Screenshot, URL and wait diagnostics attached to Allure on failure

================================================================================
"""

from typing import Generator

import httpx
import pytest
from loguru import logger

from acceptance.ui_testing.flows import authenticate
from acceptance.ui_testing.framework.errors import DriverUnavailable
from acceptance.ui_testing.framework.harness_config import Credentials, HarnessConfig
from acceptance.ui_testing.framework.playwright_driver import PlaywrightDriver
from acceptance.ui_testing.framework.session import Session, SessionManager
from acceptance.ui_testing.reporting import attach_failure_diagnostics
from harness_tools.common import ConfigurationError


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def harness_config() -> HarnessConfig:
    """Run configuration from config/config.yaml and UI_* environment variables."""
    config = HarnessConfig.from_loader()
    logger.info(
        f"UI harness: {config.base_url} ({config.browser}, headless={config.headless}, "
        f"timeout={config.default_timeout_ms}ms)"
    )
    return config


@pytest.fixture(scope="session")
def app_available(harness_config: HarnessConfig) -> str:
    """
    Skip UI scenarios when the application under test is not reachable.

    Any HTTP response counts as reachable.
    """
    try:
        httpx.get(harness_config.base_url, timeout=5.0, follow_redirects=True)
    except httpx.HTTPError as e:
        pytest.skip(f"Application not reachable at {harness_config.base_url}: {e}")
    return harness_config.base_url


@pytest.fixture(scope="session")
def browser_driver(harness_config: HarnessConfig) -> PlaywrightDriver:
    return PlaywrightDriver(
        browser_type=harness_config.browser,
        headless=harness_config.headless,
    )


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def session(
    request: pytest.FixtureRequest,
    app_available: str,
    browser_driver: PlaywrightDriver,
    harness_config: HarnessConfig,
) -> Generator[Session, None, None]:
    """
    Function-scoped browser session.

    Each scenario gets its own browser; nothing is shared between scenarios.
    """
    manager = SessionManager(browser_driver, harness_config)
    try:
        session = manager.open()
    except DriverUnavailable as e:
        pytest.skip(f"Browser unavailable: {e}")
    request.node.harness_session = session
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_credentials(harness_config: HarnessConfig) -> Credentials:
    try:
        return harness_config.credentials_for("user")
    except ConfigurationError as e:
        pytest.skip(str(e))


@pytest.fixture
def admin_credentials(harness_config: HarnessConfig) -> Credentials:
    try:
        return harness_config.credentials_for("admin")
    except ConfigurationError as e:
        pytest.skip(str(e))


@pytest.fixture
def authenticated_session(session: Session, user_credentials: Credentials) -> Session:
    """
    Provides a session logged in as the configured user.

    Fails the scenario (not skips) when login does not reach the dashboard.
    """
    authenticate(session, user_credentials)
    return session


@pytest.fixture
def test_data():
    """Form data for registration and negative login scenarios."""
    return {
        "invalid_user": {
            "email": "invalid@example.com",
            "password": "wrongpassword",
        },
        "registration": {
            "firstName": "Test",
            "lastName": "User",
            "email": "invalid-email",
            "phone": "9876543210",
            "password": "Test@1234",
            "confirmPassword": "Test@1234",
        },
    }


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach failure diagnostics to the Allure report.

    Covers setup failures (e.g. the login flow behind `authenticated_session`)
    as well as failures in the test body. The session is read from the item
    because `item.funcargs` may not hold it yet when a dependent fixture fails.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when not in ("setup", "call") or not report.failed:
        return

    error = call.excinfo.value if call.excinfo is not None else None
    attach_failure_diagnostics(error, getattr(item, "harness_session", None))
