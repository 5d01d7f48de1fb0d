"""
================================================================================
Unit Test Fixtures
================================================================================

Fake driver, fake clock and session fixtures for browser-free tests of the
harness core.

================================================================================
"""

import pytest

from acceptance.ui_testing.framework.harness_config import HarnessConfig
from acceptance.ui_testing.framework.session import SessionManager
from harness_tools.common import ConfigLoader

from .fakes import FakeClock, FakeDriver, FakePage


BASE_URL = "http://app.test"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def harness_config() -> HarnessConfig:
    return HarnessConfig(base_url=BASE_URL, default_timeout_ms=1000, poll_interval_ms=100)


@pytest.fixture
def manager(driver, harness_config, clock) -> SessionManager:
    return SessionManager(driver, harness_config, clock=clock.now, sleep=clock.sleep)


@pytest.fixture
def session(manager):
    """Open session over the fake driver, closed after the test."""
    with manager.scoped() as session:
        yield session


@pytest.fixture
def fresh_config_loader():
    """Reset the ConfigLoader singleton around a test."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
