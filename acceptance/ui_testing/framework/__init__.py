"""
================================================================================
UI Testing Framework
================================================================================

Condition-polling and session-lifecycle engine for browser acceptance tests.

Components:
    - locator: Immutable element locators with ordered fallbacks
    - condition: Retryable predicates over session state, any_of / all_of
    - poller: Fixed-cadence bounded evaluation loop
    - session: Browser session lifecycle and scoped acquisition
    - flow: Reusable action + wait sequences
    - driver / playwright_driver: Driver capability surface and Playwright backend
    - harness_config: Typed run configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .condition import (
    Condition,
    ConditionResult,
    ConditionStatus,
    all_of,
    any_of,
    element_absent,
    element_clickable,
    element_present,
    element_text_contains,
    element_visible,
    title_contains,
    url_contains,
)
from .driver import BrowserDriver, Viewport
from .errors import (
    ConditionError,
    ConditionFailed,
    ConditionNotSatisfied,
    ConditionTimedOut,
    DriverError,
    DriverUnavailable,
    FlowFailed,
    HarnessError,
    LocatorNotFound,
    SessionAlreadyActive,
    SessionClosed,
)
from .flow import Flow, FlowResult, FlowStep, param, run
from .harness_config import Credentials, HarnessConfig
from .locator import Locator, Strategy
from .poller import PollOutcome, PollStatus, Poller
from .session import Session, SessionManager

__all__ = [
    "BrowserDriver",
    "Condition",
    "ConditionError",
    "ConditionFailed",
    "ConditionNotSatisfied",
    "ConditionResult",
    "ConditionStatus",
    "ConditionTimedOut",
    "Credentials",
    "DriverError",
    "DriverUnavailable",
    "Flow",
    "FlowFailed",
    "FlowResult",
    "FlowStep",
    "HarnessConfig",
    "HarnessError",
    "Locator",
    "LocatorNotFound",
    "PollOutcome",
    "PollStatus",
    "Poller",
    "Session",
    "SessionAlreadyActive",
    "SessionClosed",
    "SessionManager",
    "Strategy",
    "Viewport",
    "all_of",
    "any_of",
    "element_absent",
    "element_clickable",
    "element_present",
    "element_text_contains",
    "element_visible",
    "param",
    "run",
    "title_contains",
    "url_contains",
]
