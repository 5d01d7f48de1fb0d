"""
================================================================================
Failure Diagnostics
================================================================================

Collects what a failed UI scenario leaves behind and attaches it to Allure:
the poll outcome or flow result behind a wait failure, plus the current URL
and a screenshot from the scenario's session when it is still open.

Used by the UI conftest for failures in both setup (e.g. an authenticated
session fixture whose login flow stopped) and the test body.

================================================================================
"""

from typing import Optional

from loguru import logger

from acceptance.ui_testing.framework.errors import ConditionError, DriverError, FlowFailed
from acceptance.ui_testing.framework.session import Session
from harness_tools.report_tools.allure_utils import (
    attach_flow_result,
    attach_png,
    attach_poll_outcome,
    attach_text,
)


def attach_failure_diagnostics(
    error: Optional[BaseException],
    session: Optional[Session],
) -> None:
    """
    Attach diagnostics for a failed scenario.

    Args:
        error: Exception that failed the scenario (None when unknown)
        session: Scenario session, if one was opened
    """
    if isinstance(error, ConditionError):
        attach_poll_outcome(error.outcome, name="failed_wait")
    elif isinstance(error, FlowFailed):
        attach_flow_result(error.result, name="failed_flow")

    if not isinstance(session, Session) or session.closed:
        return
    try:
        attach_text(session.current_url(), name="failure_url")
        png = session.screenshot()
        if png:
            attach_png(png, name="failure_screenshot")
    except DriverError as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
