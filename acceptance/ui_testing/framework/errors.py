"""
================================================================================
Harness Errors
================================================================================

Exception taxonomy for the UI harness.

    HarnessError
    ├── SessionClosed          operation attempted after teardown
    ├── SessionAlreadyActive   second session opened within one scenario
    ├── DriverUnavailable      browser could not be launched
    ├── DriverError            a driver query/action failed
    ├── LocatorNotFound        one-shot lookup found nothing
    ├── ConditionError
    │   ├── ConditionFailed    condition detected an unrecoverable state
    │   └── ConditionTimedOut  polling budget exhausted
    │       └── ConditionNotSatisfied  one-shot check still pending
    └── FlowFailed             a flow stopped on an unsatisfied wait

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .flow import FlowResult
    from .locator import Locator
    from .poller import PollOutcome


class HarnessError(Exception):
    """Base exception for all UI harness failures."""
    pass


class SessionClosed(HarnessError):
    """Raised when a session is used after close()."""
    pass


class SessionAlreadyActive(HarnessError):
    """Raised when a manager is asked for a second concurrent session."""
    pass


class DriverUnavailable(HarnessError):
    """Raised when the browser cannot be launched or attached."""
    pass


class DriverError(HarnessError):
    """Raised when a driver query or action fails."""
    pass


class LocatorNotFound(HarnessError):
    """Raised when every alternative of a locator resolves to nothing."""

    def __init__(self, locator: "Locator", message: str = ""):
        self.locator = locator
        super().__init__(message or f"No element matched locator: {locator}")


class ConditionError(HarnessError):
    """Base for poll failures; carries the PollOutcome for diagnostics."""

    def __init__(self, outcome: "PollOutcome", message: str):
        self.outcome = outcome
        super().__init__(message)

    @property
    def description(self) -> str:
        return self.outcome.description

    @property
    def last_observed(self) -> Any:
        return self.outcome.last_observed


class ConditionFailed(ConditionError):
    """The condition explicitly reported an unrecoverable negative state."""

    def __init__(self, outcome: "PollOutcome"):
        super().__init__(
            outcome,
            f"Condition failed: {outcome.description} "
            f"(reason: {outcome.reason}; after {outcome.attempts} attempts, "
            f"{outcome.elapsed_ms:.0f}ms)",
        )


class ConditionTimedOut(ConditionError):
    """Polling ran out of time before the condition was satisfied."""

    def __init__(self, outcome: "PollOutcome"):
        super().__init__(
            outcome,
            f"Timed out after {outcome.elapsed_ms:.0f}ms waiting for: "
            f"{outcome.description} ({outcome.attempts} attempts; "
            f"last observed: {outcome.last_observed!r})",
        )


class ConditionNotSatisfied(ConditionTimedOut):
    """A one-shot check found the condition still pending."""

    def __init__(self, outcome: "PollOutcome"):
        ConditionError.__init__(
            self,
            outcome,
            f"Condition not satisfied on single evaluation: "
            f"{outcome.description} (last observed: {outcome.last_observed!r})",
        )


class FlowFailed(HarnessError):
    """A flow stopped because one of its waits was not satisfied."""

    def __init__(self, result: "FlowResult"):
        self.result = result
        outcome = result.failed_outcome
        cause = "failed" if outcome is not None and outcome.failed else "timed out"
        super().__init__(
            f"Flow '{result.flow_name}' {cause} at step '{result.failed_step}' "
            f"waiting for: {result.failed_condition}"
            + (f" (last observed: {outcome.last_observed!r})"
               if outcome is not None and outcome.timed_out else "")
            + (f" (reason: {outcome.reason})"
               if outcome is not None and outcome.failed else "")
        )


__all__ = [
    "HarnessError",
    "SessionClosed",
    "SessionAlreadyActive",
    "DriverUnavailable",
    "DriverError",
    "LocatorNotFound",
    "ConditionError",
    "ConditionFailed",
    "ConditionTimedOut",
    "ConditionNotSatisfied",
    "FlowFailed",
]
