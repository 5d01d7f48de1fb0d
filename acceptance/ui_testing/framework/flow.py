"""
================================================================================
Flow Composer
================================================================================

Reusable, ordered user journeys built from actions and waits.

A Flow is a stateless definition: a name plus an ordered tuple of steps.
Each step optionally performs a driver action and then optionally blocks on
a Condition; the next step never starts while a wait is pending. Running a
flow stops at the first unsatisfied wait and reports which step and which
condition stopped it.

Usage:
    login = (
        Flow("authenticate")
        .navigate("/login", wait_for=element_visible(EMAIL_INPUT))
        .type_text(EMAIL_INPUT, param("email"))
        .type_text(PASSWORD_INPUT, param("password"), secret=True)
        .click(SUBMIT, wait_for=url_contains("dashboard"))
    )
    result = login.run(session, {"email": "...", "password": "..."})
    result.raise_for_failure()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar, Union

import allure
from loguru import logger

from harness_tools.report_tools.allure_utils import attach_flow_result

from .condition import Condition
from .errors import FlowFailed, HarnessError
from .locator import Locator
from .poller import PollOutcome
from .session import Session


T = TypeVar("T")

Params = Mapping[str, Any]
Action = Callable[[Session, Params], None]
Parameterized = Union[T, Callable[[Params], T]]


def param(key: str) -> Callable[[Params], Any]:
    """Refer to a run parameter instead of a literal value."""

    def lookup(params: Params) -> Any:
        try:
            return params[key]
        except KeyError:
            raise ValueError(f"Missing flow parameter '{key}'") from None

    lookup.__name__ = f"param[{key}]"
    return lookup


def _resolve(value: Any, params: Params) -> Any:
    if callable(value) and not isinstance(value, (Condition, Locator)):
        return value(params)
    return value


@dataclass(frozen=True)
class FlowStep:
    """
    One step of a flow.

    Attributes:
        name: Step name used in reports and failures
        action: Driver action, called with (session, params)
        wait_for: Condition (or params -> Condition) to block on after the action
        timeout_ms: Wait budget; the session default when None
    """

    name: str
    action: Optional[Action] = None
    wait_for: Optional[Parameterized[Condition]] = None
    timeout_ms: Optional[int] = None

    def condition_for(self, params: Params) -> Optional[Condition]:
        return _resolve(self.wait_for, params)


@dataclass(frozen=True)
class FlowResult:
    """
    Outcome of one flow run.

    Attributes:
        flow_name: Name of the flow
        succeeded: Every wait was satisfied
        final_url: URL observed when the run ended
        completed_steps: Names of steps that finished
        failed_step: Step whose wait was not satisfied
        failed_condition: Description of that wait
        outcomes: Poll outcomes of every wait, in order
    """

    flow_name: str
    succeeded: bool
    final_url: Optional[str]
    completed_steps: Tuple[str, ...] = ()
    failed_step: Optional[str] = None
    failed_condition: Optional[str] = None
    outcomes: Tuple[PollOutcome, ...] = ()

    @property
    def failed_outcome(self) -> Optional[PollOutcome]:
        if self.succeeded or not self.outcomes:
            return None
        return self.outcomes[-1]

    def raise_for_failure(self) -> "FlowResult":
        """Raise FlowFailed unless every wait was satisfied."""
        if not self.succeeded:
            raise FlowFailed(self)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flow_name": self.flow_name,
            "succeeded": self.succeeded,
            "final_url": self.final_url,
            "completed_steps": list(self.completed_steps),
            "failed_step": self.failed_step,
            "failed_condition": self.failed_condition,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


@dataclass(frozen=True)
class Flow:
    """Named, immutable sequence of steps. Builders return new flows."""

    name: str
    steps: Tuple[FlowStep, ...] = field(default=())

    # =========================================================================
    # Builders
    # =========================================================================

    def step(
        self,
        name: str,
        action: Optional[Action] = None,
        wait_for: Optional[Parameterized[Condition]] = None,
        timeout_ms: Optional[int] = None,
    ) -> "Flow":
        if action is None and wait_for is None:
            raise ValueError(f"Step '{name}' needs an action, a wait, or both")
        return Flow(self.name, self.steps + (FlowStep(name, action, wait_for, timeout_ms),))

    def then(self, other: "Flow") -> "Flow":
        """Append every step of `other`."""
        return Flow(self.name, self.steps + other.steps)

    def navigate(
        self,
        path: Parameterized[str],
        wait_for: Optional[Parameterized[Condition]] = None,
        timeout_ms: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "Flow":
        def action(session: Session, params: Params) -> None:
            session.navigate(_resolve(path, params))

        return self.step(name or f"navigate {_label(path)}", action, wait_for, timeout_ms)

    def type_text(
        self,
        locator: Parameterized[Locator],
        text: Parameterized[str],
        secret: bool = False,
        wait_for: Optional[Parameterized[Condition]] = None,
        timeout_ms: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "Flow":
        def action(session: Session, params: Params) -> None:
            session.type(_resolve(locator, params), str(_resolve(text, params)), secret=secret)

        return self.step(name or f"type into {_label(locator)}", action, wait_for, timeout_ms)

    def click(
        self,
        locator: Parameterized[Locator],
        wait_for: Optional[Parameterized[Condition]] = None,
        timeout_ms: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "Flow":
        def action(session: Session, params: Params) -> None:
            session.click(_resolve(locator, params))

        return self.step(name or f"click {_label(locator)}", action, wait_for, timeout_ms)

    def press(
        self,
        locator: Parameterized[Locator],
        key: str,
        wait_for: Optional[Parameterized[Condition]] = None,
        timeout_ms: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "Flow":
        def action(session: Session, params: Params) -> None:
            session.press(_resolve(locator, params), key)

        return self.step(name or f"press {key}", action, wait_for, timeout_ms)

    def wait(
        self,
        condition: Parameterized[Condition],
        timeout_ms: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "Flow":
        return self.step(name or f"wait for {_label(condition)}", None, condition, timeout_ms)

    # =========================================================================
    # Execution
    # =========================================================================

    def run(self, session: Session, params: Optional[Params] = None) -> FlowResult:
        return run(self, session, params)


def _label(value: Any) -> str:
    if callable(value) and not isinstance(value, (Condition, Locator)):
        return getattr(value, "__name__", "<parameter>")
    return str(value)


def run(flow: Flow, session: Session, params: Optional[Params] = None) -> FlowResult:
    """
    Execute `flow` against `session`.

    Steps run strictly in order. Driver errors and LocatorNotFound raised by
    an action propagate; an unsatisfied wait ends the run with a failed
    FlowResult.
    """
    params = dict(params or {})
    completed: List[str] = []
    outcomes: List[PollOutcome] = []

    logger.info(f"Running flow '{flow.name}' ({len(flow.steps)} steps)")
    with allure.step(f"Flow: {flow.name}"):
        for index, step in enumerate(flow.steps, start=1):
            with allure.step(f"[{index}/{len(flow.steps)}] {step.name}"):
                if step.action is not None:
                    try:
                        step.action(session, params)
                    except HarnessError as e:
                        logger.error(
                            f"Flow '{flow.name}' step '{step.name}' action failed: {e}"
                        )
                        raise

                condition = step.condition_for(params)
                if condition is not None:
                    outcome = session.poll(condition, step.timeout_ms)
                    outcomes.append(outcome)
                    if not outcome.satisfied:
                        result = FlowResult(
                            flow_name=flow.name,
                            succeeded=False,
                            final_url=session.current_url(),
                            completed_steps=tuple(completed),
                            failed_step=step.name,
                            failed_condition=condition.description,
                            outcomes=tuple(outcomes),
                        )
                        logger.error(
                            f"Flow '{flow.name}' stopped at step '{step.name}' "
                            f"({outcome.status.value}): {condition.description}"
                        )
                        attach_flow_result(result)
                        return result

                completed.append(step.name)

    result = FlowResult(
        flow_name=flow.name,
        succeeded=True,
        final_url=session.current_url(),
        completed_steps=tuple(completed),
        outcomes=tuple(outcomes),
    )
    logger.info(f"Flow '{flow.name}' completed at {result.final_url}")
    return result


__all__ = [
    "Flow",
    "FlowResult",
    "FlowStep",
    "param",
    "run",
]
