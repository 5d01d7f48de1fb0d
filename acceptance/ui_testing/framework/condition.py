"""
================================================================================
Conditions
================================================================================

Named, side-effect-free predicates over live session state.

A Condition is evaluated by the Poller (or once, via Session.check) and
reports one of three results:

    - Pending:   not there yet, retry later (carries what was observed)
    - Satisfied: terminal success (carries a value, e.g. the element found)
    - Failed:    terminal failure detected early (carries a reason)

Built-in conditions mirror the classic explicit waits (presence, visibility,
clickability, URL / title fragments). Combinators build new conditions:

    >>> ready = all_of(element_visible(EMAIL_INPUT), element_clickable(SUBMIT))
    >>> landed = url_contains("/dashboard").fail_on(element_visible(ERROR_BANNER))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol

from .locator import Locator


class ConditionStatus(str, Enum):
    PENDING = "pending"
    SATISFIED = "satisfied"
    FAILED = "failed"


@dataclass(frozen=True)
class ConditionResult:
    """
    Result of a single condition evaluation.

    Attributes:
        status: Pending / Satisfied / Failed
        value: Payload of a satisfied result
        reason: Explanation of a failed result
        observed: Snapshot of what was seen (diagnostics for pending results)
    """

    status: ConditionStatus
    value: Any = None
    reason: Optional[str] = None
    observed: Any = None

    @classmethod
    def pending(cls, observed: Any = None) -> "ConditionResult":
        return cls(ConditionStatus.PENDING, observed=observed)

    @classmethod
    def satisfied(cls, value: Any = True) -> "ConditionResult":
        return cls(ConditionStatus.SATISFIED, value=value, observed=value)

    @classmethod
    def failed(cls, reason: str, observed: Any = None) -> "ConditionResult":
        return cls(ConditionStatus.FAILED, reason=reason, observed=observed)

    @property
    def is_pending(self) -> bool:
        return self.status is ConditionStatus.PENDING

    @property
    def is_satisfied(self) -> bool:
        return self.status is ConditionStatus.SATISFIED

    @property
    def is_failed(self) -> bool:
        return self.status is ConditionStatus.FAILED


class SessionState(Protocol):
    """Read-only view of a browser session that conditions probe."""

    def find_elements(self, locator: Locator) -> List[Any]: ...

    def current_url(self) -> str: ...

    def title(self) -> str: ...

    def is_displayed(self, element: Any) -> bool: ...

    def is_enabled(self, element: Any) -> bool: ...

    def text_of(self, element: Any) -> str: ...


Probe = Callable[[Any], ConditionResult]


@dataclass(frozen=True)
class Condition:
    """
    A described, retryable predicate.

    Conditions hold no mutable state; everything that changes between
    attempts lives in the Poller invocation.
    """

    description: str
    probe: Probe

    def evaluate(self, state: Any) -> ConditionResult:
        result = self.probe(state)
        if not isinstance(result, ConditionResult):
            raise TypeError(
                f"Condition '{self.description}' returned {type(result).__name__}, "
                f"expected ConditionResult"
            )
        return result

    def fail_on(self, guard: "Condition", reason: Optional[str] = None) -> "Condition":
        """
        Fail immediately whenever `guard` is satisfied.

        The guard is probed first, so an error banner wins over a
        simultaneously satisfied target state.
        """
        message = reason or f"{guard.description} detected"

        def probe(state: Any) -> ConditionResult:
            detected = guard.evaluate(state)
            if detected.is_satisfied:
                return ConditionResult.failed(message, observed=detected.value)
            return self.evaluate(state)

        return Condition(f"{self.description} (fails on: {guard.description})", probe)

    def __str__(self) -> str:
        return self.description


# =============================================================================
# Combinators
# =============================================================================

def any_of(*conditions: Condition) -> Condition:
    """
    Satisfied as soon as one sub-condition is satisfied.

    Sub-conditions are evaluated in order and evaluation stops at the first
    satisfied one. The result is Failed only when every sub-condition
    failed; a mix of Failed and Pending stays Pending.
    """
    if not conditions:
        raise ValueError("any_of() needs at least one condition")

    def probe(state: Any) -> ConditionResult:
        observed: Dict[str, Any] = {}
        reasons: List[str] = []
        for condition in conditions:
            result = condition.evaluate(state)
            if result.is_satisfied:
                return result
            if result.is_failed:
                reasons.append(f"{condition.description}: {result.reason}")
                observed[condition.description] = result.reason
            else:
                observed[condition.description] = result.observed
        if len(reasons) == len(conditions):
            return ConditionResult.failed("; ".join(reasons), observed=observed)
        return ConditionResult.pending(observed=observed)

    return Condition(
        "any of (" + ", ".join(c.description for c in conditions) + ")", probe
    )


def all_of(*conditions: Condition) -> Condition:
    """
    Satisfied when every sub-condition is satisfied.

    Stops at the first Pending or Failed sub-condition. The satisfied value
    is the tuple of sub-condition values.
    """
    if not conditions:
        raise ValueError("all_of() needs at least one condition")

    def probe(state: Any) -> ConditionResult:
        values = []
        for condition in conditions:
            result = condition.evaluate(state)
            if result.is_failed:
                return ConditionResult.failed(
                    f"{condition.description}: {result.reason}",
                    observed=result.observed,
                )
            if result.is_pending:
                return ConditionResult.pending(
                    observed={condition.description: result.observed}
                )
            values.append(result.value)
        return ConditionResult.satisfied(tuple(values))

    return Condition(
        "all of (" + ", ".join(c.description for c in conditions) + ")", probe
    )


# =============================================================================
# Built-in Conditions
# =============================================================================

def element_present(locator: Locator) -> Condition:
    """At least one element matches (attached to the DOM)."""

    def probe(state: SessionState) -> ConditionResult:
        element = locator.resolve_first(state)
        if element is None:
            return ConditionResult.pending(observed=f"no element matches {locator}")
        return ConditionResult.satisfied(element)

    return Condition(f"element present: {locator}", probe)


def element_visible(locator: Locator) -> Condition:
    """A matching element is displayed."""

    def probe(state: SessionState) -> ConditionResult:
        found = locator.resolve(state)
        if not found:
            return ConditionResult.pending(observed=f"no element matches {locator}")
        for element in found:
            if state.is_displayed(element):
                return ConditionResult.satisfied(element)
        return ConditionResult.pending(observed=f"{len(found)} match(es), none visible")

    return Condition(f"element visible: {locator}", probe)


def element_clickable(locator: Locator) -> Condition:
    """A matching element is displayed and enabled."""

    def probe(state: SessionState) -> ConditionResult:
        found = locator.resolve(state)
        if not found:
            return ConditionResult.pending(observed=f"no element matches {locator}")
        for element in found:
            if state.is_displayed(element) and state.is_enabled(element):
                return ConditionResult.satisfied(element)
        return ConditionResult.pending(
            observed=f"{len(found)} match(es), none visible and enabled"
        )

    return Condition(f"element clickable: {locator}", probe)


def element_absent(locator: Locator) -> Condition:
    """No matching element is displayed."""

    def probe(state: SessionState) -> ConditionResult:
        visible = [e for e in locator.resolve(state) if state.is_displayed(e)]
        if visible:
            return ConditionResult.pending(observed=f"{len(visible)} visible match(es)")
        return ConditionResult.satisfied(True)

    return Condition(f"element absent: {locator}", probe)


def element_text_contains(locator: Locator, text: str) -> Condition:
    """A matching element's text contains `text`."""

    def probe(state: SessionState) -> ConditionResult:
        found = locator.resolve(state)
        if not found:
            return ConditionResult.pending(observed=f"no element matches {locator}")
        texts = []
        for element in found:
            content = state.text_of(element) or ""
            if text in content:
                return ConditionResult.satisfied(element)
            texts.append(content)
        return ConditionResult.pending(observed=texts)

    return Condition(f"text {text!r} in {locator}", probe)


def url_contains(fragment: str) -> Condition:
    """The current URL contains `fragment`."""

    def probe(state: SessionState) -> ConditionResult:
        url = state.current_url()
        if fragment in url:
            return ConditionResult.satisfied(url)
        return ConditionResult.pending(observed=url)

    return Condition(f"URL contains {fragment!r}", probe)


def title_contains(fragment: str) -> Condition:
    """The page title contains `fragment`."""

    def probe(state: SessionState) -> ConditionResult:
        title = state.title()
        if fragment in title:
            return ConditionResult.satisfied(title)
        return ConditionResult.pending(observed=title)

    return Condition(f"title contains {fragment!r}", probe)


__all__ = [
    "Condition",
    "ConditionResult",
    "ConditionStatus",
    "SessionState",
    "all_of",
    "any_of",
    "element_absent",
    "element_clickable",
    "element_present",
    "element_text_contains",
    "element_visible",
    "title_contains",
    "url_contains",
]
