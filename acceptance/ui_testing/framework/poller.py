# ================================================================================
# Poller Module
# ================================================================================
#
# Bounded, fixed-cadence evaluation loop for Conditions.
#
# Key Features:
#   - Fixed polling interval (UI latency is bounded by rendering/network,
#     not contention, so no backoff)
#   - Immediate return on Satisfied (no trailing sleep)
#   - Immediate stop on Failed, distinguished from timing out
#   - Timeout outcome carries the last observed state for diagnostics
#   - Injectable clock/sleep for deterministic unit tests
#   - Allure step integration
#
# Usage:
#   poller = Poller(interval_ms=200)
#   outcome = poller.poll(url_contains("/dashboard"), session, timeout_ms=20000)
#   value = poller.wait_for(element_clickable(SUBMIT), session, timeout_ms=5000)
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type

import allure
from loguru import logger

from .condition import Condition, ConditionResult
from .errors import ConditionFailed, ConditionTimedOut, DriverError, SessionClosed


DEFAULT_INTERVAL_MS = 200


class PollStatus(str, Enum):
    SATISFIED = "satisfied"
    FAILED = "failed"
    TIMED_OUT = "timed-out"


@dataclass(frozen=True)
class PollOutcome:
    """
    Result of one Poller invocation.

    Attributes:
        status: Terminal state of the poll cycle
        description: Description of the polled condition
        elapsed_ms: Wall-clock time spent polling
        attempts: Number of condition evaluations
        value: Satisfied value (None otherwise)
        reason: Failure reason (FAILED only)
        last_observed: Last snapshot reported by the condition
    """

    status: PollStatus
    description: str
    elapsed_ms: float
    attempts: int
    value: Any = None
    reason: Optional[str] = None
    last_observed: Any = None

    @property
    def satisfied(self) -> bool:
        return self.status is PollStatus.SATISFIED

    @property
    def failed(self) -> bool:
        return self.status is PollStatus.FAILED

    @property
    def timed_out(self) -> bool:
        return self.status is PollStatus.TIMED_OUT

    def raise_for_status(self) -> "PollOutcome":
        """
        Raise the matching error unless satisfied.

        Raises:
            ConditionFailed: Condition reported an unrecoverable state
            ConditionTimedOut: Budget exhausted without satisfaction
        """
        if self.failed:
            raise ConditionFailed(self)
        if self.timed_out:
            raise ConditionTimedOut(self)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "satisfied": self.satisfied,
            "description": self.description,
            "elapsed_ms": round(self.elapsed_ms, 1),
            "attempts": self.attempts,
            "reason": self.reason,
            "last_observed": repr(self.last_observed),
        }


class Poller:
    """
    Repeatedly evaluates a Condition until satisfied, failed, or out of time.

    One poll cycle:

        Pending -> Pending (sleep, retry)
                -> Satisfied (terminal success)
                -> Failed    (terminal failure)
                -> TimedOut  (terminal failure, budget exhausted)

    A timeout of 0 evaluates the condition exactly once.
    """

    def __init__(
        self,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        ignored_exceptions: Tuple[Type[BaseException], ...] = (DriverError,),
    ):
        """
        Initialize poller.

        Args:
            interval_ms: Default pause between attempts in milliseconds
            clock: Monotonic clock returning seconds
            sleep: Sleep function taking seconds
            ignored_exceptions: Errors raised by a probe that count as Pending
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = interval_ms
        self._clock = clock
        self._sleep = sleep
        self._ignored = ignored_exceptions

    def poll(
        self,
        condition: Condition,
        state: Any,
        timeout_ms: float,
        interval_ms: Optional[float] = None,
    ) -> PollOutcome:
        """
        Evaluate `condition` against `state` until a terminal result.

        Args:
            condition: Condition to evaluate
            state: Session (or fake state source) passed to the condition
            timeout_ms: Polling budget in milliseconds
            interval_ms: Pause between attempts (defaults to the poller's)

        Returns:
            PollOutcome; never raises for Failed / TimedOut
        """
        interval_ms = self.interval_ms if interval_ms is None else interval_ms
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must not be negative, got {timeout_ms}")

        start = self._clock()
        attempts = 0
        last_observed: Any = None

        while True:
            attempts += 1
            result = self._evaluate(condition, state)
            elapsed_ms = (self._clock() - start) * 1000

            if result.is_satisfied:
                logger.debug(
                    f"Condition satisfied after {attempts} attempt(s) "
                    f"({elapsed_ms:.0f}ms): {condition.description}"
                )
                return PollOutcome(
                    status=PollStatus.SATISFIED,
                    description=condition.description,
                    elapsed_ms=elapsed_ms,
                    attempts=attempts,
                    value=result.value,
                    last_observed=result.observed,
                )

            if result.is_failed:
                logger.error(
                    f"Condition failed after {attempts} attempt(s): "
                    f"{condition.description} -> {result.reason}"
                )
                return PollOutcome(
                    status=PollStatus.FAILED,
                    description=condition.description,
                    elapsed_ms=elapsed_ms,
                    attempts=attempts,
                    reason=result.reason,
                    last_observed=result.observed,
                )

            last_observed = result.observed
            remaining_ms = timeout_ms - elapsed_ms
            if remaining_ms <= 0:
                logger.error(
                    f"Timeout after {elapsed_ms:.0f}ms ({attempts} attempts) waiting for: "
                    f"{condition.description}. Last observed: {last_observed!r}"
                )
                return PollOutcome(
                    status=PollStatus.TIMED_OUT,
                    description=condition.description,
                    elapsed_ms=elapsed_ms,
                    attempts=attempts,
                    last_observed=last_observed,
                )

            logger.debug(
                f"Attempt {attempts}: pending ({condition.description}). "
                f"Observed: {last_observed!r}"
            )
            self._sleep(min(interval_ms, remaining_ms) / 1000)

    def wait_for(
        self,
        condition: Condition,
        state: Any,
        timeout_ms: float,
        interval_ms: Optional[float] = None,
    ) -> Any:
        """
        Poll and return the satisfied value.

        Raises:
            ConditionFailed: Condition reported an unrecoverable state
            ConditionTimedOut: Budget exhausted without satisfaction
        """
        with allure.step(f"Wait for: {condition.description}"):
            outcome = self.poll(condition, state, timeout_ms, interval_ms)
            outcome.raise_for_status()
            return outcome.value

    def _evaluate(self, condition: Condition, state: Any) -> ConditionResult:
        try:
            return condition.evaluate(state)
        except SessionClosed:
            raise
        except self._ignored as e:
            logger.warning(f"Probe error treated as pending ({condition.description}): {e}")
            return ConditionResult.pending(observed=f"{type(e).__name__}: {e}")


__all__ = [
    "DEFAULT_INTERVAL_MS",
    "PollOutcome",
    "PollStatus",
    "Poller",
]
