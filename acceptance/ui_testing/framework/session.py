"""
================================================================================
Session Manager
================================================================================

Browser session lifecycle for UI scenarios.

Features:
    - One exclusively-owned browser per scenario (no pooling, no sharing)
    - Viewport applied at launch
    - Idempotent, unconditional teardown
    - Scoped acquisition (`with manager.scoped() as session:`)
    - Element interactions, waits and one-shot checks bound to the session

Usage:
    manager = SessionManager(PlaywrightDriver(), HarnessConfig.from_loader())
    with manager.scoped() as session:
        session.navigate("/login")
        session.wait_for(url_contains("/login"))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Iterator, List, Optional, TypeVar, Union

import allure
from loguru import logger

from .condition import Condition
from .driver import BrowserDriver, Viewport
from .errors import (
    ConditionNotSatisfied,
    DriverError,
    DriverUnavailable,
    SessionAlreadyActive,
    SessionClosed,
)
from .harness_config import HarnessConfig
from .locator import Locator
from .poller import PollOutcome, Poller


T = TypeVar("T")

Target = Union[Locator, Any]


class Session:
    """
    One browser instance for one scenario.

    The session is the state source conditions probe: it exposes
    `find_elements`, `current_url`, `title` and element queries. Every
    operation after `close()` raises SessionClosed.
    """

    def __init__(
        self,
        driver: BrowserDriver,
        handle: Any,
        viewport: Viewport,
        default_timeout_ms: int,
        base_url: str,
        poller: Poller,
    ):
        self._driver = driver
        self._handle = handle
        self.viewport = viewport
        self.default_timeout_ms = default_timeout_ms
        self.base_url = base_url.rstrip("/")
        self.poller = poller
        self.created_at = datetime.now()
        self._closed = False

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Session {state} {self.viewport.width}x{self.viewport.height} {self.base_url}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def _live_handle(self) -> Any:
        if self._closed:
            raise SessionClosed("Session is closed; the browser has been released")
        return self._handle

    def _ensure_open(self) -> None:
        self._live_handle()

    # =========================================================================
    # Navigation and page state
    # =========================================================================

    def url_for(self, path: str) -> str:
        """Absolute URL for `path` (absolute URLs pass through unchanged)."""
        if "://" in path:
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def navigate(self, path: str = "/") -> None:
        """
        Navigate to `path` under the configured base URL.

        Args:
            path: Path such as "/login" or an absolute URL
        """
        url = self.url_for(path)
        with allure.step(f"Navigate to {path}"):
            self._driver.navigate(self._live_handle(), url)
            logger.debug(f"Navigated to: {url}")

    def current_url(self) -> str:
        return self._driver.current_url(self._live_handle())

    def title(self) -> str:
        return self._driver.title(self._live_handle())

    def screenshot(self) -> Optional[bytes]:
        return self._driver.screenshot(self._live_handle())

    # =========================================================================
    # Element queries
    # =========================================================================

    def find_elements(self, locator: Locator) -> List[Any]:
        """Run one single-strategy lookup through the driver."""
        return list(self._driver.find_elements(self._live_handle(), locator))

    def find(self, locator: Locator) -> Any:
        """One-shot lookup; raises LocatorNotFound when nothing matches."""
        self._ensure_open()
        return locator.require(self)

    def _element(self, target: Target) -> Any:
        if isinstance(target, Locator):
            return self.find(target)
        self._ensure_open()
        return target

    def is_displayed(self, element: Any) -> bool:
        self._ensure_open()
        return self._driver.is_displayed(element)

    def is_enabled(self, element: Any) -> bool:
        self._ensure_open()
        return self._driver.is_enabled(element)

    def text_of(self, target: Target) -> str:
        return self._driver.text_of(self._element(target))

    def attribute_of(self, target: Target, name: str) -> Optional[str]:
        return self._driver.attribute_of(self._element(target), name)

    # =========================================================================
    # Element actions
    # =========================================================================

    def click(self, target: Target) -> None:
        """Click a locator (one-shot lookup) or an element handle."""
        with allure.step(f"Click: {target}"):
            self._driver.click(self._element(target))

    def type(self, target: Target, text: str, secret: bool = False) -> None:
        """
        Enter text into an input.

        Args:
            target: Locator or element handle
            text: Text to enter
            secret: Mask the value in reports
        """
        shown = "*" * len(text) if secret else text
        with allure.step(f"Fill {target}: {shown}"):
            self._driver.type(self._element(target), text)

    def press(self, target: Target, key: str) -> None:
        with allure.step(f"Press {key} on {target}"):
            self._driver.press(self._element(target), key)

    # =========================================================================
    # Waits
    # =========================================================================

    def poll(
        self,
        condition: Condition,
        timeout_ms: Optional[float] = None,
        interval_ms: Optional[float] = None,
    ) -> PollOutcome:
        """Poll `condition`; returns the outcome without raising."""
        self._ensure_open()
        timeout_ms = self.default_timeout_ms if timeout_ms is None else timeout_ms
        return self.poller.poll(condition, self, timeout_ms, interval_ms)

    def wait_for(
        self,
        condition: Condition,
        timeout_ms: Optional[float] = None,
        interval_ms: Optional[float] = None,
    ) -> Any:
        """
        Poll until satisfied and return the satisfied value.

        Raises:
            ConditionFailed: Condition detected an unrecoverable state
            ConditionTimedOut: Budget exhausted without satisfaction
        """
        self._ensure_open()
        timeout_ms = self.default_timeout_ms if timeout_ms is None else timeout_ms
        return self.poller.wait_for(condition, self, timeout_ms, interval_ms)

    def check(self, condition: Condition) -> Any:
        """
        Evaluate `condition` exactly once (no polling).

        Raises:
            ConditionFailed: Condition is failed
            ConditionNotSatisfied: Condition is still pending
        """
        self._ensure_open()
        with allure.step(f"Check: {condition.description}"):
            outcome = self.poller.poll(condition, self, 0)
            if outcome.timed_out:
                raise ConditionNotSatisfied(outcome)
            outcome.raise_for_status()
            return outcome.value

    # =========================================================================
    # Teardown
    # =========================================================================

    def close(self) -> None:
        """
        Release the browser. Safe to call any number of times.

        Teardown errors are logged, never raised, so they cannot mask the
        scenario's own failure.
        """
        if self._closed:
            return
        self._closed = True
        handle, self._handle = self._handle, None
        try:
            self._driver.close(handle)
        except (DriverError, OSError) as e:
            logger.warning(f"Browser teardown reported an error: {e}")
        lifetime = (datetime.now() - self.created_at).total_seconds()
        logger.debug(f"Session closed after {lifetime:.1f}s")


class SessionManager:
    """
    Opens sessions for scenarios.

    A manager hands out at most one active session at a time; use one
    manager per scenario (the pytest fixtures do) so sessions are never
    shared.
    """

    def __init__(
        self,
        driver: BrowserDriver,
        config: HarnessConfig,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.config = config
        self._clock = clock
        self._sleep = sleep
        self._active: Optional[Session] = None

    @property
    def active(self) -> Optional[Session]:
        if self._active is not None and self._active.closed:
            self._active = None
        return self._active

    def open(
        self,
        viewport: Optional[Viewport] = None,
        default_timeout_ms: Optional[int] = None,
    ) -> Session:
        """
        Launch a browser and wrap it in a Session.

        Args:
            viewport: Window size (defaults to configuration)
            default_timeout_ms: Wait budget (defaults to configuration)

        Raises:
            SessionAlreadyActive: A session from this manager is still open
            DriverUnavailable: The browser could not be launched
        """
        if self.active is not None:
            raise SessionAlreadyActive(
                "A session is already active; close it before opening another"
            )

        viewport = viewport or self.config.viewport
        timeout_ms = (
            self.config.default_timeout_ms if default_timeout_ms is None else default_timeout_ms
        )

        try:
            handle = self.driver.launch(viewport)
        except DriverError as e:
            raise DriverUnavailable(f"Browser launch failed: {e}") from e

        session = Session(
            driver=self.driver,
            handle=handle,
            viewport=viewport,
            default_timeout_ms=timeout_ms,
            base_url=self.config.base_url,
            poller=Poller(
                interval_ms=self.config.poll_interval_ms,
                clock=self._clock,
                sleep=self._sleep,
            ),
        )
        self._active = session
        logger.info(
            f"Session opened ({viewport.width}x{viewport.height}, "
            f"timeout={timeout_ms}ms, base_url={self.config.base_url})"
        )
        return session

    @contextmanager
    def scoped(
        self,
        viewport: Optional[Viewport] = None,
        default_timeout_ms: Optional[int] = None,
    ) -> Iterator[Session]:
        """Open a session and close it on every exit path."""
        session = self.open(viewport, default_timeout_ms)
        try:
            yield session
        finally:
            session.close()

    def run_scenario(self, body: Callable[[Session], T]) -> T:
        """Run `body` with a fresh session, closing it however `body` exits."""
        with self.scoped() as session:
            return body(session)


__all__ = [
    "Session",
    "SessionManager",
]
