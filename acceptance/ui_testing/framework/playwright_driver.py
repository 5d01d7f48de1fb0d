"""
================================================================================
Playwright Driver
================================================================================

Synchronous Playwright implementation of the BrowserDriver surface.

Features:
    - chromium / firefox / webkit selection
    - One isolated playwright + browser + context + page per handle
    - Locator strategy translation to Playwright selectors
    - Playwright errors mapped onto the harness error taxonomy

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    ElementHandle,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .driver import SUPPORTED_BROWSERS, BrowserDriver, Viewport
from .errors import DriverError, DriverUnavailable
from .locator import Locator, Strategy


@dataclass
class PlaywrightHandle:
    """Everything one session owns."""

    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page


def _css_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def to_selector(locator: Locator) -> str:
    """
    Translate a single-strategy locator into a Playwright selector.

    Examples:
        >>> to_selector(Locator.by_name("email"))
        '[name="email"]'
        >>> to_selector(Locator.by_text("Login", tag="a"))
        "xpath=//a[contains(text(), 'Login')]"
    """
    if locator.strategy is Strategy.ATTRIBUTE_EQUALS:
        return f"[{locator.attribute}={_css_string(locator.value)}]"
    if locator.strategy is Strategy.TAG_NAME:
        return locator.value
    if locator.strategy is Strategy.TEXT_CONTAINS:
        return f"xpath=//{locator.tag}[contains(text(), {_xpath_literal(locator.value)})]"
    return locator.value


class PlaywrightDriver(BrowserDriver):
    """
    BrowserDriver backed by playwright.sync_api.

    Usage:
        driver = PlaywrightDriver(browser_type="chromium", headless=True)
        manager = SessionManager(driver, config)
        with manager.scoped() as session:
            session.navigate("/login")
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
            "--no-sandbox",
            "--disable-dev-shm-usage",
        ],
    }

    def __init__(
        self,
        browser_type: str = "chromium",
        headless: bool = True,
        action_timeout_ms: int = 10000,
    ):
        """
        Initialize driver.

        Args:
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
            headless: Run browser in headless mode
            action_timeout_ms: Upper bound for a single driver action
        """
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{browser_type}', expected one of {SUPPORTED_BROWSERS}"
            )
        self.browser_type = browser_type
        self.headless = headless
        self.action_timeout_ms = action_timeout_ms

    def launch(self, viewport: Viewport) -> PlaywrightHandle:
        playwright: Optional[Playwright] = None
        try:
            playwright = sync_playwright().start()
            launcher = getattr(playwright, self.browser_type)
            launch_options = {
                **self.DEFAULT_LAUNCH_OPTIONS,
                "headless": self.headless,
            }
            if self.browser_type != "chromium":
                launch_options.pop("args")
            browser = launcher.launch(**launch_options)
            context = browser.new_context(
                viewport=viewport.as_dict(),
                ignore_https_errors=True,
            )
            context.set_default_timeout(self.action_timeout_ms)
            page = context.new_page()
        except PlaywrightError as e:
            if playwright is not None:
                playwright.stop()
            raise DriverUnavailable(
                f"Could not launch {self.browser_type}: {e}"
            ) from e

        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless}, viewport={viewport.width}x{viewport.height})"
        )
        return PlaywrightHandle(playwright, browser, context, page)

    def navigate(self, handle: PlaywrightHandle, url: str) -> None:
        try:
            handle.page.goto(url, wait_until="domcontentloaded")
        except PlaywrightError as e:
            raise DriverError(f"Navigation to {url} failed: {e}") from e

    def find_elements(self, handle: PlaywrightHandle, locator: Locator) -> List[ElementHandle]:
        try:
            return handle.page.query_selector_all(to_selector(locator))
        except PlaywrightError as e:
            raise DriverError(f"Lookup failed for {locator}: {e}") from e

    def click(self, element: ElementHandle) -> None:
        try:
            element.click()
        except PlaywrightError as e:
            raise DriverError(f"Click failed: {e}") from e

    def type(self, element: ElementHandle, text: str) -> None:
        try:
            element.fill(text)
        except PlaywrightError as e:
            raise DriverError(f"Typing failed: {e}") from e

    def press(self, element: ElementHandle, key: str) -> None:
        try:
            element.press(key)
        except PlaywrightError as e:
            raise DriverError(f"Key press '{key}' failed: {e}") from e

    def current_url(self, handle: PlaywrightHandle) -> str:
        return handle.page.url

    def title(self, handle: PlaywrightHandle) -> str:
        try:
            return handle.page.title()
        except PlaywrightError as e:
            raise DriverError(f"Reading title failed: {e}") from e

    def is_displayed(self, element: ElementHandle) -> bool:
        try:
            return element.is_visible()
        except PlaywrightError as e:
            raise DriverError(f"Visibility check failed: {e}") from e

    def is_enabled(self, element: ElementHandle) -> bool:
        try:
            return element.is_enabled()
        except PlaywrightError as e:
            raise DriverError(f"Enabled check failed: {e}") from e

    def text_of(self, element: ElementHandle) -> str:
        try:
            return element.inner_text()
        except PlaywrightError as e:
            raise DriverError(f"Reading text failed: {e}") from e

    def attribute_of(self, element: ElementHandle, name: str) -> Optional[str]:
        try:
            return element.get_attribute(name)
        except PlaywrightError as e:
            raise DriverError(f"Reading attribute '{name}' failed: {e}") from e

    def screenshot(self, handle: PlaywrightHandle) -> Optional[bytes]:
        try:
            return handle.page.screenshot(full_page=True)
        except PlaywrightError as e:
            raise DriverError(f"Screenshot failed: {e}") from e

    def close(self, handle: PlaywrightHandle) -> None:
        try:
            try:
                handle.context.close()
            finally:
                try:
                    handle.browser.close()
                finally:
                    handle.playwright.stop()
        except PlaywrightError as e:
            raise DriverError(f"Browser teardown failed: {e}") from e
        logger.debug("Browser closed")


__all__ = [
    "PlaywrightDriver",
    "PlaywrightHandle",
    "SUPPORTED_BROWSERS",
    "to_selector",
]
