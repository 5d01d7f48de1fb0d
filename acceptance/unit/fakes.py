"""
In-memory stand-ins for the browser driver and the clock.

FakeDriver keeps a page as a mapping of single-strategy locators to fake
elements, so conditions, sessions and flows can be exercised without a
browser. FakeClock advances only when something sleeps and fires scheduled
page changes as time passes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from acceptance.ui_testing.framework.driver import BrowserDriver, Viewport
from acceptance.ui_testing.framework.errors import DriverError
from acceptance.ui_testing.framework.locator import Locator


class FakeClock:
    """Millisecond-exact clock driven by `sleep`."""

    def __init__(self):
        self._ms = 0
        self.sleeps: List[float] = []
        self._events: List[Tuple[int, Callable[[], None]]] = []

    def now(self) -> float:
        return self._ms / 1000

    @property
    def elapsed_ms(self) -> int:
        return self._ms

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._ms += round(seconds * 1000)
        self._fire_due()

    def after(self, ms: int, action: Callable[[], None]) -> None:
        """Run `action` once the clock reaches now + `ms`."""
        self._events.append((self._ms + ms, action))
        self._events.sort(key=lambda event: event[0])

    def _fire_due(self) -> None:
        while self._events and self._events[0][0] <= self._ms:
            _, action = self._events.pop(0)
            action()


@dataclass(eq=False)
class FakeElement:
    name: str
    visible: bool = True
    enabled: bool = True
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    on_click: Optional[Callable[[], None]] = None
    clicks: int = 0
    typed: List[str] = field(default_factory=list)
    pressed: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"<FakeElement {self.name}>"


@dataclass
class FakeHandle:
    number: int
    viewport: Viewport


class FakeDriver(BrowserDriver):
    """BrowserDriver over an in-memory page."""

    def __init__(self, url: str = "about:blank", title: str = ""):
        self.url = url
        self.page_title = title
        self.elements: Dict[Locator, List[FakeElement]] = {}
        self.on_navigate: Optional[Callable[[str], None]] = None

        self.launch_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.screenshot_error: Optional[Exception] = None
        self.query_errors = 0

        self.launched: List[FakeHandle] = []
        self.closed: List[FakeHandle] = []
        self.visits: List[str] = []
        self.lookups: List[Locator] = []

    # Page setup

    def place(self, locator: Locator, *elements: FakeElement) -> List[FakeElement]:
        key = locator.primary()
        self.elements.setdefault(key, []).extend(elements)
        return list(elements)

    def remove(self, locator: Locator) -> None:
        self.elements.pop(locator.primary(), None)

    # BrowserDriver

    def launch(self, viewport: Viewport) -> FakeHandle:
        if self.launch_error is not None:
            raise self.launch_error
        handle = FakeHandle(len(self.launched) + 1, viewport)
        self.launched.append(handle)
        return handle

    def navigate(self, handle: Any, url: str) -> None:
        self.url = url
        self.visits.append(url)
        if self.on_navigate is not None:
            self.on_navigate(url)

    def find_elements(self, handle: Any, locator: Locator) -> List[FakeElement]:
        self.lookups.append(locator)
        if self.query_errors > 0:
            self.query_errors -= 1
            raise DriverError("element handle went stale")
        return list(self.elements.get(locator, []))

    def click(self, element: FakeElement) -> None:
        element.clicks += 1
        if element.on_click is not None:
            element.on_click()

    def type(self, element: FakeElement, text: str) -> None:
        element.typed.append(text)
        element.attributes["value"] = text

    def press(self, element: FakeElement, key: str) -> None:
        element.pressed.append(key)

    def current_url(self, handle: Any) -> str:
        return self.url

    def title(self, handle: Any) -> str:
        return self.page_title

    def is_displayed(self, element: FakeElement) -> bool:
        return element.visible

    def is_enabled(self, element: FakeElement) -> bool:
        return element.enabled

    def text_of(self, element: FakeElement) -> str:
        return element.text

    def attribute_of(self, element: FakeElement, name: str) -> Optional[str]:
        return element.attributes.get(name)

    def screenshot(self, handle: Any) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b"\x89PNG fake"

    def close(self, handle: Any) -> None:
        self.closed.append(handle)
        if self.close_error is not None:
            raise self.close_error


class FakePage:
    """
    Minimal state source for condition tests (no session, no driver).

    Mirrors the read-only surface conditions probe.
    """

    def __init__(self, url: str = "", title: str = ""):
        self.url = url
        self.page_title = title
        self.elements: Dict[Locator, List[FakeElement]] = {}
        self.probes = 0

    def place(self, locator: Locator, *elements: FakeElement) -> None:
        self.elements.setdefault(locator.primary(), []).extend(elements)

    def find_elements(self, locator: Locator) -> List[FakeElement]:
        self.probes += 1
        return list(self.elements.get(locator, []))

    def current_url(self) -> str:
        return self.url

    def title(self) -> str:
        return self.page_title

    def is_displayed(self, element: FakeElement) -> bool:
        return element.visible

    def is_enabled(self, element: FakeElement) -> bool:
        return element.enabled

    def text_of(self, element: FakeElement) -> str:
        return element.text
