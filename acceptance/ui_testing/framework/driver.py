"""Browser driver capability surface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .locator import Locator


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass(frozen=True)
class Viewport:
    """Browser window size in CSS pixels."""

    width: int = 1280
    height: int = 900

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")

    def as_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


class BrowserDriver(ABC):
    """
    Interface the harness core depends on.

    Handles are opaque to the core. `find_elements` always receives a
    single-strategy locator; fallbacks are handled by Locator itself.
    Implementations raise DriverUnavailable from `launch` and DriverError
    from queries and actions.
    """

    @abstractmethod
    def launch(self, viewport: Viewport) -> Any:
        """Start a browser sized to `viewport` and return its handle."""

    @abstractmethod
    def navigate(self, handle: Any, url: str) -> None:
        """Load `url`."""

    @abstractmethod
    def find_elements(self, handle: Any, locator: Locator) -> List[Any]:
        """Return elements matching a single-strategy locator."""

    @abstractmethod
    def click(self, element: Any) -> None:
        """Click an element."""

    @abstractmethod
    def type(self, element: Any, text: str) -> None:
        """Enter text into an element."""

    @abstractmethod
    def current_url(self, handle: Any) -> str:
        """URL of the current page."""

    @abstractmethod
    def title(self, handle: Any) -> str:
        """Title of the current page."""

    @abstractmethod
    def close(self, handle: Any) -> None:
        """Release every resource behind `handle`."""

    @abstractmethod
    def press(self, element: Any, key: str) -> None:
        """Press a keyboard key with focus on `element`."""

    @abstractmethod
    def is_displayed(self, element: Any) -> bool:
        """Whether the element is rendered and visible."""

    @abstractmethod
    def is_enabled(self, element: Any) -> bool:
        """Whether the element accepts interaction."""

    @abstractmethod
    def text_of(self, element: Any) -> str:
        """Visible text of the element."""

    @abstractmethod
    def attribute_of(self, element: Any, name: str) -> Optional[str]:
        """Value of an element attribute, or None."""

    def screenshot(self, handle: Any) -> Optional[bytes]:
        """PNG of the current page; drivers without screenshots return None."""
        return None


__all__ = [
    "BrowserDriver",
    "SUPPORTED_BROWSERS",
    "Viewport",
]
