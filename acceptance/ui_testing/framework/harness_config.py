"""
================================================================================
Harness Configuration
================================================================================

Typed configuration object passed explicitly into sessions and flows.

Sources:
    - ConfigLoader (YAML + environment), see `HarnessConfig.from_loader`
    - Plain mappings using either the camelCase option names
      (baseUrl, defaultTimeoutMs, pollIntervalMs, viewport) or the
      snake_case YAML names, see `HarnessConfig.from_dict`

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from harness_tools.common import ConfigLoader, ConfigurationError

from .driver import SUPPORTED_BROWSERS, Viewport


DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT_MS = 20000
DEFAULT_POLL_INTERVAL_MS = 200


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***MASKED***')"


@dataclass(frozen=True)
class HarnessConfig:
    """
    Settings for one test run.

    Attributes:
        base_url: Origin of the application under test
        default_timeout_ms: Poll budget when a wait names none
        poll_interval_ms: Pause between poll attempts
        viewport: Browser window size
        browser: Playwright browser type
        headless: Run without a visible window
        credentials: Login fixtures keyed by role ("user", "admin", ...)
    """

    base_url: str = DEFAULT_BASE_URL
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    viewport: Viewport = field(default_factory=Viewport)
    browser: str = "chromium"
    headless: bool = True
    credentials: Mapping[str, Credentials] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.default_timeout_ms < 0:
            raise ConfigurationError(
                f"default_timeout_ms must not be negative, got {self.default_timeout_ms}"
            )
        if self.poll_interval_ms <= 0:
            raise ConfigurationError(
                f"poll_interval_ms must be positive, got {self.poll_interval_ms}"
            )
        if self.browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Unsupported browser '{self.browser}', expected one of {SUPPORTED_BROWSERS}"
            )

    def credentials_for(self, role: str) -> Credentials:
        try:
            return self.credentials[role]
        except KeyError:
            raise ConfigurationError(f"No credentials configured for role '{role}'") from None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HarnessConfig":
        """
        Build from a plain mapping.

        Recognized options (either spelling):
            baseUrl / base_url
            defaultTimeoutMs / default_timeout_ms
            pollIntervalMs / poll_interval_ms
            viewport: {width, height}
            browser, headless, credentials: {role: {email, password}}
        """
        def pick(camel: str, snake: str, default: Any) -> Any:
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        viewport_data = data.get("viewport") or {}
        try:
            if isinstance(viewport_data, Viewport):
                viewport = viewport_data
            else:
                viewport = Viewport(
                    int(viewport_data.get("width", Viewport.width)),
                    int(viewport_data.get("height", Viewport.height)),
                )
            return cls(
                base_url=str(pick("baseUrl", "base_url", DEFAULT_BASE_URL)),
                default_timeout_ms=int(
                    pick("defaultTimeoutMs", "default_timeout_ms", DEFAULT_TIMEOUT_MS)
                ),
                poll_interval_ms=int(
                    pick("pollIntervalMs", "poll_interval_ms", DEFAULT_POLL_INTERVAL_MS)
                ),
                viewport=viewport,
                browser=str(data.get("browser", "chromium")),
                headless=_as_bool(data.get("headless", True)),
                credentials=_parse_credentials(data.get("credentials") or {}),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid harness configuration: {e}") from e

    @classmethod
    def from_loader(cls, loader: Optional[ConfigLoader] = None) -> "HarnessConfig":
        """Build from the YAML/env ConfigLoader (`ui.*` and `credentials.*` keys)."""
        loader = loader or ConfigLoader()

        credentials: Dict[str, Dict[str, Any]] = {}
        for role in loader.get_section("credentials"):
            credentials[role] = {
                "email": loader.get(f"credentials.{role}.email", ""),
                "password": loader.get(f"credentials.{role}.password", ""),
            }

        return cls.from_dict({
            "base_url": loader.get("ui.base_url", DEFAULT_BASE_URL),
            "default_timeout_ms": loader.get("ui.default_timeout_ms", DEFAULT_TIMEOUT_MS),
            "poll_interval_ms": loader.get("ui.poll_interval_ms", DEFAULT_POLL_INTERVAL_MS),
            "viewport": {
                "width": loader.get("ui.viewport.width", Viewport.width),
                "height": loader.get("ui.viewport.height", Viewport.height),
            },
            "browser": loader.get("ui.browser", "chromium"),
            "headless": loader.get("ui.headless", True),
            "credentials": credentials,
        })


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "on")
    return bool(value)


def _parse_credentials(data: Mapping[str, Any]) -> Dict[str, Credentials]:
    parsed = {}
    for role, entry in data.items():
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"Credentials for role '{role}' must be a mapping")
        parsed[role] = Credentials(
            email=str(entry.get("email", "")),
            password=str(entry.get("password", "")),
        )
    return parsed


__all__ = [
    "Credentials",
    "HarnessConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_TIMEOUT_MS",
]
