"""
Repository-level pytest configuration.

Provides:
  - The repository root path
  - Loguru initialization for every run (level and sinks from config.yaml)

Note:
  UI settings (base URL, browser, credentials) are NOT defaulted here. They
  come from config/config.yaml and may be overridden with UI_* / CREDENTIALS_*
  environment variables, e.g. UI_BASE_URL=http://localhost:3000.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from harness_tools.common import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> None:
    """Configure Loguru once per test session."""
    init_logger()
