"""
================================================================================
Harness Tools
================================================================================

Infrastructure utilities shared by the acceptance suites.

Modules:
    - common: Configuration loading and logging setup
    - report_tools: Allure attachment helpers for waits, flows and screenshots

Example:
    from harness_tools.common import init_logger, get_config
    from harness_tools.report_tools.allure_utils import attach_poll_outcome

    init_logger()
    timeout = get_config("ui.default_timeout_ms", 20000)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
