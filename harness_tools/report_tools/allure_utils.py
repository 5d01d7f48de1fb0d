"""
================================================================================
Allure Report Utilities
================================================================================

This module provides helpers for enriching Allure reports with UI harness
diagnostics.

Features:
- Generic JSON / text / PNG attachments
- Poll outcome attachments (condition, attempts, last observed state)
- Flow result attachments (which step stopped the flow)

================================================================================
"""

import json
from typing import Any, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(png: bytes, name: str = "Screenshot"):
    """Attach a PNG screenshot to Allure report."""
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


# ================================================================================
# Harness Diagnostics
# ================================================================================

def attach_poll_outcome(outcome: Any, name: Optional[str] = None):
    """
    Attach a poll outcome.

    Args:
        outcome: Object exposing `to_dict()` and `description`
        name: Attachment name (defaults to the condition description)
    """
    payload = outcome.to_dict()
    title = name or f"Wait: {payload.get('description', 'condition')}"
    attach_json(payload, name=title)
    logger.debug(f"Attached poll outcome: {title}")


def attach_flow_result(result: Any, name: Optional[str] = None):
    """
    Attach a flow result.

    Args:
        result: Object exposing `to_dict()` and `flow_name`
        name: Attachment name (defaults to the flow name)
    """
    payload = result.to_dict()
    attach_json(payload, name=name or f"Flow: {payload.get('flow_name', 'flow')}")
