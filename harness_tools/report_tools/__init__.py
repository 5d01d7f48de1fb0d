"""Allure reporting helpers for the UI harness."""

from .allure_utils import (
    attach_flow_result,
    attach_json,
    attach_png,
    attach_poll_outcome,
    attach_text,
)

__all__ = [
    "attach_flow_result",
    "attach_json",
    "attach_png",
    "attach_poll_outcome",
    "attach_text",
]
