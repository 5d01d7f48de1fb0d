"""Acceptance test suites: browser UI scenarios and harness unit tests."""
