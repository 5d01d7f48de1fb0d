"""UI acceptance testing: harness framework, application flows and scenarios."""
