"""Test configuration and fixtures."""

import logfire

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)
