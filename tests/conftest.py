"""Test configuration and fixtures."""

import logfire

# Spans and events are emitted everywhere; keep them local and quiet in tests
logfire.configure(send_to_logfire=False, console=False)
