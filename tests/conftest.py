"""Test configuration and fixtures."""

import logfire

# Keep test output local; the app instruments itself on import
logfire.configure(send_to_logfire=False, console=False)
