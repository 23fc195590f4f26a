"""Test configuration and fixtures for sourcedump."""


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI subprocess tests (slow)")
