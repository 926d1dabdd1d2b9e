"""Top-level pytest configuration for plugin fixture registration.

This file centralizes `pytest_plugins` to comply with pytest's requirement
that plugin declarations live in a top-level conftest located at the rootdir.
"""

pytest_plugins = [
    "tests.fixtures.requests",
]


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Ensure async tests work properly
    config.option.asyncio_mode = "auto"

    from regaudit.core.logging import setup_logging

    setup_logging(json_logs=False, log_level_name="DEBUG")
