"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    # Loggers created during the test run pick this up
    os.environ['BOOSTMAP_LOG_LEVEL'] = 'WARNING'

    # Also configure root logger to be quiet
    logging.getLogger().setLevel(logging.WARNING)

    # The adapters log every conversion at DEBUG
    for logger_name in ['boostmap.container.adapters', 'boostmap.typed.nested']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
