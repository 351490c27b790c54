"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['DUPECHECK_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Decode and store warnings are expected in the failure-path tests
    for logger_name in ['dupecheck.hashing.extract', 'dupecheck.store.json_store', 'dupecheck.cli']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
