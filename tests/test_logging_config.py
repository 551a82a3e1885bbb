import logging

import pytest

from sleep_tracker.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging("WARNING")


def test_services_follow_app_level_by_default():
    setup_logging("info")

    assert logging.getLogger("sleep_tracker").level == logging.INFO
    assert logging.getLogger("sleep_tracker.services").level == logging.INFO
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_services_level_override():
    setup_logging("WARNING", services_level="debug")

    services = logging.getLogger("sleep_tracker.services.sleep_entries")

    assert services.isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("sleep_tracker.api.auth").isEnabledFor(logging.INFO)


def test_sql_echo_level():
    setup_logging("WARNING", sql_level="INFO")

    assert logging.getLogger("sqlalchemy.engine").isEnabledFor(logging.INFO)
