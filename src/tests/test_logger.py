import logging

from src.tavus_bridge.logging.logger import LOG_FORMAT, setup_logger


def test_setup_logger_is_idempotent():
    first = setup_logger("tavus_bridge.test.idempotent")
    second = setup_logger("tavus_bridge.test.idempotent")

    assert first is second
    assert len(first.handlers) == 1
    assert first.handlers[0].formatter._fmt == LOG_FORMAT
    assert first.propagate is False


def test_explicit_and_unknown_levels():
    assert setup_logger("tavus_bridge.test.debug", level="debug").level == logging.DEBUG
    assert setup_logger("tavus_bridge.test.bogus", level="LOUD").level == logging.INFO
