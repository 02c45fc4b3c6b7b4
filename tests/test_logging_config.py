import logging

from logging_config import LOGGER_NAME, get_logger, setup_logging


def test_setup_is_idempotent():
    logger = setup_logging("DEBUG")
    count = len(logger.handlers)
    again = setup_logging(logging.WARNING)
    assert again is logger
    assert len(again.handlers) == count == 1
    assert again.level == logging.WARNING


def test_module_loggers_nest_under_app_logger():
    assert get_logger().name == LOGGER_NAME
    assert get_logger("pipeline").name == f"{LOGGER_NAME}.pipeline"
