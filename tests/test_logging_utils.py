import logging

from briefly.logging_utils import CONSOLE_HANDLER_NAME, add_console_handler, setup_logging


def test_add_console_handler_ignores_other_stream_handlers():
    logger = logging.getLogger("briefly.tests.console")
    stray = logging.StreamHandler()
    logger.addHandler(stray)
    try:
        add_console_handler(logger, logging.DEBUG)
        add_console_handler(logger, logging.DEBUG)
        tagged = [h for h in logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME]
        assert len(tagged) == 1
        assert tagged[0].level == logging.DEBUG
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)


def test_setup_logging_writes_to_log_dir(tmp_path):
    logger, log_path = setup_logging(log_dir=str(tmp_path / "logs"))
    assert logger.name == "briefly"
    assert log_path.endswith("briefly.log")
    assert (tmp_path / "logs").is_dir()
