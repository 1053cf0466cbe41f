"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from rostr import __logger__
from rostr.__logger__ import create_logger


class TestCreateLogger:
    """Tests for create_logger function."""

    def test_installs_rich_handler(self):
        create_logger()

        handlers = __logger__.logger.handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RichHandler)
        assert __logger__.logger.propagate is False

    def test_sets_level(self):
        create_logger(level="DEBUG")
        assert __logger__.logger.level == logging.DEBUG

        create_logger(level="WARNING")
        assert __logger__.logger.level == logging.WARNING

    def test_repeated_setup_does_not_stack_handlers(self):
        create_logger()
        create_logger()
        assert len(__logger__.logger.handlers) == 1

    def test_module_loggers_are_children(self):
        assert logging.getLogger("rostr.config.loader").parent.name in (
            "rostr",
            "rostr.config",
        )
