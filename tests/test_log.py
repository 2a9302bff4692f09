"""Tests for wren.log — handler setup for the wren logger tree."""

import logging

from wren.log import configure_logging


class TestConfigureLogging:
    def test_sets_level_from_name(self) -> None:
        assert configure_logging("debug").level == logging.DEBUG

    def test_unknown_name_falls_back_to_info(self) -> None:
        assert configure_logging("chatty").level == logging.INFO

    def test_accepts_int(self) -> None:
        assert configure_logging(logging.WARNING).level == logging.WARNING

    def test_handler_added_once(self) -> None:
        logger = configure_logging("info")
        count = len(logger.handlers)
        configure_logging("debug")
        assert len(logger.handlers) == count
