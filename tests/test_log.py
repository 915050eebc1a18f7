from __future__ import annotations

import logging

import pytest

from savingsestimator import log


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_replaces_handlers(restore_root_logger):
    log.setup_logging("debug")
    log.setup_logging("info")

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
    assert root.handlers[0].formatter._fmt == log.LOG_FORMAT


def test_unknown_level_falls_back_to_warning(restore_root_logger):
    log.setup_logging("chatty")
    assert restore_root_logger.level == logging.WARNING


def test_module_is_documented():
    assert log.__doc__
