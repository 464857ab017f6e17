"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from dfconduit.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from dfconduit.optimize import ControlledRandomSearch


def test_get_logger_returns_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("dfconduit.")


def test_get_logger_caching():
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_keeps_package_names():
    logger = get_logger("dfconduit.optimize.crs")
    assert logger.name == "dfconduit.optimize.crs"


def test_get_logger_different_modules():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_logger_output():
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        logger = get_logger("test_module")
        logger.info("Test message")

        output = captured.getvalue()
        assert "Test message" in output
        assert "test_module" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_optimizer_reports_termination_at_info_level():
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        crs = ControlledRandomSearch(max_evaluations=60, rng=0)
        crs.optimize(lambda x: float(np.sum(x**2)), [-1.0], [1.0], [0.5])
        assert "ControlledRandomSearch stopped" in captured.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level <= logging.INFO

    set_log_level(logging.WARNING)
    assert logger.level <= logging.WARNING


def test_set_log_level_string():
    logger = get_logger("test_module")

    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG

    set_log_level("ERROR")
    assert logger.level == logging.ERROR

    set_log_level("WARNING")
