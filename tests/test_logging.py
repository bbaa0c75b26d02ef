"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from convexkit.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from convexkit.optimize import newton_method
from convexkit.optimize.testfuns import fnonquadr_problem


def test_get_logger_returns_logger():
    """Test that get_logger returns a namespaced logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "convexkit.test_module"


def test_get_logger_keeps_package_names():
    """Module loggers inside the package keep their dotted name."""
    assert get_logger("convexkit.optimize.newton").name == "convexkit.optimize.newton"
    assert get_logger().name == "convexkit"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_redirects_output():
    """Test configure_logging with a custom stream and format."""
    stream = StringIO()
    logger = get_logger("test_module")
    try:
        configure_logging(
            level=logging.DEBUG, format_string="%(levelname)s|%(message)s", stream=stream
        )
        logger.debug("Debug message")
        assert "DEBUG|Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_solver_logs_progress_at_debug():
    """Solvers report each iteration at DEBUG and convergence at INFO."""
    stream = StringIO()
    get_logger("convexkit.optimize.newton")
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        newton_method(fnonquadr_problem(), np.array([1.0, 1.0]))
        output = stream.getvalue()
        assert "newton_method iter 1" in output
        assert "newton_method converged" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_solvers_are_silent_by_default():
    stream = StringIO()
    get_logger("convexkit.optimize.newton")
    configure_logging(level=logging.WARNING, stream=stream)
    try:
        newton_method(fnonquadr_problem(), np.array([1.0, 1.0]))
        assert stream.getvalue() == ""
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("test_module").propagate is False
