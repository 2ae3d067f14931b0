"""
Logging module for the probability library.

This module provides JSON-formatted logging functionality for the library.
"""

from prob_lib.logging.logger import (setup_logger, get_logger, reset_logger,
                                     log_phase, log_combinator)

__all__ = ["setup_logger", "get_logger", "reset_logger", "log_phase",
           "log_combinator"]
