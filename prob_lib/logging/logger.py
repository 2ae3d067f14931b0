"""
Logger implementation for the probability library.

This module provides JSON-formatted logging functionality for the library.
The library is silent by default; once debugging is enabled, logs are written
to timestamped files in a 'logs' directory.
"""

import os
import json
import logging
import datetime
from typing import Dict, Any, Optional
import numpy as np

# Create a custom JSON formatter that can handle numpy values and distributions
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for logging."""

    def __init__(self):
        super().__init__()

    def _serialize(self, obj: Any) -> Any:
        """Serialize objects to JSON-compatible format."""
        if isinstance(obj, np.ndarray):
            # Convert numpy arrays to lists with limited size
            if obj.size > 100:  # Only show a sample for large arrays
                shape_str = 'x'.join(str(dim) for dim in obj.shape)
                sample = obj.flatten()[:5].tolist()
                return f"ndarray({shape_str}): sample={sample}..."
            return obj.tolist()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif obj is None or isinstance(obj, (bool, int, float, str)):
            return obj
        elif isinstance(obj, (list, tuple)):
            # Handle lists and tuples recursively
            if len(obj) > 100:  # Only show a sample for large lists
                return [self._serialize(item) for item in list(obj)[:5]] + ["..."]
            return [self._serialize(item) for item in obj]
        elif isinstance(obj, dict):
            # Handle dictionaries recursively
            return {str(k): self._serialize(v) for k, v in obj.items()}
        elif callable(getattr(obj, 'items', None)):
            # Distributions serialize as [outcome, probability] pairs
            return self._serialize([[o, p] for o, p in obj.items()])
        elif hasattr(obj, '__float__'):
            # Probabilities and other numeric wrappers
            return float(obj)
        elif hasattr(obj, '__dict__'):
            # For custom objects, convert to dict
            return {
                "__type": obj.__class__.__name__,
                **{k: self._serialize(v) for k, v in obj.__dict__.items()
                   if not k.startswith('_')}
            }
        return repr(obj)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data = {
            'timestamp': datetime.datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Handle the case where the message is already a dict
        if isinstance(record.msg, dict):
            log_data['data'] = self._serialize(record.msg)
        else:
            log_data['message'] = record.getMessage()

            # Add any extra attributes
            if hasattr(record, 'data'):
                log_data['data'] = self._serialize(record.data)

        return json.dumps(log_data)


# Global logger instance
_logger = None

def setup_logger(
    debug: bool = False,
    log_level: str = "info",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up the logger with the specified configuration.

    A JSON file handler is only attached when debug is enabled or a log file
    is given; otherwise the library logs nowhere.

    Args:
        debug: Whether to enable debugging
        log_level: The log level (debug, info, warning, error)
        log_file: Optional custom log file path

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    # Create logger
    logger = logging.getLogger("prob_lib")

    # Set log level
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR
    }

    # Set the level based on debug flag and log_level
    if debug:
        logger.setLevel(level_map.get(log_level.lower(), logging.INFO))
    else:
        logger.setLevel(logging.WARNING)  # Minimal logging when debug is False

    if debug or log_file is not None:
        # Create logs directory if it doesn't exist
        logs_dir = os.path.join(os.getcwd(), "logs")

        # Create a timestamped log file if not specified
        if log_file is None:
            os.makedirs(logs_dir, exist_ok=True)
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(logs_dir, f"prob_lib_{timestamp}.json")
        elif not os.path.isabs(log_file):
            # If relative path, put it in the logs directory
            os.makedirs(logs_dir, exist_ok=True)
            log_file = os.path.join(logs_dir, log_file)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)
    else:
        logger.addHandler(logging.NullHandler())

    # Store the logger
    _logger = logger

    # Log initial setup
    if debug:
        logger.info({
            "event": "logger_initialized",
            "log_level": log_level,
            "log_file": log_file
        })

    return logger


def get_logger() -> logging.Logger:
    """
    Get the configured logger instance.

    Returns:
        Logger instance
    """
    global _logger

    if _logger is None:
        # Set up with default configuration if not already configured
        _logger = setup_logger()

    return _logger


def reset_logger() -> None:
    """Close and detach the handlers so that setup_logger can run again."""
    global _logger

    if _logger is None:
        return
    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)
        handler.close()
    _logger = None


# Helper functions for common logging patterns

def log_phase(phase: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Log the start of a new processing phase.

    Args:
        phase: Name of the phase
        details: Optional details about the phase
    """
    logger = get_logger()

    log_data = {
        "event": "phase_start",
        "phase": phase
    }

    if details:
        log_data["details"] = details

    logger.info(log_data)


def log_combinator(combinator: str, raw_pairs: int, outcomes: int) -> None:
    """
    Log how far a combinator's output shrank when equal outcomes were merged.

    Args:
        combinator: Name of the combinator (map, and_then, given)
        raw_pairs: Number of (outcome, probability) pairs produced
        outcomes: Number of distinct outcomes left after merging
    """
    logger = get_logger()

    # Combinators run in tight loops; skip building the record when disabled
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug({
        "event": "combinator",
        "combinator": combinator,
        "raw_pairs": raw_pairs,
        "outcomes": outcomes,
        "merged": raw_pairs - outcomes
    })
