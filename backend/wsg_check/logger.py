"""
Logging configuration.
"""
import logging
import sys

# Create logger
logger = logging.getLogger("wsg_check")
logger.setLevel(logging.INFO)

# Console handler
console_handler = logging.StreamHandler(sys.stderr)
console_handler.setLevel(logging.DEBUG)

# Formatter
formatter = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
console_handler.setFormatter(formatter)

# Add handler
if not logger.handlers:
    logger.addHandler(console_handler)


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between DEBUG and INFO."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
