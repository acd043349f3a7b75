import logging
import sys


def configure_logging(level=logging.INFO):
    """Send all logging to stderr through a single handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid duplicate lines when the app factory runs more than once
    if root_logger.handlers:
        root_logger.handlers.clear()

    root_logger.addHandler(handler)
