import sys
import logging

# --------------------------------------------------------
# Unified logger for all squatdepth modules
# --------------------------------------------------------
LOGGER_NAME = "squatdepth"
logger = logging.getLogger(LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """Child logger under the package logger, e.g. ``squatdepth.session``."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logger.getChild(name)


def configure_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Entry points (CLI, API) call this once; library code only emits.
    Calling it again just updates the level.
    """
    logger.setLevel(level)

    # If no handlers exist, add one (avoid duplicate logs)
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    logger.propagate = False  # Prevent duplicate uvicorn logs
    return logger
