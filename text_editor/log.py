"""
Logging setup — attaches a timestamped file handler to the package logger.
"""

import logging
import os
from datetime import datetime


def setup_logger(log_dir: str = ".text_editor/logs", level: int = logging.DEBUG) -> logging.Logger:
    """Creates a file logger for the ``text_editor`` package. All verbose output goes here.

    Calling it again reuses the file handler already attached.
    """
    logger = logging.getLogger("text_editor")
    logger.setLevel(level)
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"text_editor_{timestamp}.log")

    # File handler — captures everything
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(fh)

    return logger
