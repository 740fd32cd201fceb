"""
Logging for act_amplifier modules: one dated file per module under logs/ plus stdout.

Level comes from AMPLIFIER_LOG_LEVEL; the CLI overrides it with set_log_level().
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path


DEFAULT_LOG_LEVEL = os.getenv("AMPLIFIER_LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


def setup_logging(
    module_name: str,
    log_level: str = DEFAULT_LOG_LEVEL,
    log_dir: str = "logs",
    console_output: bool = True
) -> logging.Logger:
    """
    Set up logging for a module with both file and console output.

    Args:
        module_name: Name of the module (use __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (default: logs/)
        console_output: Whether to output to console (default: True)

    Returns:
        Configured logger instance

    The file is logs/{module}_{date}.log, e.g. logs/reconciler_2024-05-01.log.
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Prevent duplicate handlers if setup_logging called multiple times
    if logger.handlers:
        return logger

    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    today = datetime.now().strftime("%Y-%m-%d")
    simple_module = module_name.split('.')[-1]
    log_file = log_path / f"{simple_module}_{today}.log"

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(getattr(logging, log_level.upper()))
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def set_log_level(log_level: str) -> None:
    """
    Change the level of every act_amplifier logger already configured.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    level = getattr(logging, log_level.upper())
    for name, logger in logging.root.manager.loggerDict.items():
        if not name.startswith("act_amplifier") or not isinstance(logger, logging.Logger):
            continue
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
