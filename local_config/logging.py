import logging
import os
from datetime import datetime

LOGGER_NAME = "local_config"


def setup_logging(log_dir=None, level=None):
    """
    Sets up the package logger: console output at LOCAL_CONFIG_LOG_LEVEL
    (WARNING by default) and, when log_dir is given, debug messages to a file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    if level is None:
        level = os.getenv("LOCAL_CONFIG_LOG_LEVEL", "WARNING").upper()

    # Create console handler once; re-running setup only adjusts its level
    console_handler = next(
        (h for h in logger.handlers if getattr(h, "_local_config_console", False)), None
    )
    if console_handler is None:
        console_handler = logging.StreamHandler()
        console_handler._local_config_console = True
        console_formatter = logging.Formatter('%(levelname)s - %(name)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)
    console_handler.setLevel(level)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime("local_config_%Y%m%d_%H%M%S.log")
        log_filepath = os.path.abspath(os.path.join(log_dir, log_filename))

        already_attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_filepath
            for h in logger.handlers
        )
        if not already_attached:
            # File handler logs debug messages
            file_handler = logging.FileHandler(log_filepath)
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

    return logger

# Initialize logger
logger = setup_logging()
