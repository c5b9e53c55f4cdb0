# utils/my_logging.py
import logging
import os

from .. import APP_NAME


def setup_logging(app_name=APP_NAME, base_dir="~/projects", level=logging.INFO):
    base_dir = os.path.expanduser(base_dir)
    app_logs_dir = os.path.join(base_dir, "logs", app_name)
    os.makedirs(app_logs_dir, exist_ok=True)

    log_file = os.path.join(app_logs_dir, f"{app_name}.log")

    logger = logging.getLogger(app_name)
    logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    # avoid duplicate handlers on reruns
    if not logger.handlers:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        console_handler = logging.StreamHandler()
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

    logger.debug(f"Logger initialized, writing to {log_file}")
    return logger


def get_logger(logger=None):
    """Return the given logger or the application logger."""
    return logger if logger is not None else logging.getLogger(APP_NAME)
