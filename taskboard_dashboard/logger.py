import logging
import os
from logging.handlers import TimedRotatingFileHandler


def setup_logger(log_dir: str = 'logs', level=logging.DEBUG) -> logging.Logger:
    logger = logging.getLogger("taskboard_dashboard")
    logger.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s'
    )

    # Remove all handlers associated with the logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    os.makedirs(log_dir, exist_ok=True)

    # A new log file is created every <interval> day at <when>. It is kept for <backupCount> days.
    file_handler = TimedRotatingFileHandler(
        os.path.join(log_dir, 'log'), when='midnight', interval=1, backupCount=30
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger
