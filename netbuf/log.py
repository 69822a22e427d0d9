import logging
import os
from datetime import datetime

LOGGER_NAME = 'netbuf'


def setup_logging(log_dir: str = 'logs', debug: bool = False) -> logging.Logger:
    """Send netbuf records to a timestamped file under `log_dir` and to the console"""
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    # File handler - logs/netbuf_yyyy-mm-dd-hh-mm-ss.log
    os.makedirs(log_dir, exist_ok=True)
    file_handler = logging.FileHandler(
        os.path.join(log_dir, f'netbuf_{datetime.now().strftime("%Y-%m-%d-%H-%M-%S")}.log'),
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger
