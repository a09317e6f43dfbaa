"""
Logging for the postfeed logger: console plus one log file per day.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "postfeed"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class DailyRotatingFileHandler(logging.FileHandler):
    """
    Writes to ``<log_dir>/postfeed_<YYYYMMDD>_<HHMMSS>.log``.

    HHMMSS is when the handler was created and stays fixed, so a
    long-running API process switches files at midnight but keeps one
    run's lines together.
    """

    def __init__(self, log_dir: str = "logs"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._started = datetime.now().strftime("%H%M%S")
        self._day = datetime.now().strftime("%Y%m%d")
        super().__init__(self._path_for(self._day), mode="a", encoding="utf-8")

    def _path_for(self, day: str) -> str:
        return str(self.log_dir / f"{LOGGER_NAME}_{day}_{self._started}.log")

    def emit(self, record: logging.LogRecord) -> None:
        today = datetime.now().strftime("%Y%m%d")
        if today != self._day:
            self.close()
            self._day = today
            self.baseFilename = self._path_for(today)
            self.stream = self._open()
        super().emit(record)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the postfeed logger and return it.

    Repeated calls replace the handlers. Unknown level names fall back to
    INFO.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR)
        log_dir: Log directory. Defaults to LOG_DIR or "logs"
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = DailyRotatingFileHandler(log_dir or os.getenv("LOG_DIR", "logs"))
    for handler in (logging.StreamHandler(), file_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging to {file_handler.baseFilename} at {logging.getLevelName(logger.level)}")
    return logger
