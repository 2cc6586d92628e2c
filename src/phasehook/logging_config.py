"""Logging setup"""

import logging
from datetime import datetime
from pathlib import Path

from phasehook.config import Config


def setup_logging() -> logging.Logger:
    """Configure root logging and return the phasehook logger.

    Logs go to stderr and to a dated file under Config.get_log_path().
    """
    log_dir = Path(Config.get_log_path())
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"phasehook_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=logging.DEBUG if Config.DEBUG else getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler()
        ]
    )

    return logging.getLogger("phasehook")
