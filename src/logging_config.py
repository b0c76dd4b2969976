import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_LEVEL_ENV = "TEAM_BALANCER_LOG_LEVEL"


def setup_logging(
    log_level: Optional[str] = None, log_dir: Optional[Path] = None
) -> Optional[Path]:
    """Configure logging for the team balancer.

    The level comes from ``log_level``, then ``$TEAM_BALANCER_LOG_LEVEL``,
    then INFO. Returns the log file path, or None if logging was already
    configured.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return None  # Already configured

    level_name = (log_level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "team_balancer.log"

    root_logger.setLevel(logging.DEBUG)

    # File handler keeps engine step detail (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging initialized (level=%s, file=%s)", level_name, log_file
    )
    return log_file
