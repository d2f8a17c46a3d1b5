import logging
import os
import time
from logging.handlers import RotatingFileHandler

from chorechart.core.config import GetBool, GetEnv

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LocalTimeFormatter(logging.Formatter):
    converter = time.localtime


def _read_size(name: str, default: int) -> int:
    raw = GetEnv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def setup_logging() -> None:
    """Configure the root logger from LOG_* variables.

    Console output is always on. LOG_FILE_PATH adds a size-rotated file;
    SQLALCHEMY_ECHO raises the engine logger to INFO to show issued SQL.
    Safe to call more than once.
    """
    log_level = (GetEnv("LOG_LEVEL", "INFO") or "INFO").upper()
    log_file_path = GetEnv("LOG_FILE_PATH")

    formatter = LocalTimeFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file_path,
                maxBytes=_read_size("LOG_MAX_BYTES", 5_000_000),
                backupCount=_read_size("LOG_BACKUP_COUNT", 5),
            )
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # request_logger in main.py replaces uvicorn's access lines
    logging.getLogger("uvicorn.access").handlers.clear()
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if GetBool("SQLALCHEMY_ECHO") else logging.WARNING
    )
