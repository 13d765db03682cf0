"""
Log yapilandirmasi.

Iki hedef: terminal (StreamHandler) ve donen log dosyasi
(<LOG_DIR>/kolaypanel.log, RotatingFileHandler).
Servis modulleri sadece logging.getLogger(__name__) kullanir.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from kolaypanel.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Bu kutuphaneler INFO seviyesinde cok gurultulu
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "multipart")


def _file_handler(log_dir: str, formatter: logging.Formatter) -> RotatingFileHandler:
    if not os.path.isabs(log_dir):
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        log_dir = os.path.join(project_root, log_dir)
    os.makedirs(log_dir, exist_ok=True)

    handler = RotatingFileHandler(
        os.path.join(log_dir, "kolaypanel.log"),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """Uygulama acilisinda bir kez cagrilir (main.py). Tekrar cagrilirsa sadece seviye guncellenir."""
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if any(getattr(h, "_kolaypanel", False) for h in root_logger.handlers):
        return

    formatter = logging.Formatter(LOG_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    for handler in (console_handler, _file_handler(log_dir or settings.LOG_DIR, formatter)):
        handler._kolaypanel = True
        root_logger.addHandler(handler)

    logging.getLogger(__name__).info("Loglama hazir (seviye: %s)", level_name)
