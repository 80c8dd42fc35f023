"""Logging für Konsole und rotierende Log-Datei"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Bibliotheken, die nur Warnungen loggen sollen
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access", "alembic.runtime.migration")


def _build_handlers(log_file: str, level: int) -> List[logging.Handler]:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handlers: List[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        # 5 MB pro Datei, 3 ältere Dateien bleiben erhalten
        RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"),
    ]
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(debug: bool = False, log_file: str = "eventraum.log") -> None:
    """
    Richtet das Root-Logging ein.

    Zeilen sehen so aus:
        2026-03-14 18:00:01 - app.services.reconciliation - INFO - Reconciled event 3: ... -> partial

    Args:
        debug: DEBUG statt INFO
        log_file: Pfad zur Log-Datei (Verzeichnis wird bei Bedarf angelegt)
    """
    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in _build_handlers(log_file, level):
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.info(f"Logging ready (level {logging.getLevelName(level)}, file {Path(log_file).absolute()})")
