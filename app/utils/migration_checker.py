"""
Migration Checker Utility

Prüft beim App-Start ob Alembic-Migrationen ausstehen und führt diese automatisch aus.
"""
import logging
from typing import Optional, Tuple

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect

from app.config import settings
from app.database import engine

logger = logging.getLogger(__name__)


def get_alembic_config() -> Config:
    """
    Alembic-Konfiguration aus alembic.ini, Datenbank-URL aus den Settings.
    """
    config = Config(str(settings.base_dir / "alembic.ini"))
    config.set_main_option("script_location", str(settings.base_dir / "migrations"))
    # '%' ist in ConfigParser-Werten ein Interpolationszeichen
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    # Logging der App nicht durch alembic.ini ersetzen
    config.attributes["configure_logger"] = False
    return config


def get_current_db_version() -> Optional[str]:
    """
    Gibt die aktuelle Datenbank-Version zurück.

    Returns:
        Revision-ID oder None (Datenbank nicht versioniert)
    """
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def get_head_version(config: Optional[Config] = None) -> Optional[str]:
    script = ScriptDirectory.from_config(config or get_alembic_config())
    return script.get_current_head()


def check_migrations_pending() -> Tuple[bool, Optional[str]]:
    """
    Prüft ob Alembic-Migrationen ausstehen.

    Returns:
        Tuple (has_pending, current_version)
    """
    current_version = get_current_db_version()
    head_version = get_head_version()
    logger.debug(f"DB revision: {current_version}, head: {head_version}")
    return current_version != head_version, current_version


def _has_tables() -> bool:
    tables = set(inspect(engine).get_table_names())
    tables.discard("alembic_version")
    return bool(tables)


def check_and_run_migrations(auto_upgrade: bool = True) -> None:
    """
    Prüft und führt Migrationen aus (wenn auto_upgrade=True).

    Eine Datenbank ohne Versionseintrag, deren Tabellen bereits über
    create_all angelegt wurden, wird auf head gestempelt statt migriert.

    Raises:
        RuntimeError: Wenn Migrationen fehlschlagen und auto_upgrade=True
    """
    logger.info("Checking Alembic migrations...")

    has_pending, current_version = check_migrations_pending()
    if not has_pending:
        logger.info("Database schema is up to date")
        return

    logger.warning(f"Pending migrations found (current revision: {current_version or 'none'})")
    if not auto_upgrade:
        logger.warning("Auto-upgrade disabled, run manually: alembic upgrade head")
        return

    config = get_alembic_config()
    try:
        if current_version is None and _has_tables():
            command.stamp(config, "head")
            logger.info("Existing schema stamped as head")
        else:
            command.upgrade(config, "head")
            logger.info("Migrations applied")
    except Exception as e:
        error_msg = f"Migration upgrade failed ({e}). Run manually: alembic upgrade head"
        logger.error(error_msg, exc_info=True)
        raise RuntimeError(error_msg) from e
