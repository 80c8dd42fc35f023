"""Engine, Sessions und Transaktionsklammer der Eventraum-Datenbank"""
from contextlib import contextmanager
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.config import settings


def build_engine_options(database_url: str, echo: bool = False) -> Dict[str, Any]:
    """
    Engine-Optionen je Datenbank.

    SQLite: eine Datei, die von den Worker-Threads von FastAPI gemeinsam
    genutzt wird; bei Schreibsperren wird bis zu 30 s gewartet.
    PostgreSQL: Verbindungen vor Verwendung prüfen.
    """
    if database_url.startswith("sqlite"):
        return {
            "echo": echo,
            "connect_args": {"check_same_thread": False, "timeout": 30},
        }
    return {"echo": echo, "pool_pre_ping": True}


engine = create_engine(settings.database_url, **build_engine_options(settings.database_url, settings.debug))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """FastAPI-Dependency: eine Session pro Anfrage"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Commit bei Erfolg, Rollback bei jeder Exception.

    Alles, was innerhalb des Blocks geschrieben wird, landet gemeinsam in
    der Datenbank oder gar nicht. Schreiboperationen auf Transaktionen und
    Buchungen führen deshalb auch den Zahlungsabgleich innerhalb desselben
    Blocks aus:

        with transaction(db):
            db.add(payment)
            changes = reconcile_many(db, payment.event_id)
        publish_payment_changes(changes)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db() -> None:
    """
    Legt fehlende Tabellen an (frische Installation, Tests).

    Das Schema wird danach von Alembic verwaltet, siehe
    app.utils.migration_checker.
    """
    import app.models  # noqa: F401  Tabellen an Base.metadata registrieren
    Base.metadata.create_all(bind=engine)
