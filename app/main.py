"""Hauptanwendung für die Eventraum-Verwaltung"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
import logging

from app.config import settings
from app.logging_config import setup_logging
from app.database import init_db, SessionLocal
from app.routers import (
    spaces,
    clients,
    professionals,
    events,
    services,
    transactions,
    financial,
    calendar,
    contracts,
)

logger = logging.getLogger(__name__)

# Rate Limiter (schützt vor Fehlbedienung, z.B. doppelt abgeschickte Formulare)
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan Context Manager für Startup und Shutdown.
    """
    # ===== STARTUP =====
    setup_logging(debug=settings.debug, log_file=settings.log_file)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    init_db()
    logger.info("Database initialized")

    # Alembic-Migrationen prüfen und ausführen
    from app.utils.migration_checker import check_and_run_migrations
    try:
        check_and_run_migrations(auto_upgrade=True)
    except RuntimeError as e:
        logger.error(f"Migration error on startup, refusing to start: {e}")
        raise

    if settings.seed_demo_data:
        from app.utils.seed_helper import seed_defaults
        db = SessionLocal()
        try:
            seed_defaults(db)
        finally:
            db.close()

    yield

    # ===== SHUTDOWN =====
    logger.info(f"Stopping {settings.app_name}")


# FastAPI App erstellen
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)

# Rate Limiter zur App hinzufügen
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Router registrieren
app.include_router(spaces.router)
app.include_router(clients.router)
app.include_router(professionals.router)
app.include_router(events.router)
app.include_router(services.router)
app.include_router(transactions.router)
app.include_router(financial.router)
app.include_router(calendar.router)
app.include_router(contracts.router)


@app.get("/health")
async def health_check():
    """Health-Check-Endpunkt für Docker"""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
