"""Konfiguration für die Eventraum-Verwaltung"""
from pathlib import Path
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Anwendungs-Einstellungen mit Validierung

    Alle Einstellungen können via Umgebungsvariablen (.env) überschrieben werden.
    """

    # App-Grundeinstellungen
    app_name: str = Field(
        default="Eventraum-Verwaltung",
        description="Name der Anwendung"
    )
    app_version: str = Field(
        default="0.1.0",
        description="Version der Anwendung"
    )
    debug: bool = Field(
        default=False,
        description="Debug-Modus (nur für Entwicklung)"
    )

    # Datenbank
    database_url: str = Field(
        default="sqlite:///./eventraum.db",
        description="Datenbank-URL (SQLite oder PostgreSQL)"
    )

    # Pfade
    base_dir: Path = Path(__file__).parent.parent
    log_file: str = Field(
        default="eventraum.log",
        description="Pfad zur Log-Datei"
    )

    # Server
    host: str = Field(
        default="127.0.0.1",
        description="Server-Host (0.0.0.0 für alle Interfaces, 127.0.0.1 nur lokal)"
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server-Port (1-65535)"
    )
    rate_limit: str = Field(
        default="200/minute",
        description="Standard-Limit pro Client (slowapi-Syntax)"
    )

    # Finanzen
    forecast_days: int = Field(
        default=30,
        ge=1,
        description="Standard-Zeitraum der Prognose in Tagen"
    )
    currency_symbol: str = Field(
        default="R$",
        min_length=1,
        max_length=5,
        description="Währungssymbol für Anzeige, PDF und Export"
    )

    # Demo-Daten (Standard-Räume und Servicearten)
    seed_demo_data: bool = Field(
        default=True,
        description="Legt beim ersten Start Standard-Räume und Servicearten an"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignoriere unbekannte Env-Vars
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validiert die Datenbank-URL"""
        if not v:
            raise ValueError("DATABASE_URL darf nicht leer sein")

        # Erlaube SQLite und PostgreSQL
        if not (v.startswith("sqlite://") or v.startswith("postgresql://")):
            raise ValueError(
                "DATABASE_URL muss mit 'sqlite://' oder 'postgresql://' beginnen"
            )

        return v

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validiert den Server-Host"""
        if not v:
            raise ValueError("HOST darf nicht leer sein")

        if v in ["0.0.0.0", "::"]:
            logger.warning(
                "Server ist auf ALLEN Netzwerk-Interfaces erreichbar! "
                "Für lokalen Betrieb HOST=127.0.0.1 verwenden."
            )

        return v

    @field_validator("rate_limit")
    @classmethod
    def validate_rate_limit(cls, v: str) -> str:
        """Validiert das Rate-Limit (z.B. '200/minute')"""
        count, _, period = v.partition("/")
        if not count.strip().isdigit() or period.strip() not in ("second", "minute", "hour", "day"):
            raise ValueError("RATE_LIMIT muss das Format '<Anzahl>/<second|minute|hour|day>' haben")
        return v


settings = Settings()
