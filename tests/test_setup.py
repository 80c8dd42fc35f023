"""Tests für Engine-Optionen und Logging-Einrichtung"""
import logging

import pytest

from app.database import build_engine_options
from app.logging_config import setup_logging


@pytest.mark.unit
class TestEngineOptions:

    def test_sqlite_shares_connections_between_threads(self):
        options = build_engine_options("sqlite:///./eventraum.db")
        assert options["connect_args"] == {"check_same_thread": False, "timeout": 30}
        assert "pool_pre_ping" not in options

    def test_postgresql_pings_connections(self):
        options = build_engine_options("postgresql://user@localhost/eventraum", echo=True)
        assert options == {"echo": True, "pool_pre_ping": True}


@pytest.mark.unit
class TestSetupLogging:

    @pytest.fixture
    def restore_root_logger(self):
        root_logger = logging.getLogger()
        handlers, level = list(root_logger.handlers), root_logger.level
        yield
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers = handlers
        root_logger.setLevel(level)

    def test_console_and_file(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "eventraum.log"
        setup_logging(debug=True, log_file=str(log_file))

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 2
        assert log_file.exists()
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
