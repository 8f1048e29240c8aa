"""
로깅 설정 테스트
"""

import logging
import logging.handlers

import pytest

from app.config import settings
from app.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """setup_logging"""

    def test_console_only_when_file_logging_off(self, restore_root_logger):
        root = setup_logging(settings.model_copy(update={"log_to_file": False, "log_level": "INFO"}))

        assert root.level == logging.INFO
        assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)

    def test_file_handlers_written_to_log_dir(self, tmp_path, restore_root_logger):
        log_dir = tmp_path / "logs"
        root = setup_logging(
            settings.model_copy(
                update={"log_to_file": True, "log_dir": str(log_dir), "log_backup_count": 2}
            )
        )

        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 2
        assert all(h.backupCount == 2 for h in file_handlers)
        assert (log_dir / "error.log").exists()

    def test_app_loggers_stay_at_info_when_root_is_quiet(self, restore_root_logger):
        setup_logging(settings.model_copy(update={"log_to_file": False, "log_level": "warning"}))

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("app.services").level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_sql_logging_toggle(self, restore_root_logger):
        setup_logging(settings.model_copy(update={"log_to_file": False, "log_sql": True}))
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

        setup_logging(settings.model_copy(update={"log_to_file": False, "log_sql": False}))
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
