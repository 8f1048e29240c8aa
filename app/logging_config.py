"""
로깅 설정 모듈
설정값(Settings)에 따라 콘솔/파일 핸들러를 구성합니다.
"""
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path

from app.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ERROR_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 앱 로거 상한 레벨: LOG_LEVEL=WARNING 이어도 서비스 이벤트는 INFO 로 남김
APP_LOGGER_LEVELS = {
    "app.services": logging.INFO,
    "app.routers.websocket": logging.INFO,
    "app.middleware": logging.INFO,
}

# 외부 라이브러리 로거
NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "watchfiles": logging.WARNING,
    "passlib": logging.ERROR,
    "httpx": logging.WARNING,
    "aiosmtplib": logging.WARNING,
}


def _rotating_handler(path: Path, level: int, fmt: str, settings: Settings) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, DATE_FORMAT))
    return handler


def setup_logging(settings: Settings) -> logging.Logger:
    """
    애플리케이션 로깅 설정

    - 콘솔 핸들러는 항상 추가
    - log_to_file 이 켜져 있으면 일자별 앱 로그와 error.log 를 log_dir 에 기록
    - log_sql 이 꺼져 있으면 SQLAlchemy 엔진 로그는 WARNING 이상만 출력

    Returns:
        설정이 끝난 루트 로거
    """
    level = getattr(logging, settings.effective_log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    log_path = None
    if settings.log_to_file:
        log_path = Path(settings.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(
            _rotating_handler(
                log_path / f"todotravel_{datetime.now().strftime('%Y%m%d')}.log",
                logging.DEBUG,
                LOG_FORMAT,
                settings,
            )
        )
        root_logger.addHandler(
            _rotating_handler(log_path / "error.log", logging.ERROR, ERROR_LOG_FORMAT, settings)
        )

    for name, app_level in APP_LOGGER_LEVELS.items():
        logging.getLogger(name).setLevel(min(app_level, level))

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.log_sql else logging.WARNING)

    root_logger.info(
        f"{settings.app_name} 로깅 초기화: level={settings.effective_log_level}, "
        f"file={'off' if log_path is None else log_path.absolute()}"
    )
    return root_logger
