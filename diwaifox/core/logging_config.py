"""Настройка логирования с идентификатором запроса в каждой записи."""

import logging
import logging.config
from contextvars import ContextVar
from typing import Optional

# ContextVar для хранения request_id в рамках одного запроса
request_id_var: ContextVar[str] = ContextVar("request_id", default="N/A")


class RequestIdFilter(logging.Filter):
    """Добавляет request_id из ContextVar в запись лога."""

    def __init__(self, request_id_storage: ContextVar = request_id_var, name: str = ""):
        super().__init__(name)
        self.request_id_storage = request_id_storage

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = self.request_id_storage.get()
        return True


def setup_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Конфигурирует корневой логгер и логгеры uvicorn."""
    from .config import settings

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {
                "()": RequestIdFilter,
            },
        },
        "formatters": {
            "default": {
                "format": fmt or settings.LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "filters": ["request_id"],
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level.upper(),
        },
        "loggers": {
            "uvicorn.access": {"level": "WARNING"},
        },
    })
