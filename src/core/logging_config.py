"""
Logging configuration: console + optional file handler, text or JSON format.

Console и file handler получают одни и те же записи: это единая точка
"двойного вывода" (console/file) для всего приложения.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from src.core.config import LOG_LEVELS, Settings, get_settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Атрибуты LogRecord, не попадающие в JSON как extra-поля
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "taskName", "asctime",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter: одна запись — один JSON объект в строке"""

    def format(self, record: logging.LogRecord) -> str:
        log_dict: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)

        # extra= поля из вызова logging
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_dict[key] = value

        return json.dumps(log_dict, ensure_ascii=False, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter по имени формата ('text' или 'json')"""
    if log_format.lower() == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def configure_logging(
    settings: Optional[Settings] = None,
    log_file: Optional[Union[str, Path]] = None,
    level: Optional[str] = None,
    stream=None,
) -> List[logging.Handler]:
    """Настройка root logger: console handler и optional file handler.

    Args:
        settings: настройки приложения (default: get_settings())
        log_file: файл log (перекрывает settings.log_file_path)
        level: уровень logging (перекрывает settings.log_level)
        stream: поток console handler (default: sys.stdout)

    Returns:
        Установленные handlers (console первым)

    Raises:
        ValueError: неизвестное имя уровня logging
    """
    settings = settings or get_settings()
    root_level = (level or settings.log_level).strip().upper()
    if root_level not in LOG_LEVELS:
        raise ValueError(f"unknown log level: {level}")

    formatter = build_formatter(settings.log_format)

    handlers: List[logging.Handler] = []

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    path = log_file if log_file is not None else settings.log_file_path
    if path:
        log_path = Path(path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # append-only
        file_handler = logging.FileHandler(str(log_path), mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, root_level),
        handlers=handlers,
        force=True,  # Override existing configuration
    )

    return handlers
