# campusmart/utils/logging.py
import logging
from datetime import datetime, timezone

from pythonjsonlogger.json import JsonFormatter

from campusmart.utils.settings import LOG_LEVEL

ROOT_LOGGER = "campusmart"


class ServiceJsonFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ServiceJsonFormatter("%(timestamp)s %(level)s %(logger)s %(message)s"))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger w hierarchii campusmart, handler JSON konfigurowany raz."""
    _configure_root()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
