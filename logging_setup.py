import json
import logging
import sys
from datetime import datetime, timezone

from config import env_flag, get_env

LOG_JSON = env_flag("LOG_JSON")
LOG_LEVEL = (get_env("LOG_LEVEL", "INFO") or "INFO").upper()

# шумные логгеры библиотек, оставляем им только WARNING и выше
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "telegram")


class BotFormatter(logging.Formatter):
    """Одна строка на запись: `ts | LEVEL | name | message` или JSON."""

    def __init__(self, as_json: bool = False) -> None:
        super().__init__()
        self.as_json = as_json

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        exc = self.formatException(record.exc_info) if record.exc_info else None
        if self.as_json:
            payload = {"ts": ts, "level": record.levelname, "message": record.getMessage(), "name": record.name}
            if exc:
                payload["exc_info"] = exc
            return json.dumps(payload, ensure_ascii=False)
        line = f"{ts} | {record.levelname} | {record.name} | {record.getMessage()}"
        return f"{line} {exc}" if exc else line


def setup_logging(level: str = LOG_LEVEL, as_json: bool = LOG_JSON) -> logging.Logger:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(lvl)
    handler.setFormatter(BotFormatter(as_json))
    root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logging.getLogger("app")
