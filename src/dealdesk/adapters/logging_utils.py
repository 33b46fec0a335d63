import json
import logging
import sys
from datetime import datetime, timezone

from .config import config

# keys every line carries; context may not overwrite them
_BASE_KEYS = ("ts", "level", "logger", "event", "env")


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: the message is the event name, `extra={"context": ...}` is merged in."""

    def __init__(self, env: str = "dev") -> None:
        super().__init__()
        self.env = env

    def format(self, record):
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "env": self.env,
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            for key, value in ctx.items():
                payload[f"ctx_{key}" if key in _BASE_KEYS else key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter(env=config.ENV))
        logger.addHandler(handler)
        logger.setLevel(config.LOG_LEVEL.upper())
        logger.propagate = False
    return logger
