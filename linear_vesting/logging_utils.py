# linear_vesting/logging_utils.py
import json
import logging
from typing import Any, Dict

_RESERVED = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread", "threadName", "taskName",
}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k not in _RESERVED:
                payload[k] = v
        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(name: str = "linear_vesting", level: str = "INFO") -> logging.Logger:
    lg = logging.getLogger(name)
    if getattr(lg, "_linear_vesting_configured", False):
        return lg
    lg.setLevel(level.upper())
    ch = logging.StreamHandler()
    ch.setFormatter(JsonFormatter())
    lg.addHandler(ch)
    lg.propagate = False
    setattr(lg, "_linear_vesting_configured", True)
    return lg
