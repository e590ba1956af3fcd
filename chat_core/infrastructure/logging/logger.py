import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from chat_core.config.settings import settings


logger = logging.getLogger("chat_core")

REDACT_LIMIT = 64


def _redact(value: Any) -> Any:
    """把嵌套结构中的每个字符串截断到 REDACT_LIMIT 个字符。"""

    if isinstance(value, str):
        return value[:REDACT_LIMIT]
    if isinstance(value, dict):
        return {k: _redact(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact(v) for v in value]
    return value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        extra = getattr(record, "extra", None)
        if settings.log_redact_content:
            msg = _redact(msg or "")
            if isinstance(extra, dict):
                extra = _redact(extra)
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    level_name = (level or settings.log_level or "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(JsonFormatter())
    logger.addHandler(sh)

    target_dir = log_dir or settings.log_dir
    if target_dir:
        path = Path(target_dir)
        path.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path / "chat.log", encoding="utf-8")
        fh.setFormatter(JsonFormatter())
        logger.addHandler(fh)
    return logger
