"""
Logging configuration: JSON lines on stdout.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Optional


class JsonFormatter(logging.Formatter):
    """
    Minimal JSON log formatter:
      { "t": 1700000000000, "lvl": "INFO", "name": "mod", "msg": "text", "extra": {...} }

    Pass structured fields with `log.info(msg, extra={"extra": {...}})`.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "t": int(time.time() * 1000),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if isinstance(getattr(record, "extra", None), dict):
            payload["extra"] = record.extra  # type: ignore[attr-defined]
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once.
    Level precedence: explicit arg, env LOG_LEVEL, INFO.
    """
    root = logging.getLogger()
    if getattr(root, "_fusion_replay_configured", False):
        return

    lvl_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    lvl = getattr(logging, lvl_name, None)
    if not isinstance(lvl, int):
        lvl = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(lvl)
    root._fusion_replay_configured = True  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Module logger; ensures the root is configured."""
    setup_logging()
    return logging.getLogger(name)
