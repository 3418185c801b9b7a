"""Logging to rotating files and forwarding log lines to a message broker."""

from __future__ import annotations

import datetime as dt
import json
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Protocol

KAFKA_TOPIC = "consume_alert_rust"
LOG_FILE_NAME = "consume_alert.log"
KEEP_LOG_FILES = 10

logger = logging.getLogger("consume_alert")

_LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "ERROR"}


class MessageProducer(Protocol):
    """Anything that can publish a text message to a topic."""

    def produce_message(self, topic: str, message: str) -> Any:
        ...


class LogFormatter(logging.Formatter):
    """Formats records as ``[time] [LEVEL] T[thread] message``."""

    def format(self, record: logging.LogRecord) -> str:
        created = dt.datetime.fromtimestamp(record.created)
        level = _LEVEL_NAMES.get(record.levelname, record.levelname)
        thread = record.threadName or "unknown"
        return (
            f"[{created:%Y-%m-%d %H:%M:%S}] [{level}] T[{thread}] "
            f"{record.getMessage()}"
        )


def set_global_logger(log_directory: str | Path = "logs") -> logging.Handler:
    """Log INFO and above to a daily rotated file, keeping ten old files."""
    directory = Path(log_directory)
    directory.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        directory / LOG_FILE_NAME,
        when="midnight",
        backupCount=KEEP_LOG_FILES,
        encoding="utf-8",
    )
    handler.setFormatter(LogFormatter())
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)
    return handler


def _send_to_broker(message: str, producer: MessageProducer | None) -> None:
    if producer is None:
        return
    try:
        producer.produce_message(KAFKA_TOPIC, message)
    except Exception as exc:
        logger.error("%r", exc)


def errork(err: BaseException | str, producer: MessageProducer | None = None) -> None:
    """Log an error and forward its text to the broker."""
    logger.error("%r", err)
    _send_to_broker(str(err), producer)


def infok(info: str, producer: MessageProducer | None = None) -> None:
    """Log an informational message and forward it to the broker."""
    logger.info("%s", json.dumps(info, ensure_ascii=False))
    _send_to_broker(info, producer)