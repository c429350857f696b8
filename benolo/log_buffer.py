"""Ring buffer of recent sync/scoring log records, served by ``GET /api/logs``."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from benolo.timeutils import format_iso_utc

SYNC_LOGGERS = (
    "benolo.main",
    "benolo.ingestion.sync",
    "benolo.ingestion.store",
    "benolo.ingestion.http",
    "benolo.ingestion.football_data_client",
    "benolo.ingestion.api_football_client",
    "benolo.scoring.leaderboard",
    "benolo.transactions.ledger",
)
BUFFER_SIZE = 200


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    levelno: int
    logger: str
    message: str


class BufferHandler(logging.Handler):
    def __init__(self, maxlen: int = BUFFER_SIZE) -> None:
        super().__init__(level=logging.DEBUG)
        self._records: deque[LogEntry] = deque(maxlen=maxlen)
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._records.append(
                LogEntry(
                    timestamp=format_iso_utc(datetime.fromtimestamp(record.created, tz=timezone.utc)),
                    level=record.levelname,
                    levelno=record.levelno,
                    logger=record.name,
                    message=self.format(record),
                )
            )
        except Exception:
            self.handleError(record)

    def entries(self, limit: int = 100, min_level: int = logging.NOTSET) -> list[dict]:
        """Newest first; at most *limit* records at or above *min_level*."""
        if limit <= 0:
            return []
        selected: list[dict] = []
        for entry in reversed(self._records):
            if entry.levelno < min_level:
                continue
            selected.append(asdict(entry))
            if len(selected) == limit:
                break
        return selected

    def clear(self) -> None:
        self._records.clear()


_handler: BufferHandler | None = None


def get_buffer_handler() -> BufferHandler:
    global _handler
    if _handler is None:
        _handler = BufferHandler()
    return _handler


def install_buffer_handler() -> BufferHandler:
    handler = get_buffer_handler()
    for name in SYNC_LOGGERS:
        sync_logger = logging.getLogger(name)
        if handler not in sync_logger.handlers:
            sync_logger.addHandler(handler)
        if sync_logger.level == logging.NOTSET or sync_logger.level > logging.INFO:
            sync_logger.setLevel(logging.INFO)
    return handler
