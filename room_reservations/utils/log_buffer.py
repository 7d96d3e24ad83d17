import logging
from collections import deque
from datetime import datetime, timezone

_formatter = logging.Formatter()


class LogBufferHandler(logging.Handler):
    """
    Keeps the most recent log records in memory for the admin log viewer.

    Bounded by `capacity`; the oldest record is dropped first. emit() runs
    under the handler lock, and snapshot() takes the same lock.
    """

    def __init__(self, capacity: int = 100, level: int = logging.NOTSET):
        super().__init__(level)
        self._records: deque[dict] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen

    def resize(self, capacity: int) -> None:
        self.acquire()
        try:
            self._records = deque(self._records, maxlen=capacity)
        finally:
            self.release()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
                "type":      record.levelname.lower(),
                "logger":    record.name,
                "message":   record.getMessage(),
                "details":   _formatter.formatException(record.exc_info) if record.exc_info else "",
            }
        except Exception:
            self.handleError(record)
            return
        self._records.append(entry)

    def snapshot(self, limit: int | None = None) -> list[dict]:
        """Buffered records, oldest first."""
        self.acquire()
        try:
            records = list(self._records)
        finally:
            self.release()
        if limit is not None:
            records = records[-limit:] if limit > 0 else []
        return records

    def clear(self) -> None:
        self.acquire()
        try:
            self._records.clear()
        finally:
            self.release()


log_buffer = LogBufferHandler()


def install_log_buffer(capacity: int) -> LogBufferHandler:
    """Attach the shared buffer to the root logger once."""
    if log_buffer.capacity != capacity:
        log_buffer.resize(capacity)
    root = logging.getLogger()
    if log_buffer not in root.handlers:
        root.addHandler(log_buffer)
    return log_buffer
