from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from allocviz.models.error_record import ErrorRecord

"""JSON Lines error log for sources that could not be ingested.

One `logs/errors-YYYYMMDD-HHMMSS.log` per CLI run, named (UTC) when the
buffer is created and written only once a failure has been recorded.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
DEFAULT_ERROR_TYPE = "INGESTION_ERROR"


class ErrorLogBuffer:
    def __init__(self, logs_dir: Path | None = None, *, now: datetime | None = None) -> None:
        stamp = (now or datetime.now(UTC)).strftime(TIMESTAMP_FMT)
        self.path = (logs_dir or LOGS_DIR) / f"errors-{stamp}.log"
        self._pending: list[ErrorRecord] = []

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def record(self, file: str, error: Exception) -> ErrorRecord:
        """Buffer a failure; the exception's ``error_type`` classifies it."""
        rec = ErrorRecord.create(file, getattr(error, "error_type", DEFAULT_ERROR_TYPE), str(error))
        self._pending.append(rec)
        return rec

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records to the run's log; None when nothing is pending."""
        if not self._pending:
            return None
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = "".join(f"{rec.to_json_line()}\n" for rec in self._pending)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(payload)
        self._pending.clear()
        return self.path
