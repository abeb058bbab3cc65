from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for structured ingestion error logging.

One record describes a source file that could not be ingested: unreadable
input, an empty table, or a schema without any metric source.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name being ingested
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: User-facing description of the failure
    """
    timestamp: str  # ISO8601 UTC
    file: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line with exactly the dataclass keys."""
        return json.dumps(asdict(self), ensure_ascii=False)
