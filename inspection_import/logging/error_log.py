from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run JSON Lines error log.

Records are held in memory while the import runs and written by flush() to
``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC stamp of the first write). A run with
no failures leaves no file behind.
"""

__all__ = [
    "ErrorLogBuffer",
    "ErrorRecord",
]

DEFAULT_LOGS_DIR = Path("./logs")
FILE_STAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords for one run; not thread-safe."""

    def __init__(self, logs_dir: Path = DEFAULT_LOGS_DIR) -> None:
        self.logs_dir = logs_dir
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        # 最初の参照時に確定し、以降の flush は同じファイルへ追記
        if self._path is None:
            self._path = self.logs_dir / f"errors-{datetime.now(UTC).strftime(FILE_STAMP_FMT)}.log"
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def counts_by_type(self) -> Counter[str]:
        """Pending records per error_type (READ_ERROR, SUBMIT_ERROR)."""
        return Counter(r.error_type for r in self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records; returns the file path, or None if there was nothing to write."""
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(f"{r.to_json_line()}\n" for r in self._pending)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(lines)
        self._pending.clear()
        return path
