from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress bar (tqdm, interactive terminals only).

All sheets share one bar counting mapped rows. When stdout is not a TTY
(CI, redirected output) no bar is created at all, so log files never
receive carriage-return control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


def _make_bar(total: int, description: str) -> TqdmType[Any]:
    return tqdm(
        total=total,
        desc=description,
        unit="row",
        disable=False,
        leave=True,
        position=0,
        ncols=80,
        ascii=True,
    )


class ProgressTracker:
    """Counts mapped rows; every method is a no-op without a TTY."""

    def __init__(self, total_rows: int, *, description: str = "Mapping rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = _make_bar(total_rows, description) if self.enabled else None

    def advance(self, rows: int = 1) -> None:
        self.current_row += rows
        if self.pbar is not None:
            self.pbar.update(rows)

    def set_description(self, text: str) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({text})")

    def set_postfix(self, **counts: Any) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(**counts)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
