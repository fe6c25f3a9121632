from __future__ import annotations

from ..models.processing_result import ImportResult

"""SUMMARY line rendering.

Format::

    SUMMARY sheets={n} read={n} accepted={n} rejected={n} submitted={n} elapsed_sec={x}

A trailing ``dry_run=1`` is appended when nothing was submitted on purpose.
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ImportResult) -> str:
    """Render the SUMMARY line for one import.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2025, 1, 1, tzinfo=timezone.utc)
        >>> r = ImportResult(sheets=2, read=10, mapped=10, accepted=9, rejected=1,
        ...                  submitted=9, start_time=t, end_time=t, elapsed_seconds=2.0)
        >>> render_summary_line(r)
        'SUMMARY sheets=2 read=10 accepted=9 rejected=1 submitted=9 elapsed_sec=2'
    """
    line = (
        f"SUMMARY sheets={result.sheets} "
        f"read={result.read} "
        f"accepted={result.accepted} "
        f"rejected={result.rejected} "
        f"submitted={result.submitted} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
    if result.dry_run:
        line += " dry_run=1"
    return line
