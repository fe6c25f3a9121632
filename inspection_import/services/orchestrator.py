from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..api.client import BatchMetrics, InspectionApiClient, PersistenceError
from ..excel.reader import SheetData, WorkbookReadError, read_workbook
from ..logging.error_log import ErrorLogBuffer
from ..mapping.mapper import RecordMapper
from ..mapping.validator import is_acceptable
from ..models.config_models import OUTSOURCED_PAINTING, ImportConfig
from ..models.error_record import READ_ERROR, SUBMIT_ERROR, ErrorRecord
from ..models.inspection_record import InspectionRecord
from ..models.processing_result import ImportResult, SheetStat
from ..models.row_data import RowData
from .progress import ProgressTracker

"""Import orchestration.

Coordinates one workbook import: rows of every sheet are concatenated,
mapped with the shared RecordMapper, filtered by the validator and submitted
in one bulk call. There is no per-record transaction and no resumption; the
bulk endpoint accepts the whole batch or the import fails.
"""

logger = logging.getLogger(__name__)

WORKBOOK_LEVEL = "<WORKBOOK>"


class ProcessingError(Exception):
    """Fatal error for the current import (unreadable workbook, rejected row)."""


def _iter_rows(sheets: Iterable[SheetData]) -> tuple[list[RowData], list[SheetStat]]:
    rows: list[RowData] = []
    stats: list[SheetStat] = []
    for sheet in sheets:
        rows.extend(sheet.rows)
        stats.append(SheetStat(sheet_name=sheet.sheet_name, rows=len(sheet.rows)))
    return rows, stats


def import_workbook(
    sheets: Iterable[SheetData],
    client: InspectionApiClient | None,
    mapper: RecordMapper,
    *,
    dry_run: bool = False,
) -> ImportResult:
    """Map, filter and bulk-submit the rows of every sheet.

    Args:
        sheets: Decoded worksheets in workbook order
        client: Persistence API client (may be None only for dry runs)
        mapper: Shared record mapper
        dry_run: Map and filter only, submit nothing

    Returns:
        ImportResult with read/mapped/accepted/rejected/submitted counts

    Raises:
        PersistenceError: The bulk submission failed (propagated unchanged)
    """
    if client is None and not dry_run:
        raise ValueError("client is required unless dry_run=True")

    start_time = datetime.now(UTC)
    rows, sheet_stats = _iter_rows(sheets)

    accepted: list[InspectionRecord] = []
    rejected = 0
    with ProgressTracker(len(rows)) as progress:
        current_sheet: str | None = None
        for row in rows:
            if row.sheet_name != current_sheet:
                current_sheet = row.sheet_name
                progress.set_description(current_sheet)
            record = mapper.map_row(row.values)
            if is_acceptable(record):
                accepted.append(record)
            else:
                rejected += 1
                logger.debug("rejected empty row sheet=%s row=%d", row.sheet_name, row.row_number)
            progress.advance()
        progress.set_postfix(accepted=len(accepted), rejected=rejected)

    submitted = 0
    batch_seconds = 0.0
    batch_metrics: list[BatchMetrics] = []
    if dry_run:
        logger.info("dry run: %d records not submitted", len(accepted))
    elif accepted and client is not None:
        response = client.bulk_insert(accepted, metrics_callback=batch_metrics.append)
        submitted = response.count
        batch_seconds = batch_metrics[0].elapsed_seconds if batch_metrics else 0.0
        logger.info("submitted %d records in one batch (%.3fs)", submitted, batch_seconds)
    else:
        logger.info("no acceptable rows; nothing submitted")

    end_time = datetime.now(UTC)
    result = ImportResult(
        sheets=len(sheet_stats),
        read=len(rows),
        mapped=len(rows),
        accepted=len(accepted),
        rejected=rejected,
        submitted=submitted,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        sheet_stats=sheet_stats,
        records=accepted,
        dry_run=dry_run,
        batch_seconds=batch_seconds,
    )
    outsourced = result.item_type_counts()[OUTSOURCED_PAINTING]
    if outsourced:
        logger.info("mapped %d records to '%s'", outsourced, OUTSOURCED_PAINTING)
    return result


def run_import(
    path: Path,
    config: ImportConfig,
    client: InspectionApiClient | None,
    *,
    dry_run: bool = False,
    error_log: ErrorLogBuffer | None = None,
) -> ImportResult:
    """Read the workbook at ``path`` and import it.

    Workbook-level failures are appended to ``error_log`` before being raised.

    Raises:
        ProcessingError: The workbook could not be read
        PersistenceError: The bulk submission failed
    """
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    try:
        sheets = read_workbook(path, target_sheets=config.sheets, header_row=config.header_row)
    except WorkbookReadError as e:
        error_log.append(ErrorRecord.create(path.name, WORKBOOK_LEVEL, -1, READ_ERROR, str(e)))
        raise ProcessingError(str(e)) from e

    logger.info("read %d sheets from %s", len(sheets), path.name)
    mapper = RecordMapper.from_config(config)
    try:
        return import_workbook(sheets, client, mapper, dry_run=dry_run)
    except PersistenceError as e:
        error_log.append(ErrorRecord.create(path.name, WORKBOOK_LEVEL, -1, SUBMIT_ERROR, str(e)))
        raise


def create_from_row(
    row: Mapping[Any, Any],
    client: InspectionApiClient,
    mapper: RecordMapper,
) -> dict[str, Any]:
    """Single-record creation path sharing the batch mapper.

    Raises:
        ProcessingError: The row carries no date and no identifying text
        PersistenceError: The API refused the record
    """
    record = mapper.map_row(row)
    if not is_acceptable(record):
        raise ProcessingError("row has no date, supplier, item name or item type")
    stored = client.create(record)
    logger.info("created inspection id=%s", record.id)
    return stored
