from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from inspection_import.api.client import InspectionApiClient, PersistenceError
from inspection_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from inspection_import.excel.reader import WorkbookReadError, read_workbook
from inspection_import.logging.error_log import ErrorLogBuffer
from inspection_import.logging.init import enable_debug, get_logger, log_summary, setup_logging
from inspection_import.models.config_models import ImportConfig
from inspection_import.services.analytics import supplier_defect_details, summarize_inspections, trend_series
from inspection_import.services.orchestrator import ProcessingError, run_import
from inspection_import.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (overrides process env) and config/import.yml
- Read every sheet of the workbook, map + filter rows
- Submit accepted records in one batch call, print the SUMMARY line

Exit codes: 0 on success, 1 on any fatal error (config, workbook, API).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; the file wins over existing env vars."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="inspection-import",
        description="Import inbound inspection workbooks into the QMS dashboard",
    )
    p.add_argument("workbook", nargs="?", type=Path, help="Excel workbook (.xlsx) to import")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--dry-run", action="store_true", help="Map and validate only, submit nothing")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    p.add_argument("--summary", action="store_true", help="Print dashboard KPIs of stored records then exit")
    p.add_argument("--year", type=int, help="Restrict --summary to a year")
    p.add_argument("--month", type=int, choices=range(1, 13), metavar="1-12", help="Restrict --summary to a month")
    p.add_argument("--from", dest="start", help="Restrict --summary to dates on or after YYYY-MM-DD")
    p.add_argument("--to", dest="end", help="Restrict --summary to dates on or before YYYY-MM-DD")
    p.add_argument("--group-by", choices=("day", "month", "year"), default="month", help="Trend bucket for --summary")
    return p.parse_args(argv)


def _inspect_data(path: Path, cfg: ImportConfig) -> int:
    try:
        sheets = read_workbook(path, target_sheets=cfg.sheets, header_row=cfg.header_row)
    except WorkbookReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name}")
    for sheet in sheets:
        print(f"  SHEET: {sheet.sheet_name} cols={sheet.columns} rows={len(sheet.rows)}")
        # datetime セルは isoformat で表示
        safe_rows = [
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.values.items()}
            for r in sheet.rows[:3]
        ]
        print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS


def _print_summary(client: InspectionApiClient, args: argparse.Namespace) -> int:
    logger = get_logger()
    try:
        records = client.list_inspections()
    except PersistenceError as e:
        logger.error(f"api: {e}")
        return EXIT_FATAL
    s = summarize_inspections(records, year=args.year, month=args.month, start=args.start, end=args.end)
    logger.info(
        f"inbound qty={s.total_quantity} inspected qty={s.inspection_quantity} "
        f"defect qty={s.defect_quantity} inspection_rate={s.inspection_rate}% "
        f"defect_rate(qty)={s.quantity_defect_rate}%"
    )
    logger.info(
        f"inbound count={s.inbound_count} inspections={s.inspection_count} "
        f"fails={s.fail_count} defect_rate(count)={s.count_defect_rate}%"
    )
    for name, count in s.top_defect_suppliers:
        logger.info(f"defects supplier={name} count={count}")
    for name, count in s.top_defect_types:
        logger.info(f"defects type={name} count={count}")
    for supplier, types in supplier_defect_details(records, start=args.start, end=args.end).items():
        breakdown = ", ".join(f"{t}={n}" for t, n in types.items())
        logger.info(f"defects supplier={supplier} by type: {breakdown}")
    for point in trend_series(records, group_by=args.group_by, start=args.start, end=args.end):
        logger.info(f"trend {point.key} qty={point.quantity} count={point.count}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        if args.workbook is None:
            logger.error("--inspect-data requires a workbook")
            return EXIT_FATAL
        return _inspect_data(args.workbook, cfg)

    with InspectionApiClient(cfg.api.base_url, timeout=cfg.api.timeout_seconds) as client:
        if args.summary:
            return _print_summary(client, args)

        if args.workbook is None:
            logger.error("no workbook given")
            return EXIT_FATAL

        logger.info(f"Importing {args.workbook} -> {cfg.api.base_url}")
        error_log = ErrorLogBuffer()
        try:
            result = run_import(args.workbook, cfg, client, dry_run=args.dry_run, error_log=error_log)
        except ProcessingError as e:
            logger.error(f"workbook: {e}")
            return EXIT_FATAL
        except PersistenceError as e:
            logger.error(f"submission: {e}")
            return EXIT_FATAL
        finally:
            for error_type, count in error_log.counts_by_type().items():
                logger.warning(f"{error_type} x{count}")
            log_path = error_log.flush()
            if log_path is not None:
                logger.info(f"error log written to {log_path}")

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
