from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ResolverConfig, load_config
from ..excel.reader import SourceReadError, read_workbook_groups
from ..logging.error_log import FallbackLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.workbook_data import fold_key
from ..services.errors import WorkbookLoadError
from ..services.orchestrator import (
    ResolutionError,
    read_and_load,
    resolve_report,
)
from ..services.summary import render_match_line, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (MANIFEST_SOURCE_PATH may override the configured workbook)
- Load config
- Read + load the workbook
- Resolve the selected base release against the selected groups
- Print one line per group and a SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_BAD_SELECTION = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Resolve matching manifest releases across groups")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--base", default=None, help="Base release slug (default: newest)")
    p.add_argument(
        "--group", action="append", default=None, dest="groups",
        help="Group to resolve against (repeatable, default: all)",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true",
        help="Print sheet headers & first rows then exit (only the --group sheets when given)",
    )
    p.add_argument("--fallback-log", action="store_true", help="Write defaulted cells to logs/fallbacks-*.log")
    return p.parse_args(argv)


def _inspect_data(cfg: ResolverConfig, sheets: list[str] | None = None) -> int:
    try:
        groups = read_workbook_groups(Path(cfg.source_path), target_sheets=sheets)
    except SourceReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    base_key = fold_key(cfg.base_group)
    for g in groups:
        marker = " [base]" if fold_key(g.name) == base_key else ""
        header = list(g.header) if g.header is not None else []
        print(f"SHEET: {g.name}{marker} rows={len(g.rows)} cols={header}")
        for row in g.rows[:3]:
            print("    ", [v.isoformat() if hasattr(v, "isoformat") else v for v in row])
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg, args.groups)

    diagnostics = FallbackLogBuffer(source=Path(cfg.source_path).name) if args.fallback_log else None

    try:
        workbook = read_and_load(cfg, diagnostics)
    except SourceReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL
    except WorkbookLoadError as e:
        logger.error(f"load: {e}")
        return EXIT_FATAL

    if diagnostics is not None and len(diagnostics) > 0:
        count = len(diagnostics)
        path = diagnostics.flush()
        logger.warning(f"{count} cell(s) defaulted, see {path}")

    try:
        report = resolve_report(workbook, args.base, args.groups)
    except ResolutionError as e:
        logger.error(f"select: {e}")
        return EXIT_BAD_SELECTION

    logger.info(f"base: {report.base_row.slug} '{report.base_row.release_date_full}'")
    for result in report.results:
        logger.info(render_match_line(result))

    summary_line = render_summary_line(workbook, report.results)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS
