from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from itertools import islice
from pathlib import Path

from dotenv import load_dotenv

from simple_csv_importer.config.loader import ConfigError, load_config
from simple_csv_importer.csvfile.reader import open_csv
from simple_csv_importer.logging.error_log import BufferedErrorSink, ErrorLogBuffer
from simple_csv_importer.logging.init import log_summary, setup_logging
from simple_csv_importer.models.config_models import ImporterSettings
from simple_csv_importer.models.import_result import ImportResult, ImportStatus
from simple_csv_importer.services.config_validator import validate_config
from simple_csv_importer.services.errors import ColumnError, PropertyError
from simple_csv_importer.services.header_inspector import inspect_header
from simple_csv_importer.services.importer import ConfiguredCsvImporter
from simple_csv_importer.services.progress import RowProgressTracker
from simple_csv_importer.services.summary import render_summary_line
from simple_csv_importer.services.transcoder import decode_cells, transcode

"""CLI entrypoint.

Flow:
- Load .env, then the YAML import definition
- Import one CSV file
- Log row warnings, write extracted records (--output), flush the error log
- Print the SUMMARY line and map the status to an exit code
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/import.yml")
CONFIG_ENV_VAR = "CSV_IMPORT_CONFIG"
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv; existing environment variables win."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=False)
    except Exception as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Import a CSV file of unknown character encoding")
    p.add_argument("file", type=Path, help="CSV file to import")
    p.add_argument("--config", type=Path, default=None, help="Import definition (YAML)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print header detection & first rows then exit")
    p.add_argument("--output", type=Path, default=None, help="Write extracted records to this CSV file")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    return Path(os.getenv(CONFIG_ENV_VAR, str(DEFAULT_CONFIG_PATH)))


def _exit_code(status: ImportStatus) -> int:
    if status is ImportStatus.SUCCESS:
        return EXIT_SUCCESS
    if status is ImportStatus.PARTIALLY_ERROR:
        return EXIT_PARTIAL_FAILURE
    return EXIT_FATAL


def _inspect_data(path: Path, settings: ImporterSettings) -> int:
    cfg = settings.config
    print(f"FILE: {path.name}")
    try:
        validate_config(cfg)
    except PropertyError as e:
        print(f"  config_error: {e}")
        return EXIT_FATAL
    try:
        with open_csv(path, cfg) as rows:
            sample = list(islice(rows, cfg.header_row_number + INSPECT_SAMPLE_ROWS))
    except OSError as e:
        print(f"  read_error: {e}")
        return EXIT_FATAL

    header = next((r for r in sample if r.number == cfg.header_row_number), None)
    if header is None:
        print(f"  header: row {cfg.header_row_number} not found")
        return EXIT_FATAL
    for encoding in cfg.candidate_encodings:
        print(f"  HEADER[{encoding}]: {decode_cells(header.cells, encoding)}")
    try:
        detected = inspect_header(header, cfg)
    except ColumnError as e:
        print(f"  detected=none ({e})")
        return EXIT_SUCCESS
    print(f"  detected={detected}")
    data_rows = [r for r in sample if r.number > header.number]
    safe_rows = [transcode(r.cells, detected, cfg.canonical_encoding) for r in data_rows]
    print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS


def _log_row_outcomes(logger: logging.Logger, result: ImportResult) -> None:
    for row_number, messages in result.invalid.items():
        logger.warning(f"row {row_number} invalid: {'; '.join(messages)}")
    for warning in result.warnings:
        logger.warning(warning)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when argv is None; [] means "no arguments" in tests
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_path = _resolve_config_path(args)
    try:
        settings = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.file.is_file():
        logger.error(f"file not found: {args.file}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    logger.info(f"Importing: {args.file}")

    if args.inspect_data:
        return _inspect_data(args.file, settings)

    error_log = ErrorLogBuffer()
    sink = BufferedErrorSink(error_log, args.file.name)
    start = time.perf_counter()
    with RowProgressTracker(settings.config.max_rows) as progress:
        importer = ConfiguredCsvImporter(settings, error_sink=sink, progress=progress)
        result = importer.execute(args.file)
    elapsed = time.perf_counter() - start

    _log_row_outcomes(logger, result)

    if args.output is not None and result.fatal_error is None:
        frame = result.to_frame(columns=list(settings.config.field_names))
        frame.to_csv(args.output, index=False, encoding=settings.config.canonical_encoding)
        logger.info(f"wrote {len(frame)} records to {args.output}")

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    summary_line = render_summary_line(args.file.name, result, elapsed)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    return _exit_code(result.status)
