#!/usr/bin/env python3
"""Load city and salary workbooks for a company from the command line.

Example:
    python scripts/load_workbooks.py --company acme --cities cities.xlsx --salaries salaries.xlsx
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from contribcalc.core.config import get_settings
from contribcalc.core.errors import ContribCalcError
from contribcalc.core.log import (
    get_logger,
    init_logging,
    log_context,
    progress_manager,
    shutdown_logging,
    timeit,
)
from contribcalc.db import create_schema, get_sessionmaker
from contribcalc.services import UploadService

logger = get_logger("contribcalc.scripts.load_workbooks")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--company", required=True, help="Company id the rows belong to")
    parser.add_argument("--cities", type=Path, help="City policy workbook (.xlsx or .csv)")
    parser.add_argument("--salaries", type=Path, help="Salary workbook (.xlsx or .csv)")
    parser.add_argument("--database-url", help="Override the configured SQLAlchemy URL")
    parser.add_argument("--create-schema", action="store_true", help="Create missing tables first")
    parser.add_argument("--log-level", default=None, help="Logging level (default from LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    init_logging(level=args.log_level or settings.log_level, log_dir=settings.log_dir)

    jobs = [
        (kind, path)
        for kind, path in (("cities", args.cities), ("salaries", args.salaries))
        if path is not None
    ]
    if not jobs:
        logger.error("Nothing to load: pass --cities and/or --salaries")
        return 2

    factory = get_sessionmaker(args.database_url)
    if args.create_schema:
        create_schema(factory.kw["bind"])

    log_context.bind(company=args.company)
    with timeit("Workbook import", logger=logger, unit="files", total=len(jobs)):
        for kind, path in progress_manager.track(jobs, description="Loading workbooks", total=len(jobs)):
            if not path.exists():
                logger.error("File not found: %s", path)
                return 1
            with factory() as session:
                service = UploadService(session)
                loader = service.upload_cities if kind == "cities" else service.upload_salaries
                try:
                    summary = loader(args.company, path.name, path.read_bytes())
                except ContribCalcError as exc:
                    logger.error("%s: %s", path, exc.message)
                    return 1
            logger.info("%s: %s", path, summary.message)
    return 0


if __name__ == "__main__":
    try:
        exit_code = main()
    finally:
        shutdown_logging()
    raise SystemExit(exit_code)
