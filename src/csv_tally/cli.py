"""
Command-line interface for csv-tally.

This module handles CLI argument parsing, logging configuration,
and the final report.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from csv_tally.async_orchestrator import run_async_tally
from csv_tally.config_models import TallyConfig
from csv_tally.models import TallyTotals
from csv_tally.observability import LoggingHook, configure_observability, get_observability_manager
from csv_tally.orchestrator import tally_files

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def format_report(totals: TallyTotals, column_id: str) -> List[str]:
    """Build the summary lines printed at the end of a run."""
    lines = [f"Sum of all values found for {column_id}: {totals.total}"]
    if totals.average is not None:
        lines.append(f"Average of those {totals.count} values: {totals.average}")
    return lines


def build_config(args: argparse.Namespace) -> TallyConfig:
    """Merge the optional config file with command-line overrides."""
    config = TallyConfig.from_json_file(args.config) if args.config else TallyConfig()
    overrides = {
        "column_id": args.column,
        "decimal_symbol": args.decimal_symbol,
        "encoding": args.encoding,
        "max_concurrent": args.max_concurrent,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        config = TallyConfig.from_dict({**config.model_dump(), **overrides})
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code: 0 = run completed (even with skipped files or rows),
        1 = invalid configuration
    """
    parser = argparse.ArgumentParser(
        description="Sum and average a named column across delimited text files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sum the default "Cost, Initial" column
  csv-tally costs_2023.csv costs_2024.csv

  # Another column, comma as the decimal symbol
  csv-tally --column "Amount" --decimal-symbol , export.csv

  # Read settings from a JSON file, four files at a time
  csv-tally --config tally.json --max-concurrent 4 data/*.csv
        """
    )
    parser.add_argument("input_files", nargs="*", type=Path, help="Input files")
    parser.add_argument("--config", type=Path, help="Config JSON file")
    parser.add_argument("--column", help="Substring identifying the column to sum")
    parser.add_argument("--decimal-symbol", help="Decimal symbol used in the data")
    parser.add_argument("--encoding", help="Input file encoding")
    parser.add_argument("--max-concurrent", type=int, help="Files processed concurrently")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       help="Logging level")

    args = parser.parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    try:
        config = build_config(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read config: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Validation error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid config file: {e}")
        return 1

    if not get_observability_manager().hooks:
        configure_observability([LoggingHook()])

    if config.max_concurrent > 1:
        totals, _, file_errors = run_async_tally(args.input_files, config)
    else:
        totals, _, file_errors = tally_files(args.input_files, config)

    if file_errors:
        logger.warning(f"{len(file_errors)} file(s) skipped:")
        for file_path, error_msg in file_errors.items():
            logger.warning(f"  {file_path}: {error_msg}")

    for line in format_report(totals, config.column_id):
        print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
