"""
csv-tally: sum and average one column across delimited text files.

Wrapper for running from a source checkout.

Recommended usage:
  - Command line: csv-tally --column "Cost, Initial" file1.csv file2.csv
  - Python module: python -m csv_tally.cli
  - Programmatic: from csv_tally.orchestrator import tally_files
"""

import sys

from csv_tally.cli import main
from csv_tally.orchestrator import FileProcessingError, tally_files

__all__ = ['main', 'tally_files', 'FileProcessingError']

if __name__ == "__main__":
    sys.exit(main())
