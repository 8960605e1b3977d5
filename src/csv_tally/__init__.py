"""
csv-tally package.
"""

__version__ = "1.0.0"

from csv_tally.casting import FormatError, clean_numeric_text, extract_number
from csv_tally.config_models import TallyConfig
from csv_tally.models import FileTally, TallyTotals
from csv_tally.orchestrator import FileProcessingError, tally_file, tally_files
from csv_tally.summation import locate_column, sum_column, tally_records, tally_text
from csv_tally.tokenizer import tokenize

__all__ = [
    "TallyConfig",
    "FileTally",
    "TallyTotals",
    "FormatError",
    "FileProcessingError",
    "tokenize",
    "clean_numeric_text",
    "extract_number",
    "locate_column",
    "sum_column",
    "tally_records",
    "tally_text",
    "tally_file",
    "tally_files",
]
