"""
Tokenizer for comma-delimited text.

Implements one specific dialect: double quotes toggle a quoted span and are
always stripped, commas and line breaks inside a quoted span are kept
verbatim, and there is no doubled-quote escape for literal quotes.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)

QUOTE = '"'
DELIMITER = ','
LINE_BREAKS = ('\r', '\n')


def tokenize(text: str) -> List[List[str]]:
    """Convert raw text into a list of records, each a list of fields.

    Record 0 is the header row. A line break only ends a record when the
    current field is non-empty, so blank lines and the second half of a
    CR+LF pair never produce empty records. A trailing record that is not
    terminated by a line break is not returned.

    Args:
        text: Full file contents

    Returns:
        List of records
    """
    records: List[List[str]] = []
    fields: List[str] = []
    buf: List[str] = []
    in_quotes = False

    for ch in text:
        if ch == QUOTE:
            in_quotes = not in_quotes
            continue
        if ch == DELIMITER and not in_quotes:
            fields.append(''.join(buf))
            buf = []
            continue
        if ch in LINE_BREAKS and not in_quotes:
            if buf:
                fields.append(''.join(buf))
                buf = []
                records.append(fields)
                fields = []
            continue
        buf.append(ch)

    if buf or fields:
        logger.debug(f"Dropping unterminated trailing record ({len(fields) + bool(buf)} field(s))")

    return records
