"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from csv_tally.observability import get_observability_manager


@pytest.fixture(autouse=True)
def reset_observability():
    """Keep hooks registered by one test from leaking into the next."""
    manager = get_observability_manager()
    manager.clear_hooks()
    yield
    manager.clear_hooks()


@pytest.fixture
def sample_csv_file(tmp_path) -> Path:
    """Create a sample CSV file with a quoted, comma-bearing header."""
    csv_content = (
        'Name,"Cost, Initial",Notes\n'
        'A,10.00,first\n'
        'B,bad,second\n'
        'C,20.5,third\n'
    )
    csv_file = tmp_path / "sample.csv"
    csv_file.write_text(csv_content)
    return csv_file


@pytest.fixture
def messy_csv_file(tmp_path) -> Path:
    """Create a CSV file with currency noise, CRLF endings and a short row."""
    csv_content = (
        'Item,"Total Cost, Initial (USD)"\r\n'
        'Widget,"$1,234.56"\r\n'
        'Gadget,(15.00)\r\n'
        'Short\r\n'
        'Thing,-4\r\n'
    )
    csv_file = tmp_path / "messy.csv"
    csv_file.write_bytes(csv_content.encode('utf-8'))
    return csv_file


@pytest.fixture
def sample_config_file(tmp_path) -> Path:
    """Create a sample tally configuration."""
    config = {
        "column_id": "Amount",
        "decimal_symbol": ",",
        "encoding": "utf-8"
    }
    config_file = tmp_path / "tally_config.json"
    config_file.write_text(json.dumps(config, indent=2))
    return config_file
