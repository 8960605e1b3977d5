"""
Pydantic models for strongly-typed configuration validation.

Defaults reproduce the fixed constants the tool has always used, so an
empty configuration is valid.
"""

import codecs
import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_COLUMN_ID = "Cost, Initial"
DEFAULT_DECIMAL_SYMBOL = "."


class TallyConfig(BaseModel):
    """Main tally configuration."""
    column_id: str = Field(
        DEFAULT_COLUMN_ID,
        min_length=1,
        description="Substring matched against header fields to find the column"
    )
    decimal_symbol: str = Field(
        DEFAULT_DECIMAL_SYMBOL,
        description="Character treated as the decimal point in cells"
    )
    encoding: str = Field("utf-8", description="Input file encoding")
    max_concurrent: int = Field(
        1,
        description="Files processed concurrently (1 = sequential)",
        gt=0
    )

    model_config = {"extra": "forbid"}

    @field_validator('decimal_symbol')
    @classmethod
    def validate_decimal_symbol(cls, value: str) -> str:
        """Ensure the decimal symbol is one character that cannot be a digit or sign."""
        if len(value) != 1:
            raise ValueError(f"decimal_symbol must be a single character, got '{value}'")
        if value.isdigit() or value in ('-', '"'):
            raise ValueError(f"decimal_symbol cannot be '{value}'")
        return value

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, value: str) -> str:
        """Reject codecs Python does not know before any file is opened."""
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown encoding: '{value}'") from None
        return value

    @classmethod
    def from_dict(cls, config_dict: dict) -> "TallyConfig":
        """
        Create TallyConfig from dictionary with validation.

        Raises:
            ValidationError: If configuration is invalid
        """
        return cls.model_validate(config_dict)

    @classmethod
    def from_json_file(cls, config_path: Union[str, Path]) -> "TallyConfig":
        """
        Load and validate configuration from JSON file.

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, encoding='utf-8') as f:
            config_dict = json.load(f)

        return cls.from_dict(config_dict)
