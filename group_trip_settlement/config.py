"""
Configuration Module

Settings are read from the environment. A .env file in the working
directory is loaded first if one exists.

Environment variables:
    TRIP_CURRENCY_SYMBOL - Symbol used when formatting money (default: $)
    TRIP_SETTLEMENT_NOTE - Default note on payment links (default: Trip settlement)
    TRIP_LOG_LEVEL       - Logging level for the command line tool (default: WARNING)
"""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv


DEFAULT_CURRENCY_SYMBOL = "$"
DEFAULT_SETTLEMENT_NOTE = "Trip settlement"
DEFAULT_LOG_LEVEL = "WARNING"


class Settings:
    """
    Runtime settings for the settlement tools.

    Attributes:
        currency_symbol (str): Symbol placed in front of formatted amounts.
        settlement_note (str): Note used on payment links when none is given.
        log_level (str): Name of the logging level, e.g. "INFO".
    """

    def __init__(
        self,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        settlement_note: str = DEFAULT_SETTLEMENT_NOTE,
        log_level: str = DEFAULT_LOG_LEVEL
    ):
        self.currency_symbol = currency_symbol
        self.settlement_note = settlement_note
        self.log_level = log_level.upper()

    @property
    def log_level_number(self) -> int:
        """Numeric logging level, falling back to WARNING for unknown names."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            currency_symbol=os.environ.get("TRIP_CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
            settlement_note=os.environ.get("TRIP_SETTLEMENT_NOTE", DEFAULT_SETTLEMENT_NOTE),
            log_level=os.environ.get("TRIP_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        )

    def __repr__(self) -> str:
        return (
            f"Settings(currency_symbol='{self.currency_symbol}', "
            f"settlement_note='{self.settlement_note}', log_level='{self.log_level}')"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings, loading .env on first use.

    Call get_settings.cache_clear() to re-read the environment.
    """
    env_path = os.path.join(os.getcwd(), ".env")
    if os.path.isfile(env_path):
        load_dotenv(env_path)
    return Settings.from_env()
