"""
Configuration settings for the Desired Price Pool estimator

Loads environment variables and provides logging / price table configuration.
Protocol constants (tick bounds, fee bounds, reward factors) live in
constants.py and are intentionally not configurable.
"""
import logging
import os
from typing import Optional
from dotenv import load_dotenv

from .data.prices import TokenPriceTable

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings:
    """Application settings"""

    # Logging
    LOG_LEVEL: str = os.getenv("DPP_LOG_LEVEL", "WARNING").upper()

    # Optional YAML file with {symbol: usd_price}
    TOKEN_PRICES_FILE: Optional[str] = os.getenv("DPP_TOKEN_PRICES_FILE") or None

    def get_log_level(self) -> int:
        """Resolve LOG_LEVEL name to a logging level, WARNING if unknown"""
        level = logging.getLevelName(self.LOG_LEVEL)
        return level if isinstance(level, int) else logging.WARNING

    def load_price_table(self, path: Optional[str] = None) -> TokenPriceTable:
        """USD price table from `path`, TOKEN_PRICES_FILE, or the built-in table"""
        path = path or self.TOKEN_PRICES_FILE
        if path:
            return TokenPriceTable.from_yaml(path)
        return TokenPriceTable.default()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts (library code never calls this)"""
    resolved = logging.getLevelName(level.upper()) if level else settings.get_log_level()
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=LOG_FORMAT)


# Create global settings instance
settings = Settings()
