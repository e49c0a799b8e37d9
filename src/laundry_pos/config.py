"""
Runtime configuration read from the environment (and a local .env file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    currency: str = "PHP"
    high_value_threshold: Decimal = Decimal("10000")
    low_stock_threshold: int = 5
    expiring_within_days: int = 30
    stock_workers: int = 4
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        currency=os.getenv("LAUNDRY_POS_CURRENCY", "PHP"),
        high_value_threshold=Decimal(
            os.getenv("LAUNDRY_POS_HIGH_VALUE_THRESHOLD", "10000")
        ),
        low_stock_threshold=int(os.getenv("LAUNDRY_POS_LOW_STOCK_THRESHOLD", "5")),
        expiring_within_days=int(os.getenv("LAUNDRY_POS_EXPIRING_WITHIN_DAYS", "30")),
        stock_workers=int(os.getenv("LAUNDRY_POS_STOCK_WORKERS", "4")),
        host=os.getenv("LAUNDRY_POS_HOST", "0.0.0.0"),
        port=int(os.getenv("LAUNDRY_POS_PORT", "8000")),
        debug=os.getenv("LAUNDRY_POS_DEBUG", "False") == "True",
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
