"""Environment-driven configuration for the scorecard service."""

import logging
import os

DATA_SOURCE = os.environ.get("SCORECARD_DATA_SOURCE", "live")
SCAN_TIMEOUT = float(os.environ.get("SCORECARD_SCAN_TIMEOUT", "15"))
FETCH_TIMEOUT = float(os.environ.get("SCORECARD_FETCH_TIMEOUT", "10"))
TLS_TIMEOUT = float(os.environ.get("SCORECARD_TLS_TIMEOUT", "5"))
LOG_LEVEL = os.environ.get("SCORECARD_LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.environ.get("SCORECARD_CORS_ORIGINS", "*").split(",") if o.strip()]


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
